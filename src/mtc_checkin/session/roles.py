from __future__ import annotations

from dataclasses import dataclass

from ..core import constants
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


@dataclass(frozen=True)
class RoleProfile:
    """Per-role check-in settings."""

    role: Role
    endpoint: str
    threshold_m: float


def profile_for(role: Role, settings=None) -> RoleProfile:
    if role == Role.TUTOR:
        threshold = getattr(settings, "TUTOR_THRESHOLD_M", constants.DEFAULT_TUTOR_THRESHOLD_M)
        return RoleProfile(role=role, endpoint=constants.TUTOR_ATTENDANCE_ENDPOINT, threshold_m=float(threshold))
    if role == Role.GUEST:
        threshold = getattr(settings, "GUEST_THRESHOLD_M", constants.DEFAULT_GUEST_THRESHOLD_M)
        return RoleProfile(role=role, endpoint=constants.GUEST_ATTENDANCE_ENDPOINT, threshold_m=float(threshold))
    raise AuthorizationError(f"Role '{role.value}' does not mark attendance")
