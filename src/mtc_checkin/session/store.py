from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Protocol

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..location.model import Coordinate
from .model import CenterInfo, SessionContext

CENTER_MISSING = "Unable to load center location. Please log in again."

# Storage keys written by the login pages.
TUTOR_KEY = "userData"
GUEST_KEY = "guestData"


class SessionStore(Protocol):
    def load(self) -> SessionContext:
        raise NotImplementedError


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _coordinate(raw: Any) -> Coordinate:
    if not isinstance(raw, (list, tuple)) or len(raw) < 2:
        raise ValidationError(CENTER_MISSING)
    return Coordinate.from_pair(raw)


def parse_tutor_data(data: dict) -> SessionContext:
    """Tutor payload: the center is embedded under ``assignedCenter``."""
    center = data.get("assignedCenter")
    if not isinstance(center, dict) or not center.get("coordinates"):
        raise ValidationError(CENTER_MISSING)

    try:
        role = Role(str(data.get("role") or Role.TUTOR.value).lower())
    except ValueError:
        raise ValidationError(f"Unknown role {data.get('role')!r}")
    return SessionContext(
        user_id=_text(data.get("_id")),
        name=_text(data.get("name")) or "",
        role=role,
        token=_text(data.get("token")),
        center=CenterInfo(
            center_id=_text(center.get("_id")),
            name=_text(center.get("name")),
            city=_text(center.get("city") or center.get("area")),
            coordinate=_coordinate(center.get("coordinates")),
        ),
    )


def parse_guest_data(data: dict) -> SessionContext:
    """Guest payload: center fields are flattened onto the guest record."""
    if not data.get("centerCoordinates"):
        raise ValidationError("Center location not found.")

    return SessionContext(
        user_id=_text(data.get("_id")),
        name=_text(data.get("name")) or "",
        role=Role.GUEST,
        token=_text(data.get("token")),
        center=CenterInfo(
            center_id=_text(data.get("centerId") or data.get("assignedCenter")),
            name=_text(data.get("centerName")),
            city=_text(data.get("centerCity")),
            coordinate=_coordinate(data.get("centerCoordinates")),
        ),
    )


def parse_session(payload: dict) -> SessionContext:
    """Accept either the raw stored object or ``{"userData": ...}``/``{"guestData": ...}``."""
    if not isinstance(payload, dict) or not payload:
        raise AuthenticationError("Please login to access this resource")
    if isinstance(payload.get(GUEST_KEY), dict):
        return parse_guest_data(payload[GUEST_KEY])
    if isinstance(payload.get(TUTOR_KEY), dict):
        return parse_tutor_data(payload[TUTOR_KEY])
    if "centerCoordinates" in payload:
        return parse_guest_data(payload)
    return parse_tutor_data(payload)


class JsonFileSessionStore:
    def __init__(self, path: Path | str):
        self._path = Path(path)

    def load(self) -> SessionContext:
        if not self._path.exists():
            raise AuthenticationError("Please login to access this resource")
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except json.JSONDecodeError:
            raise AuthenticationError("Authentication error occurred")
        return parse_session(payload)
