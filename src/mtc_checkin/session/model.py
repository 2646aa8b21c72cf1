from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..location.model import Coordinate


@dataclass(frozen=True)
class CenterInfo:
    """The tuition center a user checks in against."""

    center_id: Optional[str]
    name: Optional[str]
    city: Optional[str]
    coordinate: Coordinate


@dataclass(frozen=True)
class SessionContext:
    """Authenticated user as issued by the login flow. Read-only here."""

    user_id: Optional[str]
    name: str
    role: Role
    token: Optional[str]
    center: CenterInfo

    @property
    def reference_location(self) -> Coordinate:
        return self.center.coordinate

    @property
    def fallback_query(self) -> str:
        """Human-readable place for the fallback geocoder."""
        parts = [p for p in (self.center.name, self.center.city) if p]
        return ", ".join(parts)
