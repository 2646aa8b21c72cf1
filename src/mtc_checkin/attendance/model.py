from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.enums import BlockReason, SubmissionOutcome
from ..location.model import Coordinate


@dataclass(frozen=True)
class AttendanceSubmission:
    """Body of the attendance POST; the timestamp is assigned server-side."""

    coordinate: Coordinate

    def to_payload(self) -> dict[str, Any]:
        return {"currentLocation": self.coordinate.as_pair()}


@dataclass(frozen=True)
class GatewayResponse:
    status: int
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= int(self.status) < 300


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionOutcome
    message: str = ""
    block_reason: Optional[BlockReason] = None
    status: Optional[int] = None

    @property
    def marked(self) -> bool:
        """True when the server now holds today's attendance for this user."""
        return self.outcome in (SubmissionOutcome.SUCCESS, SubmissionOutcome.DUPLICATE)
