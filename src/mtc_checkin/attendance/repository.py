from __future__ import annotations

from typing import Protocol

from .model import AttendanceSubmission, GatewayResponse


class AttendanceGateway(Protocol):
    async def post_attendance(self, *, endpoint: str, submission: AttendanceSubmission, token: str) -> GatewayResponse:
        """Send one attendance write.

        Returns whatever the backend answered (any status). Raises
        ``GatewayUnavailableError`` when no answer was received.
        """

        raise NotImplementedError
