from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import is_rest_day, now_local
from ..common.error_messages import ALREADY_MARKED, NETWORK_ERROR, submission_message
from ..core.constants import DEFAULT_REST_WEEKDAY, DUPLICATE_KEY_CODE, DUPLICATE_KEY_MARKER, SUCCESS_MESSAGE
from ..core.enums import BlockReason, SubmissionOutcome
from ..core.exceptions import GatewayUnavailableError
from ..location.model import PositionFix, ProximityResult
from .model import AttendanceSubmission, GatewayResponse, SubmissionResult
from .repository import AttendanceGateway

logger = logging.getLogger(__name__)

BLOCK_MESSAGES = {
    BlockReason.REST_DAY: "Attendance is closed on Sundays.",
    BlockReason.ALREADY_MARKED: "Today's attendance has already been marked.",
    BlockReason.LOCATION_BLOCKED: "Location access is required to mark attendance.",
    BlockReason.NO_FIX: "Waiting for your location.",
    BlockReason.OUT_OF_RANGE: "You are not at your assigned center.",
    BlockReason.NOT_AUTHENTICATED: "Authentication token not found",
    BlockReason.IN_FLIGHT: "Attendance request already in progress.",
}


def is_duplicate_response(response: GatewayResponse) -> bool:
    payload = response.payload or {}
    if int(response.status) == 409:
        return True
    try:
        if int(payload.get("code")) == DUPLICATE_KEY_CODE:
            return True
    except (TypeError, ValueError):
        pass
    return any(DUPLICATE_KEY_MARKER in str(payload.get(k) or "") for k in ("error", "message"))


def interpret_response(response: GatewayResponse) -> SubmissionResult:
    payload = response.payload or {}
    if is_duplicate_response(response):
        return SubmissionResult(outcome=SubmissionOutcome.DUPLICATE, message=ALREADY_MARKED, status=response.status)
    if response.ok or payload.get("message") == SUCCESS_MESSAGE:
        return SubmissionResult(
            outcome=SubmissionOutcome.SUCCESS,
            message=str(payload.get("message") or SUCCESS_MESSAGE),
            status=response.status,
        )
    return SubmissionResult(
        outcome=SubmissionOutcome.FAILED,
        message=submission_message(response.status, payload),
        status=response.status,
    )


class AttendanceService:
    """Use case: mark today's attendance from a verified position."""

    def __init__(
        self,
        gateway: AttendanceGateway,
        *,
        endpoint: str,
        rest_weekday: int = DEFAULT_REST_WEEKDAY,
        clock: Callable[[], datetime] = now_local,
    ):
        self._gateway = gateway
        self._endpoint = endpoint
        self._rest_weekday = int(rest_weekday)
        self._clock = clock

    def today(self) -> date:
        return self._clock().date()

    def block_reason(
        self,
        *,
        fix: Optional[PositionFix],
        proximity: Optional[ProximityResult],
        token: Optional[str],
        marked_on: Optional[date] = None,
        location_blocked: bool = False,
        in_flight: bool = False,
    ) -> Optional[BlockReason]:
        """First precondition that currently forbids submitting, or None."""
        today = self.today()
        if in_flight:
            return BlockReason.IN_FLIGHT
        if is_rest_day(today, self._rest_weekday):
            return BlockReason.REST_DAY
        if marked_on == today:
            return BlockReason.ALREADY_MARKED
        if location_blocked:
            return BlockReason.LOCATION_BLOCKED
        if fix is None or proximity is None:
            return BlockReason.NO_FIX
        if not proximity.within_threshold:
            return BlockReason.OUT_OF_RANGE
        if not token:
            return BlockReason.NOT_AUTHENTICATED
        return None

    async def submit(
        self,
        *,
        fix: Optional[PositionFix],
        proximity: Optional[ProximityResult],
        token: Optional[str],
        marked_on: Optional[date] = None,
        location_blocked: bool = False,
    ) -> SubmissionResult:
        reason = self.block_reason(
            fix=fix,
            proximity=proximity,
            token=token,
            marked_on=marked_on,
            location_blocked=location_blocked,
        )
        if reason is not None:
            return SubmissionResult(outcome=SubmissionOutcome.BLOCKED, message=BLOCK_MESSAGES[reason], block_reason=reason)

        submission = AttendanceSubmission(coordinate=fix.coordinate)
        try:
            response = await self._gateway.post_attendance(endpoint=self._endpoint, submission=submission, token=token)
        except GatewayUnavailableError as e:
            if DUPLICATE_KEY_MARKER in str(e):
                return SubmissionResult(outcome=SubmissionOutcome.DUPLICATE, message=ALREADY_MARKED)
            return SubmissionResult(outcome=SubmissionOutcome.FAILED, message=NETWORK_ERROR)

        result = interpret_response(response)
        logger.info("attendance submit: %s (status=%s)", result.outcome.value, result.status)
        return result
