from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..attendance.model import SubmissionResult
from ..attendance.service import BLOCK_MESSAGES, AttendanceService
from ..common.datetime_utils import monotonic
from ..core.constants import DEFAULT_APPLY_INTERVAL_MS
from ..core.enums import BlockReason, ErrorSeverity, SubmissionOutcome
from ..location.distance import DistanceEvaluator
from ..location.model import LocationFailure, PositionEvent, PositionFix, ProximityResult
from ..location.source import PositionSource
from ..location.throttle import MapViewport, UpdateThrottle
from ..session.model import SessionContext

logger = logging.getLogger(__name__)


@dataclass
class CheckInState:
    """Everything a check-in screen renders."""

    current_fix: Optional[PositionFix] = None
    proximity: Optional[ProximityResult] = None
    is_locating: bool = True
    location_error: Optional[LocationFailure] = None
    marked_on: Optional[date] = None
    submitting: bool = False
    submit_error: Optional[str] = None
    duplicate_notice: bool = False
    last_result: Optional[SubmissionResult] = None

    @property
    def location_match(self) -> Optional[bool]:
        if self.proximity is None:
            return None
        return self.proximity.within_threshold


class CheckInFlow:
    """Location-verified attendance check-in for one session.

    Position events flow through the throttle into the distance evaluator;
    ``submit()`` is only forwarded to the backend while every precondition
    holds. Use as an async context manager; leaving it stops positioning and
    discards results of requests still in flight.
    """

    def __init__(
        self,
        session: SessionContext,
        source: PositionSource,
        attendance: AttendanceService,
        *,
        threshold_m: float,
        apply_interval_ms: int = DEFAULT_APPLY_INTERVAL_MS,
        marked_on: Optional[date] = None,
        clock: Callable[[], float] = monotonic,
    ):
        self._session = session
        self._source = source
        self._attendance = attendance
        self._evaluator = DistanceEvaluator(session.reference_location, threshold_m)
        self.viewport = MapViewport(center=session.reference_location)
        self._throttle = UpdateThrottle(min_interval_ms=apply_interval_ms, viewport=self.viewport, clock=clock)
        self.state = CheckInState(marked_on=marked_on)
        self._consumer: Optional[asyncio.Task] = None
        self._active = False
        self._force_next = False

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def source(self) -> PositionSource:
        return self._source

    @property
    def threshold_m(self) -> float:
        return self._evaluator.threshold_m

    @property
    def active(self) -> bool:
        return self._active

    async def __aenter__(self) -> "CheckInFlow":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> None:
        if self._active:
            return
        self._active = True
        try:
            await self._source.start()
            self._consumer = asyncio.get_running_loop().create_task(self._consume())
        except BaseException:
            await self.close()
            raise

    async def close(self) -> None:
        self._active = False
        self._source.stop()
        consumer, self._consumer = self._consumer, None
        if consumer is not None and not consumer.done():
            consumer.cancel()
            try:
                await consumer
            except asyncio.CancelledError:
                pass

    async def _consume(self) -> None:
        async for event in self._source:
            try:
                self.handle_event(event)
            except Exception:
                logger.exception("failed to apply position event %r", event)

    def handle_event(self, event: PositionEvent) -> None:
        if not self._active:
            return
        if isinstance(event, PositionFix):
            self._on_fix(event)
        elif isinstance(event, LocationFailure):
            self._on_failure(event)

    def _on_fix(self, fix: PositionFix) -> None:
        # Any fix, applied or dropped, means location is working again.
        self.state.location_error = None
        self.state.is_locating = False

        force, self._force_next = self._force_next, False
        if not self._throttle.offer(fix, force=force):
            return
        self.state.current_fix = fix
        self.state.proximity = self._evaluator.evaluate(fix.coordinate)
        logger.debug(
            "fix applied: %.1f m from center (approximate=%s, match=%s)",
            self.state.proximity.distance_m,
            fix.is_approximate,
            self.state.proximity.within_threshold,
        )

    def _on_failure(self, failure: LocationFailure) -> None:
        self.state.location_error = failure
        self.state.is_locating = False

    @property
    def location_blocked(self) -> bool:
        return self._source.error_severity == ErrorSeverity.TERMINAL

    @property
    def marked_today(self) -> bool:
        return self.state.marked_on == self._attendance.today()

    @property
    def block_reason(self) -> Optional[BlockReason]:
        return self._attendance.block_reason(
            fix=self.state.current_fix,
            proximity=self.state.proximity,
            token=self._session.token,
            marked_on=self.state.marked_on,
            location_blocked=self.location_blocked,
            in_flight=self.state.submitting,
        )

    @property
    def can_submit(self) -> bool:
        return self.block_reason is None

    async def submit(self) -> SubmissionResult:
        reason = self.block_reason
        if reason is not None:
            return SubmissionResult(outcome=SubmissionOutcome.BLOCKED, message=BLOCK_MESSAGES[reason], block_reason=reason)

        self.state.submitting = True
        self.state.submit_error = None
        try:
            result = await self._attendance.submit(
                fix=self.state.current_fix,
                proximity=self.state.proximity,
                token=self._session.token,
                marked_on=self.state.marked_on,
                location_blocked=self.location_blocked,
            )
        finally:
            if self._active:
                self.state.submitting = False

        if not self._active:
            logger.debug("flow closed before attendance response; result discarded")
            return result

        self.state.last_result = result
        if result.outcome == SubmissionOutcome.SUCCESS:
            self.state.marked_on = self._attendance.today()
        elif result.outcome == SubmissionOutcome.DUPLICATE:
            self.state.marked_on = self._attendance.today()
            self.state.duplicate_notice = True
        elif result.outcome == SubmissionOutcome.FAILED:
            self.state.submit_error = result.message
        return result

    def refresh_location(self) -> bool:
        """Manual retry from the location error banner."""
        if not self._active or not self._source.refresh():
            return False
        self._force_next = True
        self.state.is_locating = True
        self.state.location_error = None
        self.state.current_fix = None
        self.state.proximity = None
        return True

    def dismiss_location_error(self) -> None:
        self.state.location_error = None

    def dismiss_submit_error(self) -> None:
        self.state.submit_error = None

    def dismiss_duplicate_notice(self) -> None:
        self.state.duplicate_notice = False
