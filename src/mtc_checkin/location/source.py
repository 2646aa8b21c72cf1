from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, Optional

from ..common.datetime_utils import monotonic
from ..common.error_messages import HELP_KINDS, location_message
from ..core.constants import DEFAULT_ERROR_DEBOUNCE_S, DEFAULT_ESCALATE_AFTER_S
from ..core.enums import ErrorSeverity, LocationFailureKind, MonitorPhase, PositionErrorCode
from ..core.exceptions import ValidationError
from ..geocoding.repository import FallbackGeocoder
from .model import (
    HIGH_ACCURACY_OPTIONS,
    REFRESH_OPTIONS,
    STANDARD_OPTIONS,
    Coordinate,
    LocationFailure,
    PositionEvent,
    PositionFix,
    PositionOptions,
)
from .provider import GeolocationProvider

logger = logging.getLogger(__name__)

_STOP = object()

_KIND_BY_CODE = {
    PositionErrorCode.PERMISSION_DENIED: LocationFailureKind.PERMISSION_DENIED,
    PositionErrorCode.POSITION_UNAVAILABLE: LocationFailureKind.POSITION_UNAVAILABLE,
    PositionErrorCode.TIMEOUT: LocationFailureKind.TIMEOUT,
    PositionErrorCode.UNKNOWN: LocationFailureKind.UNKNOWN,
}


def classify_error(code) -> LocationFailureKind:
    try:
        return _KIND_BY_CODE[PositionErrorCode(int(code))]
    except (KeyError, TypeError, ValueError):
        return LocationFailureKind.UNKNOWN


def severity_of(kind: LocationFailureKind) -> ErrorSeverity:
    if kind == LocationFailureKind.PERMISSION_DENIED:
        return ErrorSeverity.TERMINAL
    return ErrorSeverity.RECOVERABLE


class PositionSource:
    """Continuous device positioning as an async stream of events.

    Yields ``PositionFix`` and ``LocationFailure`` items. Use as an async
    context manager so the watch, the escalation timer and any pending
    fallback lookup are released on every exit path::

        async with PositionSource(provider, geocoder, fallback_query="Kurla") as source:
            async for event in source:
                ...
    """

    def __init__(
        self,
        provider: Optional[GeolocationProvider],
        geocoder: FallbackGeocoder,
        *,
        fallback_query: str = "",
        escalate_after_s: float = DEFAULT_ESCALATE_AFTER_S,
        error_debounce_s: float = DEFAULT_ERROR_DEBOUNCE_S,
        standard_options: PositionOptions = STANDARD_OPTIONS,
        high_accuracy_options: PositionOptions = HIGH_ACCURACY_OPTIONS,
        refresh_options: PositionOptions = REFRESH_OPTIONS,
        clock: Callable[[], float] = monotonic,
    ):
        self._provider = provider
        self._geocoder = geocoder
        self._fallback_query = fallback_query or ""
        self._escalate_after_s = float(escalate_after_s)
        self._error_debounce_s = float(error_debounce_s)
        self._standard = standard_options
        self._high = high_accuracy_options
        self._refresh = refresh_options
        self._clock = clock

        self._phase = MonitorPhase.IDLE
        self._severity = ErrorSeverity.NONE
        self._running = False
        self._queue: Optional[asyncio.Queue] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._watch_id: Optional[int] = None
        self._escalate_handle: Optional[asyncio.TimerHandle] = None
        self._fallback_tasks: set[asyncio.Task] = set()
        self._last_error_at: Optional[float] = None

    @property
    def phase(self) -> MonitorPhase:
        return self._phase

    @property
    def error_severity(self) -> ErrorSeverity:
        return self._severity

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def capability_present(self) -> bool:
        return self._provider is not None and bool(self._provider.is_available())

    async def __aenter__(self) -> "PositionSource":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def __aiter__(self) -> AsyncIterator[PositionEvent]:
        return self.events()

    async def start(self) -> None:
        if self._running:
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._running = True
        try:
            if not self.capability_present:
                logger.info("geolocation capability absent, using fallback geocoder")
                self._fail(LocationFailureKind.CAPABILITY_ABSENT)
                return
            self._begin_monitoring(self._standard)
        except BaseException:
            self.stop()
            raise

    def stop(self) -> None:
        """Release the watch, timers and pending lookups. Safe to call twice."""
        was_running = self._running
        self._running = False
        try:
            self._clear_monitoring()
            for task in list(self._fallback_tasks):
                task.cancel()
            self._fallback_tasks.clear()
        finally:
            if was_running and self._queue is not None:
                self._queue.put_nowait(_STOP)

    async def events(self) -> AsyncIterator[PositionEvent]:
        if self._queue is None:
            raise RuntimeError("PositionSource.start() must be awaited before iterating")
        while self._running:
            item = await self._queue.get()
            if item is _STOP or not self._running:
                return
            yield item

    def refresh(self) -> bool:
        """User-requested location retry.

        Issues one fresh high-accuracy request and restores monitoring if an
        error had stopped it. Returns False when nothing was attempted.
        """
        if not self._running:
            return False
        if self._severity == ErrorSeverity.TERMINAL and self.capability_present:
            logger.info("location refresh ignored: permission denied")
            return False
        self._last_error_at = None
        if not self.capability_present:
            self._schedule_fallback(LocationFailureKind.CAPABILITY_ABSENT)
            return True
        if self._watch_id is None:
            self._begin_monitoring(self._refresh)
        else:
            self._provider.get_current_position(self._on_success, self._on_refresh_error, self._refresh)
        return True

    def _begin_monitoring(self, first_fix_options: PositionOptions) -> None:
        self._phase = MonitorPhase.AWAITING_FIRST_FIX
        self._provider.get_current_position(self._on_success, self._on_error, first_fix_options)
        self._watch_id = self._provider.watch_position(self._on_success, self._on_error, self._standard)

    def _clear_monitoring(self) -> None:
        if self._escalate_handle is not None:
            self._escalate_handle.cancel()
            self._escalate_handle = None
        if self._watch_id is not None and self._provider is not None:
            self._provider.clear_watch(self._watch_id)
        self._watch_id = None
        self._phase = MonitorPhase.IDLE

    def _escalate(self) -> None:
        self._escalate_handle = None
        if not self._running or self._watch_id is None:
            return
        self._provider.clear_watch(self._watch_id)
        self._watch_id = self._provider.watch_position(self._on_success, self._on_error, self._high)
        self._phase = MonitorPhase.MONITORING_HIGH_ACCURACY
        logger.debug("position watch escalated to high accuracy")

    def _emit(self, event: PositionEvent) -> None:
        if self._running and self._queue is not None:
            self._queue.put_nowait(event)

    def _on_success(self, latitude: float, longitude: float) -> None:
        if not self._running:
            return
        try:
            coordinate = Coordinate(latitude=latitude, longitude=longitude)
        except ValidationError as e:
            # One bad sample is reported; the watch keeps running.
            logger.warning("discarding invalid position reading: %s", e)
            self._emit_recoverable(LocationFailureKind.UNKNOWN, detail=str(e))
            return

        self._severity = ErrorSeverity.NONE
        if self._phase == MonitorPhase.AWAITING_FIRST_FIX:
            self._phase = MonitorPhase.MONITORING_STANDARD
            if self._escalate_handle is None:
                self._escalate_handle = self._loop.call_later(self._escalate_after_s, self._escalate)
        self._emit(PositionFix(coordinate=coordinate, is_approximate=False, timestamp=self._clock()))

    def _on_error(self, code, message: str = "") -> None:
        if not self._running:
            return
        now = self._clock()
        if self._last_error_at is not None and now - self._last_error_at < self._error_debounce_s:
            logger.debug("location error %s suppressed (debounce)", code)
            return
        self._last_error_at = now

        kind = classify_error(code)
        logger.warning("location error: %s %s", kind.value, message or "")
        self._clear_monitoring()
        self._fail(kind, detail=message or None)

    def _on_refresh_error(self, code, message: str = "") -> None:
        """Error from a manual refresh while the watch is still running.

        The watch stays up and no fallback is attempted; the last fix came
        from it, not from the failed refresh.
        """
        if not self._running:
            return
        if self._watch_id is None:
            self._on_error(code, message)
            return
        logger.info("location refresh failed: %s %s", classify_error(code).value, message or "")
        self._emit_recoverable(LocationFailureKind.REFRESH_FAILED, detail=message or None)

    def _emit_recoverable(self, kind: LocationFailureKind, *, detail: Optional[str] = None) -> None:
        self._emit(
            LocationFailure(
                kind=kind,
                severity=ErrorSeverity.RECOVERABLE,
                message=location_message(kind),
                show_help=kind in HELP_KINDS,
                detail=detail,
            )
        )

    def _fail(self, kind: LocationFailureKind, *, detail: Optional[str] = None) -> None:
        # Fall back whenever the capability is absent or the error is recoverable.
        severity = severity_of(kind)
        self._severity = severity
        if kind != LocationFailureKind.CAPABILITY_ABSENT:
            self._emit(
                LocationFailure(
                    kind=kind,
                    severity=severity,
                    message=location_message(kind),
                    show_help=kind in HELP_KINDS,
                    detail=detail,
                )
            )
        if severity != ErrorSeverity.TERMINAL:
            self._schedule_fallback(kind)

    def _schedule_fallback(self, trigger: LocationFailureKind) -> None:
        task = self._loop.create_task(self._fall_back(trigger))
        self._fallback_tasks.add(task)
        task.add_done_callback(self._fallback_tasks.discard)

    async def _fall_back(self, trigger: LocationFailureKind) -> None:
        try:
            coordinate = await self._geocoder.locate(self._fallback_query)
        except Exception:
            logger.exception("fallback geocoder raised for %r", self._fallback_query)
            coordinate = None

        if not self._running:
            return

        if coordinate is not None:
            self._severity = ErrorSeverity.NONE
            self._emit(PositionFix(coordinate=coordinate, is_approximate=True, timestamp=self._clock()))
            return

        if trigger == LocationFailureKind.CAPABILITY_ABSENT:
            kind, severity = LocationFailureKind.CAPABILITY_ABSENT, ErrorSeverity.TERMINAL
        else:
            kind, severity = LocationFailureKind.UNRESOLVED, ErrorSeverity.RECOVERABLE
        self._severity = severity
        self._emit(LocationFailure(kind=kind, severity=severity, message=location_message(kind), show_help=True))
