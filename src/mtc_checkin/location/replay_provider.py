from __future__ import annotations

import asyncio
import itertools
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from ..core.enums import PositionErrorCode
from ..core.exceptions import ValidationError
from .model import PositionOptions
from .provider import ErrorCallback, SuccessCallback

logger = logging.getLogger(__name__)

_ERROR_NAMES = {
    "permission_denied": PositionErrorCode.PERMISSION_DENIED,
    "position_unavailable": PositionErrorCode.POSITION_UNAVAILABLE,
    "timeout": PositionErrorCode.TIMEOUT,
    "unknown": PositionErrorCode.UNKNOWN,
}


@dataclass(frozen=True)
class TrackPoint:
    """One recorded sample: a position or an error, after ``delay_s``."""

    delay_s: float
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    error: Optional[PositionErrorCode] = None
    message: str = ""


def parse_track(items: Sequence[dict]) -> list[TrackPoint]:
    points: list[TrackPoint] = []
    for i, item in enumerate(items):
        delay = float(item.get("delay_s", 1.0))
        if "error" in item:
            name = str(item["error"]).strip().lower()
            if name not in _ERROR_NAMES:
                raise ValidationError(f"track[{i}]: unknown error {item['error']!r}")
            points.append(TrackPoint(delay_s=delay, error=_ERROR_NAMES[name], message=str(item.get("message", ""))))
            continue
        try:
            points.append(TrackPoint(delay_s=delay, latitude=float(item["lat"]), longitude=float(item["lng"])))
        except (KeyError, TypeError, ValueError):
            raise ValidationError(f"track[{i}]: expected 'lat' and 'lng' or 'error'")
    return points


def load_track(path: Path | str) -> list[TrackPoint]:
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get("points", [])
    return parse_track(data)


class ReplayGeolocationProvider:
    """Plays back a recorded track as if it came from a device.

    ``get_current_position`` delivers the first sample; each watch replays
    the whole track in order. A sample whose delay exceeds the requested
    timeout is reported as a timeout error instead.
    """

    def __init__(self, track: Sequence[TrackPoint], *, available: bool = True):
        self._track = list(track)
        self._available = bool(available)
        self._ids = itertools.count(1)
        self._tasks: dict[int, asyncio.Task] = {}

    def is_available(self) -> bool:
        return self._available

    def get_current_position(self, on_success: SuccessCallback, on_error: ErrorCallback, options: PositionOptions) -> None:
        task_id = next(self._ids)
        self._tasks[task_id] = asyncio.get_running_loop().create_task(
            self._play(task_id, self._track[:1], on_success, on_error, options)
        )

    def watch_position(self, on_success: SuccessCallback, on_error: ErrorCallback, options: PositionOptions) -> int:
        watch_id = next(self._ids)
        self._tasks[watch_id] = asyncio.get_running_loop().create_task(
            self._play(watch_id, self._track, on_success, on_error, options)
        )
        logger.debug("replay watch %s started (high_accuracy=%s)", watch_id, options.enable_high_accuracy)
        return watch_id

    def clear_watch(self, watch_id: int) -> None:
        task = self._tasks.pop(watch_id, None)
        if task is not None:
            task.cancel()

    def close(self) -> None:
        for watch_id in list(self._tasks):
            self.clear_watch(watch_id)

    async def _play(self, task_id, points, on_success, on_error, options: PositionOptions) -> None:
        timeout_s = options.timeout_ms / 1000.0
        try:
            if not points:
                await asyncio.sleep(timeout_s)
                on_error(PositionErrorCode.TIMEOUT, "Timeout expired")
                return
            for point in points:
                if point.delay_s > timeout_s:
                    await asyncio.sleep(timeout_s)
                    on_error(PositionErrorCode.TIMEOUT, "Timeout expired")
                    continue
                await asyncio.sleep(point.delay_s)
                if point.error is not None:
                    on_error(point.error, point.message)
                else:
                    on_success(point.latitude, point.longitude)
        finally:
            self._tasks.pop(task_id, None)
