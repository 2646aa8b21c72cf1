from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..common.datetime_utils import monotonic
from ..core.constants import DEFAULT_APPLY_INTERVAL_MS, DEFAULT_MAP_ZOOM, FLY_TO_ZOOM
from .model import Coordinate, PositionFix


@dataclass
class MapViewport:
    """Headless map camera state; a UI layer renders it."""

    center: Coordinate
    zoom: int = DEFAULT_MAP_ZOOM
    animated: bool = False
    fly_count: int = 0
    recenter_count: int = 0

    def fly_to(self, coordinate: Coordinate, zoom: int = FLY_TO_ZOOM) -> None:
        self.center = coordinate
        self.zoom = zoom
        self.animated = True
        self.fly_count += 1

    def set_view(self, coordinate: Coordinate) -> None:
        self.center = coordinate
        self.animated = False
        self.recenter_count += 1


class UpdateThrottle:
    """Applies at most one position fix per interval window.

    The first fix is always applied. Fixes arriving before the interval has
    elapsed since the last applied one are dropped, not queued.
    """

    def __init__(
        self,
        *,
        min_interval_ms: int = DEFAULT_APPLY_INTERVAL_MS,
        viewport: Optional[MapViewport] = None,
        clock: Callable[[], float] = monotonic,
    ):
        self._min_interval_s = int(min_interval_ms) / 1000.0
        self._viewport = viewport
        self._clock = clock
        self._last_applied_at: Optional[float] = None
        self._last_applied: Optional[PositionFix] = None

    @property
    def last_applied(self) -> Optional[PositionFix]:
        return self._last_applied

    def offer(self, fix: PositionFix, *, force: bool = False) -> bool:
        """Return True when ``fix`` is applied, False when it is dropped.

        ``force`` skips the interval check for user-requested refreshes.
        """
        now = self._clock()
        first = self._last_applied_at is None
        if not first and not force and now - self._last_applied_at < self._min_interval_s:
            return False

        if self._viewport is not None:
            if first:
                self._viewport.fly_to(fix.coordinate)
            else:
                self._viewport.set_view(fix.coordinate)

        self._last_applied_at = now
        self._last_applied = fix
        return True
