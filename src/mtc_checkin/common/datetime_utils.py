from __future__ import annotations

import time
from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def monotonic() -> float:
    """Seconds from a monotonic clock, used for throttling and debouncing."""
    return time.monotonic()


def is_rest_day(day: date, rest_weekday: int) -> bool:
    return day.weekday() == int(rest_weekday)
