from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Optional

import pytest

from mtc_checkin.core.enums import Role
from mtc_checkin.location.model import Coordinate
from mtc_checkin.session.model import CenterInfo, SessionContext

MUMBAI_CENTER = Coordinate(19.0760, 72.8777)
NEAR_CENTER = (19.0761, 72.8778)
FAR_FROM_CENTER = (19.0850, 72.8900)

# 2026-02-02 is a Monday, 2026-02-01 a Sunday.
MONDAY = datetime(2026, 2, 2, 9, 30)
SUNDAY = datetime(2026, 2, 1, 9, 30)


class ManualProvider:
    """Geolocation provider driven by the test."""

    def __init__(self, available: bool = True):
        self.available = available
        self.one_shots = []
        self.watches = {}
        self.cleared = []
        self._next_id = 0

    def is_available(self) -> bool:
        return self.available

    def get_current_position(self, on_success, on_error, options) -> None:
        self.one_shots.append((on_success, on_error, options))

    def watch_position(self, on_success, on_error, options) -> int:
        self._next_id += 1
        self.watches[self._next_id] = (on_success, on_error, options)
        return self._next_id

    def clear_watch(self, watch_id: int) -> None:
        self.cleared.append(watch_id)
        self.watches.pop(watch_id, None)

    def push_fix(self, lat: float, lng: float) -> None:
        for on_success, _, _ in list(self.watches.values()):
            on_success(lat, lng)

    def push_error(self, code, message: str = "") -> None:
        for _, on_error, _ in list(self.watches.values()):
            on_error(code, message)

    @property
    def watch_options(self):
        return [opts for _, _, opts in self.watches.values()]


class FakeGeocoder:
    def __init__(self, result: Optional[Coordinate] = None, *, gate: Optional[asyncio.Event] = None):
        self.result = result
        self.gate = gate
        self.calls: list[str] = []

    async def locate(self, query: str) -> Optional[Coordinate]:
        self.calls.append(query)
        if self.gate is not None:
            await self.gate.wait()
        return self.result


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


async def settle(rounds: int = 5) -> None:
    """Let queued callbacks and consumer tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def make_session(role: Role = Role.TUTOR, token: Optional[str] = "tok-123") -> SessionContext:
    return SessionContext(
        user_id="t-1",
        name="Ayesha",
        role=role,
        token=token,
        center=CenterInfo(center_id="c-9", name="Kurla Center", city="Mumbai", coordinate=MUMBAI_CENTER),
    )


@pytest.fixture
def provider() -> ManualProvider:
    return ManualProvider()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
