import asyncio
import json

import pytest

from mtc_checkin.core.enums import PositionErrorCode
from mtc_checkin.core.exceptions import ValidationError
from mtc_checkin.location.model import PositionOptions
from mtc_checkin.location.replay_provider import ReplayGeolocationProvider, TrackPoint, load_track, parse_track

FAST = PositionOptions(enable_high_accuracy=False, maximum_age_ms=0, timeout_ms=200)


def test_parse_track_positions_and_errors():
    points = parse_track(
        [
            {"delay_s": 0.5, "lat": 19.076, "lng": 72.8777},
            {"delay_s": 1, "error": "timeout"},
            {"lat": "19.1", "lng": "72.9"},
        ]
    )

    assert points[0] == TrackPoint(delay_s=0.5, latitude=19.076, longitude=72.8777)
    assert points[1].error == PositionErrorCode.TIMEOUT
    assert points[2].delay_s == 1.0
    assert points[2].latitude == pytest.approx(19.1)


def test_parse_track_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_track([{"delay_s": 1, "error": "on_fire"}])
    with pytest.raises(ValidationError):
        parse_track([{"delay_s": 1, "lat": 19.0}])


def test_load_track_accepts_points_object(tmp_path):
    path = tmp_path / "track.json"
    path.write_text(json.dumps({"points": [{"delay_s": 0, "lat": 1, "lng": 2}]}), encoding="utf-8")

    assert load_track(path) == [TrackPoint(delay_s=0.0, latitude=1.0, longitude=2.0)]


def test_watch_replays_track_in_order():
    track = parse_track(
        [
            {"delay_s": 0.01, "lat": 19.0, "lng": 72.0},
            {"delay_s": 0.01, "error": "position_unavailable"},
            {"delay_s": 0.01, "lat": 19.1, "lng": 72.1},
        ]
    )
    provider = ReplayGeolocationProvider(track)
    seen = []

    async def scenario():
        provider.watch_position(lambda lat, lng: seen.append((lat, lng)), lambda code, msg: seen.append(code), FAST)
        await asyncio.sleep(0.2)

    asyncio.run(scenario())
    assert seen == [(19.0, 72.0), PositionErrorCode.POSITION_UNAVAILABLE, (19.1, 72.1)]


def test_slow_sample_becomes_timeout():
    provider = ReplayGeolocationProvider([TrackPoint(delay_s=5.0, latitude=19.0, longitude=72.0)])
    seen = []

    async def scenario():
        provider.get_current_position(lambda lat, lng: seen.append("fix"), lambda code, msg: seen.append(code), FAST)
        await asyncio.sleep(0.4)

    asyncio.run(scenario())
    assert seen == [PositionErrorCode.TIMEOUT]


def test_clear_watch_stops_playback():
    track = [TrackPoint(delay_s=0.05, latitude=19.0, longitude=72.0) for _ in range(5)]
    provider = ReplayGeolocationProvider(track)
    seen = []

    async def scenario():
        watch_id = provider.watch_position(lambda lat, lng: seen.append(lat), lambda code, msg: None, FAST)
        await asyncio.sleep(0.07)
        provider.clear_watch(watch_id)
        await asyncio.sleep(0.3)

    asyncio.run(scenario())
    assert len(seen) == 1
