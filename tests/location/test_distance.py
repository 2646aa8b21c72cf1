import pytest

from conftest import FAR_FROM_CENTER, MUMBAI_CENTER, NEAR_CENTER

from mtc_checkin.core.exceptions import ValidationError
from mtc_checkin.location.distance import DistanceEvaluator, haversine_m
from mtc_checkin.location.model import Coordinate

PAIRS = [
    (Coordinate(19.0760, 72.8777), Coordinate(19.0850, 72.8900)),
    (Coordinate(-33.8688, 151.2093), Coordinate(51.5074, -0.1278)),
    (Coordinate(0.0, 179.9), Coordinate(0.0, -179.9)),
    (Coordinate(89.9, 0.0), Coordinate(-89.9, 180.0)),
]


@pytest.mark.parametrize("a,b", PAIRS)
def test_distance_is_symmetric(a, b):
    assert haversine_m(a, b) == pytest.approx(haversine_m(b, a), rel=1e-12)


@pytest.mark.parametrize("a", [p[0] for p in PAIRS] + [p[1] for p in PAIRS])
def test_distance_to_self_is_zero(a):
    assert haversine_m(a, a) == 0.0


def test_one_degree_of_latitude_is_about_111_km():
    d = haversine_m(Coordinate(10.0, 20.0), Coordinate(11.0, 20.0))
    assert d == pytest.approx(111_195, rel=1e-3)


def test_date_line_crossing_is_short():
    a, b = PAIRS[2]
    assert haversine_m(a, b) < 25_000


def test_mumbai_nearby_fix_is_within_100m():
    evaluator = DistanceEvaluator(MUMBAI_CENTER, 100)
    result = evaluator.evaluate(Coordinate(*NEAR_CENTER))

    assert 10 < result.distance_m < 20
    assert result.within_threshold is True


def test_mumbai_far_fix_is_outside_100m():
    evaluator = DistanceEvaluator(MUMBAI_CENTER, 100)
    result = evaluator.evaluate(Coordinate(*FAR_FROM_CENTER))

    assert 1_400 < result.distance_m < 1_800
    assert result.within_threshold is False


def test_threshold_boundary_is_inclusive():
    point = Coordinate(*FAR_FROM_CENTER)
    exact = haversine_m(point, MUMBAI_CENTER)

    assert DistanceEvaluator(MUMBAI_CENTER, exact).evaluate(point).within_threshold is True
    assert DistanceEvaluator(MUMBAI_CENTER, exact - 0.001).evaluate(point).within_threshold is False


def test_guest_threshold_accepts_what_tutor_threshold_rejects():
    point = Coordinate(19.0850, 72.8777)  # ~1 km north

    assert DistanceEvaluator(MUMBAI_CENTER, 100).evaluate(point).within_threshold is False
    assert DistanceEvaluator(MUMBAI_CENTER, 1300).evaluate(point).within_threshold is True


def test_negative_threshold_rejected():
    with pytest.raises(ValidationError):
        DistanceEvaluator(MUMBAI_CENTER, -1)


@pytest.mark.parametrize("lat,lng", [(90.1, 0), (-91, 0), (0, 180.5), (0, -181), ("abc", 0)])
def test_coordinate_rejects_out_of_range(lat, lng):
    with pytest.raises(ValidationError):
        Coordinate(lat, lng)
