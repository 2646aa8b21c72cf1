from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from ..core.constants import EARTH_RADIUS_M
from ..core.exceptions import ValidationError
from .model import Coordinate, ProximityResult


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates, in metres."""
    lat1, lat2 = radians(a.latitude), radians(b.latitude)
    dlat = radians(b.latitude - a.latitude)
    dlon = radians(b.longitude - a.longitude)
    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Guard against h drifting a hair above 1.0 for antipodal points.
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_M * atan2(sqrt(h), sqrt(1 - h))


class DistanceEvaluator:
    """Classifies proximity of a coordinate to a fixed reference location."""

    def __init__(self, reference: Coordinate, threshold_m: float):
        if threshold_m is None or float(threshold_m) < 0:
            raise ValidationError("threshold_m must be a non-negative number of metres")
        self._reference = reference
        self._threshold_m = float(threshold_m)

    @property
    def reference(self) -> Coordinate:
        return self._reference

    @property
    def threshold_m(self) -> float:
        return self._threshold_m

    def evaluate(self, coordinate: Coordinate) -> ProximityResult:
        distance = haversine_m(coordinate, self._reference)
        return ProximityResult(
            distance_m=distance,
            within_threshold=distance <= self._threshold_m,
            threshold_m=self._threshold_m,
        )
