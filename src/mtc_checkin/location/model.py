from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..common.validators import require_latitude, require_longitude
from ..core.enums import ErrorSeverity, LocationFailureKind


@dataclass(frozen=True)
class Coordinate:
    """A point on the globe in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        object.__setattr__(self, "latitude", require_latitude(self.latitude))
        object.__setattr__(self, "longitude", require_longitude(self.longitude))

    @classmethod
    def from_pair(cls, pair) -> "Coordinate":
        """Build from a ``[lat, lng]`` sequence as stored by the backend."""
        lat, lng = pair[0], pair[1]
        return cls(latitude=lat, longitude=lng)

    def as_pair(self) -> list[float]:
        return [self.latitude, self.longitude]


@dataclass(frozen=True)
class PositionFix:
    coordinate: Coordinate
    is_approximate: bool = False
    timestamp: float = 0.0


@dataclass(frozen=True)
class PositionOptions:
    """Accuracy/staleness/timeout settings handed to the provider."""

    enable_high_accuracy: bool
    maximum_age_ms: int
    timeout_ms: int


STANDARD_OPTIONS = PositionOptions(enable_high_accuracy=False, maximum_age_ms=60_000, timeout_ms=10_000)
HIGH_ACCURACY_OPTIONS = PositionOptions(enable_high_accuracy=True, maximum_age_ms=30_000, timeout_ms=15_000)
REFRESH_OPTIONS = PositionOptions(enable_high_accuracy=True, maximum_age_ms=0, timeout_ms=15_000)


@dataclass(frozen=True)
class LocationFailure:
    """A classified location error surfaced to the flow."""

    kind: LocationFailureKind
    severity: ErrorSeverity
    message: str
    show_help: bool = False
    detail: Optional[str] = None


@dataclass(frozen=True)
class ProximityResult:
    distance_m: float
    within_threshold: bool
    threshold_m: float = field(default=0.0, compare=False)


PositionEvent = Union[PositionFix, LocationFailure]
