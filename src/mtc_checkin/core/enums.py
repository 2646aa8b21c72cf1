from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles issued by the authentication backend."""

    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    TUTOR = "tutor"
    GUEST = "guest"


class PositionErrorCode(int, Enum):
    """Error codes reported by a geolocation provider (W3C numbering)."""

    UNKNOWN = 0
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


class LocationFailureKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"
    CAPABILITY_ABSENT = "capability_absent"
    UNRESOLVED = "unresolved"
    REFRESH_FAILED = "refresh_failed"


class ErrorSeverity(str, Enum):
    NONE = "none"
    RECOVERABLE = "recoverable"
    TERMINAL = "terminal"


class MonitorPhase(str, Enum):
    """Lifecycle of the continuous position monitor."""

    IDLE = "idle"
    AWAITING_FIRST_FIX = "awaiting_first_fix"
    MONITORING_STANDARD = "monitoring_standard"
    MONITORING_HIGH_ACCURACY = "monitoring_high_accuracy"


class SubmissionOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    DUPLICATE = "DUPLICATE"
    FAILED = "FAILED"
    BLOCKED = "BLOCKED"


class BlockReason(str, Enum):
    """Why the attendance action is currently disabled."""

    NO_FIX = "NO_FIX"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    ALREADY_MARKED = "ALREADY_MARKED"
    REST_DAY = "REST_DAY"
    LOCATION_BLOCKED = "LOCATION_BLOCKED"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    IN_FLIGHT = "IN_FLIGHT"
