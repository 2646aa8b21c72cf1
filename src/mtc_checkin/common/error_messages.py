"""User-facing messages for location and submission failures."""

from __future__ import annotations

from typing import Any, Optional

from ..core.enums import LocationFailureKind

GENERIC_SUBMIT_ERROR = "Failed to mark attendance"
NETWORK_ERROR = "Unable to reach the server. Please check your internet connection or try again later."
ALREADY_MARKED = "Attendance has already been marked for today."
REQUEST_DENIED = "Request Denied"

LOCATION_MESSAGES = {
    LocationFailureKind.PERMISSION_DENIED: (
        'Location access denied. Click "Get Help" to learn how to enable location permissions.'
    ),
    LocationFailureKind.POSITION_UNAVAILABLE: "Location information is unavailable. Please check your GPS settings.",
    LocationFailureKind.TIMEOUT: "Location request timed out. Trying fallback method...",
    LocationFailureKind.UNKNOWN: "An unknown error occurred while retrieving location.",
    LocationFailureKind.CAPABILITY_ABSENT: "Unable to determine location.",
    LocationFailureKind.UNRESOLVED: "Unable to determine location from any source. Please check your settings.",
    LocationFailureKind.REFRESH_FAILED: "Failed to refresh location. Please try again.",
}

# Failures where the UI offers the "Get Help" link.
HELP_KINDS = frozenset(
    {
        LocationFailureKind.PERMISSION_DENIED,
        LocationFailureKind.POSITION_UNAVAILABLE,
        LocationFailureKind.UNKNOWN,
        LocationFailureKind.CAPABILITY_ABSENT,
        LocationFailureKind.UNRESOLVED,
    }
)

STATUS_MESSAGES = {
    400: "Bad request. Please check your input.",
    401: "Your session has expired. Please login again.",
    403: "You do not have permission to perform this action.",
    404: "Requested resource was not found.",
    500: "Internal server error. Please try again later.",
}


def location_message(kind: LocationFailureKind) -> str:
    return LOCATION_MESSAGES.get(kind, LOCATION_MESSAGES[LocationFailureKind.UNKNOWN])


def submission_message(status: int, payload: Optional[dict[str, Any]] = None) -> str:
    """Pick the message shown for a failed submission.

    The server-provided ``message`` wins, except for 401 where the session
    wording is always used.
    """
    if status == 401:
        return STATUS_MESSAGES[401]
    message = (payload or {}).get("message")
    if message:
        return str(message)
    if status in STATUS_MESSAGES:
        return STATUS_MESSAGES[status]
    if status:
        return f"Request failed with status {status}."
    return GENERIC_SUBMIT_ERROR
