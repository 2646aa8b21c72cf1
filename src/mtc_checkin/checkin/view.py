from __future__ import annotations

from typing import Any

from ..common.error_messages import ALREADY_MARKED, REQUEST_DENIED
from .flow import CheckInFlow


def status_view(flow: CheckInFlow) -> dict[str, Any]:
    """Flatten flow state into display strings for a screen or a log line."""
    state = flow.state
    match = state.location_match
    fix = state.current_fix
    marked = flow.marked_today

    banners: list[dict[str, Any]] = []
    if state.location_error is not None:
        banners.append(
            {
                "kind": "location",
                "text": state.location_error.message,
                "help": state.location_error.show_help,
                "retry": not flow.location_blocked,
            }
        )
    if state.submit_error:
        banners.append({"kind": "submit", "text": state.submit_error, "help": False, "retry": False})

    return {
        "name": flow.session.name,
        "center": flow.session.center.name or "-",
        "locating": state.is_locating,
        "location_status": None if match is None else ("Location verified" if match else "Location mismatch"),
        "marker": None if fix is None else ("Approximate location (fallback)" if fix.is_approximate else "GPS location"),
        "distance_m": None if state.proximity is None else round(state.proximity.distance_m, 1),
        "radius_m": flow.threshold_m,
        "attendance": "Marked" if marked else "Pending",
        "button_label": "Marked" if marked else "Mark Attendance",
        "button_enabled": flow.can_submit,
        "denied_popover": f"{REQUEST_DENIED}: {ALREADY_MARKED}" if state.duplicate_notice else None,
        "banners": banners,
    }
