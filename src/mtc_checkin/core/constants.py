"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000.0

DEFAULT_APPLY_INTERVAL_MS = 5000
DEFAULT_ESCALATE_AFTER_S = 5.0
DEFAULT_ERROR_DEBOUNCE_S = 5.0
DEFAULT_GEOCODER_TIMEOUT_S = 8.0
DEFAULT_API_TIMEOUT_S = 15.0

DEFAULT_TUTOR_THRESHOLD_M = 100.0
DEFAULT_GUEST_THRESHOLD_M = 1300.0

# datetime.weekday(): Monday == 0 ... Sunday == 6
DEFAULT_REST_WEEKDAY = 6

DEFAULT_MAP_ZOOM = 15
FLY_TO_ZOOM = 17

TUTOR_ATTENDANCE_ENDPOINT = "/tutors/attendance"
GUEST_ATTENDANCE_ENDPOINT = "/guest/attendance"

SUCCESS_MESSAGE = "Attendance submitted successfully"
DUPLICATE_KEY_CODE = 11000
DUPLICATE_KEY_MARKER = "E11000"
