from ..core import constants

API_BASE_URL = "http://testserver/api"
API_TIMEOUT_S = 2.0

OPENCAGE_API_KEY = None
GEOCODER_TIMEOUT_S = 1.0

APPLY_INTERVAL_MS = constants.DEFAULT_APPLY_INTERVAL_MS
ESCALATE_AFTER_S = constants.DEFAULT_ESCALATE_AFTER_S
ERROR_DEBOUNCE_S = constants.DEFAULT_ERROR_DEBOUNCE_S

TUTOR_THRESHOLD_M = constants.DEFAULT_TUTOR_THRESHOLD_M
GUEST_THRESHOLD_M = constants.DEFAULT_GUEST_THRESHOLD_M
REST_WEEKDAY = constants.DEFAULT_REST_WEEKDAY

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
