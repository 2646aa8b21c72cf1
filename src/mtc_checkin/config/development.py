import os

from .config import Config

API_BASE_URL = os.getenv("MTC_API_URL", "http://localhost:5000/api")
API_TIMEOUT_S = Config.API_TIMEOUT_S

OPENCAGE_API_KEY = Config.OPENCAGE_API_KEY
GEOCODER_TIMEOUT_S = Config.GEOCODER_TIMEOUT_S

APPLY_INTERVAL_MS = Config.APPLY_INTERVAL_MS
ESCALATE_AFTER_S = Config.ESCALATE_AFTER_S
ERROR_DEBOUNCE_S = Config.ERROR_DEBOUNCE_S

TUTOR_THRESHOLD_M = Config.TUTOR_THRESHOLD_M
GUEST_THRESHOLD_M = Config.GUEST_THRESHOLD_M
REST_WEEKDAY = Config.REST_WEEKDAY

DEBUG = bool(int(os.getenv("DEBUG", "1")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
