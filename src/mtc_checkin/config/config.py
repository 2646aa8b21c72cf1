import os

from ..core import constants


def _env_float(name: str, default: float) -> float:
    return float(os.environ.get(name, str(default)))


class Config:
    # API_BASE_URL lives in each environment module; defaults differ.
    API_TIMEOUT_S = _env_float("MTC_API_TIMEOUT_S", constants.DEFAULT_API_TIMEOUT_S)

    # Fallback geocoding (OpenCage). No key means fallback is unavailable.
    OPENCAGE_API_KEY = os.environ.get("OPENCAGE_API_KEY") or None
    GEOCODER_TIMEOUT_S = _env_float("GEOCODER_TIMEOUT_S", constants.DEFAULT_GEOCODER_TIMEOUT_S)

    # Position pipeline
    APPLY_INTERVAL_MS = int(os.environ.get("APPLY_INTERVAL_MS", str(constants.DEFAULT_APPLY_INTERVAL_MS)))
    ESCALATE_AFTER_S = _env_float("ESCALATE_AFTER_S", constants.DEFAULT_ESCALATE_AFTER_S)
    ERROR_DEBOUNCE_S = _env_float("ERROR_DEBOUNCE_S", constants.DEFAULT_ERROR_DEBOUNCE_S)

    # Per-role distance thresholds, metres
    TUTOR_THRESHOLD_M = _env_float("TUTOR_THRESHOLD_M", constants.DEFAULT_TUTOR_THRESHOLD_M)
    GUEST_THRESHOLD_M = _env_float("GUEST_THRESHOLD_M", constants.DEFAULT_GUEST_THRESHOLD_M)

    REST_WEEKDAY = int(os.environ.get("REST_WEEKDAY", str(constants.DEFAULT_REST_WEEKDAY)))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
