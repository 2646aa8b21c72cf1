import importlib

from mtc_checkin.config import get_settings_module


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module() == "mtc_checkin.config.production"

    monkeypatch.setenv("APP_ENV", "Testing")
    assert get_settings_module() == "mtc_checkin.config.testing"

    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "mtc_checkin.config.development"


def test_testing_settings_have_per_role_thresholds():
    settings = importlib.import_module("mtc_checkin.config.testing")

    assert settings.TUTOR_THRESHOLD_M == 100.0
    assert settings.GUEST_THRESHOLD_M == 1300.0
    assert settings.APPLY_INTERVAL_MS == 5000
    assert settings.OPENCAGE_API_KEY is None


def test_environment_modules_own_api_url(monkeypatch):
    from mtc_checkin.config import development, production
    from mtc_checkin.config.config import Config

    assert not hasattr(Config, "API_BASE_URL")

    monkeypatch.setenv("MTC_API_URL", "https://staging.example.org/api")
    try:
        assert importlib.reload(development).API_BASE_URL == "https://staging.example.org/api"
        assert importlib.reload(production).API_BASE_URL == "https://staging.example.org/api"
    finally:
        monkeypatch.delenv("MTC_API_URL")
        importlib.reload(development)
        importlib.reload(production)

    assert production.API_BASE_URL == "https://mtc-backend-jn5y.onrender.com/api"
    assert development.API_BASE_URL == "http://localhost:5000/api"
