import pytest

from partyscout.core import config

_ENV_KEYS = (
    "GOOGLE_API_KEY",
    "PORT",
    "PLACES_TIMEOUT_SECONDS",
    "PLACES_MAX_RESULTS",
    "DEFAULT_SEARCH_RADIUS_METERS",
    "CORS_ALLOW_ORIGINS",
)


def setup_function(function):
    config.get_settings.cache_clear()


def teardown_function(function):
    config.get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: None)


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "abc123")
    monkeypatch.setenv("PORT", "9100")
    monkeypatch.setenv("PLACES_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("PLACES_MAX_RESULTS", "5")
    monkeypatch.setenv("DEFAULT_SEARCH_RADIUS_METERS", "8000")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")

    settings = config.get_settings()

    assert settings.google_api_key == "abc123"
    assert settings.port == 9100
    assert settings.places_timeout_seconds == 2.5
    assert settings.places_max_results == 5
    assert settings.default_search_radius_meters == 8000
    assert settings.cors_allow_origins == ("https://a.example", "https://b.example")


def test_get_settings_defaults_and_warns_when_key_missing(caplog):
    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "GOOGLE_API_KEY is not configured" in " ".join(caplog.messages)
    assert settings.google_api_key == ""
    assert settings.port == 8080
    assert settings.places_timeout_seconds == 10.0
    assert settings.places_max_results == 20
    assert settings.default_search_radius_meters == 5000
    assert settings.cors_allow_origins == ("http://localhost:5173", "http://localhost:3000")


def test_wildcard_cors_origin(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "*")
    assert config.get_settings().cors_allow_origins == ("*",)


def test_require_api_key():
    assert config.Settings(google_api_key="k").require_api_key() == "k"
    with pytest.raises(config.ConfigError):
        config.Settings(google_api_key="").require_api_key()
