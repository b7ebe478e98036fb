# =============================================================================
# tests/unit/test_settings.py
# Unit Tests for client settings
# =============================================================================

from unittest.mock import patch

import pytest

from livestock_core.config import ClientSettings, DEFAULT_BASE_URL, load_settings
from livestock_core.errors import ConfigurationError


@pytest.fixture
def no_secrets():
    with patch("livestock_core.config.settings._load_from_secrets", return_value=None):
        yield


@pytest.fixture
def clean_env(monkeypatch, no_secrets):
    for name in ("LIVESTOCK_API_URL", "LIVESTOCK_API_TIMEOUT", "LIVESTOCK_STORAGE_DIR",
                 "LIVESTOCK_RECENT_EVENTS", "LIVESTOCK_MAX_WORKERS"):
        monkeypatch.delenv(name, raising=False)
    with patch("livestock_core.config.settings.load_dotenv"):
        yield monkeypatch


class TestLoadSettings:
    """Test precedence and validation"""

    def test_defaults(self, clean_env):
        settings = load_settings()

        assert settings == ClientSettings()
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == 30.0

    def test_environment_values(self, clean_env):
        clean_env.setenv("LIVESTOCK_API_URL", "https://farm.example/api/")
        clean_env.setenv("LIVESTOCK_API_TIMEOUT", "12.5")
        clean_env.setenv("LIVESTOCK_MAX_WORKERS", "8")

        settings = load_settings()

        assert settings.base_url == "https://farm.example/api"
        assert settings.timeout == 12.5
        assert settings.max_workers == 8

    def test_secrets_take_precedence_over_environment(self, monkeypatch):
        monkeypatch.setenv("LIVESTOCK_API_URL", "https://env.example/api")
        secrets = {"base_url": "https://secrets.example/api", "timeout": 10, "unrelated": True}

        with patch("livestock_core.config.settings._load_from_secrets", return_value=secrets):
            settings = load_settings()

        assert settings.base_url == "https://secrets.example/api"
        assert settings.timeout == 10.0

    def test_overrides_win(self, clean_env):
        clean_env.setenv("LIVESTOCK_API_URL", "https://env.example/api")

        settings = load_settings(base_url="http://override/api", recent_events_limit=3)

        assert settings.base_url == "http://override/api"
        assert settings.recent_events_limit == 3

    def test_invalid_timeout_raises(self, clean_env):
        clean_env.setenv("LIVESTOCK_API_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings()

        assert exc_info.value.details["config_key"] == "timeout"
        assert exc_info.value.recoverable is False

    def test_non_positive_workers_raise(self, clean_env):
        with pytest.raises(ConfigurationError):
            load_settings(max_workers=0)

    def test_unknown_override_raises(self, clean_env):
        with pytest.raises(ConfigurationError):
            load_settings(colour="green")

    def test_with_overrides_ignores_none(self):
        settings = ClientSettings().with_overrides(timeout=None, storage_dir="/tmp/s")

        assert settings.timeout == 30.0
        assert settings.storage_dir == "/tmp/s"
