"""Unit tests for environment settings."""

from unittest.mock import patch

import pytest

from flybook.config import DEFAULT_API_URL, Settings


@patch("flybook.config.load_dotenv")
class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self, mock_load_dotenv, monkeypatch) -> None:
        for name in (
            "FLYBOOK_API_URL",
            "FLYBOOK_TIMEOUT",
            "FLYBOOK_NOTIFICATION_DWELL",
            "FLYBOOK_NOTIFICATION_GRACE",
            "FLYBOOK_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        s = Settings.from_env()

        mock_load_dotenv.assert_called_once()
        assert s.api_url == DEFAULT_API_URL
        assert s.timeout == 30
        assert s.notification_dwell == 4.7
        assert s.notification_grace == 0.3
        assert s.log_level == "WARNING"

    def test_overrides(self, mock_load_dotenv, monkeypatch) -> None:
        monkeypatch.setenv("FLYBOOK_API_URL", "http://example.test/api")
        monkeypatch.setenv("FLYBOOK_TIMEOUT", "5")
        monkeypatch.setenv("FLYBOOK_NOTIFICATION_DWELL", "1.5")
        monkeypatch.setenv("FLYBOOK_LOG_LEVEL", "debug")

        s = Settings.from_env()

        assert s.api_url == "http://example.test/api"
        assert s.timeout == 5.0
        assert s.notification_dwell == 1.5
        assert s.log_level == "DEBUG"

    def test_invalid_number(self, mock_load_dotenv, monkeypatch) -> None:
        monkeypatch.setenv("FLYBOOK_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="FLYBOOK_TIMEOUT"):
            Settings.from_env()

    def test_invalid_log_level(self, mock_load_dotenv, monkeypatch) -> None:
        monkeypatch.setenv("FLYBOOK_LOG_LEVEL", "loud")
        with pytest.raises(ValueError, match="FLYBOOK_LOG_LEVEL"):
            Settings.from_env()
