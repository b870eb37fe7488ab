"""
Unit tests for application settings.
"""
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from showcase.utils.config import DEFAULT_TERMINAL_WS_URL, Settings, get_configuration_summary


class TestSettingsDefaults:
    """Test default values."""

    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.is_production is False
        assert settings.feature_terminal is False
        assert settings.terminal_ws_url == DEFAULT_TERMINAL_WS_URL
        assert settings.session_timeout_seconds == 120
        assert settings.load_timeout == 10.0
        assert settings.widget_catalog is None


class TestSettingsEnvironment:
    """Test environment overrides."""

    def test_environment_variables(self):
        with patch.dict("os.environ", {
            "ENVIRONMENT": "Production",
            "FEATURE_TERMINAL": "true",
            "WIDGET_CATALOG": "config/widgets.json",
            "WIDGET_LOAD_TIMEOUT": "2.5",
        }):
            settings = Settings(_env_file=None)

        assert settings.is_production is True
        assert settings.feature_terminal is True
        assert settings.widget_catalog == Path("config/widgets.json")
        assert settings.load_timeout == 2.5

    @pytest.mark.parametrize("value", ["0", "-1"])
    def test_non_positive_load_timeout_disables(self, value):
        with patch.dict("os.environ", {"WIDGET_LOAD_TIMEOUT": value}):
            settings = Settings(_env_file=None)
        assert settings.load_timeout is None

    def test_invalid_ws_url_rejected(self):
        with pytest.raises(ValidationError):
            Settings(TERMINAL_WS_URL="http://example.com/ws", _env_file=None)

    def test_invalid_session_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Settings(SESSION_TIMEOUT_SECONDS=0, _env_file=None)


class TestConfigurationSummary:
    """Test the display summary."""

    def test_summary(self):
        settings = Settings(FEATURE_TERMINAL=True, WIDGET_LOAD_TIMEOUT=0, _env_file=None)
        summary = get_configuration_summary(settings)

        assert summary["feature_terminal"] is True
        assert summary["widget_load_timeout"] == "disabled"
        assert summary["widget_catalog"] in ("built-in", str(settings.widget_catalog))
