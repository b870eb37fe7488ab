"""
Application configuration using Pydantic Settings.
Manages environment variables and default settings for the widget host.
"""
from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TERMINAL_WS_URL = "ws://127.0.0.1:4000/ws"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env file.

    All settings can be overridden with environment variables using the aliases
    (e.g., ENVIRONMENT, FEATURE_TERMINAL).
    """
    # Environment Settings
    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Widget registry
    widget_catalog: Path | None = Field(default=None, alias="WIDGET_CATALOG")
    widget_load_timeout: float = Field(10.0, alias="WIDGET_LOAD_TIMEOUT")

    # Sessions
    session_timeout_seconds: float = Field(120.0, alias="SESSION_TIMEOUT_SECONDS")

    # Terminal demo
    feature_terminal: bool = Field(False, alias="FEATURE_TERMINAL")
    terminal_ws_url: str = Field(DEFAULT_TERMINAL_WS_URL, alias="TERMINAL_WS_URL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore"
    )

    @field_validator('session_timeout_seconds', mode='after')
    @classmethod
    def validate_session_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Session timeout must be positive")
        return v

    @field_validator('terminal_ws_url', mode='after')
    @classmethod
    def validate_ws_url(cls, v: str) -> str:
        if not v.startswith(("ws://", "wss://")):
            raise ValueError(f"Terminal WebSocket URL must use ws:// or wss://, got '{v}'")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def load_timeout(self) -> float | None:
        """Load timeout in seconds, or None when disabled."""
        return self.widget_load_timeout if self.widget_load_timeout > 0 else None


# Global settings instance - automatically loads from environment and .env file
SETTINGS = Settings()


def get_configuration_summary(settings: Settings | None = None) -> dict:
    """
    Get a summary of all configuration for display.

    Returns:
        Dictionary with configuration values
    """
    settings = settings or SETTINGS
    return {
        'environment': settings.environment,
        'log_level': settings.log_level,
        'widget_catalog': str(settings.widget_catalog) if settings.widget_catalog else "built-in",
        'widget_load_timeout': settings.load_timeout if settings.load_timeout else "disabled",
        'session_timeout_seconds': settings.session_timeout_seconds,
        'feature_terminal': settings.feature_terminal,
        'terminal_ws_url': settings.terminal_ws_url,
    }
