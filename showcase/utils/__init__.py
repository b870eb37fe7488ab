"""
Core utilities for the widget host.

This module contains shared utility functions and classes:
- config: Application configuration management
- logging: Structured logging setup
- exceptions: Custom exception classes
- threading: Cooperative cancellation
"""

from .config import SETTINGS, Settings, get_configuration_summary
from .logging import setup_logging
from .exceptions import (
    ShowcaseError,
    ConfigurationError,
    DuplicateKeyError,
    WidgetLoadError,
    LoadAbortedError,
)
from .threading import CancellationToken

__all__ = [
    "SETTINGS",
    "Settings",
    "get_configuration_summary",
    "setup_logging",
    "ShowcaseError",
    "ConfigurationError",
    "DuplicateKeyError",
    "WidgetLoadError",
    "LoadAbortedError",
    "CancellationToken",
]
