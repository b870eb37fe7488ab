"""Embeddable widget implementations."""
from .base import WidgetInterface
from .terminal import TerminalDemo, file_api_base_url, terminal_session_status

__all__ = [
    "WidgetInterface",
    "TerminalDemo",
    "file_api_base_url",
    "terminal_session_status",
]
