"""
Showcase TUI - Textual host for embeddable demo widgets

Usage:
    from cli.tui import run
    run()
"""

from .app import ShowcaseApp, run
from .widgets import WidgetCard, WidgetHost
from .messages import WidgetCommandSent, WidgetStatusChanged

__all__ = [
    "ShowcaseApp",
    "run",
    "WidgetCard",
    "WidgetHost",
    "WidgetCommandSent",
    "WidgetStatusChanged",
]
