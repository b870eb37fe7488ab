"""Widget interface.

Abstract base class every mountable widget implements. Mounts select an
implementation by registry key and only talk to it through this contract.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

from rich.console import RenderableType

from ..session import SessionScope
from ..utils.config import SETTINGS, Settings


class WidgetInterface(ABC):
    """Interface for renderable, mountable widgets.

    Mounts construct implementations as ``Widget(settings=...)``.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or SETTINGS

    def on_mount(self, scope: SessionScope) -> None:
        """Called once after the widget is bound to its mount's scope."""

    def on_unmount(self, scope: SessionScope) -> None:
        """Called before the mount destroys the scope."""

    def on_session_reset(self, scope: SessionScope) -> None:
        """Called after an idle scope was reset and carries a new session id."""

    @abstractmethod
    def render(self, scope: SessionScope) -> RenderableType:
        """Render the widget.

        Args:
            scope: The owning mount's session scope

        Returns:
            A Rich renderable
        """
        pass

    @abstractmethod
    def handle_event(self, event: Any, scope: SessionScope) -> None:
        """Handle a synchronous user event.

        Args:
            event: Widget-specific event payload
            scope: The owning mount's session scope
        """
        pass
