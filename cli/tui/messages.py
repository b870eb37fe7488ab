"""
Custom Textual messages posted by widget hosts.

Hosts report lifecycle changes upward so the app can update its status
bar without reaching into each host.
"""

from textual.message import Message

from showcase.models import MountStatus


class WidgetStatusChanged(Message):
    """A hosted widget changed lifecycle status."""

    def __init__(self, key: str, status: MountStatus) -> None:
        self.key = key
        self.status = status
        super().__init__()


class WidgetCommandSent(Message):
    """A command was forwarded to a hosted widget."""

    def __init__(self, key: str, command: str, delivered: bool) -> None:
        self.key = key
        self.command = command
        self.delivered = delivered
        super().__init__()
