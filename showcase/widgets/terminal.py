"""
Scripted terminal demo widget.

Replays a short setup walkthrough and answers a handful of commands. The
live shell transport is not implemented; with the terminal feature on the
widget reports that it is running in fallback mode.
"""
import logging
from typing import Any, Dict, List, Optional

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from ..session import SessionScope
from ..utils.config import SETTINGS, Settings
from .base import WidgetInterface

log = logging.getLogger(__name__)

BANNER = "Portfolio Terminal Demo"
PROMPT = "$"
COMMANDS = ("help", "clear", "replay")
MAX_LINES = 200
REPLAY_HINT = "Type 'help' or press Enter to replay."

SETUP_SCRIPT = (
    "git clone https://github.com/nextjs/saas-starter",
    "npm install",
    "npm run db:setup",
    "npm run db:migrate",
    "npm run db:seed",
    "npm run dev 🎉",
)


def terminal_session_status(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Describe whether a live terminal session could be offered."""
    settings = settings or SETTINGS
    if not settings.feature_terminal:
        return {"ok": False, "enabled": False, "reason": "Feature disabled"}
    return {
        "ok": True,
        "enabled": True,
        "ws_url": settings.terminal_ws_url,
        "file_api_url": file_api_base_url(settings.terminal_ws_url),
    }


def file_api_base_url(ws_url: str) -> str:
    """Derive the HTTP file API base from the terminal WebSocket URL."""
    # wss: must be replaced before ws:
    return ws_url.replace("wss:", "https:", 1).replace("ws:", "http:", 1).replace("/ws", "", 1)


class TerminalDemo(WidgetInterface):
    """Terminal walkthrough rendered as a Rich panel."""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(settings)
        self.lines: List[str] = []

    @property
    def mode_label(self) -> str:
        return "Demo (fallback)" if self.settings.feature_terminal else "Demo (feature off)"

    def on_mount(self, scope: SessionScope) -> None:
        scope.set("terminal.status", terminal_session_status(self.settings))
        self._write_banner(scope)
        self._replay()

    def on_unmount(self, scope: SessionScope) -> None:
        self.lines.clear()

    def on_session_reset(self, scope: SessionScope) -> None:
        self.lines.clear()
        self._write_banner(scope)

    def render(self, scope: SessionScope) -> RenderableType:
        body = Text()
        for line in self.lines:
            if line.startswith(f"{PROMPT} "):
                body.append(PROMPT, style="bold green")
                body.append(line[len(PROMPT):] + "\n")
            else:
                body.append(line + "\n")
        footer = Text(f"Session: {scope.session_id}", style="dim")
        return Panel(
            Group(body, footer),
            title="Terminal Demo",
            subtitle=self.mode_label,
            border_style="cyan",
        )

    def handle_event(self, event: Any, scope: SessionScope) -> None:
        if not isinstance(event, str):
            raise TypeError(f"Terminal demo expects a command string, got {type(event).__name__}")

        scope.touch()
        raw = event.strip()
        cmd = raw.lower()

        if not cmd or cmd == "replay":
            self._replay()
        elif cmd == "help":
            self._write(f"Commands: {', '.join(COMMANDS)}")
        elif cmd == "clear":
            self.lines.clear()
            self._write_banner(scope)
        else:
            self._write(
                f'Demo mode: command not available "{raw}". Try: {" | ".join(COMMANDS)}'
            )

    def _write_banner(self, scope: SessionScope) -> None:
        self._write(BANNER)
        self._write(f"Session: {scope.session_id}")
        if self.settings.feature_terminal:
            self._write("Live terminal transport is not available; running the scripted demo.")
        else:
            self._write(REPLAY_HINT)

    def _replay(self) -> None:
        for step in SETUP_SCRIPT:
            self._write(f"{PROMPT} {step}")

    def _write(self, line: str) -> None:
        self.lines.append(line)
        if len(self.lines) > MAX_LINES:
            del self.lines[: len(self.lines) - MAX_LINES]
