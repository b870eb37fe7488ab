"""
Showcase TUI - Interactive demos page

Lists every registered widget as a card and embeds it through a WidgetHost.
A failing widget shows its own fallback; sibling widgets keep running.
"""

from __future__ import annotations

from typing import Dict, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer
from textual.widgets import Footer, Header, Static

from showcase.models import MountStatus
from showcase.registry import WidgetRegistry, get_registry
from showcase.utils.config import Settings

from .messages import WidgetCommandSent, WidgetStatusChanged
from .widgets import WidgetCard, WidgetHost


class ShowcaseApp(App):
    """
    Host application for the widget registry.

    Features:
    - One card per registry entry, in registry order
    - Per-widget lazy loading and crash containment
    - Retry of failed widgets from the keyboard
    """

    CSS = """
    Screen {
        background: #0a0e1a;
        color: #e2e8f0;
    }

    Header {
        background: #0f172a;
        color: #38bdf8;
    }

    #demos {
        height: 1fr;
    }

    #status-bar {
        dock: bottom;
        height: 1;
        background: #1e293b;
        color: #94a3b8;
        padding: 0 2;
    }

    Footer {
        background: #0f172a;
    }
    """

    TITLE = "SHOWCASE"
    SUB_TITLE = "Interactive Demos"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "retry_failed", "Retry failed"),
    ]

    def __init__(
        self,
        registry: Optional[WidgetRegistry] = None,
        settings: Optional[Settings] = None,
        **kwargs
    ) -> None:
        super().__init__(**kwargs)
        self.registry = registry if registry is not None else get_registry()
        self.settings = settings
        self.statuses: Dict[str, MountStatus] = {}
        self.status_text = ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with ScrollableContainer(id="demos"):
            for entry in self.registry:
                yield WidgetCard(entry, registry=self.registry, settings=self.settings)
        yield Static("● Loading widgets...", id="status-bar")
        yield Footer()

    # ─────────────────────────────────────────────────────────────────────────
    # Event Handlers
    # ─────────────────────────────────────────────────────────────────────────

    def on_widget_status_changed(self, msg: WidgetStatusChanged) -> None:
        self.statuses[msg.key] = msg.status
        self._update_status()

    def on_widget_command_sent(self, msg: WidgetCommandSent) -> None:
        if not msg.delivered:
            self.notify(f"{msg.key}: command not delivered", severity="warning")

    # ─────────────────────────────────────────────────────────────────────────
    # Actions
    # ─────────────────────────────────────────────────────────────────────────

    def action_retry_failed(self) -> None:
        """Retry every widget whose boundary has failed."""
        for host in self.query(WidgetHost):
            if host.widget_mount is not None and host.widget_mount.status is MountStatus.FAILED:
                host.retry()

    def _update_status(self) -> None:
        failed = [k for k, s in self.statuses.items() if s is MountStatus.FAILED]
        ready = sum(1 for s in self.statuses.values() if s is MountStatus.READY)
        text = f"● {len(self.registry)} widget(s) | {ready} ready"
        if failed:
            text += f" | failed: {', '.join(failed)}"
        self.status_text = text
        try:
            self.query_one("#status-bar", Static).update(text)
        except Exception:
            pass


# =============================================================================
# ENTRY POINT
# =============================================================================

def run() -> None:
    """Launch the Showcase TUI."""
    app = ShowcaseApp()
    app.run()


if __name__ == "__main__":
    run()
