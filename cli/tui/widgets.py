"""
Textual widgets for the Showcase host.

A WidgetHost owns exactly one WidgetMount for the lifetime of the Textual
widget: the mount (and its session scope) is created when the host is
mounted and torn down when the host is removed.
"""

from typing import Optional

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Input, Static

from showcase.models import MountStatus, RenderedWidget, WidgetEntry
from showcase.mount import WidgetMount
from showcase.registry import WidgetRegistry
from showcase.utils.config import Settings

from .messages import WidgetCommandSent, WidgetStatusChanged

TICK_SECONDS = 1.0


# =============================================================================
# WIDGET HOST
# =============================================================================

class WidgetHost(Container):
    """
    Embeds one registered widget.
    Loading runs in a worker; only this host shows the loading state.
    """

    DEFAULT_CSS = """
    WidgetHost {
        height: auto;
        padding: 1;
        background: #0c1322;
        border: solid #1e3a5f;
    }

    WidgetHost.host--failed {
        border: solid #ef4444;
    }

    WidgetHost .host-output {
        height: auto;
    }

    WidgetHost .host-controls {
        height: auto;
        margin-top: 1;
    }

    WidgetHost .host-controls Input {
        width: 1fr;
    }

    WidgetHost #retry {
        display: none;
    }

    WidgetHost.host--failed #retry {
        display: block;
    }
    """

    def __init__(
        self,
        key: str,
        registry: Optional[WidgetRegistry] = None,
        settings: Optional[Settings] = None,
        **kwargs
    ) -> None:
        super().__init__(**kwargs)
        self.key = key
        self._registry = registry
        self._settings = settings
        self.widget_mount: Optional[WidgetMount] = None

    def compose(self) -> ComposeResult:
        yield Static("", classes="host-output", id="output")
        with Horizontal(classes="host-controls"):
            yield Input(placeholder="Type a command (help, clear, replay)", id="command")
            yield Button("Retry", id="retry", variant="error")

    def on_mount(self) -> None:
        self.widget_mount = WidgetMount(self.key, registry=self._registry, settings=self._settings)
        self.refresh_output()
        self.load_widget()
        self.set_interval(TICK_SECONDS, self._tick)

    def on_unmount(self) -> None:
        if self.widget_mount is not None:
            self.widget_mount.unmount()

    @work(exclusive=True, group="widget-load")
    async def load_widget(self) -> None:
        """Resolve the widget implementation without blocking the app."""
        status = await self.widget_mount.load()
        if status is MountStatus.UNMOUNTED:
            return
        rendered = self.refresh_output()
        self.post_message(WidgetStatusChanged(self.key, rendered.status))

    def refresh_output(self) -> Optional[RenderedWidget]:
        if self.widget_mount is None:
            return None
        rendered = self.widget_mount.render()
        self.set_class(rendered.retry_available, "host--failed")
        try:
            self.query_one("#output", Static).update(rendered.renderable or "")
            self.query_one("#command", Input).disabled = rendered.status is not MountStatus.READY
        except Exception:
            pass  # Widget not yet composed
        return rendered

    @on(Input.Submitted, "#command")
    def on_command_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        command = event.value
        event.input.value = ""
        delivered = self.widget_mount.dispatch(command)
        rendered = self.refresh_output()
        self.post_message(WidgetCommandSent(self.key, command, delivered))
        if rendered is not None and rendered.status is MountStatus.FAILED:
            self.post_message(WidgetStatusChanged(self.key, rendered.status))

    @on(Button.Pressed, "#retry")
    def on_retry_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.retry()

    def retry(self) -> None:
        """Retry a failed widget; reloads if the failure happened while loading."""
        status = self.widget_mount.retry()
        rendered = self.refresh_output()
        if status is MountStatus.PENDING:
            self.load_widget()
        elif rendered is not None:
            self.post_message(WidgetStatusChanged(self.key, rendered.status))

    def _tick(self) -> None:
        if self.widget_mount is not None and self.widget_mount.tick():
            self.refresh_output()


# =============================================================================
# WIDGET CARD
# =============================================================================

class WidgetCard(Container):
    """Title, description and host for one registry entry."""

    DEFAULT_CSS = """
    WidgetCard {
        height: auto;
        padding: 1 2;
        margin: 1;
        background: #0f172a;
        border: solid #334155;
    }

    WidgetCard .card-title {
        text-style: bold;
        color: #38bdf8;
    }

    WidgetCard .card-description {
        color: #94a3b8;
        margin-bottom: 1;
    }
    """

    def __init__(
        self,
        entry: WidgetEntry,
        registry: Optional[WidgetRegistry] = None,
        settings: Optional[Settings] = None,
        **kwargs
    ) -> None:
        super().__init__(**kwargs)
        self.entry = entry
        self._registry = registry
        self._settings = settings

    def compose(self) -> ComposeResult:
        yield Static(self.entry.title, classes="card-title")
        if self.entry.description:
            yield Static(self.entry.description, classes="card-description")
        yield WidgetHost(
            self.entry.key,
            registry=self._registry,
            settings=self._settings,
            id=f"host-{self.entry.key}",
        )
