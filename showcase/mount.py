"""
Widget mount.

Resolves a registry key, lazily loads the widget implementation and renders
it inside a per-mount session scope and error boundary.

Lifecycle:
    mount = WidgetMount("terminal")
    await mount.load()      # the only suspension point
    mount.render()
    mount.dispatch("help")
    mount.unmount()         # always releases the scope, exactly once
"""
import asyncio
import functools
import importlib
import io
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional

from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.text import Text

from .boundary import ErrorBoundary
from .models import (
    EXTERNAL_PLACEHOLDER,
    FallbackView,
    MountRequest,
    MountStatus,
    RenderedWidget,
    WidgetEntry,
)
from .registry import WidgetRegistry, get_registry
from .session import SessionScope, create_scope, destroy_scope
from .utils.config import SETTINGS, Settings
from .utils.exceptions import LoadAbortedError, WidgetLoadError, WidgetRuntimeFailure
from .utils.threading import CancellationToken
from .widgets.base import WidgetInterface

log = logging.getLogger(__name__)

WidgetFactory = Callable[..., WidgetInterface]
Loader = Callable[[WidgetEntry], Awaitable[WidgetFactory]]

RENDER_WIDTH = 80


async def import_implementation(entry: WidgetEntry) -> WidgetFactory:
    """
    Resolve ``entry.implementation`` ("module:attribute").

    The import runs in a worker thread so a slow first import does not
    block the event loop.

    Raises:
        WidgetLoadError: If the module or attribute cannot be resolved
    """
    module_name, _, attribute = entry.implementation.partition(":")
    try:
        module = await asyncio.to_thread(importlib.import_module, module_name)
    except ImportError as e:
        raise WidgetLoadError(
            f"Cannot import widget module {module_name!r} for {entry.key!r}: {e}",
            details={"key": entry.key, "module": module_name},
            cause=e
        ) from e
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise WidgetLoadError(
            f"Module {module_name!r} has no widget {attribute!r}",
            details={"key": entry.key, "attribute": attribute},
            cause=e
        ) from e


def renderable_to_text(renderable: RenderableType, width: int = RENDER_WIDTH) -> str:
    """Render a Rich renderable to plain text."""
    console = Console(
        file=io.StringIO(),
        width=width,
        color_system=None,
        force_terminal=False,
        legacy_windows=False,
    )
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class WidgetMount:
    """
    One on-screen instance of a widget.

    Each mount owns its own SessionScope; two mounts of the same key never
    share state.
    """

    def __init__(
        self,
        key: str,
        registry: Optional[WidgetRegistry] = None,
        settings: Optional[Settings] = None,
        loader: Optional[Loader] = None,
        scope_values: Optional[Dict[str, Any]] = None,
    ):
        self.request = MountRequest(key)
        self.settings = settings or SETTINGS
        self.registry = registry if registry is not None else get_registry()
        self.entry: Optional[WidgetEntry] = self.registry.lookup(key)
        self.scope: SessionScope = create_scope(
            scope_values, timeout_seconds=self.settings.session_timeout_seconds
        )
        self.boundary = ErrorBoundary(name=key, settings=self.settings)
        self.widget: Optional[WidgetInterface] = None

        self._loader = loader or import_implementation
        self._impl: Optional[WidgetFactory] = None
        self._status = MountStatus.PENDING
        if self.entry is None or self.entry.is_external:
            self._status = MountStatus.EXTERNAL
        self._token = CancellationToken()
        self._pending: Optional[asyncio.Future] = None

    @property
    def key(self) -> str:
        return self.request.key

    @property
    def title(self) -> str:
        return self.entry.title if self.entry else self.key

    @property
    def status(self) -> MountStatus:
        if self._status is not MountStatus.UNMOUNTED and self.boundary.has_failed:
            return MountStatus.FAILED
        return self._status

    @property
    def is_alive(self) -> bool:
        return not self._token.is_cancelled

    @property
    def failure(self) -> Optional[WidgetRuntimeFailure]:
        """The captured error wrapped with this mount's key, if the boundary failed."""
        if not self.boundary.has_failed:
            return None
        return WidgetRuntimeFailure(self.key, self.boundary.last_error, context=self.boundary.last_context)

    async def load(self) -> MountStatus:
        """
        Resolve and instantiate the widget.

        Unregistered keys and externally hosted entries end in ``external``.
        Load errors are captured by the boundary. If the mount is unmounted
        while loading, the result is discarded.
        """
        if not self.is_alive:
            return self.status
        if self.entry is None or self.entry.is_external:
            self._status = MountStatus.EXTERNAL
            return self.status
        if self.widget is not None or self.boundary.has_failed:
            return self.status

        self._status = MountStatus.LOADING
        try:
            impl = self._impl or await self._resolve()
            self._token.check(LoadAbortedError)
            self._impl = impl
            self._instantiate()
        except LoadAbortedError:
            log.debug(f"Discarded load of {self.key!r}: mount was torn down")
        except asyncio.CancelledError:
            if self.is_alive:
                raise
            log.debug(f"Cancelled load of {self.key!r}: mount was torn down")
        except Exception as e:
            self.boundary.capture(e, context="load")
        return self.status

    async def _resolve(self) -> WidgetFactory:
        self._pending = asyncio.ensure_future(self._loader(self.entry))
        timeout = self.settings.load_timeout
        try:
            return await asyncio.wait_for(self._pending, timeout)
        except asyncio.TimeoutError as e:
            raise WidgetLoadError(
                f"Loading widget {self.key!r} timed out after {timeout}s",
                details={"key": self.key, "timeout": timeout},
                cause=e
            ) from e
        finally:
            self._pending = None

    def _instantiate(self) -> None:
        self._status = MountStatus.READY
        widget = self.boundary.handle_event(functools.partial(self._impl, settings=self.settings))
        if widget is None:
            return
        self.widget = widget
        self.boundary.handle_event(widget.on_mount, self.scope)
        log.debug(f"Mounted widget {self.key!r} (session {self.scope.session_id})")

    def render(self) -> RenderedWidget:
        status = self.status
        if status is MountStatus.UNMOUNTED:
            return RenderedWidget(self.key, status, "")
        if status is MountStatus.EXTERNAL:
            return self._render_external()
        if status in (MountStatus.PENDING, MountStatus.LOADING):
            text = f"Loading {self.title}..."
            return RenderedWidget(self.key, status, text, Text(text, style="dim"))

        result = self.boundary.render(self._render_widget)
        if isinstance(result, FallbackView):
            return self._render_fallback(result)
        renderable, text = result
        return RenderedWidget(self.key, MountStatus.READY, text, renderable)

    def _render_widget(self):
        renderable = self.widget.render(self.scope)
        return renderable, renderable_to_text(renderable)

    def _render_external(self) -> RenderedWidget:
        text = EXTERNAL_PLACEHOLDER
        if self.entry is not None and self.entry.subdomain:
            text = f"{EXTERNAL_PLACEHOLDER}: https://{self.entry.subdomain}"
        return RenderedWidget(self.key, MountStatus.EXTERNAL, text, Text(text))

    def _render_fallback(self, view: FallbackView) -> RenderedWidget:
        body = Text()
        body.append(view.title + "\n", style="bold")
        body.append(view.message + "\n")
        if view.error:
            body.append(view.error + "\n", style="dim")
        body.append(f"[{view.action}]", style="reverse")
        panel = Panel(body, border_style="red")
        return RenderedWidget(
            self.key, MountStatus.FAILED, view.text, panel, retry_available=True
        )

    def dispatch(self, event: Any) -> bool:
        """Forward a synchronous event to the widget. Returns False if not delivered or it failed."""
        if self.status is not MountStatus.READY:
            return False
        self.boundary.handle_event(self.widget.handle_event, event, self.scope)
        return not self.boundary.has_failed

    def tick(self) -> bool:
        """Periodic housekeeping: expire an idle session. Returns True if it was reset."""
        if not self.is_alive or not self.scope.expire_if_inactive():
            return False
        if self.status is MountStatus.READY:
            self.boundary.handle_event(self.widget.on_session_reset, self.scope)
        return True

    def retry(self) -> MountStatus:
        """
        User-driven retry after a failure.

        Rebuilds the widget from scratch. If the failure happened while
        loading, the mount goes back to ``pending`` and ``load()`` must be
        awaited again.
        """
        if not self.is_alive or not self.boundary.has_failed:
            return self.status
        self.boundary.retry()
        self._discard_widget()
        if self._impl is None:
            self._status = MountStatus.PENDING
        else:
            self._instantiate()
        return self.status

    def unmount(self) -> None:
        """Tear down the mount. Idempotent; the scope is destroyed exactly once."""
        if not self.is_alive:
            return
        self._token.cancel()
        self._status = MountStatus.UNMOUNTED
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        try:
            self._discard_widget()
        finally:
            destroy_scope(self.scope)
        log.debug(f"Unmounted widget {self.key!r}")

    def _discard_widget(self) -> None:
        widget, self.widget = self.widget, None
        if widget is None:
            return
        try:
            widget.on_unmount(self.scope)
        except Exception as e:
            log.warning(f"Widget {self.key!r} failed during unmount: {e}")


async def mount(key: str, **kwargs) -> WidgetMount:
    """Create a mount for ``key`` and load it."""
    widget_mount = WidgetMount(key, **kwargs)
    await widget_mount.load()
    return widget_mount


@asynccontextmanager
async def mounted(key: str, **kwargs) -> AsyncIterator[WidgetMount]:
    """Mount ``key`` for the duration of the block; always unmounts."""
    widget_mount = WidgetMount(key, **kwargs)
    try:
        await widget_mount.load()
        yield widget_mount
    finally:
        widget_mount.unmount()
