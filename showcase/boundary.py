"""
Error isolation boundary.

Two-state machine (healthy/failed) guarding a widget's synchronous render
and event handling. A captured failure replaces the widget output with a
fallback view until the user asks to retry. There is no automatic retry.

Limitation: errors raised from asynchronous callbacks or timers that a
widget schedules are not seen here unless they re-raise during a later
render or event.
"""
import logging
from typing import Any, Callable, List, Optional, TypeVar, Union

from .models import BoundaryState, BoundaryStatus, FallbackView
from .utils.config import SETTINGS, Settings
from .utils.exceptions import sanitize_error_message

log = logging.getLogger(__name__)

T = TypeVar("T")
ErrorHook = Callable[[BaseException, Optional[str]], None]


class ErrorBoundary:
    """Contains failures raised inside a widget subtree."""

    def __init__(
        self,
        name: str = "widget",
        settings: Optional[Settings] = None,
        fallback: Optional[FallbackView] = None,
        on_error: Optional[List[ErrorHook]] = None,
    ):
        self.name = name
        self.settings = settings or SETTINGS
        self._fallback = fallback or FallbackView()
        self._hooks: List[ErrorHook] = list(on_error or [])
        self.state = BoundaryState()

    @property
    def status(self) -> BoundaryStatus:
        return self.state.status

    @property
    def has_failed(self) -> bool:
        return self.state.has_failed

    @property
    def last_error(self) -> Optional[BaseException]:
        return self.state.last_error

    @property
    def last_context(self) -> Optional[str]:
        return self.state.last_context

    def add_hook(self, hook: ErrorHook) -> None:
        self._hooks.append(hook)

    def render(self, render_fn: Callable[..., T], *args: Any) -> Union[T, FallbackView]:
        """Run ``render_fn`` unless failed; a raised error switches to the fallback."""
        if self.state.has_failed:
            return self.fallback()
        try:
            return render_fn(*args)
        except Exception as e:
            self.capture(e, context="render")
            return self.fallback()

    def handle_event(self, handler: Callable[..., T], *args: Any) -> Optional[T]:
        """Run a synchronous event handler inside the boundary."""
        if self.state.has_failed:
            return None
        try:
            return handler(*args)
        except Exception as e:
            self.capture(e, context="event")
            return None

    def capture(self, error: BaseException, context: Optional[str] = None) -> None:
        """Transition healthy -> failed, recording the error."""
        self.state.has_failed = True
        self.state.last_error = error
        self.state.last_context = context

        if not self.settings.is_production:
            log.error(
                "[DemoError] %s %s",
                sanitize_error_message(repr(error)),
                f"{{boundary={self.name}, context={context}}}",
                exc_info=error,
            )

        for hook in self._hooks:
            try:
                hook(error, context)
            except Exception as e:
                log.warning(f"Error hook failed for boundary {self.name!r}: {e}")

    def retry(self) -> None:
        """Transition failed -> healthy; the next render starts from scratch."""
        if not self.state.has_failed:
            return
        log.debug(f"Boundary {self.name!r} retry requested")
        self.state = BoundaryState()

    def fallback(self) -> FallbackView:
        if self.settings.is_production or self.state.last_error is None:
            return self._fallback
        return FallbackView(
            title=self._fallback.title,
            message=self._fallback.message,
            action=self._fallback.action,
            error=sanitize_error_message(str(self.state.last_error)),
        )
