"""
Per-mount session scopes.

Each mount owns one SessionScope and passes it explicitly to its widget.
Scopes are never shared between mounts, including mounts of the same key.
Destroying a scope releases every resource acquired through it, exactly
once, on every exit path.
"""
import logging
import secrets
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .utils.config import SETTINGS
from .utils.exceptions import ScopeClosedError

log = logging.getLogger(__name__)

Clock = Callable[[], float]


def generate_session_id() -> str:
    return secrets.token_hex(8)


class SessionScope:
    """
    Scoped state container for a single widget mount.

    Holds named values, the resources whose release the scope owns, and
    the demo session metadata (ids and inactivity expiry).
    """

    def __init__(
        self,
        initial_values: Optional[Dict[str, Any]] = None,
        timeout_seconds: Optional[float] = None,
        clock: Clock = time.time,
    ):
        self._values: Dict[str, Any] = dict(initial_values or {})
        self._closers: List[Tuple[str, Callable[[], None]]] = []
        self._lock = threading.RLock()
        self._closed = False
        self._clock = clock
        self.timeout_seconds = timeout_seconds or SETTINGS.session_timeout_seconds

        self.session_id = generate_session_id()
        self.server_session_id: Optional[str] = None
        now = self._clock()
        self.started_at = now
        self._last_touch = now

    # -- values ---------------------------------------------------------

    def get(self, name: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        with self._lock:
            self._ensure_open(name)
            self._values[name] = value

    def acquire(self, name: str, value: Any, close: Optional[Callable[[], None]] = None) -> Any:
        """
        Store a value whose release this scope owns.

        ``close`` runs when the scope is destroyed. When omitted, the value's
        own ``close()`` method is used if it has one.
        """
        if close is None:
            close = getattr(value, "close", None)
        with self._lock:
            self._ensure_open(name)
            self._values[name] = value
            if close is not None:
                self._closers.append((name, close))
        return value

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._values)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._values

    # -- session metadata -----------------------------------------------

    @property
    def expires_at(self) -> float:
        return self._last_touch + self.timeout_seconds

    @property
    def inactive_seconds(self) -> float:
        return max(0.0, self._clock() - self._last_touch)

    def touch(self) -> None:
        """Record activity, pushing expiry forward."""
        self._last_touch = self._clock()

    def reset(self) -> None:
        """Start a fresh session; stored values are kept."""
        now = self._clock()
        self.session_id = generate_session_id()
        self.server_session_id = None
        self.started_at = now
        self._last_touch = now
        log.debug("Session reset")

    def expire_if_inactive(self) -> bool:
        """Reset the session when idle longer than the timeout. Returns True if reset."""
        if self.inactive_seconds > self.timeout_seconds:
            self.reset()
            return True
        return False

    # -- lifecycle ------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def destroy(self) -> None:
        """
        Release every acquired resource in reverse order. Idempotent.

        Close failures are logged and do not stop the remaining releases.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            closers = list(reversed(self._closers))
            self._closers.clear()
            self._values.clear()

        for name, close in closers:
            try:
                close()
            except Exception as e:
                log.warning(f"Failed to release session resource {name!r}: {e}")
        log.debug(f"Session {self.session_id} destroyed ({len(closers)} resource(s) released)")

    def _ensure_open(self, name: str) -> None:
        if self._closed:
            raise ScopeClosedError(
                f"Cannot store {name!r}: session scope is destroyed",
                details={"name": name}
            )


def create_scope(
    initial_values: Optional[Dict[str, Any]] = None,
    timeout_seconds: Optional[float] = None,
    clock: Clock = time.time,
) -> SessionScope:
    """Create a new, independent session scope."""
    return SessionScope(initial_values, timeout_seconds=timeout_seconds, clock=clock)


def destroy_scope(scope: SessionScope) -> None:
    """Release a scope's resources. Safe to call more than once."""
    scope.destroy()


@contextmanager
def session_scope(
    initial_values: Optional[Dict[str, Any]] = None,
    timeout_seconds: Optional[float] = None,
) -> Iterator[SessionScope]:
    """Context manager guaranteeing the scope is destroyed on every exit path."""
    scope = create_scope(initial_values, timeout_seconds=timeout_seconds)
    try:
        yield scope
    finally:
        scope.destroy()
