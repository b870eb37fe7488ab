"""
Cooperative cancellation for mount loads.

A token is owned by one mount. Teardown cancels it; a pending load checks it
before committing its result.
"""
import threading

from .exceptions import LoadAbortedError


class CancellationToken:
    """One-way flag shared between a mount and its in-flight load."""

    def __init__(self):
        self._cancelled = threading.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Request cancellation. Repeated calls are no-ops."""
        self._cancelled.set()

    def check(self, error_type: type = LoadAbortedError) -> None:
        """Raise ``error_type`` if cancellation was requested."""
        if self.is_cancelled:
            raise error_type("Operation was cancelled")
