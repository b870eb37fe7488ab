"""
Widget registry.

Maps widget keys to their metadata. Built once at process start from the
built-in catalog or a version-controlled JSON catalog file, then sealed:
after sealing there is no writer, so concurrent reads need no locking.
"""
import json
import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from pydantic import ValidationError

from .models import WidgetEntry
from .utils.config import SETTINGS, Settings
from .utils.exceptions import (
    CatalogError,
    DuplicateKeyError,
    RegistrySealedError,
    log_and_reraise,
)

log = logging.getLogger(__name__)


DEFAULT_CATALOG: List[WidgetEntry] = [
    WidgetEntry(
        key="terminal",
        title="Terminal Demo",
        description="Animated CLI walkthrough demonstrating setup steps and simple interactivity.",
        subdomain="terminal.russellbomer.com",
        implementation="showcase.widgets.terminal:TerminalDemo",
    ),
]


class WidgetRegistry:
    """
    Insertion-ordered collection of widget entries with unique keys.
    """

    def __init__(self, entries: Optional[Iterable[WidgetEntry]] = None):
        self._entries: Dict[str, WidgetEntry] = {}
        self._sealed = False
        for entry in entries or ():
            self.register(entry)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, entry: WidgetEntry) -> None:
        """
        Register a widget entry.

        Raises:
            DuplicateKeyError: If the key is already registered (registry unchanged)
            RegistrySealedError: If the registry was sealed
        """
        if self._sealed:
            raise RegistrySealedError(
                f"Cannot register {entry.key!r}: registry is sealed",
                details={"key": entry.key}
            )
        if entry.key in self._entries:
            raise DuplicateKeyError(entry.key)
        self._entries[entry.key] = entry
        log.debug(f"Registered widget {entry.key!r}")

    def seal(self) -> "WidgetRegistry":
        """Make the registry read-only."""
        self._sealed = True
        return self

    def lookup(self, key: str) -> Optional[WidgetEntry]:
        """Return the entry for ``key`` or None when it is not registered."""
        return self._entries.get(key)

    def list(self) -> List[WidgetEntry]:
        """All entries in registration order."""
        return list(self._entries.values())

    def keys(self) -> List[str]:
        return list(self._entries)

    def __iter__(self) -> Iterator[WidgetEntry]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


def load_catalog(path: Path) -> List[WidgetEntry]:
    """
    Read widget entries from a JSON catalog file.

    The file holds a list of objects with the WidgetEntry fields.

    Raises:
        CatalogError: If the file is missing, unreadable or invalid
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log_and_reraise(log, e, f"read widget catalog {Path(path).name}", CatalogError)

    if not isinstance(raw, list):
        raise CatalogError(
            f"Widget catalog must be a JSON list, got {type(raw).__name__}",
            details={"path": str(path)}
        )

    try:
        return [WidgetEntry.model_validate(item) for item in raw]
    except ValidationError as e:
        log_and_reraise(log, e, f"validate widget catalog {Path(path).name}", CatalogError)


def build_registry(entries: Iterable[WidgetEntry]) -> WidgetRegistry:
    """
    Register every entry and seal the registry.

    A duplicate key is a startup failure: it is logged loudly and re-raised.
    """
    registry = WidgetRegistry()
    for entry in entries:
        try:
            registry.register(entry)
        except DuplicateKeyError as e:
            log.critical(f"Widget registry configuration error: {e.message}")
            raise
    return registry.seal()


def registry_from_settings(settings: Optional[Settings] = None) -> WidgetRegistry:
    """Build the registry from the configured catalog, or the built-in one."""
    settings = settings or SETTINGS
    if settings.widget_catalog:
        entries = load_catalog(settings.widget_catalog)
        log.info(f"Loaded {len(entries)} widget(s) from {settings.widget_catalog.name}")
    else:
        entries = DEFAULT_CATALOG
    return build_registry(entries)


_default_registry: Optional[WidgetRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> WidgetRegistry:
    """Get the process-wide registry, building it on first use."""
    global _default_registry
    if _default_registry is None:
        with _registry_lock:
            if _default_registry is None:
                _default_registry = registry_from_settings()
    return _default_registry


def reset_registry() -> None:
    """Drop the process-wide registry (for testing)."""
    global _default_registry
    with _registry_lock:
        _default_registry = None
