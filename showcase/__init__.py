"""showcase - Registry, isolation boundary and session scopes for embeddable demo widgets."""

__version__ = "0.1.0"

from .models import WidgetEntry, MountStatus, BoundaryStatus, RenderedWidget
from .registry import WidgetRegistry, build_registry, get_registry, reset_registry
from .session import SessionScope, create_scope, destroy_scope, session_scope
from .boundary import ErrorBoundary
from .mount import WidgetMount, mount, mounted

__all__ = [
    "WidgetEntry",
    "MountStatus",
    "BoundaryStatus",
    "RenderedWidget",
    "WidgetRegistry",
    "build_registry",
    "get_registry",
    "reset_registry",
    "SessionScope",
    "create_scope",
    "destroy_scope",
    "session_scope",
    "ErrorBoundary",
    "WidgetMount",
    "mount",
    "mounted",
]
