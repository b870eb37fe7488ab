"""Data models for the widget registry, boundary and mounts."""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

KEY_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")
IMPLEMENTATION_PATTERN = re.compile(r"^[A-Za-z_][\w.]*:[A-Za-z_]\w*$")

EXTERNAL_PLACEHOLDER = "External demo"


class BoundaryStatus(str, Enum):
    """Error boundary states."""
    HEALTHY = "healthy"
    FAILED = "failed"


class MountStatus(str, Enum):
    """Lifecycle of a widget mount."""
    PENDING = "pending"
    LOADING = "loading"
    READY = "ready"
    EXTERNAL = "external"
    FAILED = "failed"
    UNMOUNTED = "unmounted"


class WidgetEntry(BaseModel):
    """Registry metadata for one embeddable widget."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(..., min_length=1, max_length=64)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    subdomain: Optional[str] = None
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    # "package.module:ClassName"; None means the widget is hosted elsewhere
    implementation: Optional[str] = None

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not KEY_PATTERN.match(v):
            raise ValueError(f"Widget key must be a lowercase slug, got '{v}'")
        return v

    @field_validator("implementation")
    @classmethod
    def validate_implementation(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not IMPLEMENTATION_PATTERN.match(v):
            raise ValueError(f"Implementation must look like 'module:attribute', got '{v}'")
        return v

    @property
    def is_external(self) -> bool:
        return self.implementation is None


@dataclass(frozen=True)
class MountRequest:
    """Input to a mount: the widget key."""
    key: str


@dataclass
class BoundaryState:
    """Mutable state of an error boundary."""
    has_failed: bool = False
    last_error: Optional[BaseException] = None
    last_context: Optional[str] = None

    @property
    def status(self) -> BoundaryStatus:
        return BoundaryStatus.FAILED if self.has_failed else BoundaryStatus.HEALTHY


@dataclass(frozen=True)
class FallbackView:
    """What a failed boundary shows in place of the widget."""
    title: str = "Demo crashed"
    message: str = "This interactive preview encountered an unexpected error."
    action: str = "Retry"
    error: Optional[str] = None

    @property
    def text(self) -> str:
        return f"{self.title}\n{self.message}\n[{self.action}]"


@dataclass(frozen=True)
class RenderedWidget:
    """Output of a single mount render."""
    key: str
    status: MountStatus
    text: str
    renderable: Any = None
    retry_available: bool = False

    def __str__(self) -> str:
        return self.text
