"""
Centralized exception hierarchy for the widget host.
Provides consistent error handling across the registry, sessions and mounts.
"""
import logging
import re
from typing import Optional, Any, Dict

__all__ = [
    'ShowcaseError', 'ConfigurationError', 'DuplicateKeyError', 'RegistrySealedError',
    'CatalogError', 'WidgetLoadError', 'WidgetRuntimeFailure', 'LoadAbortedError',
    'ScopeClosedError', 'sanitize_error_message', 'sanitize_log_message', 'log_and_reraise',
]

MAX_LOG_MESSAGE_LENGTH = 2000


class ShowcaseError(Exception):
    """
    Base exception for all Showcase errors.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            details: Optional additional context
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None
        }


class ConfigurationError(ShowcaseError):
    """Raised when configuration or seed data is invalid."""
    pass


class DuplicateKeyError(ConfigurationError):
    """Raised when a widget key is registered twice."""

    def __init__(self, key: str):
        super().__init__(
            f"Widget key already registered: {key!r}",
            details={"key": key}
        )
        self.key = key


class RegistrySealedError(ConfigurationError):
    """Raised when registering into a registry that was sealed at startup."""
    pass


class CatalogError(ConfigurationError):
    """Raised when the widget catalog file cannot be read or parsed."""
    pass


class WidgetLoadError(ShowcaseError):
    """Raised when a widget implementation cannot be resolved."""
    pass


class WidgetRuntimeFailure(ShowcaseError):
    """Wraps an error raised while a widget rendered or handled an event."""

    def __init__(self, key: str, error: BaseException, context: Optional[str] = None):
        super().__init__(
            f"Widget {key!r} failed: {error}",
            details={"key": key, "context": context},
            cause=error
        )
        self.key = key


class LoadAbortedError(ShowcaseError):
    """Raised internally when a mount is torn down while its load is pending."""
    pass


class ScopeClosedError(ShowcaseError):
    """Raised when writing to a session scope that was already destroyed."""
    pass


def sanitize_error_message(message: str) -> str:
    """
    Sanitize error message to remove sensitive information.

    Args:
        message: Original error message

    Returns:
        Sanitized error message
    """
    path_patterns = [
        r'[A-Za-z]:\\[^:\n]*\\([^\\:\n]+)',  # Windows paths
        r'/[^:\n ]*/([^/:\n ]+)',             # Unix paths
    ]

    sanitized = message
    for pattern in path_patterns:
        sanitized = re.sub(pattern, r'<path>/\1', sanitized)

    # Bearer tokens and key-like secrets
    sanitized = re.sub(r'(?i)(bearer\s+)[a-z0-9._\-]{16,}', r'\1***MASKED***', sanitized)
    sanitized = re.sub(r'sk-[a-zA-Z0-9]{20,}', 'sk-***MASKED***', sanitized)

    return sanitized


def sanitize_log_message(message: str) -> str:
    """
    Make a message safe for a single log line.

    Escapes CR/LF, drops other control characters (tab is kept),
    masks secrets and truncates overly long messages.
    """
    sanitized = message.replace("\r", "\\r").replace("\n", "\\n")
    sanitized = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', sanitized)
    sanitized = re.sub(r'(?i)(bearer\s+)[a-z0-9._\-]{16,}', r'\1***MASKED***', sanitized)
    sanitized = re.sub(r'sk-[a-zA-Z0-9]{20,}', 'sk-***MASKED***', sanitized)
    if len(sanitized) > MAX_LOG_MESSAGE_LENGTH:
        sanitized = sanitized[:MAX_LOG_MESSAGE_LENGTH] + "...[truncated]"
    return sanitized


def log_and_reraise(
    logger: logging.Logger,
    error: Exception,
    operation: str,
    error_type: type = ShowcaseError,
    log_level: int = logging.ERROR
) -> None:
    """
    Log an error and re-raise it as a specific type.

    Args:
        logger: Logger instance
        error: Original exception
        operation: Description of failed operation
        error_type: Type of exception to raise
        log_level: Logging level to use

    Raises:
        Exception of specified type
    """
    message = f"Failed to {operation}: {sanitize_error_message(str(error))}"

    logger.log(
        log_level,
        message,
        extra={
            "operation": operation,
            "error_type": error.__class__.__name__
        }
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Full traceback:", exc_info=error)

    if issubclass(error_type, ShowcaseError):
        raise error_type(message, cause=error) from error
    raise error_type(message) from error
