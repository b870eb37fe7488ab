from rich.logging import RichHandler
import logging
import logging.handlers
from pathlib import Path

from . import config
from .exceptions import sanitize_log_message

LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level() -> int:
    """Resolve LOG_LEVEL from settings; unknown names fall back to INFO."""
    return LOG_LEVELS.get(config.SETTINGS.log_level.upper(), logging.INFO)


def is_production() -> bool:
    return config.SETTINGS.is_production


class SanitizingFormatter(logging.Formatter):
    """
    A logging formatter that sanitizes log messages to prevent log injection.

    Applies sanitization to the message content while preserving the format.
    """

    def format(self, record: logging.LogRecord) -> str:
        if record.msg:
            record.msg = sanitize_log_message(str(record.msg))
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: sanitize_log_message(str(v)) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(sanitize_log_message(str(arg)) for arg in record.args)
        return super().format(record)


def setup_logging(level: int = None, log_file: bool = True, log_dir: Path = Path("logs")) -> None:
    """
    Setup logging with environment-aware defaults.

    Args:
        level: Override log level. If None, uses environment config.
        log_file: Whether to create log file.
        log_dir: Directory for the log file.
    """
    if level is None:
        level = get_log_level()

    # In production, reduce console verbosity
    console_level = logging.WARNING if is_production() else level

    handlers = [RichHandler(rich_tracebacks=True, level=console_level)]

    if log_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "showcase.log",
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            SanitizingFormatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
    )
