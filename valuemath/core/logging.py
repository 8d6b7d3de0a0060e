"""
Structured logging configuration.

Every kernel module logs through a child of the ``valuemath`` logger. The
kernel never installs handlers on its own; a host that wants kernel output
calls ``setup_logging()``, which touches only the ``valuemath`` logger and
leaves the root logger alone.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .config import Settings, settings as default_settings

PACKAGE_LOGGER = "valuemath"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text log formatter"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def _owned(handler: logging.Handler) -> bool:
    return getattr(handler, "_valuemath_owned", False)


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the ``valuemath`` logger.

    Calling it again replaces the handlers a previous call installed. Records
    still propagate to the host's root handlers unless the host disables
    propagation on the returned logger.
    """
    config = config or default_settings
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    log_level = getattr(logging, config.LOG_LEVEL.upper(), logging.WARNING)

    if config.LOG_FORMAT == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = TextFormatter()

    for handler in [h for h in package_logger.handlers if _owned(h)]:
        package_logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if config.LOG_FILE:
        log_path = Path(config.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        handler._valuemath_owned = True
        package_logger.addHandler(handler)

    package_logger.setLevel(log_level)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger with structured context"""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Add context to log messages"""
        extra_data = kwargs.pop("extra_data", {})
        kwargs.setdefault("extra", {})["extra_data"] = {**self.extra, **extra_data}
        return msg, kwargs


def get_context_logger(name: str, **context) -> LoggerAdapter:
    """Get logger with permanent context"""
    return LoggerAdapter(get_logger(name), context)
