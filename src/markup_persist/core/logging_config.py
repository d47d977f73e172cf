"""
Structured Logging Configuration
Persistence diagnostics with structlog, scoped to the library's logger.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from pythonjsonlogger import jsonlogger

from .config import get_settings

LIBRARY_LOGGER = "markup_persist"


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> logging.Logger:
    """
    Configure structured logging for the library.

    Only the ``markup_persist`` logger tree is touched; the host
    application's root logger is left alone. Calling again replaces the
    handler installed by the previous call.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL), defaults to settings
        json_logs: Use JSON formatter for machine-readable logs, defaults to settings

    Returns:
        The configured library logger
    """
    if level is None:
        level = get_settings().log_level
    if json_logs is None:
        json_logs = get_settings().json_logs

    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    for old in list(library_logger.handlers):
        library_logger.removeHandler(old)
    library_logger.addHandler(handler)
    library_logger.setLevel(log_level)
    library_logger.propagate = False

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return library_logger


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger; ``name`` is normally the module's ``__name__``."""
    return structlog.get_logger(name)


class LogContext:
    """Bind persistence context (root type, ...) to every log line in scope."""

    def __init__(self, **kwargs: Any):
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())
