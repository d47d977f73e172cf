"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    PersistenceError,
    PreconditionError,
    ResolutionError,
    ConversionError,
    StructuralConflict,
    DepthExceeded,
)
from .logging_config import configure_logging, get_logger, LogContext


def create_container(prefixes=None, default_prefix=None, with_events=True):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(prefixes, default_prefix, with_events)


def create_services(prefixes=None, default_prefix=None, with_events=True):
    """Create a wired services context (lazy import to avoid circular deps)."""
    from .container import create_services as _create_services

    return _create_services(prefixes, default_prefix, with_events)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "PersistenceError",
    "PreconditionError",
    "ResolutionError",
    "ConversionError",
    "StructuralConflict",
    "DepthExceeded",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # DI
    "create_container",
    "create_services",
]
