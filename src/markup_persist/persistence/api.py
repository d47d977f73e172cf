"""Convenience entry points over a default ControlPersister."""

from dataclasses import dataclass
from typing import Any, Optional

from returns.result import Failure, Result, Success

from ..core.config import Settings
from ..core.errors import PersistenceError, PreconditionError
from ..core.logging_config import get_logger
from ..markup.writer import TextSink
from ..services.registry import ServiceRegistry
from .persister import ControlPersister

logger = get_logger(__name__)


@dataclass(frozen=True)
class PersistenceFailure:
    """Persistence error with details (for Result pattern)."""

    message: str
    kind: str


def persist_control(
    sink: TextSink,
    control: Any,
    services: ServiceRegistry,
    settings: Optional[Settings] = None,
) -> None:
    """
    Persist a component to a text sink.

    Args:
        sink: Destination (file, io.StringIO, MarkupWriter, ...)
        control: Root component
        services: Services context
        settings: Overrides the cached environment settings
    """
    ControlPersister(settings).persist_control(sink, control, services)


def persist_control_to_string(
    control: Any, services: ServiceRegistry, settings: Optional[Settings] = None
) -> str:
    """Persist a component and return the markup."""
    return ControlPersister(settings).persist_control_to_string(control, services)


def persist_inner_properties(
    sink: TextSink,
    component: Any,
    services: ServiceRegistry,
    settings: Optional[Settings] = None,
) -> None:
    """Persist only the inner content of a component."""
    ControlPersister(settings).persist_inner_properties(sink, component, services)


def persist_inner_properties_to_string(
    component: Any, services: ServiceRegistry, settings: Optional[Settings] = None
) -> str:
    """Persist only the inner content of a component and return it."""
    return ControlPersister(settings).persist_inner_properties_to_string(component, services)


def persist_sited_control(control: Any, settings: Optional[Settings] = None) -> str:
    """
    Persist a component using the services context it is sited in.

    Returns:
        The markup, or an empty string when the component has no site
    """
    if control is None:
        raise PreconditionError("control is required")

    site = getattr(control, "site", None)
    if site is None:
        logger.debug("unsited_control", type=type(control).__name__)
        return ""
    return persist_control_to_string(control, site, settings)


def try_persist_control(
    control: Any, services: ServiceRegistry, settings: Optional[Settings] = None
) -> Result[str, PersistenceFailure]:
    """
    Persist a component (Result pattern version).

    Returns:
        Success with the markup, or Failure describing the persistence error
    """
    try:
        return Success(persist_control_to_string(control, services, settings))
    except PersistenceError as e:
        return Failure(PersistenceFailure(str(e), type(e).__name__))
