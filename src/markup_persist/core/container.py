"""Dependency Injection Container."""

from typing import Mapping, Optional

from injector import Injector, Module, provider, singleton

from ..metadata.providers import DeclaredEventProvider, DeclaredPropertyProvider, TagPrefixTable
from ..services.registry import ServiceRegistry
from ..services.types import ServiceKind


class PersistenceModule(Module):
    """Default persistence collaborators."""

    def __init__(
        self,
        prefixes: Optional[Mapping[type, str]] = None,
        default_prefix: Optional[str] = None,
        with_events: bool = True,
    ) -> None:
        self.prefixes = dict(prefixes or {})
        self.default_prefix = default_prefix
        self.with_events = with_events

    @singleton
    @provider
    def provide_tag_prefixes(self) -> TagPrefixTable:
        """Provide tag prefix table."""
        return TagPrefixTable(self.prefixes, default=self.default_prefix)

    @singleton
    @provider
    def provide_property_provider(self) -> DeclaredPropertyProvider:
        """Provide descriptor-backed property metadata."""
        return DeclaredPropertyProvider()

    @singleton
    @provider
    def provide_event_provider(self) -> DeclaredEventProvider:
        """Provide descriptor-backed event metadata."""
        return DeclaredEventProvider()

    @singleton
    @provider
    def provide_registry(
        self,
        prefixes: TagPrefixTable,
        properties: DeclaredPropertyProvider,
        events: DeclaredEventProvider,
    ) -> ServiceRegistry:
        """Provide registry with all default services."""
        registry = ServiceRegistry({
            ServiceKind.TAG_PREFIXES: prefixes,
            ServiceKind.PROPERTIES: properties,
        })
        if self.with_events:
            registry.register(ServiceKind.EVENTS, events)
        return registry


def create_container(
    prefixes: Optional[Mapping[type, str]] = None,
    default_prefix: Optional[str] = None,
    with_events: bool = True,
) -> Injector:
    """Create configured injector."""
    return Injector([PersistenceModule(prefixes, default_prefix, with_events)])


def create_services(
    prefixes: Optional[Mapping[type, str]] = None,
    default_prefix: Optional[str] = None,
    with_events: bool = True,
) -> ServiceRegistry:
    """Build a services context wired with the built-in providers."""
    return create_container(prefixes, default_prefix, with_events).get(ServiceRegistry)
