"""Built-in metadata providers backed by statically declared descriptors."""

from typing import Any, Iterable, Mapping, Optional

from ..core.errors import ResolutionError
from .types import EventDescriptor, PropertyDescriptor


class TagPrefixTable:
    """
    Maps component and property types to tag prefixes.

    Lookups walk the type's MRO, so registering a base class covers its
    subclasses. ``default`` is used when nothing in the MRO is registered.
    """

    def __init__(
        self,
        prefixes: Optional[Mapping[type, str]] = None,
        default: Optional[str] = None,
    ):
        self.prefixes: dict[type, str] = dict(prefixes or {})
        self.default = default

    def register(self, type_: type, prefix: str) -> None:
        if not prefix:
            raise ValueError("prefix must be non-empty")
        self.prefixes[type_] = prefix

    def resolve_prefix(self, type_: type) -> str:
        for klass in getattr(type_, "__mro__", (type_,)):
            prefix = self.prefixes.get(klass)
            if prefix:
                return prefix
        if self.default:
            return self.default
        raise ResolutionError(f"No tag prefix available for {type_.__name__}")


class DeclaredPropertyProvider:
    """Reads descriptors from the ``describe_properties`` capability."""

    def describe_properties(self, instance: Any) -> tuple[PropertyDescriptor, ...]:
        describe = getattr(instance, "describe_properties", None)
        if describe is None:
            return ()
        return tuple(describe())

    def describe_child_properties(
        self, descriptor: PropertyDescriptor, value: Any
    ) -> tuple[PropertyDescriptor, ...]:
        if value is None:
            return ()
        return self.describe_properties(value)


class DeclaredEventProvider:
    """Reads events from ``describe_events`` and binds them to handler names."""

    def __init__(self) -> None:
        self._handler_properties: dict[str, PropertyDescriptor] = {}

    def describe_events(self, instance: Any) -> Optional[Iterable[EventDescriptor]]:
        describe = getattr(instance, "describe_events", None)
        if describe is None:
            return None
        return describe()

    def resolve_handler_property(self, event: EventDescriptor) -> Optional[PropertyDescriptor]:
        prop = self._handler_properties.get(event.name)
        if prop is None:
            prop = PropertyDescriptor(
                name=event.name,
                declared_type=str,
                getter=lambda owner, name=event.name: _bound_handler(owner, name),
            )
            self._handler_properties[event.name] = prop
        return prop


def _bound_handler(owner: Any, event: str) -> Optional[str]:
    handlers = getattr(owner, "event_handlers", None) or {}
    return handlers.get(event)
