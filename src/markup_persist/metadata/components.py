"""Component capability classes.

Types describe their persistable properties statically through a class-level
``properties`` tuple; ``describe_properties`` merges those along the MRO,
base classes first, so declaration order is output order.
"""

from typing import TYPE_CHECKING, Any, ClassVar, Iterable, Optional

from .types import EventDescriptor, PropertyDescriptor

if TYPE_CHECKING:
    from ..services.registry import ServiceRegistry


class Persistable:
    """Base for any value whose properties can be persisted."""

    properties: ClassVar[tuple[PropertyDescriptor, ...]] = ()

    def __init__(self, **values: Any):
        descriptors = {prop.attribute_name: prop for prop in self.describe_properties()}
        unknown = set(values) - set(descriptors)
        if unknown:
            raise TypeError(f"{type(self).__name__} has no properties {sorted(unknown)}")

        for attr, prop in descriptors.items():
            if prop.getter is not None:
                continue
            setattr(self, attr, values[attr] if attr in values else prop.initial_value())

    @classmethod
    def describe_properties(cls) -> tuple[PropertyDescriptor, ...]:
        merged: dict[str, PropertyDescriptor] = {}
        for klass in reversed(cls.__mro__):
            for prop in vars(klass).get("properties", ()):
                merged[prop.name] = prop
        return tuple(merged.values())



class Component(Persistable):
    """A persistable value with ordered children and bindable events."""

    persist_children: ClassVar[bool] = False
    events: ClassVar[tuple[EventDescriptor, ...]] = ()

    def __init__(
        self,
        children: Optional[Iterable["Component"]] = None,
        site: Optional["ServiceRegistry"] = None,
        **values: Any,
    ):
        super().__init__(**values)
        self.children: list[Component] = list(children or [])
        self.event_handlers: dict[str, str] = {}
        self.site = site

    @classmethod
    def describe_events(cls) -> tuple[EventDescriptor, ...]:
        merged: dict[str, EventDescriptor] = {}
        for klass in reversed(cls.__mro__):
            for event in vars(klass).get("events", ()):
                merged[event.name] = event
        return tuple(merged.values())

    def add(self, *children: "Component") -> "Component":
        """Append children in order, returning self for chaining."""
        self.children.extend(children)
        return self

    def bind_event(self, event: str, handler: str) -> None:
        """Attach a handler method name to a declared event."""
        if event not in {e.name for e in self.describe_events()}:
            raise KeyError(f"{type(self).__name__} declares no event {event!r}")
        self.event_handlers[event] = handler
