"""
Service Type Definitions
Collaborator contracts the persister consumes
"""

from enum import Enum
from typing import Any, Iterable, Optional, Protocol, Sequence

from ..metadata.types import EventDescriptor, PropertyDescriptor


class ServiceKind(str, Enum):
    """Services a persistence context can supply"""
    TAG_PREFIXES = "tag_prefixes"
    PROPERTIES = "properties"
    EVENTS = "events"


class TagPrefixResolver(Protocol):
    """Maps a type to the namespace prefix of its tags"""

    def resolve_prefix(self, type_: type) -> str:
        """Return the prefix, raising ResolutionError when none applies"""
        ...


class PropertyMetadataProvider(Protocol):
    """Enumerates persistable properties"""

    def describe_properties(self, instance: Any) -> Sequence[PropertyDescriptor]:
        ...

    def describe_child_properties(
        self, descriptor: PropertyDescriptor, value: Any
    ) -> Sequence[PropertyDescriptor]:
        ...


class EventMetadataProvider(Protocol):
    """Enumerates events and resolves their bound handler properties"""

    def describe_events(self, instance: Any) -> Optional[Iterable[EventDescriptor]]:
        """Return None when the instance exposes no event bindings"""
        ...

    def resolve_handler_property(self, event: EventDescriptor) -> Optional[PropertyDescriptor]:
        ...
