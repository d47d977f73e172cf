"""
Persistence Metadata
Descriptors, component capabilities and built-in providers
"""

from .types import (
    BOOL_CONVERTER,
    ENUM_CONVERTER,
    INNER_MODES,
    NO_STRING_CONVERTER,
    SOLE_INNER_MODES,
    STRING_CONVERTER,
    Converter,
    EventDescriptor,
    PersistenceMode,
    PropertyDescriptor,
    SerializationVisibility,
)
from .components import Component, Persistable
from .providers import DeclaredEventProvider, DeclaredPropertyProvider, TagPrefixTable

__all__ = [
    "BOOL_CONVERTER",
    "ENUM_CONVERTER",
    "INNER_MODES",
    "NO_STRING_CONVERTER",
    "SOLE_INNER_MODES",
    "STRING_CONVERTER",
    "Converter",
    "EventDescriptor",
    "PersistenceMode",
    "PropertyDescriptor",
    "SerializationVisibility",
    "Component",
    "Persistable",
    "DeclaredEventProvider",
    "DeclaredPropertyProvider",
    "TagPrefixTable",
]
