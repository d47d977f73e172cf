"""markup-persist: metadata-driven component-to-markup persistence.

Serializes an in-memory tree of components into tagged server-control markup.
Which properties become attributes, which become nested tags and which are
skipped is decided entirely by per-property metadata.
"""

from .core import (
    Settings,
    get_settings,
    configure_logging,
    get_logger,
    PersistenceError,
    PreconditionError,
    ResolutionError,
    ConversionError,
    StructuralConflict,
    DepthExceeded,
    create_services,
)
from .markup import MarkupWriter
from .metadata import (
    Component,
    Converter,
    EventDescriptor,
    Persistable,
    PersistenceMode,
    PropertyDescriptor,
    SerializationVisibility,
    TagPrefixTable,
)
from .services import ServiceKind, ServiceRegistry
from .persistence import (
    ControlPersister,
    PersistenceFailure,
    persist_control,
    persist_control_to_string,
    persist_inner_properties,
    persist_inner_properties_to_string,
    persist_sited_control,
    try_persist_control,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "PersistenceError",
    "PreconditionError",
    "ResolutionError",
    "ConversionError",
    "StructuralConflict",
    "DepthExceeded",
    "create_services",
    "MarkupWriter",
    "Component",
    "Converter",
    "EventDescriptor",
    "Persistable",
    "PersistenceMode",
    "PropertyDescriptor",
    "SerializationVisibility",
    "TagPrefixTable",
    "ServiceKind",
    "ServiceRegistry",
    "ControlPersister",
    "PersistenceFailure",
    "persist_control",
    "persist_control_to_string",
    "persist_inner_properties",
    "persist_inner_properties_to_string",
    "persist_sited_control",
    "try_persist_control",
]
