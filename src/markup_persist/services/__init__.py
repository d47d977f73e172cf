"""
Service System
Collaborators supplied to the persister per call
"""

from .types import (
    ServiceKind,
    TagPrefixResolver,
    PropertyMetadataProvider,
    EventMetadataProvider,
)
from .registry import ServiceRegistry

__all__ = [
    "ServiceKind",
    "TagPrefixResolver",
    "PropertyMetadataProvider",
    "EventMetadataProvider",
    "ServiceRegistry",
]
