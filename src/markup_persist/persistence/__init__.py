"""
Component Persistence
Object tree to server-control markup
"""

from .values import InnerValue, InnerValueKind
from .persister import ControlPersister
from .api import (
    PersistenceFailure,
    persist_control,
    persist_control_to_string,
    persist_inner_properties,
    persist_inner_properties_to_string,
    persist_sited_control,
    try_persist_control,
)

__all__ = [
    "InnerValue",
    "InnerValueKind",
    "ControlPersister",
    "PersistenceFailure",
    "persist_control",
    "persist_control_to_string",
    "persist_inner_properties",
    "persist_inner_properties_to_string",
    "persist_sited_control",
    "try_persist_control",
]
