"""Shape of a property value persisted as inner content."""

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class InnerValueKind(str, Enum):
    """How an inner property value is rendered."""

    NULL = "null"  # Self-closing named tag, or nothing for a default property
    SCALAR = "scalar"  # Encoded text
    COLLECTION = "collection"  # One tag per element
    STRUCTURED = "structured"  # Named tag carrying the value's attributes


@dataclass(frozen=True)
class InnerValue:
    """A property value classified once, before any markup is written."""

    kind: InnerValueKind
    value: Any = None

    @classmethod
    def classify(cls, value: Any) -> "InnerValue":
        """
        Decide the shape of ``value``.

        Strings are scalars; any other sized, iterable, non-mapping container
        is a collection (snapshotted to a tuple); everything else is structured.
        """
        if value is None:
            return cls(InnerValueKind.NULL)
        if isinstance(value, str):
            return cls(InnerValueKind.SCALAR, value)
        if isinstance(value, Collection) and not isinstance(value, (Mapping, bytes, bytearray)):
            return cls(InnerValueKind.COLLECTION, tuple(value))
        return cls(InnerValueKind.STRUCTURED, value)

    @property
    def is_empty(self) -> bool:
        """True for a null value or a collection without elements."""
        if self.kind is InnerValueKind.NULL:
            return True
        return self.kind is InnerValueKind.COLLECTION and not self.value
