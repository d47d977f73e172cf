"""
Metadata Type Definitions
Descriptors that decide how a property takes part in persistence
"""

from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field


class SerializationVisibility(str, Enum):
    """How a property is visible to the persister"""
    VISIBLE = "visible"  # Persist the value itself
    HIDDEN = "hidden"  # Never persist
    CONTENT = "content"  # Persist the value's own properties, dash-prefixed


class PersistenceMode(str, Enum):
    """Where a visible property is written"""
    ATTRIBUTE = "attribute"
    INNER_PROPERTY = "inner_property"
    INNER_DEFAULT_PROPERTY = "inner_default_property"
    ENCODED_INNER_DEFAULT_PROPERTY = "encoded_inner_default_property"


INNER_MODES = frozenset({
    PersistenceMode.INNER_PROPERTY,
    PersistenceMode.INNER_DEFAULT_PROPERTY,
    PersistenceMode.ENCODED_INNER_DEFAULT_PROPERTY,
})

SOLE_INNER_MODES = frozenset({
    PersistenceMode.INNER_DEFAULT_PROPERTY,
    PersistenceMode.ENCODED_INNER_DEFAULT_PROPERTY,
})


def _format_bool(value: Any) -> str:
    return "True" if value else "False"


def _format_enum(value: Any) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


class Converter(BaseModel):
    """Converts property values to their markup string form"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    can_convert_to_string: bool = True
    formatter: Callable[[Any], str] = str

    def to_string(self, value: Any) -> str:
        """Convert a value; exceptions from the formatter propagate"""
        if value is None:
            return ""
        return self.formatter(value)


STRING_CONVERTER = Converter()
BOOL_CONVERTER = Converter(formatter=_format_bool)
ENUM_CONVERTER = Converter(formatter=_format_enum)
NO_STRING_CONVERTER = Converter(can_convert_to_string=False)


class PropertyDescriptor(BaseModel):
    """Describes one persistable property of a component or structured value"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description="Logical property name")
    declared_type: type = Field(default=object, description="Type used for tag prefix lookup")
    visibility: SerializationVisibility = SerializationVisibility.VISIBLE
    mode: Optional[PersistenceMode] = Field(default=None, description="None behaves as ATTRIBUTE")
    read_only: bool = False
    design_time_only: bool = False
    default: Any = None
    default_factory: Optional[Callable[[], Any]] = None
    converter: Optional[Converter] = STRING_CONVERTER
    getter: Optional[Callable[[Any], Any]] = None
    attribute: Optional[str] = Field(default=None, description="Python attribute when not `name`")

    @property
    def effective_mode(self) -> PersistenceMode:
        return self.mode or PersistenceMode.ATTRIBUTE

    @property
    def attribute_name(self) -> str:
        return self.attribute or self.name

    @property
    def can_convert_to_string(self) -> bool:
        return self.converter is not None and self.converter.can_convert_to_string

    def initial_value(self) -> Any:
        """Value a freshly constructed owner starts with"""
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def get_value(self, owner: Any) -> Any:
        if self.getter is not None:
            return self.getter(owner)
        return getattr(owner, self.attribute_name)

    def has_non_default_value(self, owner: Any) -> bool:
        """True only when the current value differs from the declared default.

        Factory defaults compare against a fresh factory value, so mutable
        structured defaults (compared by identity) always count as set.
        """
        return self.get_value(owner) != self.initial_value()


class EventDescriptor(BaseModel):
    """Describes one event a component can raise"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
