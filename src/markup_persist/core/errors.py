"""Persistence error taxonomy.

Every failure raised while persisting a component derives from
PersistenceError. Policy-driven omissions (hidden, read-only, default-valued
properties) are not errors and never raise.
"""


class PersistenceError(Exception):
    """Persisting a component failed."""

    pass


class PreconditionError(PersistenceError, ValueError):
    """A required argument was missing or of the wrong kind."""

    pass


class ResolutionError(PersistenceError):
    """A tag prefix or required service could not be resolved."""

    pass


class ConversionError(PersistenceError):
    """A property converter failed to produce a string."""

    def __init__(self, message: str, property_name: str | None = None) -> None:
        super().__init__(message)
        self.property_name = property_name


class StructuralConflict(PersistenceError):
    """A default inner property was mixed with other inner content."""

    def __init__(self, message: str, property_name: str | None = None) -> None:
        super().__init__(message)
        self.property_name = property_name


class DepthExceeded(PersistenceError):
    """Component nesting went deeper than the configured limit."""

    def __init__(self, depth: int, limit: int) -> None:
        super().__init__(f"Component nesting depth {depth} exceeds maximum {limit}")
        self.depth = depth
        self.limit = limit
