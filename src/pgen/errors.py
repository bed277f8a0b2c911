"""Exceptions raised while loading, validating and rendering a schema document.

Every validation failure is a ``SchemaError`` subclass naming the offending
entity (an enumeration, table or field name). The message is the single line
shown to the user, so it must be self-contained.
"""


class PgenError(Exception):
    """Base class for all pgen errors."""


class DocumentLoadError(PgenError):
    """The schema document could not be located or decoded."""


class SchemaError(PgenError):
    """A schema declaration failed validation."""

    def __init__(self, message: str, entity: str | None = None) -> None:
        super().__init__(message)
        self.entity = entity


class StructuralError(SchemaError):
    """A top-level entry is malformed or its 'type' discriminator is missing."""


class UnresolvedTypeError(SchemaError):
    """A type token is neither built-in nor a declared enumeration."""


class MissingAttributeError(SchemaError):
    """A required attribute (e.g. a table's 'db') was not supplied."""


class IncompatibleAttributeError(SchemaError):
    """An attribute was applied to a data type that does not support it."""


class AttributeConflictError(SchemaError):
    """Two attributes of the same field contradict each other."""


class UnknownAttributeError(SchemaError):
    """A field declares an attribute pgen does not know."""


class InvalidAttributeValueError(SchemaError):
    """An attribute carries a value of the wrong shape."""


class InvariantError(PgenError):
    """An internal invariant of the in-memory model does not hold."""


class RenderError(InvariantError):
    """The in-memory model is inconsistent and cannot be rendered."""
