"""Type registry mapping schema type tokens to column types."""

from typing import Any

import structlog

from pgen.errors import StructuralError, UnresolvedTypeError
from pgen.models.enums import DataType
from pgen.models.types import ColumnType

BUILTIN_TYPES: dict[str, DataType] = {
    "i32": DataType.INTEGER,
    "i64": DataType.BIGINT,
    "str": DataType.VARCHAR,
    "bool": DataType.BOOL,
    "t": DataType.TIME,
    "tsz": DataType.TIMESTAMPTZ,
    "double": DataType.DOUBLE,
    "text": DataType.TEXT,
    "serial": DataType.SERIAL,
    "jsonb": DataType.JSONB,
}


class TypeRegistry:
    """Resolves type tokens against the built-in table and declared enumerations.

    Enumerations must be registered before any token naming them is resolved;
    the decoder guarantees this by building every enumeration first.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._enum_names: list[str] = []
        self._logger = logger or structlog.get_logger(__name__)

    @property
    def enum_names(self) -> list[str]:
        return list(self._enum_names)

    def register_enum(self, name: str) -> None:
        """Make ``name`` resolvable as an enumeration column type.

        Raises:
            StructuralError: If the name shadows a built-in token or is already registered.
        """
        if name in BUILTIN_TYPES:
            raise StructuralError(f"enum {name}: name collides with built-in type '{name}'", entity=name)
        if name in self._enum_names:
            raise StructuralError(f"enum {name}: declared more than once", entity=name)
        self._enum_names.append(name)
        self._logger.debug("enum_type_registered", enum=name)

    def resolve(self, token: Any) -> ColumnType:
        """Resolve a type token to a ColumnType.

        Raises:
            UnresolvedTypeError: If the token is neither built-in nor a registered enumeration.
        """
        if isinstance(token, str):
            if token in BUILTIN_TYPES:
                return ColumnType(kind=BUILTIN_TYPES[token])
            if token in self._enum_names:
                return ColumnType.enum(token)
        raise UnresolvedTypeError(f"invalid data type: {token}", entity=str(token))
