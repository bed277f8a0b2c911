"""Column types and the per-type capability table.

Every rule of the form "can a column of this type carry attribute X" is
answered by ``TYPE_CAPABILITIES``. Builders, model validators and the renderer
all consult the same table, so adding a type means adding one entry here.
"""

import math
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, model_validator

from pgen.models.base import SchemaModel
from pgen.models.enums import DataType, DefaultKind


class TypeCapabilities(BaseModel):
    default: DefaultKind | None = None
    accepts_size: bool = False
    accepts_pk: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


TYPE_CAPABILITIES: dict[DataType, TypeCapabilities] = {
    DataType.INTEGER: TypeCapabilities(default=DefaultKind.INTEGER, accepts_pk=True),
    DataType.BIGINT: TypeCapabilities(default=DefaultKind.INTEGER, accepts_pk=True),
    DataType.VARCHAR: TypeCapabilities(default=DefaultKind.STRING, accepts_size=True),
    DataType.BOOL: TypeCapabilities(default=DefaultKind.BOOLEAN),
    DataType.TIME: TypeCapabilities(),
    DataType.TIMESTAMPTZ: TypeCapabilities(default=DefaultKind.CURRENT_TIMESTAMP),
    DataType.SERIAL: TypeCapabilities(accepts_pk=True),
    DataType.JSONB: TypeCapabilities(),
    DataType.TEXT: TypeCapabilities(default=DefaultKind.STRING),
    DataType.DOUBLE: TypeCapabilities(default=DefaultKind.NUMBER),
    DataType.ENUM: TypeCapabilities(default=DefaultKind.ENUM_LABEL),
}

PRIMARY_KEY_TYPES = tuple(kind for kind, caps in TYPE_CAPABILITIES.items() if caps.accepts_pk)


class CurrentTimestamp(SchemaModel):
    """Default marker for a timestamp column that defaults to the insert time."""

    SOURCE_LITERAL: ClassVar[str] = "now"

    keyword: Literal["current_timestamp"] = "current_timestamp"

    def __str__(self) -> str:
        return self.keyword


CURRENT_TIMESTAMP = CurrentTimestamp()


class ColumnType(SchemaModel):
    """A resolved column type; ``enum_name`` is set only for enumeration references."""

    kind: DataType
    enum_name: str | None = None

    @model_validator(mode="after")
    def _validate_enum_name(self) -> "ColumnType":
        if self.kind == DataType.ENUM:
            if not self.enum_name:
                raise ValueError("enum column type requires enum_name")
        elif self.enum_name is not None:
            raise ValueError(f"data type '{self.kind}' can not reference an enumeration")
        return self

    @classmethod
    def enum(cls, name: str) -> "ColumnType":
        return cls(kind=DataType.ENUM, enum_name=name)

    @property
    def is_enum(self) -> bool:
        return self.kind == DataType.ENUM

    @property
    def sql_name(self) -> str:
        if self.enum_name is not None:
            return self.enum_name
        return self.kind.value

    @property
    def capabilities(self) -> TypeCapabilities:
        return TYPE_CAPABILITIES[self.kind]

    def accepts_default_value(self, value: Any) -> bool:
        """Check that ``value`` is a legal, already normalised default for this type."""
        kind = self.capabilities.default
        if kind is None:
            return False
        if kind in (DefaultKind.STRING, DefaultKind.ENUM_LABEL):
            return isinstance(value, str)
        if kind == DefaultKind.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if kind == DefaultKind.NUMBER:
            return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
        if kind == DefaultKind.BOOLEAN:
            return isinstance(value, bool)
        return isinstance(value, CurrentTimestamp)
