from enum import StrEnum


class DataType(StrEnum):
    """Column kinds pgen understands. Values are the rendered SQL type names."""

    INTEGER = "integer"
    BIGINT = "bigint"
    VARCHAR = "varchar"
    BOOL = "bool"
    TIME = "time"
    TIMESTAMPTZ = "timestamptz"
    SERIAL = "serial"
    JSONB = "jsonb"
    TEXT = "text"
    DOUBLE = "float8"
    ENUM = "enum"


class DefaultKind(StrEnum):
    """Which literals a column kind accepts as its default, and how they render."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    CURRENT_TIMESTAMP = "current_timestamp"
    ENUM_LABEL = "enum_label"


class DeclarationKind(StrEnum):
    ENUM = "enum"
    TABLE = "table"
