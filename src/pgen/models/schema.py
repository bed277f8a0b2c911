from typing import Any

import pydantic
from pydantic import StrictBool, StrictFloat, StrictInt, StrictStr, ValidationInfo, field_validator, model_validator

from pgen.models.base import (
    SchemaModel,
    ensure_non_empty_text,
    ensure_optional_text,
    ensure_string_list,
    find_duplicates,
)
from pgen.models.types import PRIMARY_KEY_TYPES, ColumnType, CurrentTimestamp

Index = list[str]

DefaultValue = StrictBool | StrictInt | StrictFloat | StrictStr | CurrentTimestamp


class Enumeration(SchemaModel):
    name: str
    comment: str | None = None
    values: list[str]

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        return ensure_non_empty_text(value, "name")

    @field_validator("comment", mode="before")
    @classmethod
    def _validate_comment(cls, value: Any) -> str | None:
        return ensure_optional_text(value, "comment")

    @field_validator("values", mode="before")
    @classmethod
    def _validate_values(cls, value: Any) -> list[str]:
        values = ensure_string_list(value, "values")
        if not values:
            raise ValueError("enumeration must have at least one value")
        duplicates = find_duplicates(values)
        if duplicates:
            raise ValueError(f"duplicate enumeration values: {', '.join(duplicates)}")
        return values


class Field(SchemaModel):
    """One column of a table.

    The model validator enforces every type-conditioned rule, so an instance
    always describes a column that can be rendered.
    """

    name: str
    type: ColumnType
    comment: str | None = None
    nullable: StrictBool = False
    default: DefaultValue | None = None
    size: StrictInt | None = None
    pk: StrictBool = False

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        return ensure_non_empty_text(value, "name")

    @field_validator("comment", mode="before")
    @classmethod
    def _validate_comment(cls, value: Any) -> str | None:
        return ensure_optional_text(value, "comment")

    @model_validator(mode="after")
    def _validate_type_rules(self) -> "Field":
        caps = self.type.capabilities

        if self.default is not None:
            if caps.default is None:
                raise ValueError(f"data type '{self.type.sql_name}' can not have 'default' attribute")
            if not self.type.accepts_default_value(self.default):
                raise ValueError(f"invalid default value '{self.default}'")

        if self.size is not None:
            if not caps.accepts_size:
                raise ValueError(f"data type '{self.type.sql_name}' can not have 'size' attribute")
            if self.size <= 0:
                raise ValueError("size must be a positive integer")
        elif caps.accepts_size:
            raise ValueError(f"{self.name} should have size")

        if self.pk:
            if self.type.kind not in PRIMARY_KEY_TYPES:
                raise ValueError("primary key must be integer, bigint, serial")
            if self.nullable:
                raise ValueError("primary key can not be nullable")
        return self


class Table(SchemaModel):
    name: str
    db: str
    comment: str | None = None
    fields: list[Field] = pydantic.Field(default_factory=list)
    uniques: list[Index] = pydantic.Field(default_factory=list)
    indexes: list[Index] = pydantic.Field(default_factory=list)

    @field_validator("name", "db")
    @classmethod
    def _ensure_non_empty(cls, value: str, info: ValidationInfo) -> str:
        return ensure_non_empty_text(value, info.field_name or "value")

    @field_validator("comment", mode="before")
    @classmethod
    def _validate_comment(cls, value: Any) -> str | None:
        return ensure_optional_text(value, "comment")

    @field_validator("uniques", "indexes", mode="before")
    @classmethod
    def _validate_indexes(cls, value: Any, info: ValidationInfo) -> list[Index]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"{info.field_name} must be a list of column lists")
        indexes = [ensure_string_list(index, info.field_name or "index") for index in value]
        if any(not index for index in indexes):
            raise ValueError(f"{info.field_name} can not contain an empty column list")
        return indexes

    @model_validator(mode="after")
    def _validate_field_names(self) -> "Table":
        duplicates = find_duplicates(self.field_names())
        if duplicates:
            raise ValueError(f"duplicate field names: {', '.join(duplicates)}")
        return self

    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]

    def get_field(self, name: str) -> Field | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None


class Metadata(SchemaModel):
    """Everything declared in one schema document, in declaration order."""

    enumerations: list[Enumeration] = pydantic.Field(default_factory=list)
    tables: list[Table] = pydantic.Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_references(self) -> "Metadata":
        enum_names = [enumeration.name for enumeration in self.enumerations]
        duplicates = find_duplicates(enum_names)
        if duplicates:
            raise ValueError(f"duplicate enumeration names: {', '.join(duplicates)}")

        duplicates = find_duplicates([table.name for table in self.tables])
        if duplicates:
            raise ValueError(f"duplicate table names: {', '.join(duplicates)}")

        known = set(enum_names)
        for table in self.tables:
            for field in table.fields:
                if field.type.is_enum and field.type.enum_name not in known:
                    raise ValueError(
                        f"{table.name}.{field.name} references undeclared enumeration '{field.type.enum_name}'"
                    )
        return self

    def get_enumeration(self, name: str) -> Enumeration | None:
        for enumeration in self.enumerations:
            if enumeration.name == name:
                return enumeration
        return None

    def get_table(self, name: str) -> Table | None:
        for table in self.tables:
            if table.name == name:
                return table
        return None


__all__ = ["DefaultValue", "Enumeration", "Field", "Index", "Metadata", "Table"]
