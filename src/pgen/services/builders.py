"""Builders turning classified declarations into validated schema entities.

Each builder raises a ``SchemaError`` subclass on the first rule a declaration
breaks; nothing is collected or retried. Messages name the offending
enumeration, table or field first.
"""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from pgen.errors import (
    AttributeConflictError,
    IncompatibleAttributeError,
    InvalidAttributeValueError,
    MissingAttributeError,
    StructuralError,
    UnknownAttributeError,
)
from pgen.models.base import find_duplicates
from pgen.models.declaration import Declaration
from pgen.models.enums import DefaultKind
from pgen.models.schema import DefaultValue, Enumeration, Field, Index, Table
from pgen.models.types import CURRENT_TIMESTAMP, PRIMARY_KEY_TYPES, ColumnType, CurrentTimestamp
from pgen.services.type_registry import TypeRegistry


def describe_validation_error(exc: ValidationError) -> str:
    """Return the first pydantic error message without its 'Value error, ' prefix."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    message = errors[0]["msg"]
    return message.removeprefix("Value error, ")


class EnumerationBuilder:
    """Builds an Enumeration from a declaration whose type is ``enum``.

    Attributes other than ``comment`` and ``value`` are ignored, unlike fields,
    which reject unknown attributes.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger(__name__)

    def build(self, declaration: Declaration) -> Enumeration:
        name = declaration.name
        comment: str | None = None
        values: list[str] = []

        for key, value in declaration.body():
            if key == "comment":
                comment = _expect_text(value, f"enum {name}: comment must be a string", name)
            elif key == "value":
                values = self._parse_values(name, value)
            else:
                self._logger.debug("enum_attribute_ignored", enum=name, attribute=key)

        if not values:
            raise MissingAttributeError(f"enum {name} should have at least one value", entity=name)

        try:
            enumeration = Enumeration(name=name, comment=comment, values=values)
        except ValidationError as exc:
            raise InvalidAttributeValueError(f"enum {name}: {describe_validation_error(exc)}", entity=name) from exc

        self._logger.debug("enumeration_built", enum=name, value_count=len(values))
        return enumeration

    def _parse_values(self, name: str, value: Any) -> list[str]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise InvalidAttributeValueError(f"enum {name}: 'value' must be a list of strings", entity=name)
        for item in value:
            if not isinstance(item, str) or not item:
                raise InvalidAttributeValueError(
                    f"enum {name}: invalid value '{item}', values must be strings",
                    entity=name,
                )
        duplicates = find_duplicates(value)
        if duplicates:
            raise AttributeConflictError(f"enum {name}: duplicate value '{duplicates[0]}'", entity=name)
        return list(value)


class FieldBuilder:
    """Builds a Field from one column specification.

    A specification is a mapping whose first entry is ``<field name>: <type token>``,
    followed by attributes applied in order. Which attributes are legal depends on
    the resolved column type.
    """

    def __init__(self, registry: TypeRegistry, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._registry = registry
        self._logger = logger or structlog.get_logger(__name__)

    def build(self, spec: Any, table: str) -> Field:
        """Build and validate a single field.

        Args:
            spec: The column specification mapping.
            table: Name of the owning table, used in error messages.

        Returns:
            The validated Field.

        Raises:
            SchemaError: The specific subclass names the violated rule.
        """
        if not isinstance(spec, Mapping) or not spec:
            raise StructuralError(
                f"{table}: each field must be a mapping starting with '<name>: <type>'",
                entity=table,
            )

        items = list(spec.items())
        name, token = items[0]
        if not isinstance(name, str) or not name.strip():
            raise StructuralError(f"{table}: field name must be a non-empty string", entity=table)

        column_type = self._registry.resolve(token)

        comment: str | None = None
        nullable = False
        default: DefaultValue | None = None
        size: int | None = None
        pk = False

        for key, value in items[1:]:
            if key == "default":
                default = self._parse_default(name, column_type, value)
            elif key == "size":
                size = self._parse_size(name, column_type, value)
            elif key == "comment":
                comment = _expect_text(value, f"{name}: comment must be a string", name)
            elif key == "nullable":
                nullable = _expect_flag(value, f"{name}: nullable must be true or false", name)
            elif key == "pk":
                if column_type.kind not in PRIMARY_KEY_TYPES:
                    raise IncompatibleAttributeError(
                        f"{name}: primary key must be integer, bigint, serial",
                        entity=name,
                    )
                pk = _expect_flag(value, f"{name}: pk must be true or false", name)
            else:
                raise UnknownAttributeError(f"{name}: invalid attribute: {key}", entity=name)

        if column_type.capabilities.accepts_size and size is None:
            raise AttributeConflictError(
                f"{name} should have size. if size is not a consideration, 'text' should be used",
                entity=name,
            )
        if pk and nullable:
            raise AttributeConflictError(f"{name}: primary key can not be nullable", entity=name)

        try:
            field = Field(
                name=name,
                type=column_type,
                comment=comment,
                nullable=nullable,
                default=default,
                size=size,
                pk=pk,
            )
        except ValidationError as exc:
            raise InvalidAttributeValueError(f"{name}: {describe_validation_error(exc)}", entity=name) from exc

        self._logger.debug("field_built", table=table, field=name, data_type=column_type.sql_name)
        return field

    def _parse_default(self, name: str, column_type: ColumnType, value: Any) -> DefaultValue | None:
        if value is None:
            return None
        kind = column_type.capabilities.default
        if kind is None:
            raise IncompatibleAttributeError(
                f"{name}: data type '{column_type.sql_name}' can not have 'default' attribute",
                entity=name,
            )
        if kind == DefaultKind.CURRENT_TIMESTAMP:
            if value != CurrentTimestamp.SOURCE_LITERAL:
                raise InvalidAttributeValueError(f"{name}: invalid default value '{value}'", entity=name)
            return CURRENT_TIMESTAMP
        if not column_type.accepts_default_value(value):
            raise InvalidAttributeValueError(f"{name}: invalid default value '{value}'", entity=name)
        return value

    def _parse_size(self, name: str, column_type: ColumnType, value: Any) -> int:
        if not column_type.capabilities.accepts_size:
            raise IncompatibleAttributeError(
                f"{name}: data type '{column_type.sql_name}' can not have 'size' attribute",
                entity=name,
            )
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise InvalidAttributeValueError(f"{name}: size must be a positive integer, got '{value}'", entity=name)
        return value


class TableBuilder:
    """Builds a Table from a declaration whose type is ``table``.

    When ``strict_indexes`` is set, every column named by a unique or secondary
    index must be a field of the same table.
    """

    def __init__(
        self,
        field_builder: FieldBuilder,
        strict_indexes: bool = True,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._field_builder = field_builder
        self._strict_indexes = strict_indexes
        self._logger = logger or structlog.get_logger(__name__)

    def build(self, declaration: Declaration) -> Table:
        name = declaration.name
        db: str | None = None
        comment: str | None = None
        fields: list[Field] = []
        uniques: list[Index] = []
        indexes: list[Index] = []

        for key, value in declaration.body():
            if key == "db":
                db = _expect_text(value, f"{name}: db must be a string", name)
            elif key == "comment":
                comment = _expect_text(value, f"{name}: comment must be a string", name)
            elif key == "fields":
                fields = self._build_fields(name, value)
            elif key == "uniques":
                uniques = self._parse_indexes(name, key, value)
            elif key == "indexes":
                indexes = self._parse_indexes(name, key, value)
            else:
                self._logger.debug("table_attribute_ignored", table=name, attribute=key)

        if not db:
            raise MissingAttributeError(f"{name}: db should be provided", entity=name)

        if self._strict_indexes:
            self._check_index_columns(name, fields, uniques + indexes)

        try:
            table = Table(
                name=name,
                db=db,
                comment=comment,
                fields=fields,
                uniques=uniques,
                indexes=indexes,
            )
        except ValidationError as exc:
            raise InvalidAttributeValueError(f"{name}: {describe_validation_error(exc)}", entity=name) from exc

        self._logger.debug(
            "table_built",
            table=name,
            db=db,
            field_count=len(fields),
            unique_count=len(uniques),
            index_count=len(indexes),
        )
        return table

    def _build_fields(self, name: str, value: Any) -> list[Field]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise InvalidAttributeValueError(f"{name}: 'fields' must be a list of field specifications", entity=name)

        fields: list[Field] = []
        seen: set[str] = set()
        for spec in value:
            field = self._field_builder.build(spec, table=name)
            if field.name in seen:
                raise AttributeConflictError(f"{name}: duplicate field '{field.name}'", entity=name)
            seen.add(field.name)
            fields.append(field)
        return fields

    def _parse_indexes(self, name: str, key: str, value: Any) -> list[Index]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise InvalidAttributeValueError(f"{name}: '{key}' must be a list of column lists", entity=name)

        result: list[Index] = []
        for index in value:
            if not isinstance(index, list) or not index:
                raise InvalidAttributeValueError(
                    f"{name}: each entry of '{key}' must be a non-empty list of column names",
                    entity=name,
                )
            for column in index:
                if not isinstance(column, str) or not column:
                    raise InvalidAttributeValueError(f"{name}: invalid column '{column}' in '{key}'", entity=name)
            result.append(list(index))
        return result

    def _check_index_columns(self, name: str, fields: list[Field], indexes: list[Index]) -> None:
        known = {field.name for field in fields}
        for index in indexes:
            for column in index:
                if column not in known:
                    raise StructuralError(f"{name}: index column '{column}' is not a field", entity=name)


def _expect_text(value: Any, message: str, entity: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidAttributeValueError(message, entity=entity)
    return value


def _expect_flag(value: Any, message: str, entity: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidAttributeValueError(message, entity=entity)
    return value
