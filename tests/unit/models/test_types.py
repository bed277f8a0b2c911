import pytest
from pydantic import ValidationError

from pgen.models.enums import DataType, DefaultKind
from pgen.models.types import CURRENT_TIMESTAMP, PRIMARY_KEY_TYPES, TYPE_CAPABILITIES, ColumnType


def test_every_data_type_has_capabilities() -> None:
    assert set(TYPE_CAPABILITIES) == set(DataType)


def test_only_varchar_accepts_size() -> None:
    sized = [kind for kind, caps in TYPE_CAPABILITIES.items() if caps.accepts_size]
    assert sized == [DataType.VARCHAR]


def test_primary_key_types_are_integer_family() -> None:
    assert set(PRIMARY_KEY_TYPES) == {DataType.INTEGER, DataType.BIGINT, DataType.SERIAL}


def test_types_without_defaults() -> None:
    no_default = {kind for kind, caps in TYPE_CAPABILITIES.items() if caps.default is None}
    assert no_default == {DataType.TIME, DataType.SERIAL, DataType.JSONB}


def test_enum_column_type_requires_name() -> None:
    with pytest.raises(ValidationError):
        ColumnType(kind=DataType.ENUM)


def test_builtin_column_type_rejects_enum_name() -> None:
    with pytest.raises(ValidationError):
        ColumnType(kind=DataType.TEXT, enum_name="status")


def test_sql_name() -> None:
    assert ColumnType(kind=DataType.DOUBLE).sql_name == "float8"
    assert ColumnType(kind=DataType.BOOL).sql_name == "bool"
    assert ColumnType.enum("status").sql_name == "status"
    assert ColumnType.enum("status").is_enum


@pytest.mark.parametrize(
    ("kind", "value", "expected"),
    [
        (DataType.INTEGER, 5, True),
        (DataType.INTEGER, True, False),
        (DataType.INTEGER, "5", False),
        (DataType.DOUBLE, 1.5, True),
        (DataType.DOUBLE, 2, True),
        (DataType.DOUBLE, float("inf"), False),
        (DataType.DOUBLE, float("nan"), False),
        (DataType.BOOL, False, True),
        (DataType.BOOL, 0, False),
        (DataType.TEXT, "hello", True),
        (DataType.VARCHAR, 3, False),
        (DataType.TIMESTAMPTZ, CURRENT_TIMESTAMP, True),
        (DataType.TIMESTAMPTZ, "now", False),
        (DataType.JSONB, "{}", False),
    ],
)
def test_accepts_default_value(kind: DataType, value: object, expected: bool) -> None:
    assert ColumnType(kind=kind).accepts_default_value(value) is expected


def test_enum_accepts_string_labels() -> None:
    column_type = ColumnType.enum("status")
    assert column_type.capabilities.default == DefaultKind.ENUM_LABEL
    assert column_type.accepts_default_value("active")
    assert not column_type.accepts_default_value(1)


def test_current_timestamp_renders_keyword() -> None:
    assert str(CURRENT_TIMESTAMP) == "current_timestamp"
