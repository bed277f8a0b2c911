import pytest
from pydantic import ValidationError

from pgen.models.enums import DataType
from pgen.models.schema import Enumeration, Field, Metadata, Table
from pgen.models.types import CURRENT_TIMESTAMP, ColumnType


def _int_field(name: str = "id", **kwargs: object) -> Field:
    return Field(name=name, type=ColumnType(kind=DataType.INTEGER), **kwargs)


def test_field_defaults() -> None:
    field = _int_field()

    assert field.nullable is False
    assert field.pk is False
    assert field.default is None
    assert field.size is None
    assert field.comment is None


def test_field_is_frozen() -> None:
    field = _int_field()
    with pytest.raises(ValidationError):
        field.nullable = True


def test_field_rejects_nullable_primary_key() -> None:
    with pytest.raises(ValidationError, match="primary key can not be nullable"):
        _int_field(pk=True, nullable=True)


def test_field_rejects_primary_key_on_text() -> None:
    with pytest.raises(ValidationError, match="primary key must be integer, bigint, serial"):
        Field(name="code", type=ColumnType(kind=DataType.TEXT), pk=True)


def test_varchar_requires_positive_size() -> None:
    varchar = ColumnType(kind=DataType.VARCHAR)
    with pytest.raises(ValidationError, match="should have size"):
        Field(name="name", type=varchar)
    with pytest.raises(ValidationError, match="size must be a positive integer"):
        Field(name="name", type=varchar, size=0)

    assert Field(name="name", type=varchar, size=64).size == 64


def test_size_rejected_on_other_types() -> None:
    with pytest.raises(ValidationError, match="can not have 'size' attribute"):
        _int_field(size=10)


def test_default_must_match_type() -> None:
    with pytest.raises(ValidationError, match="invalid default value"):
        _int_field(default="zero")
    with pytest.raises(ValidationError, match="can not have 'default' attribute"):
        Field(name="payload", type=ColumnType(kind=DataType.JSONB), default="{}")


def test_timestamp_default_is_marker() -> None:
    field = Field(name="created_at", type=ColumnType(kind=DataType.TIMESTAMPTZ), default=CURRENT_TIMESTAMP)
    assert field.default == CURRENT_TIMESTAMP

    with pytest.raises(ValidationError):
        Field(name="created_at", type=ColumnType(kind=DataType.TIMESTAMPTZ), default="now")


def test_boolean_default_stays_boolean() -> None:
    field = Field(name="active", type=ColumnType(kind=DataType.BOOL), default=False)
    assert field.default is False


def test_enumeration_requires_values() -> None:
    with pytest.raises(ValidationError):
        Enumeration(name="status", values=[])


def test_double_default_must_be_finite() -> None:
    with pytest.raises(ValidationError, match="invalid default value 'nan'"):
        Field(name="ratio", type=ColumnType(kind=DataType.DOUBLE), default=float("nan"))


def test_enumeration_rejects_duplicate_values() -> None:
    with pytest.raises(ValidationError, match="duplicate enumeration values: a"):
        Enumeration(name="status", values=["a", "b", "a"])


def test_table_rejects_duplicate_fields() -> None:
    with pytest.raises(ValidationError, match="duplicate field names: id"):
        Table(name="account", db="main", fields=[_int_field(), _int_field()])


def test_table_rejects_empty_index() -> None:
    with pytest.raises(ValidationError):
        Table(name="account", db="main", uniques=[[]])


def test_table_requires_db() -> None:
    with pytest.raises(ValidationError):
        Table(name="account", db="")


def test_table_without_fields_is_valid() -> None:
    table = Table(name="audit", db="main")
    assert table.fields == []
    assert table.field_names() == []


def test_metadata_lookups() -> None:
    status = Enumeration(name="status", values=["active"])
    account = Table(
        name="account",
        db="main",
        fields=[_int_field(), Field(name="status", type=ColumnType.enum("status"))],
    )
    metadata = Metadata(enumerations=[status], tables=[account])

    assert metadata.get_enumeration("status") == status
    assert metadata.get_table("account") == account
    assert metadata.get_table("missing") is None
    assert account.get_field("status") is not None


def test_metadata_rejects_undeclared_enum_reference() -> None:
    account = Table(name="account", db="main", fields=[Field(name="status", type=ColumnType.enum("status"))])
    with pytest.raises(ValidationError, match="undeclared enumeration 'status'"):
        Metadata(tables=[account])
