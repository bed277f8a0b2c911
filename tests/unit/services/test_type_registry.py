"""Unit tests for the TypeRegistry service."""

import pytest

from pgen.errors import StructuralError, UnresolvedTypeError
from pgen.models.enums import DataType
from pgen.models.types import ColumnType
from pgen.services.type_registry import BUILTIN_TYPES, TypeRegistry


class TestBuiltinTokens:
    """Tests for the fixed token table."""

    @pytest.mark.parametrize(
        ("token", "kind"),
        [
            ("i32", DataType.INTEGER),
            ("i64", DataType.BIGINT),
            ("str", DataType.VARCHAR),
            ("bool", DataType.BOOL),
            ("t", DataType.TIME),
            ("tsz", DataType.TIMESTAMPTZ),
            ("double", DataType.DOUBLE),
            ("text", DataType.TEXT),
            ("serial", DataType.SERIAL),
            ("jsonb", DataType.JSONB),
        ],
    )
    def test_resolves_builtin_token(self, token: str, kind: DataType) -> None:
        assert TypeRegistry().resolve(token) == ColumnType(kind=kind)

    def test_token_table_is_complete(self) -> None:
        assert len(BUILTIN_TYPES) == 10

    def test_sql_names_are_not_tokens(self) -> None:
        with pytest.raises(UnresolvedTypeError, match="invalid data type: integer"):
            TypeRegistry().resolve("integer")


class TestEnumResolution:
    """Tests for resolving declared enumerations."""

    def test_resolves_registered_enum(self) -> None:
        registry = TypeRegistry()
        registry.register_enum("status")

        column_type = registry.resolve("status")

        assert column_type.is_enum
        assert column_type.enum_name == "status"

    def test_unknown_token_fails(self) -> None:
        with pytest.raises(UnresolvedTypeError, match="invalid data type: mood") as exc_info:
            TypeRegistry().resolve("mood")
        assert exc_info.value.entity == "mood"

    def test_match_is_exact(self) -> None:
        registry = TypeRegistry()
        registry.register_enum("status")
        with pytest.raises(UnresolvedTypeError):
            registry.resolve("Status")

    def test_non_string_token_fails(self) -> None:
        with pytest.raises(UnresolvedTypeError, match="invalid data type: 42"):
            TypeRegistry().resolve(42)

    def test_enum_names_keep_registration_order(self) -> None:
        registry = TypeRegistry()
        registry.register_enum("b")
        registry.register_enum("a")
        assert registry.enum_names == ["b", "a"]

    def test_rejects_enum_shadowing_builtin(self) -> None:
        with pytest.raises(StructuralError, match="collides with built-in type 'text'"):
            TypeRegistry().register_enum("text")

    def test_rejects_duplicate_enum(self) -> None:
        registry = TypeRegistry()
        registry.register_enum("status")
        with pytest.raises(StructuralError, match="declared more than once"):
            registry.register_enum("status")
