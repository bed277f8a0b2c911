"""DDL renderer producing byte-stable SQL text from a Metadata model.

The output layout is part of the tool's contract: generated files are checked
in and diffed, so statement order, spacing and quoting must not drift.
"""

from collections.abc import Iterable

import structlog

from pgen.errors import RenderError
from pgen.models.enums import DefaultKind
from pgen.models.schema import Enumeration, Field, Index, Metadata, Table

HEADER = "-- Auto generated by pgen, DO NOT MODIFY."
ENUMS_SECTION = "-- Enums"
TABLES_SECTION = "-- Tables"
INDENT = "  "


def quote_literal(value: str) -> str:
    """Quote a string as a SQL literal, doubling embedded single quotes."""
    return "'" + value.replace("'", "''") + "'"


class Renderer:
    """Renders Metadata as PostgreSQL DDL.

    Enumerations come first, then tables, each in declaration order. Entities
    with nothing to render (an enumeration without values, a table without
    fields) are skipped entirely.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger(__name__)

    def render(self, metadata: Metadata) -> str:
        lines = [HEADER, "", ENUMS_SECTION, ""]
        lines.extend(self._join_blocks(self.render_enumeration(e) for e in metadata.enumerations))
        lines.extend(["", TABLES_SECTION, ""])
        lines.extend(self._join_blocks(self.render_table(t) for t in metadata.tables))

        output = "\n".join(lines) + "\n"
        self._logger.debug(
            "render_completed",
            enumeration_count=len(metadata.enumerations),
            table_count=len(metadata.tables),
            output_bytes=len(output.encode()),
        )
        return output

    def render_enumeration(self, enumeration: Enumeration) -> list[str]:
        if not enumeration.values:
            return []

        values = ", ".join(quote_literal(value) for value in enumeration.values)
        lines = [f"create type {enumeration.name} as enum({values});"]
        if enumeration.comment:
            lines.append(f"comment on type {enumeration.name} is {quote_literal(enumeration.comment)};")
        return lines

    def render_table(self, table: Table) -> list[str]:
        if not table.fields:
            return []

        lines = [f"create table if not exists {table.name} ("]
        last = len(table.fields) - 1
        for position, field in enumerate(table.fields):
            separator = "," if position < last else ""
            lines.append(f"{INDENT}{self.render_column(field)}{separator}")
        lines.append(");")

        for index in table.uniques:
            lines.append(
                f"create unique index {self._index_name(table, index, 'key')} on {table.name} ({', '.join(index)});"
            )
        for index in table.indexes:
            lines.append(f"create index {self._index_name(table, index, 'idx')} on {table.name} ({', '.join(index)});")

        if table.comment:
            lines.append(f"comment on table {table.name} is {quote_literal(table.comment)};")
        for field in table.fields:
            if field.comment:
                lines.append(f"comment on column {table.name}.{field.name} is {quote_literal(field.comment)};")
        return lines

    def render_column(self, field: Field) -> str:
        """Render one column clause, without indentation or trailing comma."""
        clause = f"{field.name} {field.type.sql_name}"
        if field.size is not None and field.type.capabilities.accepts_size:
            clause += f"({field.size})"
        if field.default is not None:
            clause += f" default {self.render_default(field)}"
        if not field.nullable and not field.pk:
            clause += " not null"
        if field.pk:
            clause += " primary key"
        return clause

    def render_default(self, field: Field) -> str:
        kind = field.type.capabilities.default
        value = field.default
        if kind is None or not field.type.accepts_default_value(value):
            raise RenderError(f"{field.name}: default value '{value}' does not match data type '{field.type.sql_name}'")

        if kind in (DefaultKind.STRING, DefaultKind.ENUM_LABEL):
            return quote_literal(value)
        if kind == DefaultKind.BOOLEAN:
            return "true" if value else "false"
        return str(value)

    def _index_name(self, table: Table, index: Index, suffix: str) -> str:
        return f"{table.name}_{'_'.join(index)}_{suffix}"

    def _join_blocks(self, blocks: Iterable[list[str]]) -> list[str]:
        lines: list[str] = []
        for block in blocks:
            if not block:
                continue
            if lines:
                lines.append("")
            lines.extend(block)
        return lines
