"""Document decoder turning a parsed schema document into Metadata.

Decoding happens in two steps. ``scan`` classifies every top-level entry into
a Declaration in document order. ``decode`` then resolves declarations in two
phases: all enumerations first, then all tables. Enumerations therefore behave
as if hoisted above tables, and a column can name an enumeration declared
anywhere in the document.
"""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from pgen.errors import InvariantError, StructuralError
from pgen.models.declaration import Declaration
from pgen.models.enums import DeclarationKind
from pgen.models.schema import Enumeration, Metadata, Table
from pgen.services.builders import EnumerationBuilder, FieldBuilder, TableBuilder, describe_validation_error
from pgen.services.type_registry import TypeRegistry

TYPE_KEY = "type"


class DocumentDecoder:
    """Decodes one schema document into a Metadata model.

    A fresh TypeRegistry is used for every ``decode`` call, so one decoder can
    process any number of documents.
    """

    def __init__(
        self,
        strict_indexes: bool = True,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._strict_indexes = strict_indexes
        self._logger = logger or structlog.get_logger(__name__)

    def scan(self, document: Mapping[str, Any]) -> list[Declaration]:
        """Classify top-level entries into declarations, preserving order.

        Entries without attributes and entries whose ``type`` is neither
        ``enum`` nor ``table`` are skipped.

        Raises:
            StructuralError: If an entry is not a mapping or does not start with ``type``.
        """
        if not isinstance(document, Mapping):
            raise StructuralError("schema document must be a mapping of enumerations and tables")

        declarations: list[Declaration] = []
        for position, (name, attributes) in enumerate(document.items()):
            if not isinstance(name, str) or not name.strip():
                raise StructuralError(f"{name}: entry names must be non-empty strings", entity=str(name))

            if attributes is None or (isinstance(attributes, Mapping) and not attributes):
                self._logger.debug("declaration_skipped", name=name, position=position, reason="empty")
                continue
            if not isinstance(attributes, Mapping):
                raise StructuralError(f"{name}: entry must be a mapping of attributes", entity=name)

            for key in attributes:
                if not isinstance(key, str):
                    raise StructuralError(f"{name}: attribute names must be strings, got '{key}'", entity=name)

            first_key, kind = next(iter(attributes.items()))
            if first_key != TYPE_KEY:
                raise StructuralError(f"{name}: the first attribute must be 'type'", entity=name)

            if kind not in (DeclarationKind.ENUM.value, DeclarationKind.TABLE.value):
                self._logger.warning(
                    "declaration_skipped",
                    name=name,
                    position=position,
                    reason="unknown_type",
                    type=kind,
                )
                continue

            declarations.append(
                Declaration(
                    name=name,
                    kind=DeclarationKind(kind),
                    position=position,
                    attributes=dict(attributes),
                )
            )

        return declarations

    def decode(self, document: Mapping[str, Any]) -> Metadata:
        """Decode a document into Metadata, aborting on the first invalid declaration.

        Raises:
            SchemaError: The specific subclass names the violated rule.
        """
        declarations = self.scan(document)
        self._logger.info("decoding_started", declaration_count=len(declarations))

        registry = TypeRegistry(logger=self._logger)
        enumeration_builder = EnumerationBuilder(logger=self._logger)
        table_builder = TableBuilder(
            FieldBuilder(registry, logger=self._logger),
            strict_indexes=self._strict_indexes,
            logger=self._logger,
        )

        enumerations: list[Enumeration] = []
        for declaration in declarations:
            if declaration.kind != DeclarationKind.ENUM:
                continue
            enumeration = enumeration_builder.build(declaration)
            self._log_resolved(declaration)
            registry.register_enum(enumeration.name)
            enumerations.append(enumeration)

        tables: list[Table] = []
        for declaration in declarations:
            if declaration.kind != DeclarationKind.TABLE:
                continue
            tables.append(table_builder.build(declaration))
            self._log_resolved(declaration)

        try:
            metadata = Metadata(enumerations=enumerations, tables=tables)
        except ValidationError as exc:
            raise InvariantError(f"inconsistent schema model: {describe_validation_error(exc)}") from exc

        self._logger.info(
            "decoding_completed",
            enumeration_count=len(enumerations),
            table_count=len(tables),
        )
        return metadata

    def _log_resolved(self, declaration: Declaration) -> None:
        self._logger.debug(
            "declaration_resolved",
            name=declaration.name,
            kind=declaration.kind.value,
            position=declaration.position,
        )
