"""Schema compiler that orchestrates loading, decoding and rendering.

Coordinates the document loader, the two-phase decoder and the DDL renderer
to turn a schema document into generated SQL text.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from pgen.models.schema import Metadata
from pgen.services.decoder import DocumentDecoder
from pgen.services.loader import load_document
from pgen.services.renderer import Renderer


class SchemaCompiler:
    """Compiles schema documents into DDL.

    Dependencies are injected via the constructor for testability. Compilation
    either returns the complete output or raises; partial output is never
    produced.
    """

    def __init__(
        self,
        decoder: DocumentDecoder,
        renderer: Renderer,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._decoder = decoder
        self._renderer = renderer
        self._logger = logger or structlog.get_logger(__name__)

    def build(self, document: Mapping[str, Any]) -> Metadata:
        """Decode a parsed document into the in-memory schema model.

        Raises:
            SchemaError: If any declaration is invalid.
        """
        return self._decoder.decode(document)

    def compile(self, document: Mapping[str, Any]) -> str:
        """Decode a parsed document and render it as DDL text."""
        metadata = self.build(document)
        output = self._renderer.render(metadata)

        self._logger.info(
            "compilation_completed",
            enumeration_count=len(metadata.enumerations),
            table_count=len(metadata.tables),
        )
        return output

    def compile_file(self, path: Path | str) -> str:
        """Load the YAML document at ``path`` and compile it.

        Raises:
            DocumentLoadError: If the file cannot be located or decoded.
            SchemaError: If any declaration is invalid.
        """
        self._logger.info("compilation_started", path=str(path))
        document = load_document(path, logger=self._logger)
        return self.compile(document)
