"""Factory functions for creating and wiring the schema compiler."""

import structlog

from pgen.services.compiler import SchemaCompiler
from pgen.services.decoder import DocumentDecoder
from pgen.services.renderer import Renderer


def create_compiler(
    strict_indexes: bool = True,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> SchemaCompiler:
    """Create a SchemaCompiler with its decoder and renderer.

    Args:
        strict_indexes: Require every index column to name a field of its table.
            Disable to accept any column name.
        logger: Structured logger shared by every component.

    Returns:
        Configured SchemaCompiler ready for use.
    """
    logger = logger or structlog.get_logger(__name__)

    decoder = DocumentDecoder(strict_indexes=strict_indexes, logger=logger)
    renderer = Renderer(logger=logger)

    return SchemaCompiler(decoder=decoder, renderer=renderer, logger=logger)
