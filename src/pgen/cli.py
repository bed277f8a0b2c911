"""Schema-to-DDL compiler CLI.

Reads a YAML schema description of enumerations and tables and prints the
equivalent PostgreSQL DDL.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
import typer

from pgen.errors import PgenError
from pgen.services.factory import create_compiler


def configure_logging(verbose: bool = False) -> None:
    """Send structured logs to stderr; only warnings and errors unless verbose."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=lambda *args: structlog.PrintLogger(file=sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        context_class=dict,
        cache_logger_on_first_use=False,
    )


configure_logging()

logger = structlog.get_logger(__name__)

app = typer.Typer(
    name="pgen",
    help="""Compile a YAML schema description into PostgreSQL DDL.

Examples:

  # Print DDL for a schema
  pgen generate --model schema.yaml

  # Write DDL to a file
  pgen generate -m schema.yaml -o schema.sql""",
    rich_markup_mode="markdown",
)


@app.command()
def generate(
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="YAML schema file to compile",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="File to write DDL to (default: stdout)",
    ),
    permissive_indexes: bool = typer.Option(
        False,
        "--permissive-indexes",
        help="Accept index columns that are not fields of their table",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each compilation step to stderr",
    ),
) -> None:
    """Compile a schema file into DDL."""
    configure_logging(verbose)

    if model is None:
        logger.debug("no_model_given")
        return

    compiler = create_compiler(strict_indexes=not permissive_indexes)

    try:
        ddl = compiler.compile_file(Path(model))
    except PgenError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)

    if output is None:
        typer.echo(ddl, nl=False)
        return

    try:
        Path(output).write_text(ddl, encoding="utf-8")
    except OSError as exc:
        typer.echo(f"error: can not write output: {exc}", err=True)
        raise typer.Exit(1)

    logger.info("output_written", path=output, bytes=len(ddl.encode()))


@app.command()
def version() -> None:
    """Show version information."""
    from pgen import __version__

    typer.echo(f"pgen {__version__}")
