"""pgen - compile an ordered YAML schema description into PostgreSQL DDL."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("pgen")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = ["__version__"]
