from pgen.models.enums import DataType, DeclarationKind, DefaultKind
from pgen.models.schema import Enumeration, Field, Index, Metadata, Table
from pgen.models.types import CURRENT_TIMESTAMP, TYPE_CAPABILITIES, ColumnType, CurrentTimestamp, TypeCapabilities

__all__ = [
    "CURRENT_TIMESTAMP",
    "ColumnType",
    "CurrentTimestamp",
    "DataType",
    "DeclarationKind",
    "DefaultKind",
    "Enumeration",
    "Field",
    "Index",
    "Metadata",
    "Table",
    "TYPE_CAPABILITIES",
    "TypeCapabilities",
]
