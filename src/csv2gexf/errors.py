"""Exception hierarchy for the CSV to GEXF conversion pipeline."""
from __future__ import annotations

from typing import Optional


class GraphConversionError(Exception):
    """Base class for every failure raised by the conversion pipeline."""


class SchemaError(GraphConversionError):
    """Raised when a column schema does not fit the table it describes."""


class CellValueError(GraphConversionError, ValueError):
    """Raised when a cell value cannot be coerced to its declared type."""

    def __init__(self, message: str, column: Optional[str] = None, value: object = None) -> None:
        super().__init__(message)
        self.column = column
        self.value = value


class TableReadError(GraphConversionError, OSError):
    """Raised when a delimited-text table cannot be read."""


class TableParseError(TableReadError):
    """Raised when the bytes of a table cannot be parsed as delimited text."""


class DocumentWriteError(GraphConversionError, OSError):
    """Raised when the serialized document cannot be written to disk."""


class DocumentError(GraphConversionError, ValueError):
    """Raised by the graph document when an entry violates its constraints."""


class AssemblyError(GraphConversionError):
    """Raised when populating the graph document fails."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigError(GraphConversionError):
    """Raised when a conversion config file cannot be read or decoded."""
