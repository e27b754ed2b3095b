"""Converts raw string cells to the types their schema element declares."""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, List, Optional

from csv2gexf.errors import CellValueError
from csv2gexf.ingest.models import Record
from csv2gexf.schema.elements import (
    EDGE_TYPES,
    SHAPES,
    AttributeDecl,
    Marker,
    NormalizedSchema,
    SchemaElement,
    VizDecl,
)

logger = logging.getLogger(__name__)

Parser = Callable[[Any], Any]


def parse_float(value: Any) -> float:
    """Parse a locale-free decimal number; NaN and infinities are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    number = float(str(value).strip())
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def parse_integer(value: Any) -> int:
    """Parse a base-10 integer; decimal literals are truncated toward zero."""
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text, 10)
    except ValueError:
        return int(parse_float(text))


def parse_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value)
    return text.lower() == "true" or text == "1"


def coerce_records(records: List[Record], schema: NormalizedSchema) -> List[Record]:
    """Coerce every cell of ``records`` in place, column by column.

    Raises:
        CellValueError: when a cell fails to parse or is not a member of the
            vocabulary its column requires.
    """
    ctxt = f"in the {schema.kind.value} table"
    for element in schema:
        parser = _parser_for(element, schema)
        if parser is None:
            continue
        logger.debug("Coercing column '%s' %s", element.column, ctxt)
        _coerce_column(records, element.column, parser, ctxt)
    return records


def _parser_for(element: SchemaElement, schema: NormalizedSchema) -> Optional[Parser]:
    if isinstance(element, Marker):
        if element.tag == "weight":
            return parse_float
        if element.tag == "type":
            return _member_of(EDGE_TYPES, "type")
        return None

    if isinstance(element, AttributeDecl):
        return {
            "integer": parse_integer,
            "float": parse_float,
            "boolean": parse_boolean,
        }.get(element.type)

    if isinstance(element, VizDecl):
        if element.id in ("size", "thickness"):
            return parse_float
        if element.id == "shape":
            return _member_of(SHAPES[schema.kind], "shape")
    # colors pass through; the document checks the rgb(...) form
    return None


def _member_of(allowed, what: str) -> Parser:
    def check(value: Any) -> Any:
        if value not in allowed:
            raise ValueError(f"Unexpected {what} '{value}', expected one of {sorted(allowed)}")
        return value

    return check


def _coerce_column(records: List[Record], header: str, parser: Parser, ctxt: str) -> None:
    for row, record in enumerate(records, start=1):
        value = record[header]
        try:
            record[header] = parser(value)
        except (TypeError, ValueError) as exc:
            raise CellValueError(
                f"Invalid value '{value}' in column '{header}' at row {row} {ctxt}: {exc}",
                column=header,
                value=value,
            ) from exc
