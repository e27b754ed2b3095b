"""Checks a raw column schema against the header row of a table."""
from __future__ import annotations

import logging
from collections import Counter
from typing import Any, List, Mapping, Sequence

from csv2gexf.errors import SchemaError
from csv2gexf.schema.elements import (
    ATTRIBUTE_TYPES,
    MARKERS,
    REQUIRED_MARKERS,
    VIZ_IDS,
    AttributeDecl,
    Marker,
    NormalizedSchema,
    SchemaElement,
    TableKind,
    VizDecl,
)

logger = logging.getLogger(__name__)


def validate_schema(headers: Sequence[str], schema: Sequence[Any], kind: TableKind) -> NormalizedSchema:
    """Validate ``schema`` for a table with the given ``headers``.

    Returns a new :class:`NormalizedSchema` in which every element is bound to
    its column header and attribute ids/titles are defaulted. The raw schema
    is left untouched, so the same config may be converted repeatedly.

    Raises:
        SchemaError: on a column count mismatch, a missing required marker or
            an invalid element. The message names the table kind and, where
            relevant, the offending index and value.
    """
    kind = TableKind(kind)
    ctxt = f"in the {kind.value} schema"

    if len(headers) != len(schema):
        raise SchemaError(
            f"There are {len(headers)} columns and {len(schema)} schema elements {ctxt}. "
            "These numbers should be equal."
        )

    duplicates = [header for header, count in Counter(headers).items() if count > 1]
    if duplicates:
        raise SchemaError(f"Duplicate column headers {duplicates} {ctxt}.")

    declared = {_marker_tag(el) for el in schema} - {None}
    for required in REQUIRED_MARKERS[kind]:
        if required not in declared:
            raise SchemaError(f"There is no '{required}' {ctxt}.")

    elements: List[SchemaElement] = [
        _normalize(index, header, raw, kind, ctxt) for index, (header, raw) in enumerate(zip(headers, schema))
    ]
    _check_unique(elements, ctxt)

    logger.debug("Normalized %s schema: %s", kind.value, elements)
    return NormalizedSchema(kind=kind, elements=tuple(elements))


def _marker_tag(raw: Any):
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Marker):
        return raw.tag
    return None


def _normalize(index: int, header: str, raw: Any, kind: TableKind, ctxt: str) -> SchemaElement:
    if isinstance(raw, (Marker, AttributeDecl, VizDecl)):
        raw = _as_raw(raw)

    if isinstance(raw, str):
        if raw not in MARKERS[kind]:
            raise SchemaError(f"Unexpected {kind.value} schema element '{raw}' at index {index} {ctxt}.")
        return Marker(tag=raw, column=header)

    if not isinstance(raw, Mapping):
        raise SchemaError(
            f"A schema element must be either a string or an object, got '{raw}' of type "
            f"{type(raw).__name__} at index {index} {ctxt}."
        )

    target = raw.get("target")
    if target == "attributes":
        attr_id = raw.get("id")
        if attr_id is None:
            attr_id = header
        title = raw.get("title")
        if title is None:
            title = attr_id
        if not isinstance(attr_id, str) or not isinstance(title, str):
            raise SchemaError(f"The id and title of the 'attributes' element at index {index} must be strings {ctxt}.")
        attr_type = raw.get("type")
        if attr_type not in ATTRIBUTE_TYPES:
            raise SchemaError(
                f"Unexpected type '{attr_type}' in the 'attributes' schema element with id '{attr_id}' "
                f"at index {index} {ctxt}."
            )
        return AttributeDecl(id=attr_id, title=title, type=attr_type, column=header)

    if target == "viz":
        viz_id = raw.get("id")
        if viz_id is None:
            raise SchemaError(f"The id is missing for the 'viz' element at index {index} {ctxt}.")
        if viz_id not in VIZ_IDS[kind]:
            raise SchemaError(f"Unexpected id '{viz_id}' for the 'viz' element at index {index} {ctxt}.")
        return VizDecl(id=viz_id, column=header)

    raise SchemaError(f"Unexpected target '{target}' at index {index} {ctxt}.")


def _as_raw(element: SchemaElement) -> Any:
    if isinstance(element, Marker):
        return element.tag
    if isinstance(element, AttributeDecl):
        return {"target": "attributes", "id": element.id, "title": element.title, "type": element.type}
    return {"target": "viz", "id": element.id}


def _check_unique(elements: Sequence[SchemaElement], ctxt: str) -> None:
    seen = set()
    for element in elements:
        if isinstance(element, Marker):
            key = ("marker", element.tag)
            what = f"marker '{element.tag}'"
        elif isinstance(element, AttributeDecl):
            key = ("attributes", element.id)
            what = f"attribute id '{element.id}'"
        else:
            key = ("viz", element.id)
            what = f"viz id '{element.id}'"
        if key in seen:
            raise SchemaError(f"The {what} is declared more than once {ctxt}.")
        seen.add(key)
