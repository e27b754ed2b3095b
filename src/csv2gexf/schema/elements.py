"""Normalized column schema elements.

A raw column schema mixes bare marker strings with ``{"target": ...}``
mappings. The validator resolves every raw element exactly once into one of
the tagged variants below, each bound to the header of its column.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Tuple, Union


class TableKind(str, Enum):
    NODE = "node"
    EDGE = "edge"


MARKERS: Dict[TableKind, FrozenSet[str]] = {
    TableKind.NODE: frozenset({"id", "label"}),
    TableKind.EDGE: frozenset({"id", "type", "label", "source", "target", "weight"}),
}

REQUIRED_MARKERS: Dict[TableKind, Tuple[str, ...]] = {
    TableKind.NODE: ("id",),
    TableKind.EDGE: ("source", "target"),
}

VIZ_IDS: Dict[TableKind, FrozenSet[str]] = {
    TableKind.NODE: frozenset({"color", "size", "shape"}),
    TableKind.EDGE: frozenset({"color", "thickness", "shape"}),
}

SHAPES: Dict[TableKind, FrozenSet[str]] = {
    TableKind.NODE: frozenset({"disc", "square", "triangle", "diamond"}),
    TableKind.EDGE: frozenset({"solid", "dotted", "dashed", "double"}),
}

ATTRIBUTE_TYPES: FrozenSet[str] = frozenset({"string", "integer", "float", "boolean"})

EDGE_TYPES: FrozenSet[str] = frozenset({"directed", "undirected", "mutual"})


@dataclass(frozen=True)
class Marker:
    """A primary structural role such as ``id`` or ``source``."""

    tag: str
    column: str


@dataclass(frozen=True)
class AttributeDecl:
    """A typed domain attribute attached to every node or edge."""

    id: str
    title: str
    type: str
    column: str


@dataclass(frozen=True)
class VizDecl:
    """A rendering hint; the value kind is implied by ``id``."""

    id: str
    column: str


SchemaElement = Union[Marker, AttributeDecl, VizDecl]


@dataclass(frozen=True)
class NormalizedSchema:
    kind: TableKind
    elements: Tuple[SchemaElement, ...]

    def __iter__(self):
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def markers(self) -> FrozenSet[str]:
        return frozenset(el.tag for el in self.elements if isinstance(el, Marker))

    def has_marker(self, tag: str) -> bool:
        return tag in self.markers
