"""In-memory GEXF graph document backed by networkx."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import networkx as nx

from csv2gexf.errors import DocumentError
from csv2gexf.graph.entries import EdgeEntry, NodeEntry, check_xml_text, is_xml_name, parse_color
from csv2gexf.schema.elements import EDGE_TYPES, SHAPES, VIZ_IDS, TableKind
from csv2gexf.schema.model import AttributeModelEntry

PYTHON_TYPES = {
    "string": (str,),
    "integer": (int,),
    "float": (float, int),
    "boolean": (bool,),
}


class GexfDocument:
    """Graph with declared attribute models, visualization data and metadata.

    Nodes and edges live in a ``networkx.MultiDiGraph`` (edge ids are the
    multigraph keys); undirected and mutual edges are recorded through their
    ``type``. Every entry is checked against the declared models before it
    is added, and the first violation raises :class:`DocumentError`.
    """

    def __init__(
        self,
        default_edge_type: str = "directed",
        meta: Optional[Mapping[str, str]] = None,
        node_model: Sequence[AttributeModelEntry] = (),
        edge_model: Sequence[AttributeModelEntry] = (),
        mode: str = "static",
    ) -> None:
        if default_edge_type not in EDGE_TYPES:
            raise DocumentError(f"Unexpected default edge type '{default_edge_type}'")
        if mode != "static":
            raise DocumentError(f"Only static graphs are supported, got mode '{mode}'")
        self.default_edge_type = default_edge_type
        self.mode = mode
        self.meta: Dict[str, str] = dict(meta or {})
        for key, value in self.meta.items():
            if not is_xml_name(key):
                raise DocumentError(f"The meta key '{key}' is not a valid XML element name")
            _check_text(value, f"The meta value '{key}'")
        self.node_model: List[AttributeModelEntry] = list(node_model)
        self.edge_model: List[AttributeModelEntry] = list(edge_model)
        self.graph = nx.MultiDiGraph(defaultedgetype=default_edge_type, mode=mode)
        for entry in self.node_model + self.edge_model:
            _check_text(entry.id, "An attribute id")
            _check_text(entry.title, f"The title of attribute '{entry.id}'")
        self._node_types = {entry.id: entry.type for entry in self.node_model}
        self._edge_types = {entry.id: entry.type for entry in self.edge_model}
        self._edge_index: Dict[str, Tuple[str, str]] = {}

    def add_node(self, entry: NodeEntry) -> None:
        if not entry.id:
            raise DocumentError("A node id must be a non-empty string")
        if self.graph.has_node(entry.id):
            raise DocumentError(f"Duplicate node id '{entry.id}'")
        _check_text(entry.id, "A node id")
        _check_text(entry.label, f"The label of node '{entry.id}'")
        self._check_attributes("node", entry.id, entry.attributes, self._node_types)
        self._check_viz(TableKind.NODE, entry.id, entry.viz)
        self.graph.add_node(
            entry.id,
            label=entry.label,
            attributes=dict(entry.attributes),
            viz=dict(entry.viz),
        )

    def add_edge(self, entry: EdgeEntry) -> None:
        if not entry.id:
            raise DocumentError("An edge id must be a non-empty string")
        if entry.id in self._edge_index:
            raise DocumentError(f"Duplicate edge id '{entry.id}'")
        _check_text(entry.id, "An edge id")
        _check_text(entry.label, f"The label of edge '{entry.id}'")
        for end in (entry.source, entry.target):
            if not self.graph.has_node(end):
                raise DocumentError(f"Edge '{entry.id}' references the unknown node '{end}'")
        if entry.type is not None and entry.type not in EDGE_TYPES:
            raise DocumentError(f"Unexpected type '{entry.type}' for edge '{entry.id}'")
        if entry.weight is not None and not _is_number(entry.weight):
            raise DocumentError(f"The weight of edge '{entry.id}' must be a number, got {entry.weight!r}")
        self._check_attributes("edge", entry.id, entry.attributes, self._edge_types)
        self._check_viz(TableKind.EDGE, entry.id, entry.viz)
        self.graph.add_edge(
            entry.source,
            entry.target,
            key=entry.id,
            label=entry.label,
            type=entry.type,
            weight=entry.weight,
            attributes=dict(entry.attributes),
            viz=dict(entry.viz),
        )
        self._edge_index[entry.id] = (entry.source, entry.target)

    def node(self, node_id: str) -> NodeEntry:
        data = self.graph.nodes[node_id]
        return NodeEntry(id=node_id, label=data["label"], attributes=dict(data["attributes"]), viz=dict(data["viz"]))

    def edge(self, edge_id: str) -> EdgeEntry:
        source, target = self._edge_index[edge_id]
        data = self.graph.edges[source, target, edge_id]
        return EdgeEntry(
            id=edge_id,
            label=data["label"],
            source=source,
            target=target,
            type=data["type"],
            weight=data["weight"],
            attributes=dict(data["attributes"]),
            viz=dict(data["viz"]),
        )

    def nodes(self) -> List[NodeEntry]:
        return [self.node(node_id) for node_id in self.graph.nodes]

    def edges(self) -> List[EdgeEntry]:
        """Edges in insertion order."""
        return [self.edge(edge_id) for edge_id in self._edge_index]

    def number_of_nodes(self) -> int:
        return self.graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    def _check_attributes(self, what: str, entry_id: str, attributes: Mapping[str, Any], model: Mapping[str, str]) -> None:
        for key, value in attributes.items():
            if key not in model:
                raise DocumentError(f"The attribute '{key}' of {what} '{entry_id}' is not declared in the {what} model")
            expected = model[key]
            if not isinstance(value, PYTHON_TYPES[expected]) or (expected != "boolean" and isinstance(value, bool)):
                raise DocumentError(
                    f"The attribute '{key}' of {what} '{entry_id}' must be of type {expected}, got {value!r}"
                )
            _check_text(value, f"The attribute '{key}' of {what} '{entry_id}'")

    def _check_viz(self, kind: TableKind, entry_id: str, viz: Mapping[str, Any]) -> None:
        for key, value in viz.items():
            if key not in VIZ_IDS[kind]:
                raise DocumentError(f"Unexpected viz '{key}' for {kind.value} '{entry_id}'")
            if key == "color":
                try:
                    parse_color(value)
                except ValueError as exc:
                    raise DocumentError(f"Invalid color for {kind.value} '{entry_id}'. {exc}") from exc
            elif key == "shape":
                if value not in SHAPES[kind]:
                    raise DocumentError(f"Unexpected shape '{value}' for {kind.value} '{entry_id}'")
            elif not _is_number(value):
                raise DocumentError(f"The viz '{key}' of {kind.value} '{entry_id}' must be a number, got {value!r}")


def _check_text(value: Any, what: str) -> None:
    try:
        check_xml_text(value, what)
    except ValueError as exc:
        raise DocumentError(str(exc)) from exc


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def iter_model(document: GexfDocument) -> Iterable[Tuple[str, List[AttributeModelEntry]]]:
    yield "node", document.node_model
    yield "edge", document.edge_model
