"""Graph document construction from validated node and edge records."""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from csv2gexf.errors import AssemblyError
from csv2gexf.graph.document import GexfDocument
from csv2gexf.graph.entries import EdgeEntry, NodeEntry
from csv2gexf.ingest.models import GraphParams, Record
from csv2gexf.schema.elements import AttributeDecl, Marker, NormalizedSchema, VizDecl
from csv2gexf.schema.model import derive_attribute_model

logger = logging.getLogger(__name__)


class GraphAssembler:
    """Populates a :class:`GexfDocument` from typed node and edge records."""

    def __init__(self, graph_params: Optional[GraphParams] = None) -> None:
        self.graph_params = graph_params or GraphParams()

    def assemble(
        self,
        node_records: Iterable[Record],
        edge_records: Iterable[Record],
        node_schema: NormalizedSchema,
        edge_schema: NormalizedSchema,
    ) -> GexfDocument:
        try:
            document = GexfDocument(
                default_edge_type=self.graph_params.default_edge_type,
                meta=self.graph_params.meta,
                node_model=derive_attribute_model(node_schema),
                edge_model=derive_attribute_model(edge_schema),
                mode=self.graph_params.mode,
            )
            for node_record in node_records:
                document.add_node(self.build_node(node_record, node_schema))
            for position, edge_record in enumerate(edge_records, start=1):
                document.add_edge(self.build_edge(edge_record, edge_schema, position))
        except Exception as exc:
            raise AssemblyError(f"Failed to assemble the graph document. {exc}", cause=exc) from exc

        logger.info(
            "Graph assembled with %d nodes and %d edges", document.number_of_nodes(), document.number_of_edges()
        )
        return document

    def build_node(self, record: Record, schema: NormalizedSchema) -> NodeEntry:
        node_id = None
        label = None
        attributes = {}
        viz = {}
        for element in schema:
            value = record[element.column]
            if isinstance(element, Marker):
                if element.tag == "id":
                    node_id = value
                elif element.tag == "label":
                    label = value
            elif isinstance(element, AttributeDecl):
                attributes[element.id] = value
            elif isinstance(element, VizDecl):
                viz[element.id] = value

        if label is None:
            label = node_id
        return NodeEntry(id=node_id, label=label, attributes=attributes, viz=viz)

    def build_edge(self, record: Record, schema: NormalizedSchema, position: int) -> EdgeEntry:
        """Build the edge at 1-based ``position`` in the edge table.

        Without an ``id`` column the edge is named ``e<position>``; without a
        ``label`` column the label is the id.
        """
        fields = {}
        attributes = {}
        viz = {}
        for element in schema:
            value = record[element.column]
            if isinstance(element, Marker):
                fields[element.tag] = value
            elif isinstance(element, AttributeDecl):
                attributes[element.id] = value
            elif isinstance(element, VizDecl):
                viz[element.id] = value

        edge_id = fields.get("id")
        if edge_id is None:
            edge_id = f"e{position}"
        label = fields.get("label")
        if label is None:
            label = edge_id
        return EdgeEntry(
            id=edge_id,
            label=label,
            source=fields["source"],
            target=fields["target"],
            type=fields.get("type"),
            weight=fields.get("weight"),
            attributes=attributes,
            viz=viz,
        )


def assemble_graph(
    node_records: Iterable[Record],
    edge_records: Iterable[Record],
    node_schema: NormalizedSchema,
    edge_schema: NormalizedSchema,
    graph_params: Optional[GraphParams] = None,
) -> GexfDocument:
    """Assemble a graph document; see :meth:`GraphAssembler.assemble`."""
    return GraphAssembler(graph_params).assemble(node_records, edge_records, node_schema, edge_schema)
