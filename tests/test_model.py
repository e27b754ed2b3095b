from __future__ import annotations

from csv2gexf.schema.elements import TableKind
from csv2gexf.schema.model import AttributeModelEntry, derive_attribute_model
from csv2gexf.schema.validator import validate_schema


def test_attribute_model_keeps_column_order(node_schema):
    assert derive_attribute_model(node_schema) == [
        AttributeModelEntry(id="score", type="float", title="Score"),
        AttributeModelEntry(id="active", type="boolean", title="active"),
    ]


def test_markers_and_viz_are_excluded():
    schema = validate_schema(
        ["s", "t", "w", "c"],
        ["source", "target", "weight", {"target": "viz", "id": "color"}],
        TableKind.EDGE,
    )

    assert derive_attribute_model(schema) == []
