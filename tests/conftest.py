from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from csv2gexf.schema.elements import TableKind
from csv2gexf.schema.validator import validate_schema

NODE_CSV = """
id,label,score,active,color
n1,Node One,3.14,true,"rgb(255,204,0)"
n2,Node Two,2.5,0,"rgb(0,0,255)"
n3,Node Three,1,TRUE,"rgb(10,20,30)"
"""

EDGE_CSV = """
source,target,relation,weight
n1,n2,knows,1.5
n2,n3,likes,2
n3,n1,knows,0.5
"""

NODE_SCHEMA = [
    "id",
    "label",
    {"target": "attributes", "id": "score", "title": "Score", "type": "float"},
    {"target": "attributes", "type": "boolean"},
    {"target": "viz", "id": "color"},
]

EDGE_SCHEMA = [
    "source",
    "target",
    {"target": "attributes", "type": "string"},
    "weight",
]


@pytest.fixture
def write_csv(tmp_path):
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def node_csv(write_csv) -> Path:
    return write_csv("nodes.csv", NODE_CSV)


@pytest.fixture
def edge_csv(write_csv) -> Path:
    return write_csv("edges.csv", EDGE_CSV)


@pytest.fixture
def config_dict(node_csv, edge_csv) -> dict:
    return {
        "graphParams": {
            "defaultEdgeType": "directed",
            "meta": {"lastmodifieddate": "2016-03-20", "creator": "tests"},
        },
        "nodes": {
            "file": str(node_csv),
            "schema": [dict(el) if isinstance(el, dict) else el for el in NODE_SCHEMA],
            "parseOptions": {"delimiter": ",", "trim": True, "skip_empty_lines": True},
        },
        "edges": {
            "file": str(edge_csv),
            "schema": [dict(el) if isinstance(el, dict) else el for el in EDGE_SCHEMA],
            "parseOptions": {"trim": True, "skip_empty_lines": True},
        },
    }


@pytest.fixture
def node_schema():
    return validate_schema(["id", "label", "score", "active", "color"], NODE_SCHEMA, TableKind.NODE)


@pytest.fixture
def edge_schema():
    return validate_schema(["source", "target", "relation", "weight"], EDGE_SCHEMA, TableKind.EDGE)
