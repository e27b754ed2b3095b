"""GEXF 1.2 serialization of a :class:`GexfDocument`."""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Mapping, Optional

from csv2gexf.config import get_settings
from csv2gexf.errors import DocumentWriteError
from csv2gexf.graph.document import GexfDocument, iter_model
from csv2gexf.graph.entries import parse_color

logger = logging.getLogger(__name__)

GEXF_NAMESPACE = "http://www.gexf.net/1.2draft"
VIZ_NAMESPACE = "http://www.gexf.net/1.2draft/viz"
GEXF_VERSION = "1.2"

ET.register_namespace("", GEXF_NAMESPACE)
ET.register_namespace("viz", VIZ_NAMESPACE)


def _tag(name: str) -> str:
    return f"{{{GEXF_NAMESPACE}}}{name}"


def _viz(name: str) -> str:
    return f"{{{VIZ_NAMESPACE}}}{name}"


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_tree(document: GexfDocument) -> ET.Element:
    root = ET.Element(_tag("gexf"), {"version": GEXF_VERSION})
    _add_meta(root, document.meta)

    graph = ET.SubElement(root, _tag("graph"), {"defaultedgetype": document.default_edge_type, "mode": document.mode})
    for cls, model in iter_model(document):
        if not model:
            continue
        attributes = ET.SubElement(graph, _tag("attributes"), {"class": cls})
        for entry in model:
            ET.SubElement(attributes, _tag("attribute"), {"id": entry.id, "title": entry.title, "type": entry.type})

    nodes = ET.SubElement(graph, _tag("nodes"))
    for node in document.nodes():
        element = ET.SubElement(nodes, _tag("node"), {"id": node.id, "label": node.label})
        _add_attvalues(element, node.attributes)
        _add_viz(element, node.viz)

    edges = ET.SubElement(graph, _tag("edges"))
    for edge in document.edges():
        attrs = {"id": edge.id, "source": edge.source, "target": edge.target, "label": edge.label}
        if edge.type is not None:
            attrs["type"] = edge.type
        if edge.weight is not None:
            attrs["weight"] = format_value(edge.weight)
        element = ET.SubElement(edges, _tag("edge"), attrs)
        _add_attvalues(element, edge.attributes)
        _add_viz(element, edge.viz)
    return root


def _add_meta(root: ET.Element, meta: Mapping[str, str]) -> None:
    if not meta:
        return
    attrs = {}
    if "lastmodifieddate" in meta:
        attrs["lastmodifieddate"] = meta["lastmodifieddate"]
    element = ET.SubElement(root, _tag("meta"), attrs)
    for key, value in meta.items():
        if key == "lastmodifieddate":
            continue
        ET.SubElement(element, _tag(key)).text = value


def _add_attvalues(element: ET.Element, attributes: Mapping[str, Any]) -> None:
    if not attributes:
        return
    attvalues = ET.SubElement(element, _tag("attvalues"))
    for key, value in attributes.items():
        ET.SubElement(attvalues, _tag("attvalue"), {"for": key, "value": format_value(value)})


def _add_viz(element: ET.Element, viz: Mapping[str, Any]) -> None:
    for key, value in viz.items():
        if key == "color":
            color = parse_color(value)
            attrs = {"r": str(color.r), "g": str(color.g), "b": str(color.b)}
            if color.a is not None:
                attrs["a"] = format_value(color.a)
            ET.SubElement(element, _viz("color"), attrs)
        else:
            ET.SubElement(element, _viz(key), {"value": format_value(value)})


def to_string(document: GexfDocument, indent: Optional[str] = None, encoding: Optional[str] = None) -> str:
    """Serialize ``document`` as a pretty-printed GEXF string."""
    settings = get_settings()
    root = build_tree(document)
    ET.indent(root, space=settings.xml_indent if indent is None else indent)
    declaration = f'<?xml version="1.0" encoding="{(encoding or settings.encoding).upper()}"?>'
    return declaration + "\n" + ET.tostring(root, encoding="unicode") + "\n"


def save(document: GexfDocument, path: Path, encoding: Optional[str] = None) -> Path:
    """Write ``document`` to ``path`` and return the path."""
    path = Path(path)
    encoding = encoding or get_settings().encoding
    payload = to_string(document, encoding=encoding)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding=encoding)
    except OSError as exc:
        raise DocumentWriteError(f"Failed to save the GEXF file {path}. {exc}") from exc
    logger.info("GEXF document written to %s", path)
    return path
