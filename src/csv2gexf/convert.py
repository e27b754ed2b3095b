"""Runs a full CSV to GEXF conversion."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

from csv2gexf.config import get_settings
from csv2gexf.graph.builder import assemble_graph
from csv2gexf.graph.document import GexfDocument
from csv2gexf.graph.writer import save
from csv2gexf.ingest.csv_loader import load_table
from csv2gexf.ingest.models import ConversionConfig, Table
from csv2gexf.schema.elements import NormalizedSchema, TableKind

logger = logging.getLogger(__name__)

LoadedTable = Tuple[Table, NormalizedSchema]


def convert(
    config: Union[ConversionConfig, Mapping[str, Any]],
    *,
    parallel: Optional[bool] = None,
) -> Union[GexfDocument, Path]:
    """Convert the node and edge tables described by ``config``.

    Tables are loaded, validated and coerced, then assembled into a
    :class:`GexfDocument`. When ``saveAs`` is configured the document is
    written there and the path is returned, otherwise the document itself.
    Any failure is logged once and re-raised unchanged.
    """
    try:
        if not isinstance(config, ConversionConfig):
            config = ConversionConfig.model_validate(config)
        if parallel is None:
            parallel = get_settings().parallel_loads

        (node_table, node_schema), (edge_table, edge_schema) = _load_tables(config, parallel)
        document = assemble_graph(
            node_table.iter_records(),
            edge_table.iter_records(),
            node_schema,
            edge_schema,
            config.graph_params,
        )
        if config.save_as is not None:
            return save(document, config.save_as)
        return document
    except Exception:
        logger.exception("Conversion failed")
        raise


def _load_tables(config: ConversionConfig, parallel: bool) -> Tuple[LoadedTable, LoadedTable]:
    if not parallel:
        return load_table(config.nodes, TableKind.NODE), load_table(config.edges, TableKind.EDGE)

    with ThreadPoolExecutor(max_workers=2) as executor:
        nodes = executor.submit(load_table, config.nodes, TableKind.NODE)
        edges = executor.submit(load_table, config.edges, TableKind.EDGE)
        node_error = nodes.exception()
        edge_error = edges.exception()
    if node_error is not None:
        raise node_error
    if edge_error is not None:
        raise edge_error
    return nodes.result(), edges.result()
