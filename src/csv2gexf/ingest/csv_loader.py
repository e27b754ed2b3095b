"""Delimited-text ingestion for node and edge tables."""
from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from csv2gexf.config import get_settings
from csv2gexf.errors import TableParseError, TableReadError
from csv2gexf.ingest.models import Record, Table, TableConfig
from csv2gexf.schema.coercion import coerce_records
from csv2gexf.schema.elements import NormalizedSchema, TableKind
from csv2gexf.schema.validator import validate_schema

logger = logging.getLogger(__name__)

CSV_SAMPLE_BYTES = 4096
CANDIDATE_DELIMITERS = [",", ";", "\t", "|"]

# csv-parse style option names accepted next to the pandas ones
OPTION_ALIASES: Dict[str, str] = {
    "delimiter": "sep",
    "skip_empty_lines": "skip_blank_lines",
    "quote": "quotechar",
    "escape": "escapechar",
}
IGNORED_OPTIONS = {"columns", "trim"}


def sniff_delimiter(sample: str, default: str = ",") -> str:
    """Guess the delimiter from the first lines of a table."""
    first_line = sample.splitlines()[0] if sample else ""
    if "|" in first_line and "," not in first_line:
        return "|"
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters="".join(CANDIDATE_DELIMITERS))
        return dialect.delimiter
    except csv.Error:
        return default


def build_read_options(parse_options: Dict[str, Any], sample: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"skip_blank_lines": True}
    for key, value in parse_options.items():
        if key in IGNORED_OPTIONS:
            continue
        options[OPTION_ALIASES.get(key, key)] = value
    if options.get("sep") is None:
        options["sep"] = sniff_delimiter(sample)
    # header handling and cell typing stay under our control; only the
    # fields missing from a short row become NaN
    options.update(header=None, dtype=str, na_filter=True, keep_default_na=False, na_values=[])
    return options


def read_table(path: Path, kind: TableKind, parse_options: Optional[Dict[str, Any]] = None, encoding: Optional[str] = None) -> Table:
    """Read a delimited-text file into a :class:`Table` of string cells."""
    parse_options = dict(parse_options or {})
    encoding = encoding or parse_options.pop("encoding", None) or get_settings().encoding
    trim = parse_options.get("trim", True)
    file = Path(path).resolve()

    try:
        data = file.read_bytes()
    except OSError as exc:
        raise TableReadError(f"Failed to read {file}. {exc}") from exc

    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise TableParseError(f"Failed to decode {file} as {encoding}. {exc}") from exc
    # a byte order mark would otherwise end up in the first header
    text = text.lstrip("\ufeff")

    options = build_read_options(parse_options, text[:CSV_SAMPLE_BYTES])
    try:
        df = pd.read_csv(io.StringIO(text), **options)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError, TypeError) as exc:
        raise TableParseError(f"Failed to parse the csv data in {file}. {exc}") from exc

    missing = df.isna().sum(axis=1)
    short_rows = [position for position, count in enumerate(missing.tolist()) if count]
    if short_rows:
        position = short_rows[0]
        raise TableParseError(
            f"Failed to parse the csv data in {file}. Row {position} has "
            f"{df.shape[1] - int(missing.iloc[position])} fields, expected {df.shape[1]}."
        )

    rows: List[List[str]] = df.values.tolist()
    if trim:
        rows = [[cell.strip() for cell in row] for row in rows]
    headers, body = rows[0], rows[1:]

    records: List[Record] = [dict(zip(headers, row)) for row in body]
    logger.info("Loaded %d %s records with %d columns from %s", len(records), kind.value, len(headers), file)
    return Table(kind=kind, headers=headers, records=records, raw_path=str(file))


def load_table(config: TableConfig, kind: TableKind, encoding: Optional[str] = None) -> Tuple[Table, NormalizedSchema]:
    """Read, validate and coerce one table.

    Returns the loaded table with typed cells and the normalized schema that
    describes it.
    """
    kind = TableKind(kind)
    table = read_table(config.file, kind, config.parse_options, encoding=encoding)
    schema = validate_schema(table.headers, config.columns, kind)
    coerce_records(table.records, schema)
    return table, schema
