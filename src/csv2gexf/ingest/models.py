"""Data models for the conversion configuration and loaded tables."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from csv2gexf.errors import ConfigError
from csv2gexf.graph.entries import check_xml_text, is_xml_name
from csv2gexf.schema.elements import TableKind

Record = Dict[str, Any]


class GraphParams(BaseModel):
    """Global parameters of the produced graph document."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    default_edge_type: Literal["directed", "undirected", "mutual"] = Field(
        default="directed", alias="defaultEdgeType"
    )
    mode: Literal["static"] = "static"
    meta: Dict[str, str] = Field(default_factory=dict)

    @field_validator("meta")
    @classmethod
    def _meta_is_xml_safe(cls, meta: Dict[str, str]) -> Dict[str, str]:
        for key, value in meta.items():
            if not is_xml_name(key):
                raise ValueError(f"the meta key '{key}' is not a valid XML element name")
            check_xml_text(value, f"the meta value '{key}'")
        return meta

    @model_validator(mode="before")
    @classmethod
    def _reject_model(cls, data: Any) -> Any:
        if isinstance(data, dict) and "model" in data:
            raise ValueError("the attribute model is derived from the schemas and cannot be supplied")
        return data


class TableConfig(BaseModel):
    """Where a table lives, how its columns are typed and how to parse it."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    file: Path
    columns: List[Any] = Field(..., alias="schema", description="One raw schema element per column")
    parse_options: Dict[str, Any] = Field(default_factory=dict, alias="parseOptions")


class ConversionConfig(BaseModel):
    """Top-level configuration of one conversion run."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    graph_params: GraphParams = Field(default_factory=GraphParams, alias="graphParams")
    nodes: TableConfig
    edges: TableConfig
    save_as: Optional[Path] = Field(default=None, alias="saveAs")

    @field_validator("save_as", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        return value or None

    def resolve_paths(self, base_dir: Path) -> "ConversionConfig":
        """Return a copy with relative file paths anchored at ``base_dir``."""

        def anchor(path: Optional[Path]) -> Optional[Path]:
            if path is None or path.is_absolute():
                return path
            return base_dir / path

        return self.model_copy(
            update={
                "nodes": self.nodes.model_copy(update={"file": anchor(self.nodes.file)}),
                "edges": self.edges.model_copy(update={"file": anchor(self.edges.file)}),
                "save_as": anchor(self.save_as),
            }
        )


def load_config(path: Path) -> ConversionConfig:
    """Read a JSON conversion config; table paths are relative to the file."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Failed to read config {path}. {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to decode config {path}. {exc}") from exc
    config = ConversionConfig.model_validate(payload)
    return config.resolve_paths(path.resolve().parent)


class Table(BaseModel):
    """Container for one loaded table along with provenance metadata."""

    kind: TableKind
    headers: List[str]
    records: List[Record] = Field(default_factory=list)
    raw_path: str

    def iter_records(self) -> Iterable[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
