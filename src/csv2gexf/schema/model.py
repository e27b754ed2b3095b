"""Derives the attribute declarations embedded in the graph document."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from csv2gexf.schema.elements import AttributeDecl, NormalizedSchema


@dataclass(frozen=True)
class AttributeModelEntry:
    id: str
    type: str
    title: str


def derive_attribute_model(schema: NormalizedSchema) -> List[AttributeModelEntry]:
    """Project the ``attributes`` elements of ``schema`` in column order."""
    return [
        AttributeModelEntry(id=element.id, type=element.type, title=element.title)
        for element in schema
        if isinstance(element, AttributeDecl)
    ]
