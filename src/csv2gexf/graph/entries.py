"""Node and edge entries handed to the graph document."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional

RGB_PATTERN = re.compile(
    r"^\s*rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)\s*$"
)
XML_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")
ILLEGAL_XML_CHARS = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


@dataclass
class NodeEntry:
    id: str
    label: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    viz: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EdgeEntry:
    id: str
    label: str
    source: str
    target: str
    type: Optional[str] = None
    weight: Optional[float] = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    viz: Dict[str, Any] = field(default_factory=dict)


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: Optional[float] = None


def parse_color(value: str) -> Color:
    """Parse ``rgb(r,g,b)`` or ``rgba(r,g,b,a)`` with 0-255 channels."""
    match = RGB_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Expected a color like 'rgb(255,204,0)', got '{value}'")
    r, g, b = (int(channel) for channel in match.group(1, 2, 3))
    if max(r, g, b) > 255:
        raise ValueError(f"Color channels must be within 0-255, got '{value}'")
    alpha = match.group(4)
    if alpha is None:
        return Color(r, g, b)
    a = float(alpha)
    if a > 1.0:
        raise ValueError(f"Color alpha must be within 0.0-1.0, got '{value}'")
    return Color(r, g, b, a)


def is_xml_name(name: str) -> bool:
    return bool(XML_NAME_PATTERN.fullmatch(name))


def check_xml_text(value: Any, what: str) -> None:
    """Raise ``ValueError`` when a string holds characters XML cannot carry."""
    if not isinstance(value, str):
        return
    match = ILLEGAL_XML_CHARS.search(value)
    if match:
        raise ValueError(f"{what} contains the character {match.group()!r} which is not allowed in XML")
