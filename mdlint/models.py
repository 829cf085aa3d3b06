"""Core data models for the markdown document tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

ROOT = "root"
HEADING = "heading"
PARAGRAPH = "paragraph"
LIST = "list"
LIST_ITEM = "listItem"
BLOCKQUOTE = "blockquote"
CODE = "code"
THEMATIC_BREAK = "thematicBreak"
TEXT = "text"
EMPHASIS = "emphasis"
STRONG = "strong"
INLINE_CODE = "inlineCode"
LINK = "link"
IMAGE = "image"


@dataclass(frozen=True, order=True)
class Point:
    """A 1-based place in the source document."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, order=True)
class Position:
    """Source range covered by a node or message."""

    start: Point
    end: Point

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass
class Node:
    """Tagged tree node.

    ``children`` is ``None`` for leaves and ``position`` is ``None`` for
    generated nodes that do not come from the source text.
    """

    type: str
    children: Optional[List["Node"]] = None
    position: Optional[Position] = None
    value: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)
