"""Helpers for building document trees by hand, including generated nodes."""

from __future__ import annotations

from typing import Any, Optional

from mdlint.models import LIST, LIST_ITEM, PARAGRAPH, TEXT, Node, Point, Position


def span(start_line: int, start_column: int, end_line: int, end_column: int) -> Position:
    return Position(Point(start_line, start_column), Point(end_line, end_column))


def node(
    node_type: str,
    *children: Node,
    position: Optional[Position] = None,
    value: Optional[str] = None,
    **attributes: Any,
) -> Node:
    return Node(
        node_type,
        children=list(children) if children or value is None else None,
        position=position,
        value=value,
        attributes=dict(attributes),
    )


def text(value: str, position: Optional[Position] = None) -> Node:
    return Node(TEXT, value=value, position=position)


def single_line_item(line: int, content: str, *, end: Optional[Point] = None) -> Node:
    """A ``-   content`` item on ``line``, optionally ending elsewhere."""
    column = 5 + len(content)
    content_span = span(line, 5, line, column)
    paragraph = node(PARAGRAPH, text(content, content_span), position=content_span)
    item_end = end or Point(line, column)
    return node(LIST_ITEM, paragraph, position=Position(Point(line, 1), item_end))


def bullet_list(*items: Node, generated: bool = False) -> Node:
    if generated:
        return node(LIST, *items)
    return node(LIST, *items, position=Position(items[0].position.start, items[-1].position.end))  # type: ignore[union-attr]
