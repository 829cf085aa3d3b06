"""Shared helpers for node positions, traversal and plain text."""

from __future__ import annotations

from typing import Iterator

from .models import IMAGE, Node, Point


def is_generated(node: Node) -> bool:
    """Return True when the node is not backed by a source position."""
    return node.position is None


def start(node: Node) -> Point:
    if node.position is None:
        raise ValueError(f"Generated {node.type} node has no start position")
    return node.position.start


def end(node: Node) -> Point:
    if node.position is None:
        raise ValueError(f"Generated {node.type} node has no end position")
    return node.position.end


def visit(tree: Node, node_type: str) -> Iterator[Node]:
    """Yield every node of ``node_type`` in pre-order, the root included."""
    stack = [tree]
    while stack:
        node = stack.pop()
        if node.type == node_type:
            yield node
        if node.children:
            stack.extend(reversed(node.children))


def to_string(node: Node) -> str:
    """Flatten a node to its readable text, using alt text for images."""
    # Titles are not text content; a titled link still flattens to its children.
    if node.value:
        return node.value
    if node.type == IMAGE and node.attributes.get("alt"):
        return str(node.attributes["alt"])
    if node.children:
        return "".join(to_string(child) for child in node.children)
    return ""


__all__ = ["end", "is_generated", "start", "to_string", "visit"]
