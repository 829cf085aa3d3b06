"""Markdown front end producing a positioned document tree.

Handles the block and inline constructs the lint rules care about: ATX and
setext headings, paragraphs, bullet and ordered lists, blockquotes, fenced
and indented code, thematic breaks, code spans, links, images, emphasis and
strong emphasis. It is not a full CommonMark implementation.

List items that are followed by blank lines and then a sibling item own
those blank lines, so their end point sits at column 1 of the last blank
line. Every other node ends right after its last character.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .models import (
    BLOCKQUOTE,
    CODE,
    EMPHASIS,
    HEADING,
    IMAGE,
    INLINE_CODE,
    LINK,
    LIST,
    LIST_ITEM,
    PARAGRAPH,
    ROOT,
    STRONG,
    TEXT,
    THEMATIC_BREAK,
    Node,
    Point,
    Position,
)

_ATX_HEADING = re.compile(r"^(#{1,6})(?:[ \t]+|$)(.*)$")
_ATX_CLOSING = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
_SETEXT_UNDERLINE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
_THEMATIC_BREAK = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_FENCE_OPEN = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
_FENCE_CLOSE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")
_BLOCKQUOTE = re.compile(r"^( {0,3})> ?")
_LIST_MARKER = re.compile(r"^( {0,3})([*+-]|\d{1,9}[.)])(?=[ \t]|$)([ \t]*)(.*)$")

_INLINE = re.compile(
    r"(?P<escape>\\(?P<escaped>[!-/:-@\[-`{-~]))"
    r"|(?P<code>(?P<ticks>`+)(?P<code_body>.+?)(?<!`)(?P=ticks)(?!`))"
    r"|(?P<image>!\[(?P<image_alt>[^\]]*)\]\((?P<image_url>[^\s)]*)"
    r"(?:\s+\"(?P<image_title>[^\"]*)\")?\s*\))"
    r"|(?P<link>\[(?P<link_text>[^\]]+)\]\((?P<link_url>[^\s)]*)"
    r"(?:\s+\"(?P<link_title>[^\"]*)\")?\s*\))"
    r"|(?P<autolink><(?P<autolink_url>[A-Za-z][A-Za-z0-9+.-]{1,31}:[^\s<>]*)>)"
    r"|(?P<strong>(?P<strong_mark>\*\*|__)(?P<strong_body>\S(?:.*?\S)?)(?P=strong_mark))"
    r"|(?P<emphasis>(?<!\w)(?P<em_mark>[*_])(?P<em_body>\S(?:.*?\S)?)(?P=em_mark)(?!\w))",
    re.DOTALL,
)
_INLINE_KINDS = ("escape", "code", "image", "link", "autolink", "strong", "emphasis")


@dataclass(frozen=True)
class _Line:
    """A source line, possibly with container prefixes stripped."""

    number: int
    offset: int
    text: str

    @property
    def blank(self) -> bool:
        return not self.text.strip()

    @property
    def indent(self) -> int:
        return len(self.text) - len(self.text.lstrip(" "))

    @property
    def end(self) -> Point:
        return Point(self.number, self.offset + len(self.text.rstrip()) + 1)

    def shift(self, count: int) -> "_Line":
        count = min(count, len(self.text))
        return _Line(self.number, self.offset + count, self.text[count:])


def parse(text: str) -> Node:
    """Parse markdown ``text`` into a ``root`` node with source positions."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    raw_lines = normalized.split("\n")
    lines = [_Line(number, 0, raw) for number, raw in enumerate(raw_lines, start=1)]
    children = _parse_blocks(lines)
    position = Position(Point(1, 1), Point(len(raw_lines), len(raw_lines[-1]) + 1))
    return Node(ROOT, children=children, position=position)


def _parse_blocks(lines: Sequence[_Line]) -> List[Node]:
    nodes: List[Node] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        if line.blank:
            index += 1
            continue
        stripped = line.text[line.indent:]
        if line.indent >= 4:
            node, index = _parse_indented_code(lines, index)
        elif _is_fence(line):
            node, index = _parse_fenced_code(lines, index)
        elif _ATX_HEADING.match(stripped):
            node, index = _parse_atx_heading(line), index + 1
        elif _THEMATIC_BREAK.match(line.text):
            position = Position(Point(line.number, line.offset + line.indent + 1), line.end)
            node, index = Node(THEMATIC_BREAK, position=position), index + 1
        elif _BLOCKQUOTE.match(line.text):
            node, index = _parse_blockquote(lines, index)
        elif _LIST_MARKER.match(line.text):
            node, index = _parse_list(lines, index)
        else:
            node, index = _parse_paragraph(lines, index)
        nodes.append(node)
    return nodes


def _is_fence(line: _Line) -> bool:
    match = _FENCE_OPEN.match(line.text)
    if not match:
        return False
    return not (match.group(2)[0] == "`" and "`" in match.group(3))


def _starts_block(line: _Line) -> bool:
    """Return True when ``line`` interrupts a running paragraph."""
    if line.blank:
        return True
    if line.indent >= 4:
        return False
    if _ATX_HEADING.match(line.text[line.indent:]) or _is_fence(line):
        return True
    if _THEMATIC_BREAK.match(line.text) or _BLOCKQUOTE.match(line.text):
        return True
    marker = _LIST_MARKER.match(line.text)
    if marker and marker.group(4).strip():
        bullet = marker.group(2)
        return bullet in "*+-" or bullet[:-1] == "1"
    return False


def _parse_atx_heading(line: _Line) -> Node:
    indent = line.indent
    match = _ATX_HEADING.match(line.text[indent:])
    assert match is not None
    content = _ATX_CLOSING.sub("", match.group(2)).rstrip()
    content_line = _Line(line.number, line.offset + indent + match.start(2), content)
    position = Position(Point(line.number, line.offset + indent + 1), line.end)
    return Node(
        HEADING,
        children=_inline_children([content_line]) if content else [],
        position=position,
        attributes={"depth": len(match.group(1))},
    )


def _parse_paragraph(lines: Sequence[_Line], index: int) -> Tuple[Node, int]:
    collected = [lines[index].shift(lines[index].indent)]
    index += 1
    while index < len(lines):
        line = lines[index]
        if line.blank:
            break
        underline = _SETEXT_UNDERLINE.match(line.text)
        if underline:
            position = Position(Point(collected[0].number, collected[0].offset + 1), line.end)
            heading = Node(
                HEADING,
                children=_inline_children(collected),
                position=position,
                attributes={"depth": 1 if underline.group(1)[0] == "=" else 2},
            )
            return heading, index + 1
        if _starts_block(line):
            break
        collected.append(line.shift(line.indent))
        index += 1
    position = Position(Point(collected[0].number, collected[0].offset + 1), collected[-1].end)
    return Node(PARAGRAPH, children=_inline_children(collected), position=position), index


def _parse_fenced_code(lines: Sequence[_Line], index: int) -> Tuple[Node, int]:
    opening = lines[index]
    match = _FENCE_OPEN.match(opening.text)
    assert match is not None
    indent = len(match.group(1))
    fence = match.group(2)
    info = match.group(3).strip()

    body: List[_Line] = []
    closing: Optional[_Line] = None
    index += 1
    while index < len(lines):
        line = lines[index]
        index += 1
        close = _FENCE_CLOSE.match(line.text)
        if close and close.group(1)[0] == fence[0] and len(close.group(1)) >= len(fence):
            closing = line
            break
        body.append(line.shift(min(indent, line.indent)))

    last = closing or (body[-1] if body else opening)
    lang, _, meta = info.partition(" ")
    return (
        Node(
            CODE,
            position=Position(Point(opening.number, opening.offset + indent + 1), last.end),
            value="\n".join(line.text for line in body),
            attributes={"lang": lang or None, "meta": meta.strip() or None},
        ),
        index,
    )


def _parse_indented_code(lines: Sequence[_Line], index: int) -> Tuple[Node, int]:
    body: List[_Line] = []
    while index < len(lines) and (lines[index].blank or lines[index].indent >= 4):
        body.append(lines[index])
        index += 1
    while body[-1].blank:
        body.pop()
    value = "\n".join(line.shift(4).text for line in body)
    position = Position(Point(body[0].number, body[0].offset + 1), body[-1].end)
    return Node(CODE, position=position, value=value, attributes={"lang": None, "meta": None}), index


def _parse_blockquote(lines: Sequence[_Line], index: int) -> Tuple[Node, int]:
    first = lines[index]
    collected: List[_Line] = []
    last = first
    while index < len(lines):
        line = lines[index]
        marker = _BLOCKQUOTE.match(line.text)
        if marker:
            collected.append(line.shift(marker.end()))
        elif line.blank or not collected or collected[-1].blank or _starts_block(line):
            break
        else:
            # Lazy paragraph continuation.
            collected.append(line.shift(line.indent))
        last = line
        index += 1
    position = Position(Point(first.number, first.offset + first.indent + 1), last.end)
    return Node(BLOCKQUOTE, children=_parse_blocks(collected), position=position), index


def _marker_kind(marker: str) -> str:
    return marker if marker in "*+-" else marker[-1]


def _parse_list(lines: Sequence[_Line], index: int) -> Tuple[Node, int]:
    first = _LIST_MARKER.match(lines[index].text)
    assert first is not None
    kind = _marker_kind(first.group(2))
    ordered = kind in ".)"

    parsed: List[Tuple[List[Node], Point, Point, Optional[_Line]]] = []
    while index < len(lines):
        line = lines[index]
        match = _LIST_MARKER.match(line.text)
        if not match or _marker_kind(match.group(2)) != kind or _THEMATIC_BREAK.match(line.text):
            break
        children, item_start, content_end, index, trailing = _parse_list_item(lines, index, match)
        parsed.append((children, item_start, content_end, trailing))

    items: List[Node] = []
    for position, (children, item_start, content_end, trailing) in enumerate(parsed):
        item_end = content_end
        if trailing is not None and position < len(parsed) - 1:
            item_end = Point(trailing.number, 1)
        spread = _has_inner_blank(children)
        items.append(
            Node(
                LIST_ITEM,
                children=children,
                position=Position(item_start, item_end),
                attributes={"spread": spread},
            )
        )

    spread = any(entry[3] is not None for entry in parsed[:-1])
    attributes = {
        "ordered": ordered,
        "start": int(first.group(2)[:-1]) if ordered else None,
        "spread": spread,
    }
    position = Position(items[0].position.start, items[-1].position.end)  # type: ignore[union-attr]
    return Node(LIST, children=items, position=position, attributes=attributes), index


def _parse_list_item(
    lines: Sequence[_Line], index: int, match: "re.Match[str]"
) -> Tuple[List[Node], Point, Point, int, Optional[_Line]]:
    line = lines[index]
    marker_indent = len(match.group(1))
    marker_end = marker_indent + len(match.group(2))
    spacing = match.group(3)
    has_content = bool(match.group(4).strip())
    if not has_content or len(spacing) > 4:
        content_indent = marker_end + 1
    else:
        content_indent = marker_end + len(spacing)

    content: List[_Line] = [line.shift(content_indent)] if has_content else []
    pending: List[_Line] = []
    index += 1
    while index < len(lines):
        current = lines[index]
        if current.blank:
            pending.append(current)
            index += 1
            continue
        if current.indent >= content_indent:
            content.extend(blank.shift(content_indent) for blank in pending)
            pending = []
            content.append(current.shift(content_indent))
            index += 1
            continue
        if pending or _starts_block(current) or _LIST_MARKER.match(current.text):
            break
        if not content or not _continues_paragraph(content[-1]):
            break
        # Lazy paragraph continuation.
        content.append(current.shift(current.indent))
        index += 1

    children = _parse_blocks(content)
    item_start = Point(line.number, line.offset + marker_indent + 1)
    if children and children[-1].position is not None:
        content_end = children[-1].position.end
    else:
        content_end = Point(line.number, line.offset + marker_end + 1)
    trailing = pending[-1] if pending else None
    return children, item_start, content_end, index, trailing


def _continues_paragraph(line: _Line) -> bool:
    return not line.blank and line.indent < 4 and not _starts_block(line)


def _has_inner_blank(children: Sequence[Node]) -> bool:
    for previous, current in zip(children, children[1:]):
        if previous.position and current.position:
            if current.position.start.line - previous.position.end.line > 1:
                return True
    return False


def _inline_children(lines: Sequence[_Line]) -> List[Node]:
    content, points = _text_points(lines)
    return _parse_inline(content, points, 0, len(content))


def _text_points(lines: Sequence[_Line]) -> Tuple[str, List[Point]]:
    """Join ``lines`` and map every character (plus the end) to a source point."""
    parts: List[str] = []
    points: List[Point] = []
    for position, line in enumerate(lines):
        text = line.text.rstrip()
        points.extend(Point(line.number, line.offset + column + 1) for column in range(len(text)))
        points.append(Point(line.number, line.offset + len(text) + 1))
        parts.append(text)
    # The final entry is the end point; the others stand for newlines.
    return "\n".join(parts), points


def _span(points: Sequence[Point], content: str, begin: int, stop: int) -> Position:
    if stop <= begin:
        return Position(points[begin], points[begin])
    if content[stop - 1] == "\n":
        return Position(points[begin], points[stop])
    last = points[stop - 1]
    return Position(points[begin], Point(last.line, last.column + 1))


def _parse_inline(content: str, points: Sequence[Point], begin: int, stop: int) -> List[Node]:
    nodes: List[Node] = []
    cursor = begin
    for match in _INLINE.finditer(content, begin, stop):
        if match.start() > cursor:
            nodes.append(_text(content, points, cursor, match.start()))
        nodes.append(_inline_node(match, content, points))
        cursor = match.end()
    if cursor < stop:
        nodes.append(_text(content, points, cursor, stop))
    return _merge_text(nodes)


def _text(content: str, points: Sequence[Point], begin: int, stop: int) -> Node:
    return Node(TEXT, value=content[begin:stop], position=_span(points, content, begin, stop))


def _inline_node(match: "re.Match[str]", content: str, points: Sequence[Point]) -> Node:
    kind = next(name for name in _INLINE_KINDS if match.group(name) is not None)
    position = _span(points, content, match.start(), match.end())
    if kind == "escape":
        return Node(TEXT, value=match.group("escaped"), position=position)
    if kind == "code":
        return Node(INLINE_CODE, value=match.group("code_body"), position=position)
    if kind == "image":
        attributes = {
            "url": match.group("image_url"),
            "title": match.group("image_title"),
            "alt": match.group("image_alt"),
        }
        return Node(IMAGE, position=position, attributes=attributes)
    if kind == "link":
        children = _parse_inline(content, points, match.start("link_text"), match.end("link_text"))
        attributes = {"url": match.group("link_url"), "title": match.group("link_title")}
        return Node(LINK, children=children, position=position, attributes=attributes)
    if kind == "autolink":
        url = match.group("autolink_url")
        label = _text(content, points, match.start("autolink_url"), match.end("autolink_url"))
        return Node(LINK, children=[label], position=position, attributes={"url": url, "title": None})
    body = "strong_body" if kind == "strong" else "em_body"
    children = _parse_inline(content, points, match.start(body), match.end(body))
    return Node(STRONG if kind == "strong" else EMPHASIS, children=children, position=position)


def _merge_text(nodes: List[Node]) -> List[Node]:
    merged: List[Node] = []
    for node in nodes:
        previous = merged[-1] if merged else None
        if (
            previous is not None
            and previous.type == TEXT
            and node.type == TEXT
            and previous.position is not None
            and node.position is not None
        ):
            merged[-1] = Node(
                TEXT,
                value=(previous.value or "") + (node.value or ""),
                position=Position(previous.position.start, node.position.end),
            )
            continue
        merged.append(node)
    return merged


__all__ = ["parse"]
