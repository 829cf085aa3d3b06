"""Rule warning when list looseness is inconsistent.

If one or more items of a list span more than one line, every item must be
followed by a blank line; otherwise no item may be. With ``checkBlanks`` the
list must be loose when any item contains a blank line between its children
instead.

A boundary counts as tight when the item ends past the list's own start
column. Items followed by a blank line end at column 1 of that line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional

from ..logging import get_logger
from ..models import LIST, Node, Position
from ..unist import end, is_generated, start, visit
from .base import LintFile, Rule

MISSING_NEW_LINE = "Missing new line after list item"
EXTRANEOUS_NEW_LINE = "Extraneous new line after list item"

logger = get_logger("rules.list_item_spacing")


@dataclass(frozen=True)
class ListItemSpacingOptions:
    """Validated options for :class:`ListItemSpacing`."""

    check_blanks: bool = False

    @classmethod
    def from_option(cls, option: Any) -> "ListItemSpacingOptions":
        if isinstance(option, Mapping):
            value = option.get("checkBlanks", option.get("check_blanks", False))
            return cls(check_blanks=bool(value))
        if option is not None:
            logger.debug("Ignoring list item spacing option %r", option)
        return cls()


class ListItemSpacing(Rule):
    """Warns when item spacing does not match the looseness of its list."""

    name = "list-item-spacing"

    def __init__(self, options: Optional[ListItemSpacingOptions] = None) -> None:
        self.options = options or ListItemSpacingOptions()

    @classmethod
    def from_option(cls, option: Any = None) -> "ListItemSpacing":
        return cls(ListItemSpacingOptions.from_option(option))

    def check(self, tree: Node, file: LintFile) -> None:
        infer: Callable[[Node], bool] = (
            _contains_blank_line if self.options.check_blanks else _is_multiline
        )
        for node in visit(tree, LIST):
            if is_generated(node):
                logger.debug("Skipping generated list")
                continue
            self._check_list(node, infer, file)

    @staticmethod
    def _check_list(node: Node, infer: Callable[[Node], bool], file: LintFile) -> None:
        items = node.children or []
        is_tight_list = not any(infer(item) for item in items)
        indent = start(node).column

        # The boundary after the last item is never checked.
        for item, following in zip(items, items[1:]):
            if is_generated(item) or is_generated(following):
                continue
            is_tight = end(item).column > indent
            if is_tight == is_tight_list:
                continue
            reason = EXTRANEOUS_NEW_LINE if is_tight_list else MISSING_NEW_LINE
            file.report(reason, Position(end(item), start(following)))


def _content(item: Node) -> List[Node]:
    return [child for child in item.children or [] if not is_generated(child)]


def _is_multiline(item: Node) -> bool:
    content = _content(item)
    if not content:
        return False
    return end(content[-1]).line - start(content[0]).line > 0


def _contains_blank_line(item: Node) -> bool:
    content = _content(item)
    # Children of list items are blocks, so a gap of two lines means a blank line.
    return any(
        start(following).line - end(child).line > 1
        for child, following in zip(content, content[1:])
    )


__all__ = [
    "EXTRANEOUS_NEW_LINE",
    "ListItemSpacing",
    "ListItemSpacingOptions",
    "MISSING_NEW_LINE",
]
