"""Rule warning when headings are too long.

Only the plain text of a heading counts: markup is ignored and images
contribute their alt text.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Union

from ..logging import get_logger
from ..models import HEADING, Node
from ..unist import is_generated, to_string, visit
from .base import LintFile, Rule

DEFAULT_THRESHOLD = 60

logger = get_logger("rules.maximum_heading_length")


@dataclass(frozen=True)
class HeadingLengthOptions:
    """Validated options for :class:`MaximumHeadingLength`."""

    threshold: Union[int, float] = DEFAULT_THRESHOLD

    @classmethod
    def from_option(cls, option: Any) -> "HeadingLengthOptions":
        if isinstance(option, bool) or not isinstance(option, (int, float)):
            if option is not None:
                logger.debug("Ignoring non-numeric heading length option %r", option)
            return cls()
        if not math.isfinite(option):
            logger.debug("Ignoring non-finite heading length option %r", option)
            return cls()
        return cls(threshold=option)

    @property
    def label(self) -> str:
        if float(self.threshold).is_integer():
            return str(int(self.threshold))
        return str(self.threshold)


class MaximumHeadingLength(Rule):
    """Warns when a heading's plain text exceeds the configured threshold."""

    name = "maximum-heading-length"

    def __init__(self, options: Optional[HeadingLengthOptions] = None) -> None:
        self.options = options or HeadingLengthOptions()

    @classmethod
    def from_option(cls, option: Any = None) -> "MaximumHeadingLength":
        return cls(HeadingLengthOptions.from_option(option))

    def check(self, tree: Node, file: LintFile) -> None:
        reason = f"Use headings shorter than `{self.options.label}`"
        for heading in visit(tree, HEADING):
            if is_generated(heading):
                logger.debug("Skipping generated heading")
                continue
            if len(to_string(heading)) > self.options.threshold:
                file.report(reason, heading)


__all__ = ["DEFAULT_THRESHOLD", "HeadingLengthOptions", "MaximumHeadingLength"]
