from __future__ import annotations

from typing import Callable, List

import pytest

from mdlint.parser import parse
from mdlint.rules.base import LintFile, Rule


def render_messages(file: LintFile) -> List[str]:
    ordered = sorted(file.messages, key=lambda message: (message.position.start, message.position.end))
    return [str(message) for message in ordered]


@pytest.fixture
def run_rule() -> Callable[[Rule, str], List[str]]:
    """Parse markdown, run one rule and return ``start-end: reason`` strings."""

    def _run(rule: Rule, markdown: str) -> List[str]:
        file = LintFile("test.md")
        rule.check(parse(markdown), file)
        return render_messages(file)

    return _run
