"""Core lint rule contract and the message sink rules report into."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Union

from ..models import Node, Position

SOURCE = "remark-lint"


class Severity(str, Enum):
    """How a rule's messages are treated."""

    OFF = "off"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class LintMessage:
    """A single warning emitted by a rule."""

    reason: str
    position: Position
    rule_id: Optional[str] = None
    source: str = SOURCE
    severity: Severity = Severity.WARNING

    @property
    def line(self) -> int:
        return self.position.start.line

    @property
    def column(self) -> int:
        return self.position.start.column

    @property
    def fatal(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        return f"{self.position}: {self.reason}"


class LintFile:
    """Collects messages for one document while rules run against it."""

    def __init__(self, path: str = "<stdin>") -> None:
        self.path = path
        self.messages: List[LintMessage] = []
        self._rule_id: Optional[str] = None
        self._severity = Severity.WARNING

    def bind(self, rule_id: Optional[str], severity: Severity = Severity.WARNING) -> None:
        """Attribute subsequent reports to ``rule_id`` at ``severity``."""
        self._rule_id = rule_id
        self._severity = severity

    def report(self, reason: str, place: Union[Node, Position]) -> LintMessage:
        if isinstance(place, Node):
            if place.position is None:
                raise ValueError(f"Cannot report on generated {place.type} node")
            position = place.position
        else:
            position = place
        message = LintMessage(
            reason=reason,
            position=position,
            rule_id=self._rule_id,
            severity=self._severity,
        )
        self.messages.append(message)
        return message

    @property
    def has_errors(self) -> bool:
        return any(message.fatal for message in self.messages)


class Rule(ABC):
    """Contract for lint rules that inspect a parsed markdown tree."""

    name: str = ""

    @classmethod
    @abstractmethod
    def from_option(cls, option: Any = None) -> "Rule":
        """Build the rule from its raw configured option."""

    @abstractmethod
    def check(self, tree: Node, file: LintFile) -> None:
        """Walk ``tree`` and report violations into ``file``."""


__all__ = ["LintFile", "LintMessage", "Rule", "SOURCE", "Severity"]
