"""Markdown lint rules for heading length and list item spacing."""

from .linter import Linter, format_report
from .models import Node, Point, Position
from .parser import parse
from .rules import LintFile, LintMessage, ListItemSpacing, MaximumHeadingLength, Rule

__all__ = [
    "LintFile",
    "LintMessage",
    "Linter",
    "ListItemSpacing",
    "MaximumHeadingLength",
    "Node",
    "Point",
    "Position",
    "Rule",
    "format_report",
    "parse",
]
