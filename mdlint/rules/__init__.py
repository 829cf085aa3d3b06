"""Lint rule implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Dict, Iterable, Sequence, Set, Type

from .base import LintFile, LintMessage, Rule, Severity
from .list_item_spacing import ListItemSpacing
from .maximum_heading_length import MaximumHeadingLength

_ENTRY_POINT_GROUP = "mdlint.rules"

_BUILTIN_RULES: Dict[str, Type[Rule]] = {
    MaximumHeadingLength.name: MaximumHeadingLength,
    ListItemSpacing.name: ListItemSpacing,
}


def discover_rules(enabled: Sequence[str] | None = None) -> Dict[str, Type[Rule]]:
    """Return rule classes keyed by name, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    rules: Dict[str, Type[Rule]] = {}

    def _add(name: str, rule: Type[Rule]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in rules:
            return
        rules[key] = rule

    for name, rule in _BUILTIN_RULES.items():
        _add(name, rule)

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load rule entry point '{entry.name}': {exc}") from exc
        _add(entry.name, _coerce_rule(entry.name, loaded))

    if enabled_set:
        missing = ", ".join(sorted(enabled_set - set(rules)))
        if missing:
            raise ValueError(f"Unknown rules requested: {missing}")

    return rules


def _coerce_rule(name: str, obj: object) -> Type[Rule]:
    if isinstance(obj, type) and issubclass(obj, Rule):
        return obj
    raise TypeError(f"Rule entry point '{name}' must be a Rule subclass")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "LintFile",
    "LintMessage",
    "ListItemSpacing",
    "MaximumHeadingLength",
    "Rule",
    "Severity",
    "discover_rules",
]
