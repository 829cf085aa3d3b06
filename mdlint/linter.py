"""Runs configured rules over markdown documents and formats the results."""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .config import LintConfig, default_config
from .logging import get_logger
from .models import Node
from .parser import parse
from .rules import discover_rules
from .rules.base import LintFile, Rule, Severity

logger = get_logger("linter")


class Linter:
    """Applies every enabled rule to parsed markdown trees."""

    def __init__(self, config: LintConfig | None = None) -> None:
        self.config = config or default_config()
        self._rules: List[Tuple[Rule, Severity]] = []
        for name, rule_cls in discover_rules().items():
            setting = self.config.setting_for(name)
            if not setting.enabled:
                logger.debug("Rule %s is disabled", name)
                continue
            self._rules.append((rule_cls.from_option(setting.option), setting.severity))

    @property
    def rule_names(self) -> List[str]:
        return [rule.name for rule, _ in self._rules]

    def lint_text(self, text: str, path: str = "<stdin>") -> LintFile:
        return self.lint_tree(parse(text), path=path)

    def lint_tree(self, tree: Node, path: str = "<stdin>") -> LintFile:
        file = LintFile(path)
        for rule, severity in self._rules:
            file.bind(rule.name, severity)
            rule.check(tree, file)
        file.bind(None)
        file.messages.sort(key=lambda message: (message.position.start, message.position.end))
        logger.debug("Linted %s: %d message(s)", path, len(file.messages))
        return file

    def lint_path(self, path: Path) -> LintFile:
        text = path.read_text(encoding="utf-8")
        return self.lint_text(text, path=_relativize(path))

    def lint_paths(self, paths: Iterable[Path]) -> List[LintFile]:
        return [self.lint_path(path) for path in self.collect_files(paths)]

    def collect_files(self, paths: Iterable[Path]) -> List[Path]:
        """Expand directories into markdown files, skipping excluded paths."""
        collected: List[Path] = []
        seen = set()
        for path in paths:
            if path.is_dir():
                candidates = sorted(
                    candidate
                    for candidate in path.rglob("*")
                    if candidate.is_file() and candidate.suffix.lower() in self.config.extensions
                )
            elif path.is_file():
                candidates = [path]
            else:
                raise FileNotFoundError(f"No such file or directory: {path}")
            for candidate in candidates:
                resolved = candidate.resolve()
                if resolved in seen or self._is_excluded(resolved):
                    continue
                seen.add(resolved)
                collected.append(candidate)
        return collected

    def _is_excluded(self, path: Path) -> bool:
        try:
            relative = path.relative_to(self.config.root).as_posix()
        except ValueError:
            relative = path.as_posix()
        for pattern in self.config.exclude_paths:
            prefix = pattern.rstrip("/")
            if relative == prefix or relative.startswith(prefix + "/") or fnmatch(relative, pattern):
                logger.debug("Excluding %s (matched %s)", relative, pattern)
                return True
        return False


def format_report(files: Sequence[LintFile]) -> str:
    """Render messages grouped per file followed by a summary line."""
    lines: List[str] = []
    warnings = errors = 0
    for file in files:
        if not file.messages:
            lines.append(f"{file.path}: no issues found")
            continue
        lines.append(file.path)
        rows = [
            (
                str(message.position),
                message.severity.value,
                message.reason,
                message.rule_id or "",
                message.source,
            )
            for message in file.messages
        ]
        widths = [max(len(row[index]) for row in rows) for index in range(4)]
        for row in rows:
            cells = [cell.ljust(width) for cell, width in zip(row, widths)] + [row[4]]
            lines.append("  " + "  ".join(cells))
        errors += sum(1 for message in file.messages if message.fatal)
        warnings += sum(1 for message in file.messages if not message.fatal)
        lines.append("")

    summary = []
    if warnings:
        summary.append(f"{warnings} warning{'s' if warnings != 1 else ''}")
    if errors:
        summary.append(f"{errors} error{'s' if errors != 1 else ''}")
    if summary:
        lines.append(", ".join(summary))
    return "\n".join(lines).rstrip("\n") + "\n"


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


__all__ = ["Linter", "format_report"]
