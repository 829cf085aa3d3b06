"""Tests for running rules over documents."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdlint.config import LintConfig, RuleSetting
from mdlint.linter import Linter, format_report
from mdlint.models import Point, Position
from mdlint.rules.base import LintFile, LintMessage, Severity

NATO_HEADING = "# Alpha bravo charlie delta echo foxtrot golf hotel\n"


def _config(tmp_path: Path, **rules: RuleSetting) -> LintConfig:
    settings = {name.replace("_", "-"): value for name, value in rules.items()}
    return LintConfig(root=tmp_path.resolve(), rules=settings)


def test_linter_runs_all_rules_by_default(tmp_path: Path) -> None:
    linter = Linter(_config(tmp_path))
    assert linter.rule_names == ["maximum-heading-length", "list-item-spacing"]


def test_lint_text_reports_with_rule_metadata(tmp_path: Path) -> None:
    linter = Linter(_config(tmp_path, maximum_heading_length=RuleSetting(option=40)))
    markdown = NATO_HEADING + "\n-   Wrapped\n    item\n-   item 2\n"

    file = linter.lint_text(markdown, path="doc.md")

    assert [str(message) for message in file.messages] == [
        "1:1-1:52: Use headings shorter than `40`",
        "4:9-5:1: Missing new line after list item",
    ]
    assert [message.rule_id for message in file.messages] == [
        "maximum-heading-length",
        "list-item-spacing",
    ]
    assert all(message.source == "remark-lint" for message in file.messages)
    assert file.has_errors is False


def test_disabled_rules_do_not_run(tmp_path: Path) -> None:
    linter = Linter(
        _config(
            tmp_path,
            maximum_heading_length=RuleSetting(severity=Severity.OFF, option=10),
        )
    )

    file = linter.lint_text(NATO_HEADING)

    assert linter.rule_names == ["list-item-spacing"]
    assert file.messages == []


def test_error_severity_marks_file(tmp_path: Path) -> None:
    linter = Linter(
        _config(tmp_path, maximum_heading_length=RuleSetting(severity=Severity.ERROR, option=10))
    )

    file = linter.lint_text(NATO_HEADING)

    assert file.messages[0].severity is Severity.ERROR
    assert file.has_errors is True


def test_lint_paths_expands_directories_and_honours_excludes(tmp_path: Path) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "vendor").mkdir()
    (tmp_path / "README.md").write_text(NATO_HEADING, encoding="utf-8")
    (tmp_path / "docs" / "guide.markdown").write_text("- a\n- b\n", encoding="utf-8")
    (tmp_path / "docs" / "notes.txt").write_text(NATO_HEADING, encoding="utf-8")
    (tmp_path / "vendor" / "third.md").write_text(NATO_HEADING, encoding="utf-8")
    config = _config(tmp_path)
    config.exclude_paths = ["vendor/"]

    files = Linter(config).collect_files([tmp_path, tmp_path / "README.md"])

    assert [path.relative_to(tmp_path).as_posix() for path in files] == [
        "README.md",
        "docs/guide.markdown",
    ]


def test_lint_paths_rejects_missing_paths(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Linter(_config(tmp_path)).lint_paths([tmp_path / "missing.md"])


def test_lint_path_reads_file(tmp_path: Path) -> None:
    target = tmp_path / "doc.md"
    target.write_text(NATO_HEADING, encoding="utf-8")
    linter = Linter(_config(tmp_path, maximum_heading_length=RuleSetting(option=40)))

    file = linter.lint_path(target)

    assert len(file.messages) == 1


def test_format_report() -> None:
    noisy = LintFile("doc.md")
    noisy.messages = [
        LintMessage(
            reason="Use headings shorter than `40`",
            position=Position(Point(1, 1), Point(1, 52)),
            rule_id="maximum-heading-length",
        ),
        LintMessage(
            reason="Missing new line after list item",
            position=Position(Point(4, 9), Point(5, 1)),
            rule_id="list-item-spacing",
            severity=Severity.ERROR,
        ),
    ]
    clean = LintFile("clean.md")

    report = format_report([noisy, clean])

    assert report == (
        "doc.md\n"
        "  1:1-1:52  warning  Use headings shorter than `40`    maximum-heading-length  remark-lint\n"
        "  4:9-5:1   error    Missing new line after list item  list-item-spacing       remark-lint\n"
        "\n"
        "clean.md: no issues found\n"
        "1 warning, 1 error\n"
    )
