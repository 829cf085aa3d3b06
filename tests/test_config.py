"""Tests for mdlint.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdlint.config import (
    ConfigError,
    LintConfig,
    RuleSetting,
    load_config,
    parse_rule_setting,
)
from mdlint.rules.base import Severity


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, LintConfig)
    assert config.root == tmp_path.resolve()
    assert config.rules == {}
    assert config.exclude_paths == []
    assert config.extensions == [".md", ".markdown"]
    assert config.setting_for("list-item-spacing") == RuleSetting()


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".mdlint.yml"
    config_file.write_text(
        """
rules:
  maximum-heading-length: 40
  list-item-spacing: [error, {checkBlanks: true}]
exclude_paths:
  - "vendor/"
extensions: [md, ".mdx"]
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    heading = config.setting_for("maximum-heading-length")
    assert heading.severity is Severity.WARNING
    assert heading.option == 40
    spacing = config.setting_for("list-item-spacing")
    assert spacing.severity is Severity.ERROR
    assert spacing.option == {"checkBlanks": True}
    assert config.exclude_paths == ["vendor/"]
    assert config.extensions == [".md", ".mdx"]


def test_load_config_accepts_directory(tmp_path: Path) -> None:
    (tmp_path / ".mdlint.yml").write_text("rules:\n  list-item-spacing: off\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.setting_for("list-item-spacing").enabled is False


@pytest.mark.parametrize(
    ("value", "severity", "option"),
    [
        (False, Severity.OFF, None),
        (True, Severity.WARNING, None),
        ("off", Severity.OFF, None),
        ("warn", Severity.WARNING, None),
        ("error", Severity.ERROR, None),
        (2, Severity.WARNING, 2),
        (None, Severity.WARNING, None),
        ({"checkBlanks": True}, Severity.WARNING, {"checkBlanks": True}),
        ([2, 30], Severity.ERROR, 30),
        ([0], Severity.OFF, None),
        (["warn", 30], Severity.WARNING, 30),
        ([], Severity.WARNING, None),
    ],
)
def test_parse_rule_setting(value: object, severity: Severity, option: object) -> None:
    setting = parse_rule_setting(value)
    assert setting.severity is severity
    assert setting.option == option


def test_parse_rule_setting_rejects_bad_severity() -> None:
    with pytest.raises(ConfigError, match="Incorrect severity `loud` for `list-item-spacing`"):
        parse_rule_setting(["loud", 1], rule="list-item-spacing")
    with pytest.raises(ConfigError):
        parse_rule_setting([3, 1])


def test_load_config_rejects_unknown_rules(tmp_path: Path) -> None:
    (tmp_path / ".mdlint.yml").write_text("rules:\n  no-such-rule: true\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Unknown rule"):
        load_config(tmp_path)


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".mdlint.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_load_config_wraps_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".mdlint.yml").write_text("rules: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".mdlint.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.rules == {}
