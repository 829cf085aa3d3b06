"""Configuration loading for mdlint (.mdlint.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .logging import get_logger
from .rules import discover_rules
from .rules.base import Severity

CONFIG_FILENAME = ".mdlint.yml"
DEFAULT_EXTENSIONS = [".md", ".markdown"]

logger = get_logger("config")

_SEVERITY_ALIASES: Dict[Any, Severity] = {
    "off": Severity.OFF,
    "on": Severity.WARNING,
    "warn": Severity.WARNING,
    "warning": Severity.WARNING,
    "error": Severity.ERROR,
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RuleSetting:
    """Severity and raw option for one rule."""

    severity: Severity = Severity.WARNING
    option: Any = None

    @property
    def enabled(self) -> bool:
        return self.severity is not Severity.OFF


@dataclass
class LintConfig:
    """Represents the settings defined in .mdlint.yml."""

    root: Path
    rules: Dict[str, RuleSetting] = field(default_factory=dict)
    exclude_paths: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))

    def setting_for(self, name: str) -> RuleSetting:
        return self.rules.get(name, RuleSetting())


def default_config(root: Path | None = None) -> LintConfig:
    return LintConfig(root=(root or Path.cwd()).resolve())


def load_config(config_path: Path) -> LintConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        logger.debug("No %s found at %s; using defaults", CONFIG_FILENAME, root)
        return LintConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    rules_data = data.get("rules")
    if rules_data is not None and not isinstance(rules_data, dict):
        raise ConfigError("`rules` must be a mapping of rule names to settings")

    known = discover_rules()
    rules: Dict[str, RuleSetting] = {}
    for raw_name, raw_setting in (rules_data or {}).items():
        name = str(raw_name).lower()
        if name not in known:
            raise ConfigError(f"Unknown rule in {CONFIG_FILENAME}: {raw_name}")
        rules[name] = parse_rule_setting(raw_setting, rule=name)

    extensions = _as_str_list(data.get("extensions")) or list(DEFAULT_EXTENSIONS)

    return LintConfig(
        root=root,
        rules=rules,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        extensions=[ext if ext.startswith(".") else f".{ext}" for ext in extensions],
    )


def parse_rule_setting(value: Any, *, rule: str = "rule") -> RuleSetting:
    """Interpret a rule setting: a severity, an option, or ``[severity, option]``."""
    if isinstance(value, list):
        if not value:
            return RuleSetting()
        severity = _as_severity(value[0])
        if severity is None:
            raise ConfigError(
                f"Incorrect severity `{value[0]}` for `{rule}`, expected off, warn or error"
            )
        option = value[1] if len(value) > 1 else None
        return RuleSetting(severity=severity, option=option)

    # Bare numbers are options: `maximum-heading-length: 2` is a threshold.
    if isinstance(value, (bool, str)):
        severity = _as_severity(value)
        if severity is not None:
            return RuleSetting(severity=severity)
    return RuleSetting(option=value)


def _as_severity(value: Any) -> Optional[Severity]:
    if isinstance(value, bool):
        return Severity.WARNING if value else Severity.OFF
    if isinstance(value, int):
        return {0: Severity.OFF, 1: Severity.WARNING, 2: Severity.ERROR}.get(value)
    if isinstance(value, str):
        return _SEVERITY_ALIASES.get(value.strip().lower())
    return None


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "LintConfig",
    "RuleSetting",
    "default_config",
    "load_config",
    "parse_rule_setting",
]
