# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lint configuration.

Format (JSON, version 0):
{
  "format": "typeban",
  "version": 0,
  "rules": {
    "ban-types": [["Object", " Use object instead."], ["Foo"]],
    "<rule>": {"severity": "warning", "options": [...]}
  }
}

A rule value is either its option list or an object with `options` and an
optional `severity` ("error" or "warning"). `--ban` flags on the command line
are appended after the file's ban-types entries, so file entries win under
first-match.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from typeban.rules import RULES

DEFAULT_CONFIG_NAME = "typeban.json"
SEVERITIES = ("error", "warning")


class ConfigError(ValueError):
	"""Configuration file or flag cannot be used."""

	def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
		super().__init__(f"{path}: {message}" if path is not None else message)
		self.path = path


@dataclass(frozen=True)
class RuleConfig:
	options: tuple = ()
	severity: str = "error"


@dataclass(frozen=True)
class LintConfig:
	rules: Mapping[str, RuleConfig] = field(default_factory=dict)

	@classmethod
	def from_cli_bans(cls, bans: Sequence[str]) -> "LintConfig":
		"""Build a config from `--ban NAME` / `--ban NAME=MESSAGE` values."""
		entries = []
		for ban in bans:
			name, sep, message = ban.partition("=")
			if not name:
				raise ConfigError(f"--ban value {ban!r} has an empty type name")
			entries.append((name, message) if sep else (name,))
		if not entries:
			return cls()
		return cls(rules={"ban-types": RuleConfig(options=tuple(entries))})

	def merged(self, other: "LintConfig") -> "LintConfig":
		"""Combine two configs; options of a rule present in both are concatenated."""
		rules = dict(self.rules)
		for rule_id, rule_cfg in other.rules.items():
			base = rules.get(rule_id)
			if base is None:
				rules[rule_id] = rule_cfg
			else:
				rules[rule_id] = RuleConfig(options=base.options + rule_cfg.options, severity=base.severity)
		return LintConfig(rules=rules)


def load_config_json(path: Path) -> LintConfig:
	try:
		obj = json.loads(path.read_text(encoding="utf-8"))
	except OSError as err:
		raise ConfigError(f"cannot read config: {err.strerror or err}", path=path) from err
	except json.JSONDecodeError as err:
		raise ConfigError(f"invalid JSON: {err}", path=path) from err
	return parse_config(obj, path=path)


def parse_config(obj: Any, *, path: Optional[Path] = None) -> LintConfig:
	if not isinstance(obj, dict):
		raise ConfigError("config must be a JSON object", path=path)
	if obj.get("format", "typeban") != "typeban" or obj.get("version", 0) != 0:
		raise ConfigError("unsupported config format/version", path=path)
	rules_obj = obj.get("rules", {})
	if not isinstance(rules_obj, dict):
		raise ConfigError("rules must be a JSON object", path=path)
	rules: dict[str, RuleConfig] = {}
	for rule_id, value in rules_obj.items():
		if rule_id not in RULES:
			raise ConfigError(f"unknown rule {rule_id!r}", path=path)
		rules[rule_id] = _parse_rule_value(rule_id, value, path)
	return LintConfig(rules=rules)


def _parse_rule_value(rule_id: str, value: Any, path: Optional[Path]) -> RuleConfig:
	if isinstance(value, list):
		return RuleConfig(options=tuple(value))
	if not isinstance(value, dict):
		raise ConfigError(f"{rule_id}: expected an option list or an object", path=path)
	options = value.get("options", [])
	if not isinstance(options, list):
		raise ConfigError(f"{rule_id}: options must be a list", path=path)
	severity = value.get("severity", "error")
	if severity not in SEVERITIES:
		raise ConfigError(f"{rule_id}: severity must be one of {', '.join(SEVERITIES)}", path=path)
	return RuleConfig(options=tuple(options), severity=severity)


__all__ = [
	"ConfigError",
	"DEFAULT_CONFIG_NAME",
	"LintConfig",
	"RuleConfig",
	"load_config_json",
	"parse_config",
]
