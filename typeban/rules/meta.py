# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Rule metadata and option validation.

Each rule describes itself with a `RuleMeta`: documentation fields, the
message templates it reports with, and a schema for its options. The
schema uses the small JSON-schema vocabulary the rules need (`type`,
`items`, `minItems`, `maxItems`); `validate_options` checks configured
options against it before any rule is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence


class RuleOptionsError(ValueError):
	"""Configured options do not match the rule's schema."""

	def __init__(self, rule: str, message: str) -> None:
		super().__init__(f"{rule}: {message}")
		self.rule = rule


@dataclass(frozen=True)
class RuleMeta:
	description: str
	category: str
	messages: Mapping[str, str]
	schema: Mapping[str, Any] = field(default_factory=dict)
	recommended: bool = False
	url: str | None = None


_JSON_TYPES = {
	"array": (list, tuple),
	"string": (str,),
	"object": (dict,),
	"boolean": (bool,),
}


def validate_options(rule: str, meta: RuleMeta, options: Sequence[Any]) -> None:
	if not meta.schema:
		return
	_check(rule, options, meta.schema, "options")


def _check(rule: str, value: Any, schema: Mapping[str, Any], where: str) -> None:
	expected = schema.get("type")
	if expected is not None:
		if not isinstance(value, _JSON_TYPES[expected]):
			raise RuleOptionsError(rule, f"{where} must be of type {expected}")
	if not isinstance(value, (list, tuple)):
		return
	min_items = schema.get("minItems")
	if min_items is not None and len(value) < min_items:
		raise RuleOptionsError(rule, f"{where} must have at least {min_items} item(s)")
	max_items = schema.get("maxItems")
	if max_items is not None and len(value) > max_items:
		raise RuleOptionsError(rule, f"{where} must have at most {max_items} item(s)")
	items = schema.get("items")
	if isinstance(items, Mapping):
		for idx, item in enumerate(value):
			_check(rule, item, items, f"{where}[{idx}]")
	elif isinstance(items, Sequence):
		# Positional (tuple) form: extra items beyond the schema are unchecked.
		for idx, (item, item_schema) in enumerate(zip(value, items)):
			_check(rule, item, item_schema, f"{where}[{idx}]")


__all__ = ["RuleMeta", "RuleOptionsError", "validate_options"]
