# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
ban-types: report type names from a configured denylist.

Configuration is an ordered list of `[pattern]` / `[pattern, message]`
entries. Each pattern is anchored (`^pattern$`) and compiled once per run
into an immutable ruleset; a name is reported with the message of the
*first* rule it matches.

Type names can sit in four kinds of places:
- variable bindings and class fields (`let x: Foo`, `foo: Foo`),
- function signatures (parameters, return type, type-parameter defaults),
- class type-parameter defaults and `extends Base<Foo>` arguments,
- explicit generic arguments of a call or `new` expression statement.

Each entry point locates its top-level annotations and feeds them to
`visit_type`, which recurses through function types and generic arguments.
Matching is purely syntactic: names are not resolved. Array, union and
qualified (`ns.Foo`) types have no single name, so they are never reported
themselves; a qualified reference still has its generic arguments visited.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from typeban.parser.ast import Node, NodeKind

from .meta import RuleMeta

BANNED_TYPE = "bannedType"

META = RuleMeta(
	description="Ban specific types from being used",
	category="Best Practices",
	recommended=False,
	messages={BANNED_TYPE: "Don't use {type} as a type.{additionalMessage}"},
	schema={
		"type": "array",
		"items": {
			"type": "array",
			"items": [{"type": "string"}, {"type": "string"}],
			"minItems": 1,
			"maxItems": 2,
		},
	},
)


class BanTypesConfigError(ValueError):
	"""A ban entry cannot be compiled; fatal for the whole run."""

	def __init__(self, message: str, *, index: Optional[int] = None) -> None:
		super().__init__(message)
		self.index = index


@dataclass(frozen=True)
class BanRule:
	pattern: re.Pattern[str]
	message: str = ""

	def matches(self, name: str) -> bool:
		return self.pattern.search(name) is not None


Ruleset = Tuple[BanRule, ...]


def compile_ruleset(entries: Optional[Iterable[Sequence[Any]]]) -> Ruleset:
	"""Compile `[pattern, message?]` entries into a ruleset, keeping their order."""
	rules = []
	for index, entry in enumerate(entries or ()):
		if isinstance(entry, str) or not isinstance(entry, (list, tuple)) or not 1 <= len(entry) <= 2:
			raise BanTypesConfigError(f"ban entry {index} must be [name] or [name, message]", index=index)
		raw_name = entry[0]
		message = entry[1] if len(entry) > 1 else ""
		if message is None:
			message = ""
		if not isinstance(raw_name, str) or not isinstance(message, str):
			raise BanTypesConfigError(f"ban entry {index} must contain strings", index=index)
		try:
			pattern = re.compile(f"^{raw_name}$")
		except re.error as err:
			raise BanTypesConfigError(f"ban entry {index}: invalid pattern {raw_name!r}: {err}", index=index) from err
		rules.append(BanRule(pattern=pattern, message=message))
	return tuple(rules)


def match_name(name: object, ruleset: Ruleset) -> Optional[BanRule]:
	"""Return the first rule matching `name`, or None (also for a missing/non-str name)."""
	if not isinstance(name, str):
		return None
	for rule in ruleset:
		if rule.matches(name):
			return rule
	return None


_GENERIC_REFERENCE_KINDS = frozenset({NodeKind.TYPE_REFERENCE, NodeKind.QUALIFIED_TYPE_REFERENCE})


class TypePosition(Enum):
	ANNOTATION = "annotation"
	TYPE_ARGUMENT = "type argument"
	TYPE_PARAMETER_DEFAULT = "type parameter default"


class BanTypes:
	rule_id = "ban-types"
	meta = META

	ENTRY_KINDS = frozenset(
		{
			NodeKind.VARIABLE_DECLARATOR,
			NodeKind.PROPERTY_DEFINITION,
			NodeKind.FUNCTION_DECLARATION,
			NodeKind.FUNCTION_EXPRESSION,
			NodeKind.ARROW_FUNCTION_EXPRESSION,
			NodeKind.CLASS_DECLARATION,
			NodeKind.CLASS_EXPRESSION,
			NodeKind.EXPRESSION_STATEMENT,
		}
	)

	@staticmethod
	def compile_options(options: Optional[Iterable[Sequence[Any]]]) -> Ruleset:
		return compile_ruleset(options)

	def __init__(self, ruleset: Ruleset, context) -> None:
		self.ruleset = ruleset
		self.context = context

	def handlers(self) -> Dict[NodeKind, Callable[[Node], None]]:
		if not self.ruleset:
			return {}
		return {kind: self.visit for kind in self.ENTRY_KINDS}

	def visit(self, node: Node) -> None:
		kind = node.kind
		if kind in (NodeKind.VARIABLE_DECLARATOR, NodeKind.PROPERTY_DEFINITION):
			self.visit_type(getattr(node, "type_annotation", None), TypePosition.ANNOTATION)
		elif kind in (
			NodeKind.FUNCTION_DECLARATION,
			NodeKind.FUNCTION_EXPRESSION,
			NodeKind.ARROW_FUNCTION_EXPRESSION,
		):
			self._visit_signature(node)
		elif kind in (NodeKind.CLASS_DECLARATION, NodeKind.CLASS_EXPRESSION):
			self._visit_type_params(getattr(node, "type_params", None))
			heritage = getattr(node, "heritage", None)
			self._visit_type_args(getattr(heritage, "type_args", None))
		elif kind is NodeKind.EXPRESSION_STATEMENT:
			expression = getattr(node, "expression", None)
			self._visit_type_args(getattr(expression, "type_args", None))
		else:
			raise AssertionError(f"{self.rule_id}: no handler for node kind {kind.value}")

	def visit_type(self, node: Optional[Node], position: TypePosition) -> None:
		if node is None:
			return
		kind = getattr(node, "kind", None)
		if kind is NodeKind.FUNCTION_TYPE:
			# The signature itself is not a name; only what it mentions is.
			self._visit_signature(node)
			return
		type_args = getattr(node, "type_args", None)
		if kind in _GENERIC_REFERENCE_KINDS and type_args:
			self._check(node, position)
			self._visit_type_args(type_args)
			return
		self._check(node, position)

	def _visit_signature(self, node: Node) -> None:
		self._visit_type_params(getattr(node, "type_params", None))
		for param in getattr(node, "params", None) or ():
			self.visit_type(getattr(param, "type_annotation", None), TypePosition.ANNOTATION)
		self.visit_type(getattr(node, "return_type", None), TypePosition.ANNOTATION)

	def _visit_type_params(self, type_params: Optional[Iterable[Node]]) -> None:
		# Only defaults are candidates; the parameter name and bound are not.
		for param in type_params or ():
			default = getattr(param, "default", None)
			if default is not None:
				self.visit_type(default, TypePosition.TYPE_PARAMETER_DEFAULT)

	def _visit_type_args(self, type_args: Optional[Iterable[Node]]) -> None:
		for arg in type_args or ():
			self.visit_type(arg, TypePosition.TYPE_ARGUMENT)

	def _check(self, node: Node, position: TypePosition) -> None:
		name = getattr(node, "name", None)
		rule = match_name(name, self.ruleset)
		if rule is None:
			return
		self.context.report(
			node=node,
			message_id=BANNED_TYPE,
			data={"type": name, "additionalMessage": rule.message},
			notes=[f"found in {position.value} position"],
		)


__all__ = [
	"BANNED_TYPE",
	"META",
	"BanRule",
	"BanTypes",
	"BanTypesConfigError",
	"Ruleset",
	"TypePosition",
	"compile_ruleset",
	"match_name",
]
