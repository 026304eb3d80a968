# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lint driver: parse, walk, run rules, collect diagnostics.

All configured rules are validated and compiled when the `Linter` is built,
so a bad configuration fails before any file is read. Each file then gets a
fresh rule instance bound to a `RuleContext` that turns reports into
`Diagnostic`s; rule instances never outlive the file they were created for.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from typeban.config import ConfigError, LintConfig, RuleConfig
from typeban.core.diagnostics import Diagnostic
from typeban.core.span import Span
from typeban.parser import ast, parse_source
from typeban.rules import RULES, RuleMeta, validate_options
from typeban.walker import Handler, walk


class RuleContext:
	"""Reporting sink handed to a rule for one file."""

	def __init__(
		self,
		rule_id: str,
		meta: RuleMeta,
		*,
		path: Optional[str] = None,
		severity: str = "error",
		sink: Optional[List[Diagnostic]] = None,
	) -> None:
		self.rule_id = rule_id
		self.meta = meta
		self.path = path
		self.severity = severity
		self.diagnostics: List[Diagnostic] = sink if sink is not None else []

	def report(
		self,
		*,
		node: ast.Node,
		message_id: str,
		data: Mapping[str, Any],
		notes: Sequence[str] = (),
	) -> None:
		template = self.meta.messages[message_id]
		self.diagnostics.append(
			Diagnostic(
				message=template.format(**data),
				rule=self.rule_id,
				message_id=message_id,
				data=dict(data),
				phase="lint",
				severity=self.severity,
				span=Span.from_loc(getattr(node, "loc", None), file=self.path),
				notes=list(notes),
			)
		)


class _CompiledRule:
	def __init__(self, rule_id: str, rule_cls, config: Any, severity: str) -> None:
		self.rule_id = rule_id
		self.rule_cls = rule_cls
		self.config = config
		self.severity = severity


class Linter:
	def __init__(self, config: Optional[LintConfig] = None) -> None:
		config = config or LintConfig()
		self._rules: List[_CompiledRule] = []
		for rule_id, rule_cfg in config.rules.items():
			rule_cls = RULES.get(rule_id)
			if rule_cls is None:
				raise ConfigError(f"unknown rule {rule_id!r}")
			validate_options(rule_id, rule_cls.meta, rule_cfg.options)
			compiled = rule_cls.compile_options(rule_cfg.options)
			self._rules.append(_CompiledRule(rule_id, rule_cls, compiled, rule_cfg.severity))

	@classmethod
	def for_rule(cls, rule_id: str, options: Iterable[Sequence[Any]]) -> "Linter":
		return cls(LintConfig(rules={rule_id: RuleConfig(options=tuple(options))}))

	def lint_program(self, program: ast.Program, *, path: Optional[str] = None) -> List[Diagnostic]:
		diagnostics: List[Diagnostic] = []
		handlers: Dict[ast.NodeKind, List[Handler]] = {}
		for compiled in self._rules:
			context = RuleContext(
				compiled.rule_id,
				compiled.rule_cls.meta,
				path=path,
				severity=compiled.severity,
				sink=diagnostics,
			)
			rule = compiled.rule_cls(compiled.config, context)
			for kind, handler in rule.handlers().items():
				handlers.setdefault(kind, []).append(handler)
		if handlers:
			walk(program, {kind: _fan_out(fns) for kind, fns in handlers.items()})
		diagnostics.sort(key=lambda d: d.span.sort_key())
		return diagnostics

	def lint_source(self, source: str, *, path: Optional[str] = None) -> List[Diagnostic]:
		program, parse_diags = parse_source(source, path)
		if program is None:
			return parse_diags
		return self.lint_program(program, path=path)

	def lint_file(self, path: Path) -> List[Diagnostic]:
		try:
			source = path.read_text(encoding="utf-8")
		except (OSError, UnicodeDecodeError) as err:
			return [Diagnostic(message=f"cannot read file: {err}", phase="io", span=Span(file=str(path)))]
		return self.lint_source(source, path=str(path))


def _fan_out(fns: List[Handler]) -> Handler:
	if len(fns) == 1:
		return fns[0]

	def handler(node: ast.Node) -> None:
		for fn in fns:
			fn(node)

	return handler


__all__ = ["Linter", "RuleContext"]
