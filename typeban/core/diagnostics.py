# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure shared by the parser, the rules and the CLI.

A diagnostic is a rendered message plus the pieces it was rendered from
(`message_id`, `data`) so tests and JSON consumers can match on structure
instead of on English text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a lint finding or a parse error."""

	message: str
	# Rule that produced the diagnostic (None for parser diagnostics).
	rule: str | None = None
	message_id: str | None = None
	data: dict[str, Any] = field(default_factory=dict)
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def format(self) -> str:
		"""Render as `file:line:col: severity: message [rule]`."""
		file = self.span.file or "<source>"
		line = self.span.line if self.span.line is not None else "?"
		column = self.span.column if self.span.column is not None else "?"
		text = f"{file}:{line}:{column}: {self.severity}: {self.message}"
		if self.rule:
			text += f" [{self.rule}]"
		return text

	def to_json(self) -> dict[str, Any]:
		"""Render to a JSON-friendly dict."""
		return {
			"phase": self.phase,
			"rule": self.rule,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"data": dict(self.data),
			"notes": list(self.notes),
		}


__all__ = ["Diagnostic"]
