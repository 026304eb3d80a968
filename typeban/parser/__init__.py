# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser front-end for the source language.

`parse_program` raises lark's `UnexpectedInput` on malformed input;
`parse_source` wraps it and returns a parser-phase diagnostic instead, which
is what the linter and the CLI use.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from lark.exceptions import UnexpectedInput

from typeban.core.diagnostics import Diagnostic
from typeban.core.span import Span

from . import ast
from .parser import parse_program


def parse_source(source: str, path: Optional[str] = None) -> Tuple[Optional[ast.Program], List[Diagnostic]]:
	"""
	Parse `source` into a Program.

	Returns `(program, [])` on success and `(None, [diagnostic])` when the
	source does not parse.
	"""
	try:
		return parse_program(source), []
	except UnexpectedInput as err:
		span = Span(
			file=path,
			line=getattr(err, "line", None),
			column=getattr(err, "column", None),
			raw=err,
		)
		message = f"syntax error: {_describe(err)}"
		return None, [Diagnostic(message=message, phase="parser", severity="error", span=span)]


def _describe(err: UnexpectedInput) -> str:
	token = getattr(err, "token", None)
	if token is not None:
		if token.type == "_TERM":
			return "unexpected end of statement"
		return f"unexpected token {token.value!r}"
	char = getattr(err, "char", None)
	if char is not None:
		return f"unexpected character {char!r}"
	return "unexpected input"


__all__ = ["ast", "parse_program", "parse_source"]
