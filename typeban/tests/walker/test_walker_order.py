# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typeban.parser import parser as p
from typeban.parser.ast import (
	Identifier,
	Located,
	NodeKind,
	TypeReference,
	VariableDeclarator,
)
from typeban.walker import iter_children, iter_nodes, walk


def _loc() -> Located:
	return Located(line=1, column=1)


def test_iter_children_follows_field_order() -> None:
	ann = TypeReference(loc=_loc(), name="A")
	init = Identifier(loc=_loc(), name="b")
	decl = VariableDeclarator(loc=_loc(), name="x", type_annotation=ann, init=init)
	assert list(iter_children(decl)) == [ann, init]


def test_iter_children_skips_missing_fields() -> None:
	decl = VariableDeclarator(loc=_loc(), name="x")
	assert list(iter_children(decl)) == []


def test_iter_nodes_is_pre_order() -> None:
	prog = p.parse_program("let a: A<B> = c")
	kinds = [node.kind for node in iter_nodes(prog)]
	assert kinds == [
		NodeKind.PROGRAM,
		NodeKind.VARIABLE_DECLARATION,
		NodeKind.VARIABLE_DECLARATOR,
		NodeKind.TYPE_REFERENCE,
		NodeKind.TYPE_REFERENCE,
		NodeKind.IDENTIFIER,
	]


def test_walk_calls_handlers_for_registered_kinds_only() -> None:
	prog = p.parse_program(
		"""
function outer() {
	const inner = function() {}
	const arrow = () => 1
}
"""
	)
	seen = []
	walk(
		prog,
		{
			NodeKind.FUNCTION_DECLARATION: lambda node: seen.append(("decl", node.name)),
			NodeKind.FUNCTION_EXPRESSION: lambda node: seen.append(("expr", None)),
			NodeKind.VARIABLE_DECLARATOR: lambda node: seen.append(("var", node.name)),
		},
	)
	assert seen == [
		("decl", "outer"),
		("var", "inner"),
		("expr", None),
		("var", "arrow"),
	]


def test_walk_visits_nested_statements_once() -> None:
	prog = p.parse_program("run(() => {\n\tfoo()\n})\nfoo()")
	calls = []
	walk(prog, {NodeKind.EXPRESSION_STATEMENT: calls.append})
	assert len(calls) == 3


def test_walk_with_no_handlers_is_a_no_op() -> None:
	prog = p.parse_program("let a: A")
	walk(prog, {})
