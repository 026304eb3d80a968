# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import ast
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree

from .ast import (
	ArrayType,
	ArrowFunctionExpression,
	AssignmentExpression,
	BinaryExpression,
	Block,
	CallExpression,
	ClassDeclaration,
	ClassExpression,
	ClassHeritage,
	ClassMember,
	Expr,
	ExpressionStatement,
	FunctionDeclaration,
	FunctionExpression,
	FunctionType,
	Identifier,
	Literal,
	LiteralType,
	Located,
	MemberExpression,
	MethodDefinition,
	NewExpression,
	Param,
	Program,
	PropertyDefinition,
	QualifiedTypeReference,
	ReturnStatement,
	Stmt,
	TypeNode,
	TypeParameter,
	TypeReference,
	UnionType,
	VariableDeclaration,
	VariableDeclarator,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_KEYWORD_LITERALS = {"true": True, "false": False, "null": None}


class TerminatorInserter:
	"""
	Post-lexer turning `;` and statement-ending newlines into `_TERM` tokens.

	A newline ends a statement only when the previous token can end one and we
	are not nested inside parentheses or angle brackets of the current brace
	level. Braces open a fresh level so statements inside a block passed as a
	call argument still split on newlines. A trailing `_TERM` is emitted at end
	of input when the last token could end a statement.

	The instance is shared by every parse, so all per-stream state lives in
	`process` locals.
	"""

	always_accept = ("NEWLINE", "SEMI")

	TERMINABLE = {
		"NAME",
		"NUMBER",
		"STRING",
		"RSQB",
		"_RPAR",
		"_RBRACE",
		"_GT",
		"_RETURN",
	}

	def process(self, stream):
		# One [paren_depth, angle_depth] frame per open brace.
		frames: List[List[int]] = [[0, 0]]
		can_terminate = False
		last_token: Optional[Token] = None
		for token in stream:
			ttype = token.type
			if ttype == "NEWLINE":
				paren_depth, angle_depth = frames[-1]
				if can_terminate and paren_depth == 0 and angle_depth == 0:
					yield Token.new_borrow_pos("_TERM", token.value, token)
					can_terminate = False
				continue
			if ttype == "SEMI":
				yield Token.new_borrow_pos("_TERM", token.value, token)
				can_terminate = False
				continue
			yield token
			last_token = token
			self._update_depth(frames, ttype)
			can_terminate = ttype in self.TERMINABLE
		if can_terminate and last_token is not None:
			yield Token.new_borrow_pos("_TERM", "", last_token)

	@staticmethod
	def _update_depth(frames: List[List[int]], ttype: str) -> None:
		frame = frames[-1]
		if ttype == "_LPAR":
			frame[0] += 1
		elif ttype == "_RPAR" and frame[0]:
			frame[0] -= 1
		elif ttype == "_LT":
			frame[1] += 1
		elif ttype == "_GT" and frame[1]:
			frame[1] -= 1
		elif ttype == "_LBRACE":
			frames.append([0, 0])
		elif ttype == "_RBRACE" and len(frames) > 1:
			frames.pop()


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="program",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=TerminatorInserter(),
)


def parse_program(source: str) -> Program:
	tree = _PARSER.parse(source)
	return _build_program(tree)


def _build_program(tree: Tree) -> Program:
	body = [_build_stmt(child) for child in tree.children if isinstance(child, Tree)]
	return Program(loc=Located(line=1, column=1), body=body)


def _build_stmt(tree: Tree) -> Stmt:
	kind = _name(tree)
	if kind == "var_decl":
		return _build_var_decl(tree)
	if kind == "function_decl":
		return _build_function_decl(tree)
	if kind == "class_decl":
		return _build_class_decl(tree)
	if kind == "return_stmt":
		value = _first_tree(tree)
		return ReturnStatement(loc=_loc(tree), argument=_build_expr(value) if value is not None else None)
	if kind == "expr_stmt":
		expr_node = _first_tree(tree)
		if expr_node is None:
			raise ValueError("expression statement missing expression")
		return ExpressionStatement(loc=_loc(tree), expression=_build_expr(expr_node))
	raise ValueError(f"Unsupported statement node: {kind}")


def _build_var_decl(tree: Tree) -> VariableDeclaration:
	binder_node = _child(tree, "var_kind")
	if binder_node is None:
		raise ValueError("variable declaration missing binder keyword")
	binder = binder_node.children[0].value
	declarations = [_build_declarator(child) for child in _children(tree, "declarator")]
	return VariableDeclaration(loc=_loc(tree), binder=binder, declarations=declarations)


def _build_declarator(tree: Tree) -> VariableDeclarator:
	name_token = _token(tree, "NAME")
	init_node = next(
		(child for child in tree.children if isinstance(child, Tree) and _name(child) != "type_annotation"),
		None,
	)
	return VariableDeclarator(
		loc=_loc_from_token(name_token),
		name=name_token.value,
		type_annotation=_build_annotation(_child(tree, "type_annotation")),
		init=_build_expr(init_node) if init_node is not None else None,
	)


def _build_function_decl(tree: Tree) -> FunctionDeclaration:
	name_token = _token(tree, "NAME")
	type_params, params, return_type, body = _function_parts(tree)
	if not isinstance(body, Block):
		raise ValueError("function declaration missing body")
	return FunctionDeclaration(
		loc=_loc(tree),
		name=name_token.value,
		type_params=type_params,
		params=params,
		return_type=return_type,
		body=body,
	)


def _build_function_expr(tree: Tree) -> FunctionExpression:
	type_params, params, return_type, body = _function_parts(tree)
	if not isinstance(body, Block):
		raise ValueError("function expression missing body")
	return FunctionExpression(
		loc=_loc(tree),
		type_params=type_params,
		params=params,
		return_type=return_type,
		body=body,
	)


def _build_arrow_fn(tree: Tree) -> ArrowFunctionExpression:
	type_params, params, return_type, body = _function_parts(tree)
	return ArrowFunctionExpression(
		loc=_loc(tree),
		type_params=type_params,
		params=params,
		return_type=return_type,
		body=body,
	)


def _function_parts(tree: Tree):
	"""
	Split the shared `type_params? (params?) type_annotation? body` shape of
	function declarations, expressions, arrows and methods.

	The body is the last tree child: a `block`, or an expression for arrows.
	"""
	nodes = [child for child in tree.children if isinstance(child, Tree)]
	if not nodes:
		raise ValueError("function missing body")
	body_node = nodes[-1]
	head = nodes[:-1]
	type_params = None
	params: List[Param] = []
	return_type = None
	for node in head:
		kind = _name(node)
		if kind == "type_params":
			type_params = _build_type_params(node)
		elif kind == "params":
			params = [_build_param(child) for child in _children(node, "param")]
		elif kind == "type_annotation":
			return_type = _build_annotation(node)
	if _name(body_node) == "block":
		body = _build_block(body_node)
	else:
		body = _build_expr(body_node)
	return type_params, params, return_type, body


def _build_block(tree: Tree) -> Block:
	statements = [_build_stmt(child) for child in tree.children if isinstance(child, Tree)]
	return Block(loc=_loc(tree), body=statements)


def _build_param(tree: Tree) -> Param:
	name_token = _token(tree, "NAME")
	default_node = next(
		(child for child in tree.children if isinstance(child, Tree) and _name(child) != "type_annotation"),
		None,
	)
	return Param(
		loc=_loc_from_token(name_token),
		name=name_token.value,
		type_annotation=_build_annotation(_child(tree, "type_annotation")),
		optional=_token(tree, "OPTIONAL", required=False) is not None,
		default=_build_expr(default_node) if default_node is not None else None,
	)


def _build_class_decl(tree: Tree) -> ClassDeclaration:
	name_token = _token(tree, "NAME")
	type_params, heritage, members = _class_parts(tree)
	return ClassDeclaration(
		loc=_loc(tree),
		name=name_token.value,
		type_params=type_params,
		heritage=heritage,
		body=members,
	)


def _build_class_expr(tree: Tree) -> ClassExpression:
	type_params, heritage, members = _class_parts(tree)
	return ClassExpression(loc=_loc(tree), type_params=type_params, heritage=heritage, body=members)


def _class_parts(tree: Tree):
	params_node = _child(tree, "type_params")
	heritage_node = _child(tree, "heritage")
	body_node = _child(tree, "class_body")
	if body_node is None:
		raise ValueError("class missing body")
	heritage = None
	if heritage_node is not None:
		base_token = _token(heritage_node, "NAME")
		args_node = _child(heritage_node, "type_args")
		heritage = ClassHeritage(
			loc=_loc_from_token(base_token),
			name=base_token.value,
			type_args=_build_type_args(args_node) if args_node is not None else None,
		)
	members: List[ClassMember] = []
	for child in body_node.children:
		if not isinstance(child, Tree):
			continue
		kind = _name(child)
		if kind == "method_def":
			members.append(_build_method(child))
		elif kind == "property_def":
			members.append(_build_property(child))
	type_params = _build_type_params(params_node) if params_node is not None else None
	return type_params, heritage, members


def _build_method(tree: Tree) -> MethodDefinition:
	name_token = _token(tree, "NAME")
	type_params, params, return_type, body = _function_parts(tree)
	value = FunctionExpression(
		loc=_loc(tree),
		type_params=type_params,
		params=params,
		return_type=return_type,
		body=body,
	)
	return MethodDefinition(loc=_loc_from_token(name_token), name=name_token.value, value=value)


def _build_property(tree: Tree) -> PropertyDefinition:
	name_token = _token(tree, "NAME")
	value_node = next(
		(child for child in tree.children if isinstance(child, Tree) and _name(child) != "type_annotation"),
		None,
	)
	return PropertyDefinition(
		loc=_loc_from_token(name_token),
		name=name_token.value,
		type_annotation=_build_annotation(_child(tree, "type_annotation")),
		optional=_token(tree, "OPTIONAL", required=False) is not None,
		value=_build_expr(value_node) if value_node is not None else None,
	)


def _build_annotation(tree: Optional[Tree]) -> Optional[TypeNode]:
	if tree is None:
		return None
	type_node = _first_tree(tree)
	if type_node is None:
		raise ValueError("type annotation missing type")
	return _build_type(type_node)


def _build_type(tree: Tree) -> TypeNode:
	kind = _name(tree)
	if kind == "type_ref":
		name_tokens = [child for child in tree.children if isinstance(child, Token) and child.type == "NAME"]
		args_node = _child(tree, "type_args")
		type_args = _build_type_args(args_node) if args_node is not None else []
		if len(name_tokens) > 1:
			return QualifiedTypeReference(
				loc=_loc_from_token(name_tokens[0]),
				path=[token.value for token in name_tokens],
				type_args=type_args,
			)
		return TypeReference(loc=_loc_from_token(name_tokens[0]), name=name_tokens[0].value, type_args=type_args)
	if kind == "literal_type":
		token = tree.children[0]
		return LiteralType(loc=_loc_from_token(token), value=_literal_value(token))
	if kind == "array_type":
		element = _first_tree(tree)
		if element is None:
			raise ValueError("array type missing element type")
		return ArrayType(loc=_loc(tree), element=_build_type(element))
	if kind == "union_type":
		return UnionType(loc=_loc(tree), types=[_build_type(member) for member in _union_members(tree)])
	if kind == "fn_type":
		nodes = [child for child in tree.children if isinstance(child, Tree)]
		params_node = _child(tree, "params")
		type_params_node = _child(tree, "type_params")
		return FunctionType(
			loc=_loc(tree),
			type_params=_build_type_params(type_params_node) if type_params_node is not None else None,
			params=[_build_param(child) for child in _children(params_node, "param")] if params_node is not None else [],
			return_type=_build_type(nodes[-1]),
		)
	raise ValueError(f"Unsupported type node: {kind}")


def _union_members(tree: Tree) -> List[Tree]:
	# `A | B | C` parses left-nested.
	members: List[Tree] = []
	for child in tree.children:
		if not isinstance(child, Tree):
			continue
		if _name(child) == "union_type":
			members.extend(_union_members(child))
		else:
			members.append(child)
	return members


def _build_type_args(tree: Tree) -> List[TypeNode]:
	return [_build_type(child) for child in tree.children if isinstance(child, Tree)]


def _build_type_params(tree: Tree) -> List[TypeParameter]:
	params: List[TypeParameter] = []
	for node in _children(tree, "type_param"):
		name_token = _token(node, "NAME")
		constraint_node = _child(node, "type_constraint")
		default_node = _child(node, "type_default")
		params.append(
			TypeParameter(
				loc=_loc_from_token(name_token),
				name=name_token.value,
				constraint=_build_annotation(constraint_node),
				default=_build_annotation(default_node),
			)
		)
	return params


def _build_expr(node) -> Expr:
	if not isinstance(node, Tree):
		raise TypeError(f"Unexpected node type: {type(node)}")
	name = _name(node)
	if name == "name":
		token = node.children[0]
		if token.value in _KEYWORD_LITERALS:
			return Literal(loc=_loc_from_token(token), value=_KEYWORD_LITERALS[token.value], raw=token.value)
		return Identifier(loc=_loc_from_token(token), name=token.value)
	if name in {"number", "string"}:
		token = node.children[0]
		return Literal(loc=_loc_from_token(token), value=_literal_value(token), raw=token.value)
	if name == "assign_expr":
		target_node, value_node = [child for child in node.children if isinstance(child, Tree)]
		return AssignmentExpression(loc=_loc(node), target=_build_expr(target_node), value=_build_expr(value_node))
	if name == "binary":
		left_node, op_token, right_node = node.children
		return BinaryExpression(
			loc=_loc_from_token(op_token),
			op=op_token.value,
			left=_build_expr(left_node),
			right=_build_expr(right_node),
		)
	if name == "member":
		object_node = node.children[0]
		prop_token = node.children[-1]
		return MemberExpression(loc=_loc(node), object=_build_expr(object_node), property=prop_token.value)
	if name == "call":
		callee_node = node.children[0]
		args_node = _child(node, "args")
		type_args_node = _child(node, "type_args")
		return CallExpression(
			loc=_loc(node),
			callee=_build_expr(callee_node),
			type_args=_build_type_args(type_args_node) if type_args_node is not None else None,
			arguments=_build_args(args_node),
		)
	if name == "new_expr":
		callee_node = _child(node, "new_callee")
		if callee_node is None:
			raise ValueError("new expression missing callee")
		type_args_node = _child(node, "type_args")
		return NewExpression(
			loc=_loc(node),
			callee=_build_new_callee(callee_node),
			type_args=_build_type_args(type_args_node) if type_args_node is not None else None,
			arguments=_build_args(_child(node, "args")),
		)
	if name == "arrow_fn":
		return _build_arrow_fn(node)
	if name == "function_expr":
		return _build_function_expr(node)
	if name == "class_expr":
		return _build_class_expr(node)
	raise ValueError(f"Unsupported expression node: {name}")


def _build_args(tree: Optional[Tree]) -> List[Expr]:
	if tree is None:
		return []
	return [_build_expr(child) for child in tree.children if isinstance(child, Tree)]


def _build_new_callee(tree: Tree) -> Expr:
	tokens = [child for child in tree.children if isinstance(child, Token) and child.type == "NAME"]
	expr: Expr = Identifier(loc=_loc_from_token(tokens[0]), name=tokens[0].value)
	for token in tokens[1:]:
		expr = MemberExpression(loc=_loc_from_token(token), object=expr, property=token.value)
	return expr


def _literal_value(token: Token) -> object:
	if token.type == "STRING":
		return ast.literal_eval(token.value)
	if "." in token.value:
		return float(token.value)
	return int(token.value)


def _child(tree: Tree, name: str) -> Optional[Tree]:
	return next((child for child in tree.children if isinstance(child, Tree) and _name(child) == name), None)


def _children(tree: Tree, name: str) -> List[Tree]:
	return [child for child in tree.children if isinstance(child, Tree) and _name(child) == name]


def _first_tree(tree: Tree) -> Optional[Tree]:
	return next((child for child in tree.children if isinstance(child, Tree)), None)


def _token(tree: Tree, ttype: str, *, required: bool = True) -> Optional[Token]:
	token = next((child for child in tree.children if isinstance(child, Token) and child.type == ttype), None)
	if token is None and required:
		raise ValueError(f"{_name(tree)} missing {ttype} token")
	return token


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=getattr(meta, "line", 1), column=getattr(meta, "column", 1))


def _loc_from_token(token: Token) -> Located:
	return Located(line=token.line, column=token.column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)
