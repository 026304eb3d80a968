# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Syntax tree for the source language.

Every node class carries a `kind` class attribute drawn from the closed
`NodeKind` enumeration; the walker and the rules dispatch on it. Child
nodes are ordinary dataclass fields declared in source order, which is the
order the walker visits them in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union


class NodeKind(str, Enum):
	PROGRAM = "Program"
	BLOCK = "Block"
	VARIABLE_DECLARATION = "VariableDeclaration"
	VARIABLE_DECLARATOR = "VariableDeclarator"
	FUNCTION_DECLARATION = "FunctionDeclaration"
	FUNCTION_EXPRESSION = "FunctionExpression"
	ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
	PARAM = "Param"
	CLASS_DECLARATION = "ClassDeclaration"
	CLASS_EXPRESSION = "ClassExpression"
	CLASS_HERITAGE = "ClassHeritage"
	METHOD_DEFINITION = "MethodDefinition"
	PROPERTY_DEFINITION = "PropertyDefinition"
	RETURN_STATEMENT = "ReturnStatement"
	EXPRESSION_STATEMENT = "ExpressionStatement"
	IDENTIFIER = "Identifier"
	LITERAL = "Literal"
	MEMBER_EXPRESSION = "MemberExpression"
	CALL_EXPRESSION = "CallExpression"
	NEW_EXPRESSION = "NewExpression"
	ASSIGNMENT_EXPRESSION = "AssignmentExpression"
	BINARY_EXPRESSION = "BinaryExpression"
	TYPE_REFERENCE = "TypeReference"
	QUALIFIED_TYPE_REFERENCE = "QualifiedTypeReference"
	ARRAY_TYPE = "ArrayType"
	UNION_TYPE = "UnionType"
	FUNCTION_TYPE = "FunctionType"
	LITERAL_TYPE = "LiteralType"
	TYPE_PARAMETER = "TypeParameter"


@dataclass(frozen=True)
class Located:
	line: int
	column: int


class Node:
	kind: ClassVar[NodeKind]
	loc: Located


# Types

class TypeNode(Node):
	pass


@dataclass
class TypeReference(TypeNode):
	"""A named type, optionally instantiated: `Foo`, `Map<K, V>`."""

	kind: ClassVar[NodeKind] = NodeKind.TYPE_REFERENCE
	loc: Located
	name: str
	type_args: List[TypeNode] = field(default_factory=list)


@dataclass
class LiteralType(TypeNode):
	"""A string or number literal used as a type: `"on"`, `1`. Has no name."""

	kind: ClassVar[NodeKind] = NodeKind.LITERAL_TYPE
	loc: Located
	value: object


@dataclass
class QualifiedTypeReference(TypeNode):
	"""`ns.Foo`, `ns.Map<K, V>`. Has no single name; only its arguments are visited."""

	kind: ClassVar[NodeKind] = NodeKind.QUALIFIED_TYPE_REFERENCE
	loc: Located
	path: List[str]
	type_args: List[TypeNode] = field(default_factory=list)


@dataclass
class ArrayType(TypeNode):
	"""`T[]`. Has no name."""

	kind: ClassVar[NodeKind] = NodeKind.ARRAY_TYPE
	loc: Located
	element: TypeNode


@dataclass
class UnionType(TypeNode):
	"""`A | B`. Has no name."""

	kind: ClassVar[NodeKind] = NodeKind.UNION_TYPE
	loc: Located
	types: List[TypeNode]


@dataclass
class TypeParameter(Node):
	kind: ClassVar[NodeKind] = NodeKind.TYPE_PARAMETER
	loc: Located
	name: str
	constraint: Optional[TypeNode] = None
	default: Optional[TypeNode] = None


@dataclass
class Param(Node):
	kind: ClassVar[NodeKind] = NodeKind.PARAM
	loc: Located
	name: str
	type_annotation: Optional[TypeNode] = None
	optional: bool = False
	default: Optional["Expr"] = None


@dataclass
class FunctionType(TypeNode):
	"""A function signature used as a type: `<T = A>(x: T) => R`."""

	kind: ClassVar[NodeKind] = NodeKind.FUNCTION_TYPE
	loc: Located
	type_params: Optional[List[TypeParameter]]
	params: List[Param]
	return_type: Optional[TypeNode]


# Expressions

class Expr(Node):
	pass


@dataclass
class Identifier(Expr):
	kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER
	loc: Located
	name: str


@dataclass
class Literal(Expr):
	kind: ClassVar[NodeKind] = NodeKind.LITERAL
	loc: Located
	value: object
	raw: str


@dataclass
class MemberExpression(Expr):
	kind: ClassVar[NodeKind] = NodeKind.MEMBER_EXPRESSION
	loc: Located
	object: Expr
	property: str


@dataclass
class CallExpression(Expr):
	kind: ClassVar[NodeKind] = NodeKind.CALL_EXPRESSION
	loc: Located
	callee: Expr
	type_args: Optional[List[TypeNode]]
	arguments: List[Expr]


@dataclass
class NewExpression(Expr):
	kind: ClassVar[NodeKind] = NodeKind.NEW_EXPRESSION
	loc: Located
	callee: Expr
	type_args: Optional[List[TypeNode]]
	arguments: List[Expr]


@dataclass
class AssignmentExpression(Expr):
	kind: ClassVar[NodeKind] = NodeKind.ASSIGNMENT_EXPRESSION
	loc: Located
	target: Expr
	value: Expr


@dataclass
class BinaryExpression(Expr):
	kind: ClassVar[NodeKind] = NodeKind.BINARY_EXPRESSION
	loc: Located
	op: str
	left: Expr
	right: Expr


@dataclass
class Block(Node):
	kind: ClassVar[NodeKind] = NodeKind.BLOCK
	loc: Located
	body: List["Stmt"]


@dataclass
class FunctionExpression(Expr):
	"""Anonymous `function` expression; also the value of a class method."""

	kind: ClassVar[NodeKind] = NodeKind.FUNCTION_EXPRESSION
	loc: Located
	type_params: Optional[List[TypeParameter]]
	params: List[Param]
	return_type: Optional[TypeNode]
	body: Block


@dataclass
class ArrowFunctionExpression(Expr):
	kind: ClassVar[NodeKind] = NodeKind.ARROW_FUNCTION_EXPRESSION
	loc: Located
	type_params: Optional[List[TypeParameter]]
	params: List[Param]
	return_type: Optional[TypeNode]
	body: Union[Block, Expr]


@dataclass
class ClassHeritage(Node):
	"""`extends Base<Args>`."""

	kind: ClassVar[NodeKind] = NodeKind.CLASS_HERITAGE
	loc: Located
	name: str
	type_args: Optional[List[TypeNode]] = None


@dataclass
class MethodDefinition(Node):
	kind: ClassVar[NodeKind] = NodeKind.METHOD_DEFINITION
	loc: Located
	name: str
	value: FunctionExpression


@dataclass
class PropertyDefinition(Node):
	kind: ClassVar[NodeKind] = NodeKind.PROPERTY_DEFINITION
	loc: Located
	name: str
	type_annotation: Optional[TypeNode] = None
	optional: bool = False
	value: Optional[Expr] = None


ClassMember = Union[MethodDefinition, PropertyDefinition]


@dataclass
class ClassExpression(Expr):
	kind: ClassVar[NodeKind] = NodeKind.CLASS_EXPRESSION
	loc: Located
	type_params: Optional[List[TypeParameter]]
	heritage: Optional[ClassHeritage]
	body: List[ClassMember]


# Statements

class Stmt(Node):
	pass


@dataclass
class VariableDeclarator(Node):
	kind: ClassVar[NodeKind] = NodeKind.VARIABLE_DECLARATOR
	loc: Located
	name: str
	type_annotation: Optional[TypeNode] = None
	init: Optional[Expr] = None


@dataclass
class VariableDeclaration(Stmt):
	kind: ClassVar[NodeKind] = NodeKind.VARIABLE_DECLARATION
	loc: Located
	binder: str  # "const", "let" or "var"
	declarations: List[VariableDeclarator]


@dataclass
class FunctionDeclaration(Stmt):
	kind: ClassVar[NodeKind] = NodeKind.FUNCTION_DECLARATION
	loc: Located
	name: str
	type_params: Optional[List[TypeParameter]]
	params: List[Param]
	return_type: Optional[TypeNode]
	body: Block


@dataclass
class ClassDeclaration(Stmt):
	kind: ClassVar[NodeKind] = NodeKind.CLASS_DECLARATION
	loc: Located
	name: str
	type_params: Optional[List[TypeParameter]]
	heritage: Optional[ClassHeritage]
	body: List[ClassMember]


@dataclass
class ReturnStatement(Stmt):
	kind: ClassVar[NodeKind] = NodeKind.RETURN_STATEMENT
	loc: Located
	argument: Optional[Expr]


@dataclass
class ExpressionStatement(Stmt):
	kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_STATEMENT
	loc: Located
	expression: Expr


@dataclass
class Program(Node):
	kind: ClassVar[NodeKind] = NodeKind.PROGRAM
	loc: Located
	body: List[Stmt]
