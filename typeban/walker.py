# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generic tree walker.

Visits every node of a tree once, depth-first and pre-order, following
dataclass fields in declaration order (which is source order for every node
in `typeban.parser.ast`). For each node whose kind has a registered handler
the handler is called before the node's children are visited.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Callable, Iterator, Mapping

from typeban.parser.ast import Node, NodeKind

Handler = Callable[[Node], None]


def iter_children(node: Node) -> Iterator[Node]:
	"""Yield the direct child nodes of `node` in source order."""
	if not is_dataclass(node):
		return
	for f in fields(node):
		value = getattr(node, f.name)
		if isinstance(value, Node):
			yield value
		elif isinstance(value, list):
			for item in value:
				if isinstance(item, Node):
					yield item


def iter_nodes(root: Node) -> Iterator[Node]:
	"""Yield `root` and all of its descendants, pre-order."""
	stack = [root]
	while stack:
		node = stack.pop()
		yield node
		stack.extend(reversed(list(iter_children(node))))


def walk(root: Node, handlers: Mapping[NodeKind, Handler]) -> None:
	for node in iter_nodes(root):
		handler = handlers.get(node.kind)
		if handler is not None:
			handler(node)


__all__ = ["Handler", "iter_children", "iter_nodes", "walk"]
