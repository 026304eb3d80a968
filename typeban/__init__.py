# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
typeban: report banned type names in TypeScript-style type annotations.

Layout:
  parser: lark grammar + syntax tree
  walker: generic pre-order tree walk with per-kind handlers
  rules:  rule registry (`ban-types`) and rule metadata
  linter: runs configured rules over a file and collects diagnostics
  cli:    `typeban` command
"""

__all__ = ["cli", "config", "core", "linter", "parser", "rules", "walker"]
