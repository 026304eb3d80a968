# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared building blocks: source spans and diagnostics."""

from .diagnostics import Diagnostic
from .span import Span

__all__ = ["Diagnostic", "Span"]
