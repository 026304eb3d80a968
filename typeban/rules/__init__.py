# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Rule registry: rule id -> rule class."""

from .ban_types import BanTypes
from .meta import RuleMeta, RuleOptionsError, validate_options

RULES = {
	BanTypes.rule_id: BanTypes,
}

__all__ = ["RULES", "BanTypes", "RuleMeta", "RuleOptionsError", "validate_options"]
