# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from typeban.rules.ban_types import BanTypesConfigError, compile_ruleset, match_name


def test_compile_keeps_entry_order_and_messages() -> None:
	ruleset = compile_ruleset([["Foo", "no foo"], ["Bar"], ["Baz", None]])
	assert [rule.pattern.pattern for rule in ruleset] == ["^Foo$", "^Bar$", "^Baz$"]
	assert [rule.message for rule in ruleset] == ["no foo", "", ""]


def test_compile_empty_and_missing_entries() -> None:
	assert compile_ruleset([]) == ()
	assert compile_ruleset(None) == ()


def test_compiled_ruleset_is_immutable() -> None:
	ruleset = compile_ruleset([["Foo"]])
	assert isinstance(ruleset, tuple)
	with pytest.raises(AttributeError):
		ruleset[0].message = "changed"  # type: ignore[misc]


def test_invalid_pattern_is_a_config_error() -> None:
	with pytest.raises(BanTypesConfigError) as excinfo:
		compile_ruleset([["Ok"], ["Foo("]])
	assert excinfo.value.index == 1
	assert "Foo(" in str(excinfo.value)


@pytest.mark.parametrize(
	"entry",
	[
		"Foo",
		[],
		["Foo", "message", "extra"],
		[1],
		["Foo", 2],
	],
)
def test_malformed_entries_are_config_errors(entry) -> None:
	with pytest.raises(BanTypesConfigError):
		compile_ruleset([entry])


def test_match_name_is_anchored_and_first_match() -> None:
	ruleset = compile_ruleset([["Obj.*", "first"], ["Object", "second"]])
	assert match_name("Object", ruleset).message == "first"
	assert match_name("MyObject", ruleset) is None


def test_bare_alternation_binds_to_the_anchors() -> None:
	# `^Foo|Bar$`: each branch keeps only one anchor.
	ruleset = compile_ruleset([["Foo|Bar"]])
	assert match_name("FooX", ruleset) is not None
	assert match_name("XBar", ruleset) is not None
	assert match_name("XFooX", ruleset) is None


def test_grouped_alternation_matches_whole_names() -> None:
	ruleset = compile_ruleset([["(?:Foo|Bar)"]])
	assert match_name("Foo", ruleset) is not None
	assert match_name("Bar", ruleset) is not None
	assert match_name("FooX", ruleset) is None


def test_match_name_ignores_missing_names() -> None:
	ruleset = compile_ruleset([[".*"]])
	assert match_name(None, ruleset) is None
	assert match_name(1, ruleset) is None
	assert match_name("", ruleset) is not None
