# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from typeban import cli


def _write(path: Path, text: str) -> Path:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(text, encoding="utf-8")
	return path


def _run_json(argv, capsys):
	exit_code = cli.main([*argv, "--json"])
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == exit_code
	return exit_code, payload["diagnostics"]


def test_clean_file_exits_zero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path / "ok.ts", "let a: string\n")
	exit_code, diags = _run_json([str(src), "--ban", "Object"], capsys)
	assert exit_code == 0
	assert diags == []


def test_banned_type_exits_one_with_human_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path / "bad.ts", "let a: Object\n")
	exit_code = cli.main([str(src), "--ban", "Object= Use object instead."])
	assert exit_code == 1
	captured = capsys.readouterr()
	assert captured.out == ""
	assert captured.err.splitlines() == [
		f"{src}:1:8: error: Don't use Object as a type. Use object instead. [ban-types]",
	]


def test_json_output_shape(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path / "bad.ts", "const foo: Bar<A>;\n")
	exit_code, diags = _run_json([str(src), "--ban", "A"], capsys)
	assert exit_code == 1
	assert diags == [
		{
			"phase": "lint",
			"rule": "ban-types",
			"message": "Don't use A as a type.",
			"severity": "error",
			"file": str(src),
			"line": 1,
			"column": 16,
			"data": {"type": "A", "additionalMessage": ""},
			"notes": ["found in type argument position"],
		}
	]


def test_directory_collection_uses_extensions(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	_write(tmp_path / "src" / "b.ts", "let b: Foo\n")
	_write(tmp_path / "src" / "nested" / "a.ts", "let a: Foo\n")
	_write(tmp_path / "src" / "skip.js", "let c: Foo\n")
	_write(tmp_path / "src" / "c.mts", "let d: Foo\n")

	exit_code, diags = _run_json([str(tmp_path / "src"), "--ban", "Foo"], capsys)
	assert exit_code == 1
	assert [Path(d["file"]).name for d in diags] == ["b.ts", "a.ts"]

	exit_code, diags = _run_json([str(tmp_path / "src"), "--ban", "Foo", "--ext", ".mts"], capsys)
	assert [Path(d["file"]).name for d in diags] == ["c.mts"]


def test_explicit_file_is_linted_regardless_of_extension(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path / "script.txt", "let a: Foo\n")
	exit_code, diags = _run_json([str(src), "--ban", "Foo"], capsys)
	assert exit_code == 1
	assert len(diags) == 1


def test_config_file_is_loaded(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	config = _write(
		tmp_path / "rules.json",
		json.dumps({"format": "typeban", "version": 0, "rules": {"ban-types": [["Foo", " From file."]]}}),
	)
	src = _write(tmp_path / "a.ts", "let a: Foo\nlet b: Bar\n")
	exit_code, diags = _run_json([str(src), "-c", str(config), "--ban", "Foo= From flag.", "--ban", "Bar"], capsys)
	assert exit_code == 1
	assert [(d["data"]["type"], d["data"]["additionalMessage"]) for d in diags] == [
		("Foo", " From file."),
		("Bar", ""),
	]


def test_default_config_in_working_directory(
	tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
	_write(tmp_path / "typeban.json", json.dumps({"rules": {"ban-types": [["Foo"]]}}))
	_write(tmp_path / "main.ts", "let a: Foo\n")
	monkeypatch.chdir(tmp_path)
	exit_code, diags = _run_json([], capsys)
	assert exit_code == 1
	assert [d["file"] for d in diags] == ["main.ts"]


def test_warnings_do_not_fail_the_run(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	config = _write(
		tmp_path / "rules.json",
		json.dumps({"rules": {"ban-types": {"severity": "warning", "options": [["Foo"]]}}}),
	)
	src = _write(tmp_path / "a.ts", "let a: Foo\n")
	exit_code, diags = _run_json([str(src), "-c", str(config)], capsys)
	assert exit_code == 0
	assert [d["severity"] for d in diags] == ["warning"]


def test_syntax_error_is_reported_and_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path / "broken.ts", "let a: = 1\n")
	exit_code, diags = _run_json([str(src), "--ban", "Foo"], capsys)
	assert exit_code == 1
	assert diags[0]["phase"] == "parser"
	assert diags[0]["file"] == str(src)


def test_invalid_pattern_is_a_configuration_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path / "a.ts", "let a: Foo\n")
	exit_code = cli.main([str(src), "--ban", "Foo("])
	assert exit_code == 2
	err = capsys.readouterr().err
	assert err.startswith("typeban: error: configuration error:")


def test_invalid_config_json_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	config = _write(tmp_path / "rules.json", json.dumps({"rules": {"no-such-rule": []}}))
	src = _write(tmp_path / "a.ts", "let a: Foo\n")
	exit_code, diags = _run_json([str(src), "-c", str(config)], capsys)
	assert exit_code == 2
	assert len(diags) == 1
	diag = diags[0]
	assert "unknown rule 'no-such-rule'" in diag.pop("message")
	assert diag == {
		"phase": "config",
		"rule": None,
		"severity": "error",
		"file": None,
		"line": None,
		"column": None,
		"data": {},
		"notes": [],
	}


def test_empty_rules_config_is_a_configuration_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	config = _write(tmp_path / "rules.json", json.dumps({"rules": []}))
	src = _write(tmp_path / "a.ts", "let a: Foo\n")
	exit_code, diags = _run_json([str(src), "-c", str(config)], capsys)
	assert exit_code == 2
	assert "rules must be a JSON object" in diags[0]["message"]


def test_no_source_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	exit_code = cli.main([str(tmp_path), "--ban", "Foo"])
	assert exit_code == 2
	assert "no source files found" in capsys.readouterr().err
