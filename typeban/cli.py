# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line entry point (`typeban`, `python -m typeban`).

Exit codes: 0 when no errors were reported, 1 when at least one error-level
diagnostic was reported, 2 when the configuration is unusable or no source
files were found. Configuration problems are reported before any file is
linted.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from typeban.config import DEFAULT_CONFIG_NAME, ConfigError, LintConfig, load_config_json
from typeban.core.diagnostics import Diagnostic
from typeban.linter import Linter
from typeban.rules import RuleOptionsError
from typeban.rules.ban_types import BanTypesConfigError

DEFAULT_EXTENSIONS = (".ts",)


def main(argv: Optional[List[str]] = None) -> int:
	args = _parse_args(argv)
	try:
		config = _load_config(args)
		linter = Linter(config)
	except (ConfigError, RuleOptionsError, BanTypesConfigError) as err:
		return _fail(args, f"configuration error: {err}")

	extensions = tuple(args.ext or DEFAULT_EXTENSIONS)
	files = sorted(_collect_files(args.paths, extensions))
	if not files:
		return _fail(args, "no source files found")

	diagnostics: List[Diagnostic] = []
	for path in files:
		diagnostics.extend(linter.lint_file(path))

	exit_code = 1 if any(d.severity == "error" for d in diagnostics) else 0
	if args.json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [d.to_json() for d in diagnostics]}))
	else:
		for diag in diagnostics:
			print(diag.format(), file=sys.stderr)
	return exit_code


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
	ap = argparse.ArgumentParser(prog="typeban", description="Report banned type names in type annotations")
	ap.add_argument("paths", nargs="*", default=["."], help="files or directories to lint (default: .)")
	ap.add_argument(
		"-c",
		"--config",
		type=Path,
		help=f"path to a JSON config file (default: ./{DEFAULT_CONFIG_NAME} when present)",
	)
	ap.add_argument(
		"--ban",
		action="append",
		default=[],
		metavar="NAME[=MESSAGE]",
		help="ban a type name pattern, with an optional message appended to the report (repeatable)",
	)
	ap.add_argument(
		"--ext",
		action="append",
		metavar=".EXT",
		help="source file extension to collect from directories (repeatable; default: .ts)",
	)
	ap.add_argument(
		"--json",
		action="store_true",
		help="emit diagnostics as JSON (phase/rule/message/severity/file/line/column/data)",
	)
	return ap.parse_args(argv)


def _load_config(args: argparse.Namespace) -> LintConfig:
	config = LintConfig()
	config_path = args.config
	if config_path is None:
		default_path = Path.cwd() / DEFAULT_CONFIG_NAME
		if default_path.is_file():
			config_path = default_path
	if config_path is not None:
		config = load_config_json(config_path)
	return config.merged(LintConfig.from_cli_bans(args.ban))


def _collect_files(targets: Iterable[str], extensions: tuple[str, ...]) -> Iterable[Path]:
	seen = set()
	for target in targets:
		base = Path(target)
		if base.is_file():
			candidates: Iterable[Path] = [base]
		elif base.is_dir():
			candidates = (p for p in base.rglob("*") if p.is_file() and p.suffix in extensions)
		else:
			continue
		for path in candidates:
			resolved = path.resolve()
			if resolved not in seen:
				seen.add(resolved)
				yield path


def _fail(args: argparse.Namespace, message: str) -> int:
	if args.json:
		diag = Diagnostic(message=message, phase="config")
		print(json.dumps({"exit_code": 2, "diagnostics": [diag.to_json()]}))
	else:
		print(f"typeban: error: {message}", file=sys.stderr)
	return 2


if __name__ == "__main__":
	raise SystemExit(main())
