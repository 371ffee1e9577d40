"""Tests for the tokenhunter command line."""

import json
from pathlib import Path

from tokenhunter.cli import build_arg_parser, main


def test_parser_defaults() -> None:
    args = build_arg_parser().parse_args([])
    assert args.path == "."
    assert args.report == "summary"
    assert not args.fix
    assert args.category is None
    assert args.threads >= 1


def test_clean_tree_exits_zero(tmp_path: Path, write_file) -> None:
    write_file("a.tsx", '<div className="bg-surface p-base" />')
    assert main([str(tmp_path), "--strict"]) == 0


def test_strict_mode_and_json_report(tmp_path: Path, write_file) -> None:
    write_file("a.tsx", '<div className="bg-white p-5" />')
    out = tmp_path / "report.json"
    assert main([str(tmp_path), "--report", "detailed", "--json", str(out)]) == 0
    assert main([str(tmp_path), "--strict"]) == 1

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["totalViolations"] == 2
    assert [v["className"] for v in data["violations"]] == ["bg-white", "p-5"]
    assert data["run"]["report"] == "detailed"


def test_fix_flag_rewrites_files(tmp_path: Path, write_file) -> None:
    path = write_file("a.tsx", 'const a = "p-4";\n')
    assert main([str(tmp_path), "--fix"]) == 0
    assert path.read_text(encoding="utf-8") == 'const a = "p-base";\n'


def test_tokens_from_environment(tmp_path: Path, write_file, monkeypatch) -> None:
    write_file("src/a.tsx", 'const a = "bg-brand-500";\n')
    tokens = write_file("tokens.json", json.dumps({"palettes": ["brand"], "shades": ["500"]}))
    monkeypatch.setenv("TOKENHUNTER_TOKENS", str(tokens))
    assert main([str(tmp_path / "src"), "--strict"]) == 1
    monkeypatch.delenv("TOKENHUNTER_TOKENS")
    assert main([str(tmp_path / "src"), "--strict"]) == 0


def test_configuration_errors_exit_two(tmp_path: Path, write_file) -> None:
    assert main([str(tmp_path / "missing")]) == 2
    bad = write_file("tokens.json", "{oops")
    assert main([str(tmp_path), "--tokens", str(bad)]) == 2
