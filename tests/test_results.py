"""Tests for aggregation, the JSON contract and the report writer."""

import json
from pathlib import Path

import pytest

from tokenhunter.console import RichLogger
from tokenhunter.models import Advice, Candidate, Exact, Nearest, RawTokenUsage, SourceFile, Violation
from tokenhunter.results import ResultStore, ResultWriter, build_report, migration_suggestions


def _violation(file: str, token: str, suggestion=None, category: str = "color", severity: str = "error") -> Violation:
    usage = RawTokenUsage(file=file, line=1, column=1, raw_token=token, line_context=f'"{token}"')
    return Violation(usage, category, severity, suggestion)


def _store(entries) -> ResultStore:
    store = ResultStore()
    for label, violations in entries:
        store.add_file(SourceFile(path=Path(label), text="", display_name=label), violations)
    return store


def test_store_orders_files_and_rejects_duplicates() -> None:
    store = _store([("b.tsx", [_violation("b.tsx", "bg-white")]), ("a.tsx", [_violation("a.tsx", "bg-black")]), ("c.tsx", [])])
    result = store.scan_result()
    assert list(result.per_file) == ["a.tsx", "b.tsx"]
    assert [v.file for v in result.violations] == ["a.tsx", "b.tsx"]
    assert result.total_files == 3
    with pytest.raises(ValueError):
        store.add_file(SourceFile(path=Path("a.tsx"), text="", display_name="a.tsx"), [])


def test_advice_and_missing_suggestions_are_not_aggregated() -> None:
    violations = [
        _violation("a.tsx", "p-4", Exact("p-base"), "spacing", "warning"),
        _violation("b.tsx", "p-4", Exact("p-base"), "spacing", "warning"),
        _violation("a.tsx", "p-5", Nearest((Candidate("p-base", 0.25, "1rem"),)), "spacing", "warning"),
        _violation("a.tsx", "shadow-none", Advice("Remove class"), "shadow", "warning"),
        _violation("a.tsx", "bg-[#fff]"),
    ]
    ranked = migration_suggestions(violations)
    assert [(s.from_token, s.to, s.count) for s in ranked] == [
        ("p-4", "p-base", 2),
        ("p-5", "nearest: p-base (1rem)", 1),
    ]
    assert migration_suggestions(violations, top_n=1)[0].files == {"a.tsx", "b.tsx"}


def test_report_json_contract(tmp_path: Path) -> None:
    store = _store([("a.tsx", [_violation("a.tsx", "bg-white", Exact("bg-surface"))])])
    report = build_report(store.scan_result(), "detailed")
    out = tmp_path / "out" / "report.json"
    ResultWriter(out, RichLogger.silent()).write(report, {"path": "."})

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["violations"] == [
        {
            "file": "a.tsx",
            "line": 1,
            "column": 1,
            "className": "bg-white",
            "suggestion": "bg-surface",
            "context": '"bg-white"',
            "type": "color",
            "severity": "error",
        }
    ]
    assert data["summary"] == {
        "totalFiles": 1,
        "filesWithViolations": 1,
        "totalViolations": 1,
        "byType": {"color": 1},
        "bySeverity": {"error": 1},
    }
    assert data["suggestions"] == [{"from": "bg-white", "to": "bg-surface", "count": 1, "files": ["a.tsx"]}]
    assert data["run"] == {"path": "."}
    assert not (tmp_path / "out" / "report.json.tmp").exists()


def test_suggestion_limit() -> None:
    entries = [(f"f{i}.tsx", [_violation(f"f{i}.tsx", f"p-{i}", Exact(f"p-x{i}"), "spacing", "warning")]) for i in range(25)]
    report = build_report(_store(entries).scan_result())
    assert len(report.suggestions) == 20
    assert len(report.violations) == 10
