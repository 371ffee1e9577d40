"""End-to-end tests for validate_tokens over temporary source trees."""

from pathlib import Path

import pytest

from tokenhunter.validate import normalize_categories, validate_tokens

COMPONENT = """import React from 'react'

export function TestComponent() {
  return (
    <div className="bg-neutral-100 text-primary-500 border-error-700">
      <span className="hover:bg-neutral-50 text-neutral-900">Test</span>
    </div>
  )
}
"""

TWENTY = [f"bg-neutral-{s}" for s in (50, 100, 200, 300, 400, 500, 600, 700, 800, 900)] + [
    f"bg-primary-{s}" for s in (50, 100, 200, 300, 400, 500, 600, 700, 800, 900)
]


def test_detects_color_violations(tmp_path: Path, write_file) -> None:
    write_file("component.tsx", COMPONENT)
    report = validate_tokens(tmp_path)

    assert report.summary.total_violations == 5
    assert report.summary.files_with_violations == 1
    assert {v.class_name for v in report.violations} == {
        "bg-neutral-100",
        "text-primary-500",
        "border-error-700",
        "hover:bg-neutral-50",
        "text-neutral-900",
    }
    assert all((v.category, v.severity) == ("color", "error") for v in report.violations)
    assert report.summary.by_type == {"color": 5}
    assert report.summary.by_severity == {"error": 5}


def test_cn_calls_and_dark_mode(tmp_path: Path, write_file) -> None:
    write_file("a.tsx", "<div className={cn('bg-white', active && 'bg-primary-500')} />\n")
    write_file("b.tsx", '<div className="bg-white dark:bg-neutral-950" />\n')
    report = validate_tokens(tmp_path, report="detailed")
    assert [(v.file, v.class_name) for v in report.violations] == [
        ("a.tsx", "bg-white"),
        ("a.tsx", "bg-primary-500"),
        ("b.tsx", "bg-white"),
        ("b.tsx", "dark:bg-neutral-950"),
    ]


def test_template_literals(tmp_path: Path, write_file) -> None:
    write_file(
        "a.tsx",
        "<div className={`bg-neutral-100 ${status === 'error' ? 'text-error-700' : 'text-success-700'}`} />\n",
    )
    names = [v.class_name for v in validate_tokens(tmp_path, report="detailed").violations]
    assert "bg-neutral-100" in names
    assert "text-error-700" in names
    assert "text-success-700" in names


def test_semantic_tokens_are_clean(tmp_path: Path, write_file) -> None:
    write_file(
        "a.tsx",
        '<div className="bg-surface text-foreground border-border p-base h-size-sm w-full">\n'
        '  <button className="hover:bg-interactive-hover bg-interactive-active">Click</button>\n'
        "</div>\n",
    )
    report = validate_tokens(tmp_path)
    assert report.summary.total_violations == 0
    assert report.violations == []
    assert report.summary.total_files == 1


def test_test_files_are_opt_in(tmp_path: Path, write_file) -> None:
    write_file("component.tsx", '<div className="bg-neutral-100" />')
    write_file("component.test.tsx", '<div className="bg-primary-500" />')
    write_file("component.spec.ts", 'const c = "bg-primary-500"')

    default = validate_tokens(tmp_path)
    assert default.summary.total_files == 1
    assert [v.class_name for v in default.violations] == ["bg-neutral-100"]

    with_tests = validate_tokens(tmp_path, include_tests=True)
    assert with_tests.summary.total_files == 3
    assert with_tests.summary.total_violations == 3


def test_ignored_directories_and_nested_files(tmp_path: Path, write_file) -> None:
    write_file("app.tsx", '<div className="bg-neutral-100" />')
    write_file("components/ui/button.tsx", '<button className="text-primary-500" />')
    write_file("node_modules/pkg/index.ts", 'const c = "bg-primary-500"')
    write_file("dist/index.ts", 'const c = "bg-primary-500"')
    write_file("packages/ui-library/src/styles/colors.ts", 'const c = "bg-primary-500"')
    write_file("notes.md", '"bg-primary-500"')

    report = validate_tokens(tmp_path)
    assert report.summary.total_files == 2
    assert report.summary.files_with_violations == 2
    assert report.summary.total_violations == 2
    assert {v.file for v in report.violations} == {"app.tsx", "components/ui/button.tsx"}


def test_palette_variables(tmp_path: Path, write_file) -> None:
    write_file("a.tsx", "const style = { color: 'var(--palette-primary-500)' }\n")
    report = validate_tokens(tmp_path)
    assert report.summary.total_violations == 1
    violation = report.violations[0]
    assert violation.class_name == "--palette-primary-500"
    assert (violation.category, violation.severity) == ("color", "error")
    assert violation.suggestion is None
    assert "suggestion" not in violation.to_dict()


def test_report_modes_cap_violation_list(tmp_path: Path, write_file) -> None:
    write_file("component.tsx", f'<div className="{" ".join(TWENTY)}" />')

    summary = validate_tokens(tmp_path, report="summary")
    assert summary.summary.total_violations == 20
    assert len(summary.violations) == 10

    detailed = validate_tokens(tmp_path, report="detailed")
    assert detailed.summary.total_violations == 20
    assert len(detailed.violations) == 20

    with pytest.raises(ValueError):
        validate_tokens(tmp_path, report="verbose")


def test_suggestion_summary(tmp_path: Path, write_file) -> None:
    write_file("comp1.tsx", '<div className="bg-neutral-100 text-neutral-500" />')
    write_file("comp2.tsx", '<div className="bg-neutral-100 border-neutral-200" />')
    report = validate_tokens(tmp_path)

    assert len(report.suggestions) == 3
    top = report.suggestions[0]
    assert top.from_token == "bg-neutral-100"
    assert top.count == 2
    assert top.files == {"comp1.tsx", "comp2.tsx"}
    assert top.to_dict()["files"] == ["comp1.tsx", "comp2.tsx"]


def test_numeric_suggestions_in_report(tmp_path: Path, write_file) -> None:
    write_file("a.tsx", '<div className="p-4 hover:p-5 -m-2 h-8 w-48" />')
    report = validate_tokens(tmp_path, report="detailed")
    assert [(v.class_name, v.category, v.suggestion.text) for v in report.violations] == [
        ("p-4", "spacing", "p-base"),
        ("hover:p-5", "spacing", "nearest: hover:p-base (1rem) or hover:p-md (0.75rem)"),
        ("-m-2", "spacing", "-m-sm"),
        ("h-8", "sizing", "h-size-sm"),
    ]
    assert report.summary.by_severity == {"warning": 4}


def test_button_context_comes_from_the_same_literal(tmp_path: Path, write_file) -> None:
    write_file("a.tsx", "cn('btn bg-primary-600', 'bg-primary-600')\n")
    report = validate_tokens(tmp_path)
    first, second = report.violations
    # Sibling classes rank the candidates but never make the color exact.
    assert first.suggestion.text == "nearest: bg-interactive-primary or bg-status-info-muted"
    assert not first.is_fixable
    assert second.suggestion.text == "nearest: bg-status-info-muted or bg-interactive-primary"
    assert not second.is_fixable


def test_overlapping_literals_agree_on_the_same_occurrence(tmp_path: Path, write_file) -> None:
    line = "const c = `btn ${on ? \"x bg-primary-600 y\" : \"\"}`;\n"
    path = write_file("a.tsx", line)
    report = validate_tokens(tmp_path, fix=True, report="detailed")
    hits = [v for v in report.violations if v.class_name == "bg-primary-600"]
    assert [v.usage.column for v in hits] == [26, 26]
    assert not any(v.is_fixable for v in hits)
    assert path.read_text(encoding="utf-8") == line


def test_unmapped_palette_shades_fall_back_to_the_family(tmp_path: Path, write_file) -> None:
    write_file("a.tsx", '<p className="text-error-700 bg-error-100" />')
    report = validate_tokens(tmp_path, report="detailed")
    texts = {v.class_name: v.suggestion for v in report.violations}
    assert texts["text-error-700"].text == "nearest: text-status-error-foreground"
    assert texts["bg-error-100"] is None


def test_explicit_file_list_skips_discovery(tmp_path: Path, write_file) -> None:
    chosen = write_file("a.tsx", 'const a = "p-4";')
    write_file("b.tsx", 'const b = "p-4";')
    report = validate_tokens(tmp_path, files=[chosen])
    assert report.summary.total_files == 1
    assert [v.file for v in report.violations] == ["a.tsx"]


def test_opt_in_categories(tmp_path: Path, write_file) -> None:
    write_file("a.tsx", '<div className="shadow border-2 rounded-2xl text-[13px] bg-gradient-to-r p-4" />')
    assert validate_tokens(tmp_path).summary.by_type == {"spacing": 1}

    report = validate_tokens(tmp_path, categories=["shadow", "border", "radius", "typography", "gradient"])
    assert report.summary.by_type == {"shadow": 1, "border": 1, "radius": 1, "typography": 1, "gradient": 1}


def test_unknown_category_is_rejected() -> None:
    with pytest.raises(ValueError):
        normalize_categories(["colour"])
    assert normalize_categories([" Color ", "color"]) == ("color",)


def test_scan_is_idempotent(tmp_path: Path, write_file) -> None:
    for i in range(6):
        write_file(f"src/c{i}.tsx", f'<div className="p-{i + 1} bg-neutral-{(i + 1) * 100} h-{i + 4}" />\n')
    first = validate_tokens(tmp_path, report="detailed", threads=4).to_dict()
    second = validate_tokens(tmp_path, report="detailed", threads=1).to_dict()
    assert first == second


def test_autofix_rewrites_exact_matches_only(tmp_path: Path, write_file) -> None:
    fixable = write_file("fixable.tsx", 'const a = "p-4 gap-2";\n')
    nearest = write_file("nearest.tsx", 'const b = "p-5";\n')
    before = nearest.read_bytes()

    report = validate_tokens(tmp_path, fix=True)

    text = fixable.read_text(encoding="utf-8")
    assert "p-base" in text and "gap-sm" in text
    assert text == 'const a = "p-base gap-sm";\n'
    assert nearest.read_bytes() == before
    # The report describes the tree before fixing.
    assert report.summary.total_violations == 3


def test_autofix_preserves_crlf_and_converges(tmp_path: Path, write_file) -> None:
    path = write_file("a.tsx", 'const a = "p-4 bg-white";\r\nconst b = "m-2 p-5";\r\n')
    validate_tokens(tmp_path, fix=True)
    assert path.read_bytes() == b'const a = "p-base bg-surface";\r\nconst b = "m-sm p-5";\r\n'

    again = validate_tokens(tmp_path, fix=True, report="detailed")
    assert [v.class_name for v in again.violations] == ["p-5"]
    assert path.read_bytes() == b'const a = "p-base bg-surface";\r\nconst b = "m-sm p-5";\r\n'


def test_single_file_target(tmp_path: Path, write_file) -> None:
    path = write_file("only.tsx", 'const a = "p-4";')
    report = validate_tokens(path)
    assert report.summary.total_files == 1
    assert report.violations[0].file == "only.tsx"


def test_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        validate_tokens(tmp_path / "missing")
