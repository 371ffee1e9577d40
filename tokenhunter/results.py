from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .console import RichLogger
from .models import (
    Exact,
    MigrationSuggestionSummary,
    Nearest,
    ScanResult,
    SourceFile,
    Violation,
)

SUMMARY_VIOLATION_LIMIT = 10
SUGGESTION_LIMIT = 20
REPORT_MODES = ("summary", "detailed")


@dataclass
class ReportSummary:
    total_files: int = 0
    files_with_violations: int = 0
    total_violations: int = 0
    by_type: Dict[str, int] = field(default_factory=dict)
    by_severity: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "totalFiles": self.total_files,
            "filesWithViolations": self.files_with_violations,
            "totalViolations": self.total_violations,
            "byType": dict(self.by_type),
            "bySeverity": dict(self.by_severity),
        }


@dataclass
class ValidationReport:
    violations: List[Violation]
    summary: ReportSummary
    suggestions: List[MigrationSuggestionSummary]

    def to_dict(self) -> Dict[str, object]:
        return {
            "violations": [v.to_dict() for v in self.violations],
            "summary": self.summary.to_dict(),
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


class ResultStore:
    """Collects per-file violations from worker threads.

    Each file entry is written once, by the worker that scanned it. The
    merged ``ScanResult`` is assembled in path order, independent of the
    order in which workers finish.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._per_file: Dict[str, List[Violation]] = {}
        self._sources: Dict[str, SourceFile] = {}
        self.files_seen = 0

    def add_file(self, source: SourceFile, violations: Iterable[Violation]) -> None:
        items = list(violations)
        with self._lock:
            if source.label in self._sources:
                raise ValueError(f"File already recorded: {source.label}")
            self.files_seen += 1
            self._sources[source.label] = source
            if items:
                self._per_file[source.label] = items

    def scan_result(self) -> ScanResult:
        with self._lock:
            per_file = {label: list(self._per_file[label]) for label in sorted(self._per_file)}
            sources = dict(self._sources)
            files_seen = self.files_seen
        violations = [v for items in per_file.values() for v in items]
        return ScanResult(violations=violations, per_file=per_file, sources=sources, total_files=files_seen)


def summarize(result: ScanResult) -> ReportSummary:
    summary = ReportSummary(
        total_files=result.total_files,
        files_with_violations=sum(1 for items in result.per_file.values() if items),
        total_violations=len(result.violations),
    )
    for violation in result.violations:
        summary.by_type[violation.category] = summary.by_type.get(violation.category, 0) + 1
        summary.by_severity[violation.severity] = summary.by_severity.get(violation.severity, 0) + 1
    return summary


def migration_suggestions(violations: Iterable[Violation], top_n: Optional[int] = None) -> List[MigrationSuggestionSummary]:
    """Rank distinct ``from -> to`` pairs by how often they occur."""
    entries: Dict[tuple[str, str], MigrationSuggestionSummary] = {}
    for violation in violations:
        if not isinstance(violation.suggestion, (Exact, Nearest)):
            continue
        key = (violation.class_name, violation.suggestion.text)
        entry = entries.get(key)
        if entry is None:
            entry = entries[key] = MigrationSuggestionSummary(from_token=key[0], to=key[1])
        entry.count += 1
        entry.files.add(violation.file)
    # sorted() is stable: ties keep first-seen order.
    ranked = sorted(entries.values(), key=lambda e: e.count, reverse=True)
    return ranked if top_n is None else ranked[:top_n]


def build_report(
    result: ScanResult,
    report: str = "summary",
    suggestion_limit: int = SUGGESTION_LIMIT,
) -> ValidationReport:
    if report not in REPORT_MODES:
        raise ValueError(f"Unknown report mode: {report!r} (expected one of {', '.join(REPORT_MODES)})")
    violations = result.violations if report == "detailed" else result.violations[:SUMMARY_VIOLATION_LIMIT]
    return ValidationReport(
        violations=list(violations),
        summary=summarize(result),
        suggestions=migration_suggestions(result.violations, suggestion_limit),
    )


class ResultWriter:
    def __init__(self, out_path: Path, logger: RichLogger):
        self.out_path = out_path
        self.logger = logger

    def write(self, report: ValidationReport, run_metadata: Optional[Dict[str, object]] = None) -> None:
        payload = report.to_dict()
        if run_metadata:
            payload["run"] = run_metadata
        self.out_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.out_path.with_suffix(self.out_path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
        tmp_path.replace(self.out_path)
        self.logger.done(f"Report written to: {self.out_path}")
