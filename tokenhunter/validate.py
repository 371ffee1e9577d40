"""Pipeline entry point: discover, scan, aggregate, and optionally fix.

``validate_tokens`` is what the CLI runs and what other tools call
directly. Everything it computes comes from one scan; the autofix pass
runs after the report is built, so the report always describes the
files as they were before fixing.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .console import RichLogger
from .fixer import apply_fixes
from .input_sources import DEFAULT_EXTENSIONS, iter_source_files
from .migration import DEFAULT_TABLES, MigrationTables
from .models import CATEGORY_PRIORITY, DEFAULT_CATEGORIES
from .results import REPORT_MODES, ValidationReport, build_report
from .scanner import FileDoneCallback, Scanner
from .tokens import DEFAULT_TOKENS, TokenDefinitions


def default_thread_count() -> int:
    return min(32, (os.cpu_count() or 4) + 4)


def normalize_categories(categories: Optional[Iterable[str]]) -> tuple[str, ...]:
    if categories is None:
        return DEFAULT_CATEGORIES
    chosen = []
    for raw in categories:
        name = raw.strip().lower()
        if not name:
            continue
        if name not in CATEGORY_PRIORITY:
            raise ValueError(f"Unknown category: {raw!r} (expected one of {', '.join(CATEGORY_PRIORITY)})")
        if name not in chosen:
            chosen.append(name)
    if not chosen:
        raise ValueError("At least one category must be enabled")
    return tuple(chosen)


def validate_tokens(
    path: Union[str, Path] = ".",
    fix: bool = False,
    report: str = "summary",
    include_tests: bool = False,
    categories: Optional[Iterable[str]] = None,
    tokens: Optional[TokenDefinitions] = None,
    tables: Optional[MigrationTables] = None,
    threads: Optional[int] = None,
    logger: Optional[RichLogger] = None,
    on_file_done: Optional[FileDoneCallback] = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    extra_ignores: Iterable[str] = (),
    files: Optional[Sequence[Path]] = None,
) -> ValidationReport:
    """Scan ``path`` and return the report.

    ``files`` skips discovery when the caller has already listed the
    sources under ``path``.
    """
    if report not in REPORT_MODES:
        raise ValueError(f"Unknown report mode: {report!r} (expected one of {', '.join(REPORT_MODES)})")
    logger = logger or RichLogger.silent()
    workers = threads if threads and threads > 0 else default_thread_count()
    root = Path(path).expanduser()

    if files is None:
        files = iter_source_files(root, include_tests, extensions, extra_ignores, logger)
    # A single-file target is labelled relative to its directory.
    base = root.parent if root.is_file() else root
    logger.debug(f"Discovered {len(files)} file(s) under {root}")

    scanner = Scanner(
        tokens=tokens or DEFAULT_TOKENS,
        tables=tables or DEFAULT_TABLES,
        categories=normalize_categories(categories),
        logger=logger,
    )
    result = scanner.scan_files(files, base, workers, on_file_done)
    validation = build_report(result, report)

    if fix:
        applied = apply_fixes(result.per_file, result.sources, workers, logger)
        total = sum(applied.values())
        if total:
            logger.info(f"Applied {total} fix(es) across {sum(1 for n in applied.values() if n)} file(s)")
        else:
            logger.info("No exact fixes to apply")
    return validation
