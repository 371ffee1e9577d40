from __future__ import annotations

import argparse
import datetime as dt
import os
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from .console import RichLogger
from .input_sources import DEFAULT_EXTENSIONS, iter_source_files
from .models import CATEGORY_PRIORITY, DEFAULT_CATEGORIES, ERROR
from .results import REPORT_MODES, ResultWriter, ValidationReport
from .tokens import TokenDefinitions, load_token_definitions
from .validate import default_thread_count, validate_tokens

TOKENS_ENV_VAR = "TOKENHUNTER_TOKENS"


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="tokenhunter",
        description="Find non-semantic Tailwind utility classes and suggest semantic design tokens.",
    )
    ap.add_argument("path", nargs="?", default=".", help="Directory or file to scan (default: current directory).")
    ap.add_argument("--fix", action="store_true", help="Rewrite exact suggestions in place.")
    ap.add_argument(
        "--report",
        choices=REPORT_MODES,
        default="summary",
        help="summary lists the first 10 violations, detailed lists all (default: summary).",
    )
    ap.add_argument("--include-tests", action="store_true", help="Also scan *.test.* and *.spec.* files.")
    ap.add_argument(
        "--category",
        action="append",
        choices=CATEGORY_PRIORITY,
        help=f"Category to check (repeatable; default: {', '.join(DEFAULT_CATEGORIES)}).",
    )
    ap.add_argument(
        "--ext",
        action="append",
        help=f"File extension to scan (repeatable; default: {' '.join(DEFAULT_EXTENSIONS)}).",
    )
    ap.add_argument("--ignore", action="append", default=[], help="Extra glob to ignore (repeatable).")
    ap.add_argument(
        "--tokens",
        help=f"Token definitions JSON file. You can also set {TOKENS_ENV_VAR} env var.",
    )
    ap.add_argument(
        "--threads",
        type=int,
        default=default_thread_count(),
        help="Worker threads for scanning and fixing (default: auto).",
    )
    ap.add_argument("--json", help="Write the full report as JSON to this file.")
    ap.add_argument("--strict", action="store_true", help="Exit with code 1 when violations are found.")
    ap.add_argument("-v", "--verbose", action="store_true", help="Verbose debug logs")
    return ap


def _resolve_tokens_path(explicit: Optional[str]) -> Optional[Path]:
    if explicit and explicit.strip():
        return Path(explicit.strip()).expanduser()
    value = os.environ.get(TOKENS_ENV_VAR, "")
    if value.strip():
        return Path(value.strip()).expanduser()
    return None


def _load_tokens(path: Optional[Path], logger: RichLogger) -> Optional[TokenDefinitions]:
    if path is None:
        return None
    tokens = load_token_definitions(path)
    logger.info(f"Token definitions: {path}")
    return tokens


def _print_summary(console: Console, report: ValidationReport) -> None:
    summary = report.summary
    table = Table(title="Token Violations", header_style="bold")
    table.add_column("Type", style="cyan")
    table.add_column("Count", justify="right")
    for category in CATEGORY_PRIORITY:
        count = summary.by_type.get(category, 0)
        if count:
            table.add_row(category, str(count))
    for severity, count in sorted(summary.by_severity.items()):
        style = "red" if severity == ERROR else "yellow"
        table.add_row(f"[{style}]{severity}[/{style}]", str(count))
    table.add_row("files scanned", str(summary.total_files))
    table.add_row("files with violations", str(summary.files_with_violations))
    table.add_row("[bold]total[/bold]", f"[bold]{summary.total_violations}[/bold]")
    console.print(table)


def _print_violations(console: Console, report: ValidationReport) -> None:
    if not report.violations:
        return
    shown = len(report.violations)
    total = report.summary.total_violations
    title = "Violations" if shown == total else f"Violations (first {shown} of {total})"
    table = Table(title=title, header_style="bold")
    table.add_column("Location", style="cyan", no_wrap=True)
    table.add_column("Class")
    table.add_column("Type")
    table.add_column("Suggestion", style="green")
    for v in report.violations:
        severity_style = "red" if v.severity == ERROR else "yellow"
        table.add_row(
            f"{v.file}:{v.usage.line}:{v.usage.column}",
            v.class_name,
            f"[{severity_style}]{v.category}[/{severity_style}]",
            v.suggestion.text if v.suggestion is not None else "-",
        )
    console.print(table)


def _print_suggestions(console: Console, report: ValidationReport) -> None:
    if not report.suggestions:
        return
    table = Table(title="Top Migration Suggestions", header_style="bold")
    table.add_column("From", style="cyan")
    table.add_column("To", style="green")
    table.add_column("Count", justify="right")
    table.add_column("Files", justify="right")
    for entry in report.suggestions:
        table.add_row(entry.from_token, entry.to, str(entry.count), str(len(entry.files)))
    console.print(table)


def run(args: argparse.Namespace) -> int:
    console = Console()
    logger = RichLogger(console=Console(stderr=True), verbose=args.verbose)
    started_at = dt.datetime.now().isoformat(timespec="seconds")
    root = Path(args.path).expanduser()
    extensions: List[str] = args.ext or list(DEFAULT_EXTENSIONS)

    try:
        tokens = _load_tokens(_resolve_tokens_path(args.tokens), logger)
        # Discovery runs once up front so the progress bar has a total.
        files = iter_source_files(root, args.include_tests, extensions, args.ignore)
    except FileNotFoundError as exc:
        logger.error(f"Path not found: {exc}")
        return 2
    except (OSError, ValueError) as exc:
        logger.error(str(exc))
        return 2

    logger.info(f"Scanning {len(files)} file(s) under {root}")
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold]Scanning files"),
        BarColumn(bar_width=None),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=logger.console,
        disable=args.verbose,
    )
    try:
        with progress:
            task_id = progress.add_task("scan", total=len(files))
            report = validate_tokens(
                root,
                fix=args.fix,
                report=args.report,
                include_tests=args.include_tests,
                categories=args.category,
                tokens=tokens,
                threads=args.threads,
                logger=logger,
                on_file_done=lambda source, violations: progress.advance(task_id),
                extensions=extensions,
                extra_ignores=args.ignore,
                files=files,
            )
    except (OSError, ValueError) as exc:
        logger.error(str(exc))
        return 2

    _print_summary(console, report)
    _print_violations(console, report)
    _print_suggestions(console, report)

    if args.json:
        run_metadata: Dict[str, object] = {
            "path": str(root),
            "report": args.report,
            "fix": args.fix,
            "categories": list(args.category or DEFAULT_CATEGORIES),
            "extensions": extensions,
            "threads": args.threads,
            "started_at": started_at,
            "finished_at": dt.datetime.now().isoformat(timespec="seconds"),
        }
        try:
            ResultWriter(Path(args.json).expanduser(), logger).write(report, run_metadata)
        except OSError as exc:
            logger.error(f"Failed to write report: {exc}")
            return 2

    total = report.summary.total_violations
    if total:
        logger.warn(f"{total} violation(s) in {report.summary.files_with_violations} file(s)")
    else:
        logger.done("No token violations found")
    return 1 if args.strict and total else 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
