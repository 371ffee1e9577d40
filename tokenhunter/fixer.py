from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from .console import RichLogger
from .input_sources import read_text_preserving_newlines, write_text_preserving_newlines
from .models import Exact, SourceFile, Violation
from .text_utils import class_pattern


def eligible_fixes(violations: Sequence[Violation]) -> List[Violation]:
    """Exact-suggestion violations, bottom-to-top and right-to-left.

    Editing in this order never moves a column recorded for a violation
    that is still waiting to be applied.
    """
    fixable = [v for v in violations if isinstance(v.suggestion, Exact)]
    fixable.sort(key=lambda v: (v.usage.line, v.usage.column), reverse=True)
    return fixable


def apply_fixes_to_text(text: str, violations: Sequence[Violation], logger: Optional[RichLogger] = None) -> tuple[str, int]:
    """Return ``(new_text, applied)``; stale positions are skipped."""
    lines = text.split("\n")
    applied = 0
    for violation in eligible_fixes(violations):
        usage = violation.usage
        if usage.line < 1 or usage.line > len(lines):
            _skip(logger, violation, "line out of range")
            continue
        index = usage.line - 1
        line = lines[index]
        cut = max(0, usage.column - 1)
        # Anchored at the recorded column; the lookbehind still sees line[:cut].
        m = class_pattern(usage.raw_token).match(line, cut)
        if m is None:
            _skip(logger, violation, "token not found at recorded position")
            continue
        lines[index] = line[:cut] + violation.suggestion.text + line[m.end():]
        applied += 1
    return "\n".join(lines), applied


def _skip(logger: Optional[RichLogger], violation: Violation, reason: str) -> None:
    if logger is None:
        return
    usage = violation.usage
    logger.debug(f"skipped {usage.raw_token}: {reason}", location=f"{usage.file}:{usage.line}:{usage.column}")


def fix_file(path: Path, violations: Sequence[Violation], logger: Optional[RichLogger] = None) -> int:
    """Rewrite one file in place; files without an applied fix are not touched."""
    if not eligible_fixes(violations):
        return 0
    text = read_text_preserving_newlines(path)
    new_text, applied = apply_fixes_to_text(text, violations, logger)
    if applied and new_text != text:
        write_text_preserving_newlines(path, new_text)
    return applied


def apply_fixes(
    per_file: Mapping[str, Sequence[Violation]],
    sources: Mapping[str, SourceFile],
    threads: int = 1,
    logger: Optional[RichLogger] = None,
) -> Dict[str, int]:
    """Apply exact fixes file by file. Files are independent and may run in parallel."""
    logger = logger or RichLogger.silent()
    jobs = {label: items for label, items in per_file.items() if eligible_fixes(items)}
    applied: Dict[str, int] = {}
    if not jobs:
        return applied

    with ThreadPoolExecutor(max_workers=max(1, threads)) as executor:
        future_map = {
            executor.submit(fix_file, sources[label].path, items, logger): label for label, items in jobs.items()
        }
        for future in as_completed(future_map):
            label = future_map[future]
            count = future.result()
            applied[label] = count
            if count:
                logger.fixed(f"applied {count} fix(es)", location=label)
    return dict(sorted(applied.items()))
