from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .classifiers import classify
from .console import RichLogger
from .extractors import extract_from_source
from .input_sources import load_source_file
from .migration import DEFAULT_TABLES, HIGH, MigrationTables, analyze_context, get_migration_suggestion
from .models import (
    BORDER,
    COLOR,
    DEFAULT_CATEGORIES,
    GRADIENT,
    RADIUS,
    SHADOW,
    SIZING,
    SPACING,
    TYPOGRAPHY,
    Candidate,
    Exact,
    MigrationContext,
    Nearest,
    RawTokenUsage,
    ScanResult,
    SourceFile,
    Suggestion,
    Violation,
)
from .results import ResultStore
from .suggestions import (
    get_color_suggestion,
    resolve_border,
    resolve_border_radius,
    resolve_gradient,
    resolve_shadow,
    resolve_sizing,
    resolve_spacing,
    resolve_typography,
)
from .tokens import DEFAULT_TOKENS, TokenDefinitions

FileDoneCallback = Callable[[SourceFile, List[Violation]], None]


class Scanner:
    def __init__(
        self,
        tokens: TokenDefinitions = DEFAULT_TOKENS,
        tables: MigrationTables = DEFAULT_TABLES,
        categories: Iterable[str] = DEFAULT_CATEGORIES,
        logger: Optional[RichLogger] = None,
    ):
        self.tokens = tokens
        self.tables = tables
        self.categories = tuple(categories)
        self.logger = logger or RichLogger.silent()

    def _color_suggestion(self, usage: RawTokenUsage) -> Optional[Suggestion]:
        """Exact only when the raw token alone decides the replacement.

        Sibling classes may rank candidates but never make one exact: the
        same occurrence can appear in two overlapping literals with
        different siblings.
        """
        if usage.palette_var:
            return None
        name = usage.raw_token
        # Context comes from the token's own literal only.
        found = get_migration_suggestion(name, analyze_context(name, usage.siblings), self.tables)
        if found is None:
            family = get_color_suggestion(name)
            return Nearest((Candidate(replacement=family),)) if family is not None else None
        bare = get_migration_suggestion(name, MigrationContext(), self.tables)
        if found.confidence == HIGH and found == bare:
            return Exact(found.suggested)
        options = [found.suggested]
        for alt in found.alternatives[:1] + ((bare.suggested,) if bare is not None else ()):
            if alt not in options:
                options.append(alt)
                break
        return Nearest(tuple(Candidate(replacement=r) for r in options))

    def resolve_suggestion(self, category: str, usage: RawTokenUsage) -> Optional[Suggestion]:
        name = usage.raw_token
        if category == COLOR:
            return self._color_suggestion(usage)
        if category == SPACING:
            return resolve_spacing(name, self.tokens)
        if category == SIZING:
            return resolve_sizing(name, self.tokens)
        if category == BORDER:
            return resolve_border(name)
        if category == SHADOW:
            return resolve_shadow(name)
        if category == GRADIENT:
            return resolve_gradient(name)
        if category == TYPOGRAPHY:
            return resolve_typography(name)
        if category == RADIUS:
            return resolve_border_radius(name)
        return None

    def scan_source(self, source: SourceFile) -> List[Violation]:
        violations: List[Violation] = []
        for usage in extract_from_source(source):
            verdict = classify(usage, self.categories, self.tokens)
            if verdict is None:
                continue
            category, severity = verdict
            violations.append(Violation(usage, category, severity, self.resolve_suggestion(category, usage)))
        if violations:
            self.logger.debug(f"{len(violations)} violation(s)", location=source.label)
        return violations

    def scan_path(self, path: Path, root: Path) -> tuple[SourceFile, List[Violation]]:
        source = load_source_file(path, root)
        return source, self.scan_source(source)

    def scan_files(
        self,
        paths: Sequence[Path],
        root: Path,
        threads: int = 1,
        on_file_done: Optional[FileDoneCallback] = None,
    ) -> ScanResult:
        """Scan files in parallel; the merged result does not depend on completion order."""
        store = ResultStore()
        if not paths:
            return store.scan_result()

        with ThreadPoolExecutor(max_workers=max(1, threads)) as executor:
            futures = [executor.submit(self.scan_path, path, root) for path in paths]
            for future in as_completed(futures):
                source, violations = future.result()
                store.add_file(source, violations)
                if on_file_done is not None:
                    on_file_done(source, violations)
        return store.scan_result()
