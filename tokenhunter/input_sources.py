from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .console import RichLogger
from .models import SourceFile

DEFAULT_EXTENSIONS = (".ts", ".tsx")

DEFAULT_IGNORE_PATTERNS = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.turbo/**",
    "**/coverage/**",
    "**/fixtures/**",
    # Files where direct palette usage is intentional.
    "**/ui-library/src/styles/**",
    "**/ui-library/src/tailwind-preset.ts",
    "**/ui-library/tailwind-preset.ts",
    "**/mcp-ui/utils/migration-helper.ts",
    "**/mcp-ui/tools/validate-tokens.ts",
    "**/ui-library/src/utils/semantic-token-utils.ts",
    "**/ui-library/style-dictionary/**",
    "**/ui-library/src/stories/PaletteShowcase.stories.tsx",
)

TEST_FILE_PATTERNS = ("**/*.test.*", "**/*.spec.*")


def build_ignore_patterns(include_tests: bool = False, extra: Iterable[str] = ()) -> List[str]:
    patterns = list(DEFAULT_IGNORE_PATTERNS)
    if not include_tests:
        patterns.extend(TEST_FILE_PATTERNS)
    patterns.extend(p for p in extra if p)
    return patterns


def is_ignored(rel_path: str, patterns: Sequence[str]) -> bool:
    # fnmatch's "*" crosses "/", so "**/x/**" needs a leading segment to anchor on.
    anchored = f"./{rel_path}"
    return any(fnmatch.fnmatch(anchored, pattern) for pattern in patterns)


def iter_source_files(
    root: Path,
    include_tests: bool = False,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    extra_ignores: Iterable[str] = (),
    logger: Optional[RichLogger] = None,
) -> List[Path]:
    """Candidate files under ``root`` (or ``root`` itself), sorted by path."""
    if not root.exists():
        raise FileNotFoundError(str(root))
    if root.is_file():
        return [root]

    suffixes = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}
    patterns = build_ignore_patterns(include_tests, extra_ignores)
    found: List[Path] = []
    for p in root.rglob("*"):
        if p.suffix.lower() not in suffixes or not p.is_file():
            continue
        rel_path = p.relative_to(root).as_posix()
        if is_ignored(rel_path, patterns):
            if logger is not None:
                logger.debug(f"Ignored: {rel_path}")
            continue
        found.append(p)
    return sorted(found)


def read_text_preserving_newlines(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as handle:
        return handle.read()


def write_text_preserving_newlines(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def load_source_file(path: Path, root: Path) -> SourceFile:
    try:
        display_name = path.relative_to(root).as_posix()
    except ValueError:
        display_name = path.name
    if not display_name or display_name == ".":
        display_name = path.name
    return SourceFile(path=path, text=read_text_preserving_newlines(path), display_name=display_name)
