from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

COLOR = "color"
SPACING = "spacing"
SIZING = "sizing"
BORDER = "border"
SHADOW = "shadow"
GRADIENT = "gradient"
TYPOGRAPHY = "typography"
RADIUS = "radius"

ERROR = "error"
WARNING = "warning"

# First matching category wins when a token satisfies several predicates.
CATEGORY_PRIORITY: Tuple[str, ...] = (COLOR, SPACING, SIZING, BORDER, SHADOW, GRADIENT, TYPOGRAPHY, RADIUS)
DEFAULT_CATEGORIES: Tuple[str, ...] = (COLOR, SPACING, SIZING)

CATEGORY_SEVERITY: Dict[str, str] = {
    COLOR: ERROR,
    SPACING: WARNING,
    SIZING: WARNING,
    BORDER: WARNING,
    SHADOW: WARNING,
    GRADIENT: WARNING,
    TYPOGRAPHY: WARNING,
    RADIUS: WARNING,
}


@dataclass(frozen=True)
class SourceFile:
    path: Path
    text: str
    display_name: str = ""

    @property
    def label(self) -> str:
        return self.display_name or self.path.as_posix()


@dataclass(frozen=True)
class RawTokenUsage:
    file: str
    line: int
    column: int
    raw_token: str
    line_context: str
    siblings: Tuple[str, ...] = ()
    palette_var: bool = False


@dataclass(frozen=True)
class Candidate:
    replacement: str
    distance: Optional[float] = None
    rem: Optional[str] = None

    def render(self) -> str:
        if self.rem:
            return f"{self.replacement} ({self.rem})"
        return self.replacement


@dataclass(frozen=True)
class Exact:
    replacement: str

    @property
    def text(self) -> str:
        return self.replacement


@dataclass(frozen=True)
class Nearest:
    candidates: Tuple[Candidate, ...]

    @property
    def text(self) -> str:
        return "nearest: " + " or ".join(c.render() for c in self.candidates)


@dataclass(frozen=True)
class Advice:
    message: str

    @property
    def text(self) -> str:
        return self.message


Suggestion = Union[Exact, Nearest, Advice]


@dataclass(frozen=True)
class Violation:
    usage: RawTokenUsage
    category: str
    severity: str
    suggestion: Optional[Suggestion] = None

    @property
    def file(self) -> str:
        return self.usage.file

    @property
    def class_name(self) -> str:
        return self.usage.raw_token

    @property
    def is_fixable(self) -> bool:
        return isinstance(self.suggestion, Exact)

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "file": self.usage.file,
            "line": self.usage.line,
            "column": self.usage.column,
            "className": self.usage.raw_token,
        }
        if self.suggestion is not None:
            payload["suggestion"] = self.suggestion.text
        payload["context"] = self.usage.line_context
        payload["type"] = self.category
        payload["severity"] = self.severity
        return payload


@dataclass(frozen=True)
class MigrationContext:
    component_type: Optional[str] = None
    is_interactive: bool = False
    is_dark_mode: bool = False
    has_hover_state: bool = False
    parent_element: Optional[str] = None


@dataclass(frozen=True)
class MigrationSuggestion:
    original: str
    suggested: str
    confidence: str
    reasoning: str
    alternatives: Tuple[str, ...] = ()


@dataclass
class ScanResult:
    violations: List[Violation] = field(default_factory=list)
    per_file: Dict[str, List[Violation]] = field(default_factory=dict)
    sources: Dict[str, SourceFile] = field(default_factory=dict)
    total_files: int = 0


@dataclass
class MigrationSuggestionSummary:
    from_token: str
    to: str
    count: int = 0
    files: set[str] = field(default_factory=set)

    def to_dict(self) -> Dict[str, object]:
        return {
            "from": self.from_token,
            "to": self.to,
            "count": self.count,
            "files": sorted(self.files),
        }
