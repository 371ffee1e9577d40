from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

# Tailwind numeric scale: one unit is a quarter rem.
REM_PER_UNIT = 0.25

DEFAULT_PALETTES = (
    "primary",
    "secondary",
    "neutral",
    "success",
    "warning",
    "error",
    "info",
    "accent-1",
    "accent-2",
    "accent-3",
    "accent-4",
    "accent-5",
)

DEFAULT_SHADES = ("50", "100", "200", "300", "400", "500", "600", "700", "800", "900", "950")

DEFAULT_SPACING = (
    ("0.5", "2xs", "0.125rem"),
    ("1", "xs", "0.25rem"),
    ("2", "sm", "0.5rem"),
    ("3", "md", "0.75rem"),
    ("4", "base", "1rem"),
    ("8", "lg", "2rem"),
    ("16", "xl", "4rem"),
    ("32", "2xl", "8rem"),
)

DEFAULT_SIZING = (
    ("6", "size-xs", "1.5rem"),
    ("8", "size-sm", "2rem"),
    ("10", "size-md", "2.5rem"),
    ("12", "size-lg", "3rem"),
    ("14", "size-xl", "3.5rem"),
)


class TokenDefinitionError(ValueError):
    pass


@dataclass(frozen=True)
class ScaleEntry:
    semantic: str
    rem: str

    @property
    def rem_value(self) -> float:
        return float(self.rem.replace("rem", ""))


@dataclass(frozen=True)
class TokenDefinitions:
    palettes: Tuple[str, ...]
    shades: Tuple[str, ...]
    spacing: Mapping[str, ScaleEntry]
    sizing: Mapping[str, ScaleEntry]
    palette_colors: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # All <palette>-<shade> combinations plus plain white/black.
        values = {f"{palette}-{shade}" for palette in self.palettes for shade in self.shades}
        values.update(("white", "black"))
        object.__setattr__(self, "palette_colors", frozenset(values))


def _freeze_scale(rows) -> Mapping[str, ScaleEntry]:
    scale: Dict[str, ScaleEntry] = {}
    for key, semantic, rem in rows:
        scale[str(key)] = ScaleEntry(semantic=semantic, rem=rem)
    return MappingProxyType(scale)


def default_token_definitions() -> TokenDefinitions:
    return TokenDefinitions(
        palettes=DEFAULT_PALETTES,
        shades=DEFAULT_SHADES,
        spacing=_freeze_scale(DEFAULT_SPACING),
        sizing=_freeze_scale(DEFAULT_SIZING),
    )


DEFAULT_TOKENS = default_token_definitions()


def _scale_rows(raw: object, name: str) -> list[tuple[str, str, str]]:
    if not isinstance(raw, dict):
        raise TokenDefinitionError(f"'{name}' must be an object mapping numeric keys to tokens")
    rows = []
    for key, entry in raw.items():
        if not isinstance(entry, dict):
            raise TokenDefinitionError(f"'{name}.{key}' must be an object with 'semantic' and 'rem'")
        semantic = str(entry.get("semantic") or "").strip()
        rem = str(entry.get("rem") or "").strip()
        if not semantic or not rem:
            raise TokenDefinitionError(f"'{name}.{key}' is missing 'semantic' or 'rem'")
        try:
            float(rem.replace("rem", ""))
        except ValueError as exc:
            raise TokenDefinitionError(f"'{name}.{key}' has a non-numeric rem value: {rem}") from exc
        rows.append((str(key), semantic, rem))
    return rows


def _string_list(raw: object, name: str) -> Tuple[str, ...]:
    if not isinstance(raw, list) or not raw:
        raise TokenDefinitionError(f"'{name}' must be a non-empty list")
    return tuple(str(item).strip() for item in raw if str(item).strip())


def parse_token_definitions(data: Dict[str, object]) -> TokenDefinitions:
    if not isinstance(data, dict):
        raise TokenDefinitionError("Token definitions must be a JSON object")
    base = DEFAULT_TOKENS
    palettes = _string_list(data["palettes"], "palettes") if "palettes" in data else base.palettes
    shades = _string_list(data["shades"], "shades") if "shades" in data else base.shades
    spacing = _freeze_scale(_scale_rows(data["spacing"], "spacing")) if "spacing" in data else base.spacing
    sizing = _freeze_scale(_scale_rows(data["sizing"], "sizing")) if "sizing" in data else base.sizing
    return TokenDefinitions(palettes=palettes, shades=shades, spacing=spacing, sizing=sizing)


def load_token_definitions(path: Path) -> TokenDefinitions:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TokenDefinitionError(f"Invalid JSON in token definitions {path}: {exc}") from exc
    return parse_token_definitions(data)
