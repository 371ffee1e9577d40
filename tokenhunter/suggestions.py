from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

from .classifiers import SIZING_PREFIXES, SPACING_PREFIXES, split_sign
from .models import Advice, Candidate, Exact, Nearest, Suggestion
from .patterns import (
    ARBITRARY_FONT_RX,
    ARBITRARY_LEADING_RX,
    ARBITRARY_TEXT_RX,
    ARBITRARY_TRACKING_RX,
    ARBITRARY_VALUE_RX,
    BORDER_DIRECTION_RX,
    BORDER_PLAIN_RX,
    COLOR_FAMILY_RX,
    GRADIENT_STOP_RX,
    NUMERIC_VALUE_RX,
    OVERSIZED_TEXT_RX,
    RADIUS_SPLIT_RX,
)
from .text_utils import split_color_modifier, split_modifiers, strip_modifiers
from .tokens import DEFAULT_TOKENS, REM_PER_UNIT, ScaleEntry, TokenDefinitions

MAX_NEAREST = 2


def _text(suggestion: Optional[Suggestion]) -> Optional[str]:
    return suggestion.text if suggestion is not None else None


def find_nearest(value: str, scale: Mapping[str, ScaleEntry], prefix: str) -> List[Candidate]:
    """Closest scale entries to a numeric utility value, by rem distance.

    Zero-distance entries are dropped before the two closest are kept.
    """
    target = float(value) * REM_PER_UNIT
    ranked = sorted(
        (
            Candidate(replacement=f"{prefix}-{entry.semantic}", distance=abs(entry.rem_value - target), rem=entry.rem)
            for entry in scale.values()
        ),
        key=lambda c: c.distance,
    )
    return [c for c in ranked if c.distance > 0][:MAX_NEAREST]


def _resolve_numeric(
    class_name: str,
    prefixes: Sequence[str],
    scale: Mapping[str, ScaleEntry],
    signed: bool,
) -> Optional[Suggestion]:
    modifier, clean = split_modifiers(class_name)
    sign, unsigned = split_sign(clean) if signed else ("", clean)

    for prefix in prefixes:
        head = f"{prefix}-"
        if not unsigned.startswith(head):
            continue
        value = unsigned[len(head):]
        if not NUMERIC_VALUE_RX.match(value):
            continue
        exact = scale.get(value)
        if exact:
            return Exact(f"{modifier}{sign}{prefix}-{exact.semantic}")
        nearest = find_nearest(value, scale, f"{modifier}{sign}{prefix}")
        if nearest:
            return Nearest(tuple(nearest))
    return None


def resolve_spacing(class_name: str, tokens: TokenDefinitions = DEFAULT_TOKENS) -> Optional[Suggestion]:
    """Exact: ``p-4`` -> ``p-base``. Miss: ``p-5`` -> nearest ``p-base (1rem)`` ..."""
    return _resolve_numeric(class_name, SPACING_PREFIXES, tokens.spacing, signed=True)


def resolve_sizing(class_name: str, tokens: TokenDefinitions = DEFAULT_TOKENS) -> Optional[Suggestion]:
    """Exact: ``h-8`` -> ``h-size-sm``. Miss: ``h-9`` -> nearest ``h-size-sm`` or ``h-size-md``."""
    return _resolve_numeric(class_name, SIZING_PREFIXES, tokens.sizing, signed=False)


def get_spacing_suggestion(class_name: str, tokens: TokenDefinitions = DEFAULT_TOKENS) -> Optional[str]:
    return _text(resolve_spacing(class_name, tokens))


def get_sizing_suggestion(class_name: str, tokens: TokenDefinitions = DEFAULT_TOKENS) -> Optional[str]:
    return _text(resolve_sizing(class_name, tokens))


def _options(*replacements: str) -> Nearest:
    return Nearest(tuple(Candidate(replacement=r) for r in replacements))


def resolve_border(class_name: str) -> Optional[Suggestion]:
    modifier, clean = split_modifiers(class_name)
    m = BORDER_DIRECTION_RX.match(clean)
    if m:
        base = f"{modifier}border-{m.group(1)}"
        width = int(m.group(2))
    else:
        m = BORDER_PLAIN_RX.match(clean)
        if not m:
            return None
        base = f"{modifier}border"
        width = int(m.group(1))
    if width == 1:
        return Exact(f"{base}-line")
    if width == 2:
        return _options(f"{base}-thick", f"{base}-highlight")
    return None


def resolve_shadow(class_name: str) -> Optional[Suggestion]:
    modifier, clean = split_modifiers(class_name)
    if clean == "shadow":
        return _options(f"{modifier}shadow-sm", f"{modifier}shadow-interactive")
    if clean == "shadow-none":
        return Advice(f"Remove class or use {modifier}shadow-sm for minimal elevation")
    if clean == "shadow-inner":
        return _options(f"{modifier}shadow-inset-sm", f"{modifier}shadow-inset-md")
    if clean in ("shadow-xl", "shadow-2xl"):
        return _options(f"{modifier}shadow-lg")
    return None


def resolve_gradient(class_name: str) -> Optional[Suggestion]:
    clean = strip_modifiers(class_name)
    if clean.startswith("bg-gradient-to-"):
        return Advice("Use semantic gradients: bg-gradient-primary, bg-gradient-status-*, bg-gradient-accent-*")
    if GRADIENT_STOP_RX.match(clean):
        return Advice("Use pre-defined semantic gradients instead of constructing custom gradients")
    return None


TYPOGRAPHY_ADVICE = (
    (ARBITRARY_TEXT_RX, "Use semantic font sizes: text-xs through text-4xl"),
    (OVERSIZED_TEXT_RX, "Use text-4xl for maximum size, or consider if this is truly needed"),
    (ARBITRARY_FONT_RX, "Use font-sans or font-mono"),
    (
        ARBITRARY_LEADING_RX,
        "Use standard line-height utilities: leading-none, leading-tight, leading-snug, "
        "leading-normal, leading-relaxed, or leading-loose",
    ),
    (ARBITRARY_TRACKING_RX, "Use standard letter-spacing utilities: tracking-tighter through tracking-widest"),
)


def resolve_typography(class_name: str) -> Optional[Suggestion]:
    clean = strip_modifiers(class_name)
    for rx, message in TYPOGRAPHY_ADVICE:
        if rx.match(clean):
            return Advice(message)
    return None


def resolve_border_radius(class_name: str) -> Optional[Suggestion]:
    clean = strip_modifiers(class_name)
    if not clean.startswith("rounded"):
        return None
    after = clean[len("rounded"):]
    direction = ""
    value = after
    m = RADIUS_SPLIT_RX.match(after)
    if m:
        direction = f"-{m.group(1)}"
        value = m.group(2)
    if value.startswith("-"):
        value = value[1:]
    if ARBITRARY_VALUE_RX.match(value):
        return Advice(
            f"Use semantic border radius: rounded{direction}-sm, rounded{direction}-md, "
            f"rounded{direction}-lg, or rounded{direction}-xl"
        )
    if value in ("2xl", "3xl"):
        return Advice(f"rounded{direction}-xl (0.75rem) or rounded{direction}-full for pills/circles")
    return None


def get_border_suggestion(class_name: str) -> Optional[str]:
    return _text(resolve_border(class_name))


def get_shadow_suggestion(class_name: str) -> Optional[str]:
    return _text(resolve_shadow(class_name))


def get_gradient_suggestion(class_name: str) -> Optional[str]:
    return _text(resolve_gradient(class_name))


def get_typography_suggestion(class_name: str) -> Optional[str]:
    return _text(resolve_typography(class_name))


def get_border_radius_suggestion(class_name: str) -> Optional[str]:
    return _text(resolve_border_radius(class_name))


def _shade(rest: str, family: str) -> Optional[str]:
    head = f"{family}-"
    return rest[len(head):] if rest.startswith(head) else None


def get_color_suggestion(class_name: str) -> Optional[str]:
    """Family-level palette mapping for bg/text/border/ring color classes.

    It ignores surrounding classes. The scanner offers it as a nearest
    candidate only when ``get_migration_suggestion`` finds nothing.
    """
    modifier, clean = split_color_modifier(class_name)
    m = COLOR_FAMILY_RX.match(clean)
    if not m:
        return None
    prefix, rest = m.group(1), m.group(2)

    if prefix == "bg":
        shade = _shade(rest, "neutral")
        if shade in ("50", "100"):
            return f"{modifier}bg-surface-muted"
        if shade == "200":
            return f"{modifier}bg-surface-subtle"
        if shade in ("900", "950"):
            return f"{modifier}bg-surface"
        shade = _shade(rest, "primary")
        if shade in ("500", "600"):
            return f"{modifier}bg-interactive-primary"
        if shade in ("50", "100"):
            return f"{modifier}bg-status-info-muted"
        for status in ("error", "success", "warning"):
            if _shade(rest, status) == "50":
                return f"{modifier}bg-status-{status}-muted"
        if rest == "white":
            return f"{modifier}bg-surface"
        return None

    if prefix == "text":
        shade = _shade(rest, "neutral")
        if shade == "900":
            return f"{modifier}text-foreground"
        if shade in ("400", "500", "600"):
            return f"{modifier}text-foreground-muted"
        if shade in ("50", "100"):
            return f"{modifier}text-foreground-filled"
        for status in ("error", "success", "warning"):
            if rest.startswith(f"{status}-"):
                return f"{modifier}text-status-{status}-foreground"
        if rest.startswith("primary-"):
            return f"{modifier}text-status-info-foreground"
        return None

    if prefix == "border":
        shade = _shade(rest, "neutral")
        if shade in ("100", "800"):
            return f"{modifier}border-border-muted"
        if shade in ("200", "700"):
            return f"{modifier}border-border"
        for status in ("error", "success", "warning"):
            if rest.startswith(f"{status}-"):
                return f"{modifier}border-status-{status}-border"
        if rest.startswith("primary-"):
            return f"{modifier}border-status-info-border"
    return None
