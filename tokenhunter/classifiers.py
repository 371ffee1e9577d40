from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Tuple

from .models import (
    BORDER,
    CATEGORY_PRIORITY,
    CATEGORY_SEVERITY,
    COLOR,
    DEFAULT_CATEGORIES,
    ERROR,
    GRADIENT,
    RADIUS,
    SHADOW,
    SIZING,
    SPACING,
    TYPOGRAPHY,
    RawTokenUsage,
)
from .patterns import (
    ARBITRARY_FONT_RX,
    ARBITRARY_HEX_RX,
    ARBITRARY_LEADING_RX,
    ARBITRARY_TEXT_RX,
    ARBITRARY_TRACKING_RX,
    ARBITRARY_VALUE_RX,
    BORDER_WIDTH_RX,
    BORDER_WIDTH_VALUE_RX,
    GRADIENT_STOP_RX,
    NON_NUMERIC_VALUE_RX,
    NUMERIC_VALUE_RX,
    OVERSIZED_RADIUS_RX,
    OVERSIZED_TEXT_RX,
    RADIUS_DIRECTION_RX,
)
from .text_utils import strip_color_modifiers, strip_modifiers
from .tokens import DEFAULT_TOKENS, TokenDefinitions

COLOR_PREFIXES = (
    "bg",
    "text",
    "border",
    "outline",
    "ring",
    "fill",
    "stroke",
    "placeholder",
    "decoration",
    "accent",
    "caret",
    "divide",
    "shadow",
    "from",
    "via",
    "to",
)

BLACK_WHITE_CLASSES = {
    "bg-white",
    "bg-black",
    "text-white",
    "text-black",
    "border-white",
    "border-black",
    "ring-white",
    "ring-black",
}

SPACING_PREFIXES = (
    "p",
    "px",
    "py",
    "pt",
    "pr",
    "pb",
    "pl",
    "ps",
    "pe",
    "m",
    "mx",
    "my",
    "mt",
    "mr",
    "mb",
    "ml",
    "ms",
    "me",
    "gap",
    "gap-x",
    "gap-y",
    "space-x",
    "space-y",
)

SIZING_PREFIXES = ("h", "min-h", "max-h", "w", "min-w", "max-w")

EXEMPT_VALUES = {"0", "px", "auto", "full", "screen", "svh", "lvh", "dvh", "min", "max", "fit", "none"}

# Element sizes live in [4, 16]; smaller values are spacing-grained and
# larger ones are layout dimensions.
MIN_SIZING_NUMERIC = 4
MAX_SIZING_NUMERIC = 16

NON_SEMANTIC_SHADOWS = {"shadow", "shadow-none", "shadow-inner", "shadow-xl", "shadow-2xl"}
SEMANTIC_RADII = {"none", "sm", "md", "lg", "xl", "full"}


def is_palette_color(value: str, tokens: TokenDefinitions = DEFAULT_TOKENS) -> bool:
    return value in tokens.palette_colors


def is_non_semantic_color_class(class_name: str, tokens: TokenDefinitions = DEFAULT_TOKENS) -> bool:
    clean = strip_color_modifiers(class_name)
    prefix, sep, rest = clean.partition("-")
    if sep and prefix in COLOR_PREFIXES and rest in tokens.palette_colors and rest not in ("white", "black"):
        return True
    if clean in BLACK_WHITE_CLASSES:
        return True
    return bool(ARBITRARY_HEX_RX.search(clean))


def _numeric_value(clean: str, prefixes: Iterable[str]) -> Optional[Tuple[str, str]]:
    """Return ``(prefix, value)`` for the first prefix carrying a numeric value."""
    for prefix in prefixes:
        head = f"{prefix}-"
        if not clean.startswith(head):
            continue
        value = clean[len(head):]
        if value in EXEMPT_VALUES or NON_NUMERIC_VALUE_RX.match(value):
            continue
        if NUMERIC_VALUE_RX.match(value):
            return prefix, value
    return None


def split_sign(clean: str) -> Tuple[str, str]:
    if clean.startswith("-"):
        return "-", clean[1:]
    return "", clean


def is_non_semantic_spacing_class(class_name: str) -> bool:
    _, unsigned = split_sign(strip_modifiers(class_name))
    return _numeric_value(unsigned, SPACING_PREFIXES) is not None


def is_non_semantic_sizing_class(class_name: str) -> bool:
    clean = strip_modifiers(class_name)
    for prefix in SIZING_PREFIXES:
        hit = _numeric_value(clean, (prefix,))
        if hit and MIN_SIZING_NUMERIC <= float(hit[1]) <= MAX_SIZING_NUMERIC:
            return True
    return False


def is_non_semantic_border_class(class_name: str) -> bool:
    clean = strip_modifiers(class_name)
    if not BORDER_WIDTH_RX.match(clean):
        return False
    m = BORDER_WIDTH_VALUE_RX.search(clean)
    return bool(m) and int(m.group(1)) > 0


def is_non_semantic_shadow_class(class_name: str) -> bool:
    return strip_modifiers(class_name) in NON_SEMANTIC_SHADOWS


def is_non_semantic_gradient_class(class_name: str, tokens: TokenDefinitions = DEFAULT_TOKENS) -> bool:
    clean = strip_modifiers(class_name)
    if clean.startswith("bg-gradient-to-"):
        return True
    if GRADIENT_STOP_RX.match(clean):
        return is_palette_color(GRADIENT_STOP_RX.sub("", clean, count=1), tokens)
    return False


def is_non_semantic_typography_class(class_name: str) -> bool:
    clean = strip_modifiers(class_name)
    return any(
        rx.match(clean)
        for rx in (ARBITRARY_TEXT_RX, OVERSIZED_TEXT_RX, ARBITRARY_FONT_RX, ARBITRARY_LEADING_RX, ARBITRARY_TRACKING_RX)
    )


def is_non_semantic_border_radius_class(class_name: str) -> bool:
    clean = strip_modifiers(class_name)
    if not clean.startswith("rounded"):
        return False
    value_part = clean[len("rounded"):]
    if not value_part:
        return False
    m = RADIUS_DIRECTION_RX.match(value_part)
    actual = value_part[len(m.group(0)) - 1:] if m else value_part
    if not actual:
        return False
    value = actual[1:] if actual.startswith("-") else actual
    if value in SEMANTIC_RADII:
        return False
    if ARBITRARY_VALUE_RX.match(value):
        return True
    return bool(OVERSIZED_RADIUS_RX.match(value)) or value.isdigit()


PREDICATES: Dict[str, Callable[[str, TokenDefinitions], bool]] = {
    COLOR: is_non_semantic_color_class,
    SPACING: lambda name, tokens: is_non_semantic_spacing_class(name),
    SIZING: lambda name, tokens: is_non_semantic_sizing_class(name),
    BORDER: lambda name, tokens: is_non_semantic_border_class(name),
    SHADOW: lambda name, tokens: is_non_semantic_shadow_class(name),
    GRADIENT: is_non_semantic_gradient_class,
    TYPOGRAPHY: lambda name, tokens: is_non_semantic_typography_class(name),
    RADIUS: lambda name, tokens: is_non_semantic_border_radius_class(name),
}


def classify_token(
    class_name: str,
    categories: Iterable[str] = DEFAULT_CATEGORIES,
    tokens: TokenDefinitions = DEFAULT_TOKENS,
) -> Optional[Tuple[str, str]]:
    """Return ``(category, severity)`` for a raw class name, or None.

    Enabled categories are tested in ``CATEGORY_PRIORITY`` order and the
    first match wins, so a token belongs to at most one category.
    """
    enabled = set(categories)
    for category in CATEGORY_PRIORITY:
        if category in enabled and PREDICATES[category](class_name, tokens):
            return category, CATEGORY_SEVERITY[category]
    return None


def classify(
    usage: RawTokenUsage,
    categories: Iterable[str] = DEFAULT_CATEGORIES,
    tokens: TokenDefinitions = DEFAULT_TOKENS,
) -> Optional[Tuple[str, str]]:
    # Palette custom properties bypass the class predicates.
    if usage.palette_var:
        return COLOR, ERROR
    return classify_token(usage.raw_token, categories, tokens)
