"""Context-aware migration of palette color classes to semantic tokens.

Lookup order for a class name:

1. the context-aware table, whose entries inspect a ``MigrationContext``
2. the direct one-to-one table
3. both tables again with one known state modifier stripped; the modifier
   is re-applied to the suggestion and its alternatives
4. a shade-threshold heuristic for ``bg-neutral-*`` (low confidence)

Anything else returns ``None``.

Tables are immutable and built once; callers pass them explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence

from .models import MigrationContext, MigrationSuggestion
from .patterns import NEUTRAL_BG_RX, SHADE_RX
from .text_utils import split_color_modifier

HIGH = "high"
MEDIUM = "medium"
LOW = "low"

# Component families in detection order; the first match wins.
COMPONENT_KEYWORDS = (
    ("button", ("btn", "button")),
    ("card", ("card",)),
    ("badge", ("badge",)),
    ("input", ("input", "form")),
    ("alert", ("alert", "notification")),
)
INTERACTIVE_MARKERS = ("hover:", "focus:", "active:", "cursor-pointer")

Resolver = Callable[[MigrationContext], MigrationSuggestion]


@dataclass(frozen=True)
class MigrationTables:
    context_aware: Mapping[str, Resolver]
    simple: Mapping[str, str]


def _by_component(
    original: str,
    component: str,
    matched: tuple[str, str],
    fallback: tuple[str, str],
    alternative: Optional[str] = None,
) -> Resolver:
    """Resolver that prefers ``matched`` (high) when the component type fits.

    ``matched`` and ``fallback`` are ``(suggested, reasoning)`` pairs. The
    fallback is medium confidence and offers ``alternative`` (defaults to
    the matched token).
    """

    def resolve(ctx: MigrationContext) -> MigrationSuggestion:
        if ctx.component_type == component:
            return MigrationSuggestion(original, matched[0], HIGH, matched[1], ())
        alt = alternative if alternative is not None else matched[0]
        return MigrationSuggestion(original, fallback[0], MEDIUM, fallback[1], (alt,))

    return resolve


def _fixed(
    original: str,
    suggested: str,
    reasoning: str,
    alternatives: Sequence[str] = (),
    confidence: str = HIGH,
) -> Resolver:
    suggestion = MigrationSuggestion(original, suggested, confidence, reasoning, tuple(alternatives))
    return lambda ctx: suggestion


def _card_surface(ctx: MigrationContext) -> MigrationSuggestion:
    if ctx.component_type == "card":
        return MigrationSuggestion(
            "bg-neutral-50",
            "bg-surface-muted",
            HIGH,
            "Card backgrounds typically use surface-muted for subtle differentiation",
            ("bg-surface",),
        )
    return MigrationSuggestion(
        "bg-neutral-50", "bg-surface-subtle", MEDIUM, "Light neutral background for general surface", ("bg-surface",)
    )


def _badge_surface(ctx: MigrationContext) -> MigrationSuggestion:
    if ctx.component_type == "badge":
        return MigrationSuggestion(
            "bg-neutral-100", "bg-surface-subtle", HIGH, "Badge backgrounds need subtle contrast", ("bg-surface-subtle",)
        )
    return MigrationSuggestion(
        "bg-neutral-100", "bg-surface-muted", MEDIUM, "Secondary surface background", ("bg-surface-subtle",)
    )


def _context_aware_rules() -> Dict[str, Resolver]:
    return {
        "bg-primary-600": _by_component(
            "bg-primary-600",
            "button",
            ("bg-interactive-primary", "Primary button background should use interactive-primary token"),
            ("bg-status-info-muted", "Primary color in non-interactive context suggests informational status"),
        ),
        "bg-primary-500": _by_component(
            "bg-primary-500",
            "button",
            ("bg-interactive-primary", "Primary button background should use interactive-primary token"),
            ("bg-status-info-muted", "Primary color suggests informational context"),
        ),
        "bg-primary-700": _by_component(
            "bg-primary-700",
            "button",
            (
                "bg-interactive-primary-hover",
                "Darker primary button background should use interactive-primary-hover token",
            ),
            ("bg-status-info-emphasis", "Darker primary color suggests emphasis variant"),
        ),
        "hover:bg-neutral-100": _fixed(
            "hover:bg-neutral-100",
            "hover:bg-interactive-hover",
            "Hover state on neutral background indicates interactive element",
            ("hover:bg-surface-subtle",),
        ),
        "hover:bg-neutral-50": _fixed(
            "hover:bg-neutral-50",
            "hover:bg-interactive-hover",
            "Light hover state for interactive elements",
            ("hover:bg-surface-muted",),
        ),
        "bg-neutral-50": _card_surface,
        "bg-neutral-100": _badge_surface,
        "bg-error-50": _fixed(
            "bg-error-50",
            "bg-status-error-muted",
            "Error background for status indication uses muted variant",
            ("bg-status-error",),
        ),
        "bg-success-50": _fixed(
            "bg-success-50",
            "bg-status-success-muted",
            "Success background for positive status uses muted variant",
            ("bg-status-success",),
        ),
        "bg-warning-50": _fixed(
            "bg-warning-50",
            "bg-status-warning-muted",
            "Warning background for caution status uses muted variant",
            ("bg-status-warning",),
        ),
        "bg-primary-50": _fixed(
            "bg-primary-50",
            "bg-status-info-muted",
            "Info/primary background for status indication uses muted variant",
            ("bg-status-info",),
        ),
        "text-neutral-900": _fixed("text-neutral-900", "text-foreground", "Primary text color for main content"),
        "text-neutral-500": _fixed(
            "text-neutral-500", "text-foreground-muted", "Secondary text for descriptions and labels"
        ),
        "text-primary-600": _by_component(
            "text-primary-600",
            "link",
            ("text-interactive-accent", "Links use interactive-accent token"),
            ("text-status-info-foreground", "Primary text color for emphasis"),
        ),
        "border-neutral-200": _fixed(
            "border-neutral-200", "border-border", "Standard border color for inputs and containers"
        ),
        "border-neutral-100": _fixed(
            "border-neutral-100",
            "border-border-muted",
            "Subtle border for dividers and secondary elements",
            ("border-border",),
        ),
        "focus:border-primary-500": _fixed(
            "focus:border-primary-500",
            "focus:border-ring",
            "Focus states should use the ring token",
            ("focus:border-interactive-active",),
        ),
        "ring-primary-500": _fixed("ring-primary-500", "ring-ring", "Focus ring should use the dedicated ring token"),
        "bg-white": _fixed("bg-white", "bg-surface", "White background should use theme-aware surface token"),
        "text-white": _fixed(
            "text-white",
            "text-foreground-inverted",
            "White text should use theme-aware foreground token",
            ("text-foreground-inverted", "text-foreground-inverted-muted"),
            confidence=MEDIUM,
        ),
    }


SIMPLE_MIGRATIONS = {
    "dark:bg-neutral-950": "bg-surface",
    "dark:bg-neutral-900": "bg-surface-muted",
    "dark:text-neutral-50": "text-foreground",
    "from-primary-500": "from-interactive-primary",
    "to-primary-600": "to-interactive-primary-hover",
    "via-primary-500": "via-interactive-primary",
    "shadow-neutral-200": "shadow-border",
    "shadow-neutral-100": "shadow-border-muted",
    "divide-neutral-200": "divide-border",
    "divide-neutral-100": "divide-border-muted",
    "placeholder-neutral-400": "placeholder-foreground-muted",
    "placeholder-neutral-500": "placeholder-foreground-muted",
    "disabled:bg-neutral-100": "disabled:bg-disabled",
    "disabled:text-neutral-400": "disabled:text-disabled-foreground",
    "disabled:text-neutral-500": "disabled:text-disabled-foreground",
    "border-error-200": "border-status-error-border",
    "border-success-200": "border-status-success-border",
    "border-warning-200": "border-status-warning-border",
    "border-primary-200": "border-status-info-border",
}


def default_migration_tables() -> MigrationTables:
    return MigrationTables(
        context_aware=MappingProxyType(_context_aware_rules()),
        simple=MappingProxyType(dict(SIMPLE_MIGRATIONS)),
    )


DEFAULT_TABLES = default_migration_tables()


def analyze_context(
    class_name: str,
    surrounding_classes: Iterable[str],
    element_type: Optional[str] = None,
) -> MigrationContext:
    siblings = list(surrounding_classes)

    component_type = "unknown"
    for family, keywords in COMPONENT_KEYWORDS:
        if any(keyword in c for c in siblings for keyword in keywords):
            component_type = family
            break
    else:
        if element_type == "a" or any("link" in c for c in siblings):
            component_type = "link"

    return MigrationContext(
        component_type=component_type,
        is_interactive=any(marker in c for c in siblings for marker in INTERACTIVE_MARKERS),
        is_dark_mode=class_name.startswith("dark:") or any(c.startswith("dark:") for c in siblings),
        has_hover_state=any("hover:" in c for c in siblings),
        parent_element=element_type,
    )


def _lookup(class_name: str, context: MigrationContext, tables: MigrationTables) -> Optional[MigrationSuggestion]:
    resolver = tables.context_aware.get(class_name)
    if resolver is not None:
        return resolver(context)
    simple = tables.simple.get(class_name)
    if simple is not None:
        return MigrationSuggestion(class_name, simple, HIGH, "Direct mapping to semantic token", ())
    return None


def _neutral_background(class_name: str) -> Optional[MigrationSuggestion]:
    if "bg-neutral-" not in class_name:
        return None
    m = SHADE_RX.search(class_name)
    if not m:
        return None
    shade = int(m.group(1))
    if shade <= 200:
        return MigrationSuggestion(
            class_name,
            NEUTRAL_BG_RX.sub("bg-surface-muted", class_name, count=1),
            LOW,
            "Light neutral background, likely a surface variant",
            ("bg-surface-subtle", "bg-surface"),
        )
    if shade >= 900:
        return MigrationSuggestion(
            class_name,
            NEUTRAL_BG_RX.sub("bg-surface", class_name, count=1),
            LOW,
            "Dark neutral background, likely main surface in dark mode",
            ("bg-surface-muted",),
        )
    return None


def get_migration_suggestion(
    class_name: str,
    context: Optional[MigrationContext] = None,
    tables: MigrationTables = DEFAULT_TABLES,
) -> Optional[MigrationSuggestion]:
    ctx = context or MigrationContext()

    found = _lookup(class_name, ctx, tables)
    if found is not None:
        return found

    modifier, bare = split_color_modifier(class_name)
    if modifier:
        if bare in tables.context_aware:
            base = tables.context_aware[bare](ctx)
            return replace(
                base,
                original=class_name,
                suggested=modifier + base.suggested,
                alternatives=tuple(modifier + alt for alt in base.alternatives),
            )
        if bare in tables.simple:
            return MigrationSuggestion(
                class_name, modifier + tables.simple[bare], HIGH, "Direct mapping with modifier preserved", ()
            )

    return _neutral_background(class_name)


def batch_migrate(
    class_names: Sequence[str],
    element_type: Optional[str] = None,
    tables: MigrationTables = DEFAULT_TABLES,
) -> Dict[str, MigrationSuggestion]:
    """Resolve every class against one shared context; unresolved classes are left out."""
    context = analyze_context("", class_names, element_type)
    results: Dict[str, MigrationSuggestion] = {}
    for class_name in class_names:
        suggestion = get_migration_suggestion(class_name, context, tables)
        if suggestion is not None:
            results[class_name] = suggestion
    return results
