from __future__ import annotations

import re
from typing import Iterator, Tuple

from .patterns import CLASS_CHAR, CLASS_TOKEN_RX, COLOR_MODIFIERS, COLOR_MODIFIER_RX, MODIFIER_CHAIN_RX


def trim_snippet(text: str, max_len: int = 240) -> str:
    value = text.strip()
    if len(value) <= max_len:
        return value
    return value[: max_len - 3] + "..."


def iter_class_tokens(value: str) -> Iterator[Tuple[str, int]]:
    """Yield ``(token, offset)`` for every whitespace-delimited token in ``value``."""
    for m in CLASS_TOKEN_RX.finditer(value):
        yield m.group(0), m.start()


def split_modifiers(class_name: str) -> Tuple[str, str]:
    """Split ``md:hover:p-4`` into ``("md:hover:", "p-4")``."""
    m = MODIFIER_CHAIN_RX.match(class_name)
    if not m:
        return "", class_name
    return m.group(0), class_name[m.end():]


def strip_modifiers(class_name: str) -> str:
    return split_modifiers(class_name)[1]


def strip_color_modifiers(class_name: str) -> str:
    # Each known modifier is removed at most once, in a fixed order.
    clean = class_name
    for modifier in COLOR_MODIFIERS:
        if clean.startswith(modifier):
            clean = clean[len(modifier):]
    return clean


def split_color_modifier(class_name: str) -> Tuple[str, str]:
    m = COLOR_MODIFIER_RX.match(class_name)
    if not m:
        return "", class_name
    return m.group(0), class_name[m.end():]


def class_pattern(token: str) -> re.Pattern[str]:
    """Regex matching ``token`` as a whole class name, not part of a longer one."""
    return re.compile(rf"(?<!{CLASS_CHAR}){re.escape(token)}(?!{CLASS_CHAR})")
