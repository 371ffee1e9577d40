from __future__ import annotations

from typing import Iterator, List, Tuple

from .models import RawTokenUsage, SourceFile
from .patterns import LITERAL_PATTERNS, PALETTE_VAR_RX
from .text_utils import iter_class_tokens, trim_snippet


def iter_literals(line: str) -> Iterator[Tuple[str, int]]:
    """Yield ``(value, value_start)`` for quoted and template literal spans.

    Each pattern runs over the whole line on its own, so a span can be
    reported by both patterns. Empty literals are skipped.
    """
    for pattern in LITERAL_PATTERNS:
        for m in pattern.finditer(line):
            value = m.group(1)
            if value:
                yield value, m.start(1)


def extract_class_usages(line: str, source: str, line_no: int) -> List[RawTokenUsage]:
    usages: List[RawTokenUsage] = []
    context = trim_snippet(line)
    for value, value_start in iter_literals(line):
        tokens = list(iter_class_tokens(value))
        siblings = tuple(token for token, _ in tokens)
        for token, offset in tokens:
            usages.append(
                RawTokenUsage(
                    file=source,
                    line=line_no,
                    column=value_start + offset + 1,
                    raw_token=token,
                    line_context=context,
                    siblings=siblings,
                )
            )
    return usages


def extract_palette_var_usages(line: str, source: str, line_no: int) -> List[RawTokenUsage]:
    context = trim_snippet(line)
    return [
        RawTokenUsage(
            file=source,
            line=line_no,
            column=m.start() + 1,
            raw_token=m.group(0),
            line_context=context,
            palette_var=True,
        )
        for m in PALETTE_VAR_RX.finditer(line)
    ]


def extract_from_source(source: SourceFile) -> Iterator[RawTokenUsage]:
    """Positioned raw class-name candidates for one file, in line order.

    Class candidates of a line come first, then its ``--palette-*`` usages.
    Re-extraction from the same text always yields the same sequence.
    """
    for line_no, line in enumerate(source.text.split("\n"), start=1):
        yield from extract_class_usages(line, source.label, line_no)
        yield from extract_palette_var_usages(line, source.label, line_no)
