from __future__ import annotations

import re

# Literal spans on a single physical line. Both are scanned unconditionally.
QUOTED_STRING_RX = re.compile(r"[\"']([^\"']*?)[\"']")
TEMPLATE_LITERAL_RX = re.compile(r"`([^`]*?)`")
LITERAL_PATTERNS = (QUOTED_STRING_RX, TEMPLATE_LITERAL_RX)

CLASS_TOKEN_RX = re.compile(r"\S+")

# Direct palette CSS custom properties, e.g. var(--palette-primary-500).
PALETTE_VAR_RX = re.compile(r"--palette-[\w-]+")

# Known state modifiers for color tokens, stripped one level at a time.
COLOR_MODIFIERS = ("dark:", "hover:", "focus:", "active:", "disabled:", "group-hover:")
COLOR_MODIFIER_RX = re.compile(r"^(dark:|hover:|focus:|active:|disabled:|group-hover:)")

# Any chain of variant modifiers, e.g. md:hover:.
MODIFIER_CHAIN_RX = re.compile(r"^(?:[\w-]+:)+")

ARBITRARY_HEX_RX = re.compile(r"\[#[\da-fA-F]{3,8}\]")
NUMERIC_VALUE_RX = re.compile(r"^\d+(\.\d+)?$")
# Fractions (1/2), arbitrary values ([300px]) or keyword-like values.
NON_NUMERIC_VALUE_RX = re.compile(r"^(\d+/\d+|\[.+\]|[a-z])")

BORDER_WIDTH_RX = re.compile(r"^border(?:-[trblxy])?(?:-\d+)?$")
BORDER_WIDTH_VALUE_RX = re.compile(r"border(?:-[trblxy])?-(\d+)$")
BORDER_DIRECTION_RX = re.compile(r"^border-([trblxy])-(\d+)$")
BORDER_PLAIN_RX = re.compile(r"^border-(\d+)$")

GRADIENT_STOP_RX = re.compile(r"^(from|via|to)-")

ARBITRARY_TEXT_RX = re.compile(r"^text-\[.+\]$")
OVERSIZED_TEXT_RX = re.compile(r"^text-(5|6|7|8|9)xl$")
ARBITRARY_FONT_RX = re.compile(r"^font-\[.+\]$")
ARBITRARY_LEADING_RX = re.compile(r"^leading-\[.+\]$")
ARBITRARY_TRACKING_RX = re.compile(r"^tracking-\[.+\]$")

RADIUS_DIRECTION_RX = re.compile(r"^-(tl|tr|br|bl|t|r|b|l)(-|$)")
RADIUS_SPLIT_RX = re.compile(r"^-(tl|tr|br|bl|t|r|b|l)(.*)$")
ARBITRARY_VALUE_RX = re.compile(r"^\[.+\]$")
OVERSIZED_RADIUS_RX = re.compile(r"^(2|3)xl$")

COLOR_FAMILY_RX = re.compile(r"^(bg|text|border|ring)-(.+)$")
NEUTRAL_BG_RX = re.compile(r"bg-neutral-\d+")
SHADE_RX = re.compile(r"-(\d+)")

# Characters that continue a class name; used to anchor fix replacements.
CLASS_CHAR = r"[\w-]"
