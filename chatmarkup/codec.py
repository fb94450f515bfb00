# chatmarkup/codec.py
"""
Translates author color markup (&a, &l, &#rgb, &#rrggbb) into the normalized
internal form (§a, §l, §x§r§r§g§g§b§b), strips or collects those codes, and
decodes normalized text into styled rich-text segments.
"""
import logging
import re
from typing import Dict, List, Optional

import config
from .definitions import colors as color_defs
from .models import Color, RichTextSegment, StyleFlags, luminescence

log = logging.getLogger(__name__)

AUTHOR_MARKER = getattr(config, 'AUTHOR_MARKER', "&")
INTERNAL_MARKER = getattr(config, 'INTERNAL_MARKER', "§")

_AUTHOR = re.escape(AUTHOR_MARKER)
_INTERNAL = re.escape(INTERNAL_MARKER)
_CODES = re.escape(color_defs.VALID_CODES)

# &#rrggbb
HEX_COLOR_PATTERN_SIX = re.compile(_AUTHOR + r"#([0-9a-fA-F]{6})")
# &#rgb - only safe to run after the six digit pass
HEX_COLOR_PATTERN_THREE = re.compile(_AUTHOR + r"#([0-9a-fA-F]{3})")
# &a, &L, &x ...
LEGACY_CODE_PATTERN = re.compile(_AUTHOR + "([" + _CODES + "])", re.IGNORECASE)
# §a once normalized
INTERNAL_CODE_PATTERN = re.compile(_INTERNAL + "([" + _CODES + "])", re.IGNORECASE)
# §x§r§r§g§g§b§b or any single §<code>
FORMAT_TOKEN_PATTERN = re.compile(
    _INTERNAL + color_defs.HEX_CODE + "((?:" + _INTERNAL + "[0-9a-fA-F]){6})|" + _INTERNAL + "([" + _CODES + "])",
    re.IGNORECASE,
)


def _dark_threshold() -> float:
    return getattr(config, 'DARK_LUMINESCENCE_THRESHOLD', 16)


def _hex_replacement(digits: str, block_dark_colors: bool) -> str:
    """&x&r&r&g&g&b&b for six hex digits, or '' when blocked as too dark."""
    if block_dark_colors:
        rgb = (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        if luminescence(rgb) < _dark_threshold():
            log.debug("Dropping hex color #%s, too dark to read.", digits)
            return ""
    return AUTHOR_MARKER + color_defs.HEX_CODE + "".join(AUTHOR_MARKER + c for c in digits)


def apply_color_codes(text: str, block_dark_colors: bool = False) -> str:
    """
    Translates 6 and 3 character hex codes (&#rrggbb, &#rgb) and standard
    legacy codes (&a, &7, ...) into the internal § form.

    Args:
        text: The string to colorize.
        block_dark_colors: Drop &0 and any hex color with a luminescence
            below the dark threshold.

    Returns:
        The normalized string.
    """
    # Before hex translation so the 0 digits inside hex literals survive
    if block_dark_colors:
        text = text.replace(AUTHOR_MARKER + "0", "")

    # Six first, the three digit pattern also matches the start of six digit literals
    text = HEX_COLOR_PATTERN_SIX.sub(lambda m: _hex_replacement(m.group(1), block_dark_colors), text)
    text = HEX_COLOR_PATTERN_THREE.sub(
        lambda m: _hex_replacement("".join(c * 2 for c in m.group(1)), block_dark_colors), text
    )
    return LEGACY_CODE_PATTERN.sub(lambda m: INTERNAL_MARKER + m.group(1).lower(), text)


def remove_color_codes(text: str) -> str:
    """Completely removes every standard and hex color code from a string."""
    return INTERNAL_CODE_PATTERN.sub("", apply_color_codes(text))


def get_color_codes(text: str) -> str:
    """
    Returns only the color codes found in a string, hex codes included, in
    order of appearance and in the internal form.
    """
    return "".join(m.group(0) for m in INTERNAL_CODE_PATTERN.finditer(apply_color_codes(text)))


def decode(text: str) -> List[RichTextSegment]:
    """
    Splits normalized text into segments, one per run of identical formatting.
    A color resets styles, §r resets everything and a §x that isn't followed
    by six hex digits is ignored.
    """
    segments: List[RichTextSegment] = []
    color: Optional[Color] = None
    styles: Dict[str, bool] = {}
    position = 0

    def flush(end: int):
        chunk = text[position:end]
        if chunk:
            segments.append(RichTextSegment(text=chunk, color=color, styles=StyleFlags(**styles)))

    for match in FORMAT_TOKEN_PATTERN.finditer(text):
        flush(match.start())
        position = match.end()

        hex_digits, code = match.group(1), match.group(2)
        if hex_digits is not None:
            color = Color.from_hex(hex_digits.replace(INTERNAL_MARKER, ""))
            styles = {}
            continue

        code = code.lower()
        if code == color_defs.RESET_CODE:
            color, styles = None, {}
        elif code in color_defs.STYLE_CODES:
            styles[color_defs.STYLE_CODES[code]] = True
        elif code in color_defs.LEGACY_PALETTE:
            color, styles = Color.legacy(code), {}
        # A lone §x has nothing to apply

    flush(len(text))
    return segments


def segments_from_text(text: str, block_dark_colors: bool = False) -> List[RichTextSegment]:
    """Colorizes author text and decodes it into segments."""
    return decode(apply_color_codes(text, block_dark_colors))
