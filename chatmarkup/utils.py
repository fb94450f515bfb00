# chatmarkup/utils.py
"""
Helpers for consumers of parsed segments: flattening, re-serializing to
author markup, and terminal previews.
"""
from typing import Iterable, List

from .codec import AUTHOR_MARKER
from .definitions import colors as color_defs
from .models import Color, RichTextSegment

# StyleFlags field -> style code
_STYLE_FIELDS = {field: code for code, field in color_defs.STYLE_CODES.items()}


def plain_text(segments: Iterable[RichTextSegment]) -> str:
    """The text a reader sees, without any formatting."""
    return "".join(segment.text for segment in segments)


def _legacy_color(color: Color) -> str:
    if color.is_legacy:
        return AUTHOR_MARKER + color.code
    return AUTHOR_MARKER + color.hex.lower()


def to_legacy(segments: Iterable[RichTextSegment]) -> str:
    """
    Re-serializes segments to & markup (&c, &l, &#rrggbb). Hover and click
    events have no legacy form and are dropped.
    """
    parts: List[str] = []
    first = True
    for segment in segments:
        if segment.color is not None:
            parts.append(_legacy_color(segment.color))
        elif not first:
            parts.append(AUTHOR_MARKER + color_defs.RESET_CODE)
        for field, code in _STYLE_FIELDS.items():
            if getattr(segment.styles, field):
                parts.append(AUTHOR_MARKER + code)
        parts.append(segment.text)
        first = False
    return "".join(parts)


def colorize(segments: Iterable[RichTextSegment]) -> str:
    """
    Renders segments with ANSI escape codes for a terminal preview.
    Hex colors use 24-bit sequences.
    """
    output: List[str] = []
    formatted = False
    for segment in segments:
        codes = []
        if segment.color is not None:
            if segment.color.is_legacy:
                codes.append(color_defs.ANSI_COLORS[segment.color.code])
            else:
                codes.append("\x1b[38;2;{};{};{}m".format(*segment.color.rgb))
        for field, sequence in color_defs.ANSI_STYLES.items():
            if getattr(segment.styles, field):
                codes.append(sequence)

        if formatted:
            output.append(color_defs.ANSI_RESET)
        formatted = bool(codes)
        output.extend(codes)
        output.append(segment.text)

    if formatted:
        output.append(color_defs.ANSI_RESET)
    return "".join(output)
