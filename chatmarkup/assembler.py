# chatmarkup/assembler.py
"""
Top level entry point: turns a whole chat message into rich-text segments.
"""
import logging
from typing import List, Optional

import config
from . import codec, interpreter, scanner
from .interpreter import MalformedExpressionError
from .models import RichTextSegment

log = logging.getLogger(__name__)

TRIGGER_CHAR = getattr(config, 'TRIGGER_CHAR', "$")


def _resolve_block_dark_colors(block_dark_colors: Optional[bool]) -> bool:
    if block_dark_colors is None:
        return getattr(config, 'BLOCK_DARK_COLORS', False)
    return block_dark_colors


def parse_expression(message: str, block_dark_colors: Optional[bool] = None) -> List[RichTextSegment]:
    """
    Parses every $(...) and ${...} expression in a message.

    Literal text between expressions keeps the color codes active at the end
    of the text before it, so "&cRed $(...) still red" stays red after the
    expression. An unterminated expression loses its trigger character and
    is shown as plain text.

    Args:
        message: The raw message.
        block_dark_colors: Drop colors too dark to read. None uses config.

    Returns:
        The message's segments in reading order.

    Raises:
        MalformedExpressionError: An expression breaks its grammar's structure.
    """
    block_dark_colors = _resolve_block_dark_colors(block_dark_colors)
    if TRIGGER_CHAR not in message:
        return codec.segments_from_text(message, block_dark_colors)

    segments: List[RichTextSegment] = []
    previous_color = ""
    while TRIGGER_CHAR in message:
        section_start = message.index(TRIGGER_CHAR)
        scan = scanner.get_enclosed(message, section_start + 1)
        # Bad syntax, drop this trigger and look for the next one
        if not scan.found:
            message = message.replace(TRIGGER_CHAR, "", 1)
            continue

        literal = codec.apply_color_codes(previous_color + message[:section_start], block_dark_colors)
        segments.extend(codec.decode(literal))
        previous_color = codec.get_color_codes(literal)

        expression = interpreter.classify(scan.expression)
        log.debug("Expression '%s' resolved to %s.", scan.expression, expression.grammar.value)
        segments.extend(interpreter.interpret(expression, block_dark_colors))
        message = message[scan.end:]

    segments.extend(codec.segments_from_text(previous_color + message, block_dark_colors))
    return segments


def parse_expression_safe(message: str, block_dark_colors: Optional[bool] = None) -> List[RichTextSegment]:
    """
    Like parse_expression, but a malformed expression makes the whole message
    fall back to plain colored text instead of raising.
    """
    try:
        return parse_expression(message, block_dark_colors)
    except MalformedExpressionError as e:
        log.warning("Malformed expression in message, showing it unformatted: %s", e)
        return codec.segments_from_text(message, _resolve_block_dark_colors(block_dark_colors))
