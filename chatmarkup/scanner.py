# chatmarkup/scanner.py
"""
Pulls one balanced bracketed expression, e.g. ({hover,a,b}) or {"k": 1},
out of a message.
"""
import logging
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)

ESCAPE_CHAR = "\\"


@dataclass
class ScanResult:
    """The enclosed text (brackets included) and the index just past it."""
    expression: Optional[str]
    end: int

    @property
    def found(self) -> bool:
        return self.expression is not None


NOT_FOUND = ScanResult(None, -1)


def get_enclosed(text: str, start: int) -> ScanResult:
    """
    Finds the bracket that closes the one at `start`.

    '(' pairs with ')', anything else with '}'. Brackets directly preceded by
    a backslash don't count. Reaching the end of the string first is not an
    error, it returns NOT_FOUND.
    """
    if start >= len(text):
        return NOT_FOUND

    curved = text[start] == '('
    opener, closer = ('(', ')') if curved else ('{', '}')
    depth, i = 1, start + 1

    while depth > 0:
        if i == len(text):
            log.debug("Unterminated expression starting at %d in '%s'", start, text)
            return NOT_FOUND

        char = text[i]
        escaped = text[i - 1] == ESCAPE_CHAR
        i += 1
        if escaped:
            continue

        if char == closer:
            depth -= 1
        elif char == opener:
            depth += 1

    return ScanResult(text[start:i], i)
