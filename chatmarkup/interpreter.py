# chatmarkup/interpreter.py
"""
Interprets one scanned expression into rich-text segments.

Two grammars are understood:
    Full form - a JSON object:
        {"message-parts":[{"base-text":"Hi","hover-text":"...","run-command":"/spawn"}]}
    MiniJSON - comma separated fields:
        ({function,base text,function text[,function text 2]})
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from . import codec
from .models import ClickAction, Grammar, MarkupExpression, RichTextSegment

log = logging.getLogger(__name__)


class MalformedExpressionError(ValueError):
    """An expression looks deliberate but breaks its grammar's structure."""


class InvalidJSONError(MalformedExpressionError):
    """A full form JSON object without message-parts or a part without base-text."""


class InvalidMiniJSONError(MalformedExpressionError):
    """A MiniJSON expression with fewer than three fields."""


# Checked in this order, the first key present wins.
CLICK_KEYS: Tuple[Tuple[str, Any], ...] = (
    ("run-command", ClickAction.run_command),
    ("suggest-command", ClickAction.suggest_command),
    ("open-url", ClickAction.open_url),
    ("copy-to-clipboard", ClickAction.copy_to_clipboard),
)

# MiniJSON function -> (shows hover text, click action builder, click uses function text 2)
MINI_JSON_FUNCTIONS: Dict[str, Tuple[bool, Any, bool]] = {
    "hover": (True, None, False),
    "hover-text": (True, None, False),
    "command": (False, ClickAction.run_command, False),
    "run-command": (False, ClickAction.run_command, False),
    "suggest-command": (False, ClickAction.suggest_command, False),
    "link": (False, ClickAction.open_url, False),
    "url": (False, ClickAction.open_url, False),
    "open-url": (False, ClickAction.open_url, False),
    "clipboard": (False, ClickAction.copy_to_clipboard, False),
    "copy-to-clipboard": (False, ClickAction.copy_to_clipboard, False),
    "hover-command": (True, ClickAction.run_command, True),
    "hover-suggest": (True, ClickAction.suggest_command, True),
}

BRACKET_PAIRS = {"(": ")", "{": "}"}


def _as_text(value: Any) -> str:
    """JSON values other than strings are shown as their JSON text."""
    return value if isinstance(value, str) else json.dumps(value)


def _with_events(segments: List[RichTextSegment], click: Optional[ClickAction],
                 hover: Tuple[RichTextSegment, ...]) -> List[RichTextSegment]:
    return [segment.with_events(click=click, hover=hover) for segment in segments]


def classify(raw: str) -> MarkupExpression:
    """
    Decides once which grammar a scanned expression uses.

    Raises:
        InvalidJSONError: the expression is JSON nested too deeply to parse.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        data = None
    except RecursionError as e:
        raise InvalidJSONError("JSON object is nested too deeply.") from e

    if isinstance(data, dict):
        return MarkupExpression(raw=raw, grammar=Grammar.JSON, data=data)
    if len(raw) >= 2 and BRACKET_PAIRS.get(raw[0]) == raw[-1]:
        return MarkupExpression(raw=raw, grammar=Grammar.MINI_JSON)
    log.debug("Expression '%s' matches neither grammar.", raw)
    return MarkupExpression(raw=raw, grammar=Grammar.INVALID)


def format_json(json_object: Dict[str, Any], block_dark_colors: bool = False) -> List[RichTextSegment]:
    """
    Converts a full form JSON object into segments, one group per message part.

    Raises:
        InvalidJSONError: message-parts is missing or not a list, a part is not
            an object, or a part has no base-text.
    """
    parts = json_object.get("message-parts")
    if not isinstance(parts, list):
        raise InvalidJSONError("Incorrect syntax in JSON object: 'message-parts' must be a list.")

    segments: List[RichTextSegment] = []
    for part in parts:
        if not isinstance(part, dict):
            raise InvalidJSONError("Incorrect syntax in JSON object: every message part must be an object.")
        if "base-text" not in part:
            raise InvalidJSONError("Every message part must contain base-text.")

        hover: Tuple[RichTextSegment, ...] = ()
        if "hover-text" in part:
            hover = tuple(codec.segments_from_text(_as_text(part["hover-text"]), block_dark_colors))

        # Only one click event per part
        click = None
        for key, builder in CLICK_KEYS:
            if key in part:
                click = builder(_as_text(part[key]))
                break

        base = codec.segments_from_text(_as_text(part["base-text"]), block_dark_colors)
        segments.extend(_with_events(base, click, hover))
    return segments


def format_json_string(json_string: str, block_dark_colors: bool = False) -> List[RichTextSegment]:
    """Parses a JSON string and hands it to format_json."""
    try:
        json_object = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise InvalidJSONError(f"Incorrect syntax in JSON object: {e}") from e
    except RecursionError as e:
        raise InvalidJSONError("JSON object is nested too deeply.") from e
    if not isinstance(json_object, dict):
        raise InvalidJSONError("Incorrect syntax in JSON object: expected an object.")
    return format_json(json_object, block_dark_colors)


class MiniJSON:
    """
    The compact {function,base text,function text[,function text 2]} form.
    An unknown function leaves the expression valid but inert: its base text
    is shown with no hover or click.
    """

    def __init__(self, expression: str):
        inner = expression[1:-1] if len(expression) >= 2 else ""
        fields = inner.replace("{", "").replace("}", "").split(",")
        # Trailing empty fields don't count
        while fields and fields[-1] == "":
            fields.pop()

        if len(fields) < 3:
            raise InvalidMiniJSONError(f"Invalid MiniJSON expression '{expression}': expected at least 3 fields.")

        self.function: str = fields[0].strip().lower()
        self.base_text: str = fields[1]
        self.function_text: str = fields[2]
        self.function_text2: str = fields[3] if len(fields) >= 4 else ""

    @property
    def is_known_function(self) -> bool:
        return self.function in MINI_JSON_FUNCTIONS

    def get_segments(self, block_dark_colors: bool = False) -> List[RichTextSegment]:
        base = codec.segments_from_text(self.base_text, block_dark_colors)
        if not self.is_known_function:
            log.debug("Unknown MiniJSON function '%s', showing base text only.", self.function)
            return base

        shows_hover, click_builder, click_uses_second = MINI_JSON_FUNCTIONS[self.function]
        hover: Tuple[RichTextSegment, ...] = ()
        if shows_hover:
            hover = tuple(codec.segments_from_text(self.function_text, block_dark_colors))
        click = None
        if click_builder:
            click = click_builder(self.function_text2 if click_uses_second else self.function_text)
        return _with_events(base, click, hover)


def interpret(expression: MarkupExpression, block_dark_colors: bool = False) -> List[RichTextSegment]:
    """
    Turns a classified expression into segments.

    Raises:
        MalformedExpressionError: on structural errors in either grammar.
    """
    if expression.grammar is Grammar.JSON:
        return format_json(expression.data, block_dark_colors)
    if expression.grammar is Grammar.MINI_JSON:
        return MiniJSON(expression.raw).get_segments(block_dark_colors)
    # Neither grammar, shown as written
    return codec.segments_from_text(expression.raw, block_dark_colors)
