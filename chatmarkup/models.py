# chatmarkup/models.py
"""
Immutable rich-text models produced by the markup engine.
Everything here serializes with pydantic (model_dump / model_dump_json), which
is how a parsed message is handed to whatever renders it.
"""
from __future__ import annotations
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .definitions import colors as color_defs


def luminescence(rgb: Tuple[int, int, int]) -> float:
    """Perceptual brightness of an RGB triple, 0-255."""
    red, green, blue = rgb
    return (0.2126 * red) + (0.7152 * green) + (0.0722 * blue)


class Color(BaseModel):
    """
    A segment color. Either a legacy code (e.g. 'c' for red) or an RGB triple
    taken from a hex literal, never both.
    """
    code: Optional[str] = None
    rgb: Optional[Tuple[int, int, int]] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_kind(self) -> "Color":
        if (self.code is None) == (self.rgb is None):
            raise ValueError("A color is either a legacy code or an RGB triple.")
        if self.code is not None and self.code not in color_defs.LEGACY_PALETTE:
            raise ValueError(f"'{self.code}' is not a legacy color code.")
        if self.rgb is not None and not all(0 <= c <= 255 for c in self.rgb):
            raise ValueError(f"RGB components out of range: {self.rgb}")
        return self

    @classmethod
    def legacy(cls, code: str) -> "Color":
        return cls(code=code.lower())

    @classmethod
    def from_hex(cls, hex_digits: str) -> "Color":
        """Builds a color from 'rrggbb' or 'rgb' (a leading '#' is allowed)."""
        digits = hex_digits.lstrip("#")
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        if len(digits) != 6:
            raise ValueError(f"Expected 3 or 6 hex digits, got '{hex_digits}'")
        return cls(rgb=(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)))

    @property
    def is_legacy(self) -> bool:
        return self.code is not None

    @property
    def hex(self) -> str:
        """'#RRGGBB' form. Legacy codes resolve to their standard palette value."""
        if self.code is not None:
            return color_defs.LEGACY_PALETTE[self.code][1]
        return "#{:02X}{:02X}{:02X}".format(*self.rgb)

    @property
    def luminescence(self) -> float:
        if self.rgb is not None:
            return luminescence(self.rgb)
        return luminescence(Color.from_hex(self.hex).rgb)


class StyleFlags(BaseModel):
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    obfuscated: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def has_any(self) -> bool:
        return self.bold or self.italic or self.underline or self.strikethrough or self.obfuscated


class ClickActionType(str, Enum):
    RUN_COMMAND = "run_command"
    SUGGEST_COMMAND = "suggest_command"
    OPEN_URL = "open_url"
    COPY_TO_CLIPBOARD = "copy_to_clipboard"


class ClickAction(BaseModel):
    """What happens when a segment is clicked. One per segment at most."""
    action: ClickActionType
    value: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def run_command(cls, command: str) -> "ClickAction":
        return cls(action=ClickActionType.RUN_COMMAND, value=command)

    @classmethod
    def suggest_command(cls, command: str) -> "ClickAction":
        return cls(action=ClickActionType.SUGGEST_COMMAND, value=command)

    @classmethod
    def open_url(cls, url: str) -> "ClickAction":
        return cls(action=ClickActionType.OPEN_URL, value=url)

    @classmethod
    def copy_to_clipboard(cls, text: str) -> "ClickAction":
        return cls(action=ClickActionType.COPY_TO_CLIPBOARD, value=text)


class RichTextSegment(BaseModel):
    """
    One run of text sharing a color, styles, click action and hover tooltip.
    A message is an ordered list of these, in reading order.
    """
    text: str
    color: Optional[Color] = None
    styles: StyleFlags = Field(default_factory=StyleFlags)
    click: Optional[ClickAction] = None
    hover: Tuple["RichTextSegment", ...] = ()

    model_config = ConfigDict(frozen=True)

    def with_events(self, click: Optional[ClickAction] = None,
                    hover: Tuple["RichTextSegment", ...] = ()) -> "RichTextSegment":
        """Returns a copy carrying the given click action and hover content."""
        return self.model_copy(update={"click": click, "hover": tuple(hover)})


class Grammar(str, Enum):
    JSON = "json"
    MINI_JSON = "mini_json"
    INVALID = "invalid"


class MarkupExpression(BaseModel):
    """A bracketed expression as captured by the scanner, plus the grammar it resolved to."""
    raw: str
    grammar: Grammar
    data: Optional[dict] = None # Parsed object for the JSON grammar

    model_config = ConfigDict(frozen=True)


RichTextSegment.model_rebuild()
