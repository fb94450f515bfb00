# chatmarkup/definitions/colors.py
"""
Defines the legacy color code alphabet, the standard palette behind each
color code, and the ANSI escape sequences used for terminal previews.
Inspired by the classic chat color code system (&a, &c, &l, ...).
"""

# Every character that may follow a color marker. 0-9 and a-f are colors,
# l/m/n/o are styles, r resets and x starts a hex color.
COLOR_CHARS = "0123456789abcdeflmnorx"

# Accepted by the translator in addition to COLOR_CHARS.
OBFUSCATED_CODE = "k"

VALID_CODES = COLOR_CHARS + OBFUSCATED_CODE

RESET_CODE = "r"
HEX_CODE = "x"

# Style code -> StyleFlags field name
STYLE_CODES = {
    "k": "obfuscated",
    "l": "bold",
    "m": "strikethrough",
    "n": "underline",
    "o": "italic",
}

# Color code -> (name, standard RGB hex)
LEGACY_PALETTE = {
    "0": ("black", "#000000"),
    "1": ("dark_blue", "#0000AA"),
    "2": ("dark_green", "#00AA00"),
    "3": ("dark_aqua", "#00AAAA"),
    "4": ("dark_red", "#AA0000"),
    "5": ("dark_purple", "#AA00AA"),
    "6": ("gold", "#FFAA00"),
    "7": ("gray", "#AAAAAA"),
    "8": ("dark_gray", "#555555"),
    "9": ("blue", "#5555FF"),
    "a": ("green", "#55FF55"),
    "b": ("aqua", "#55FFFF"),
    "c": ("red", "#FF5555"),
    "d": ("light_purple", "#FF55FF"),
    "e": ("yellow", "#FFFF55"),
    "f": ("white", "#FFFFFF"),
}

# \x1b is the ESC character, [ starts the sequence, m ends it.
ANSI_RESET = "\x1b[0m"

ANSI_COLORS = {
    "0": "\x1b[30m",  # Black
    "1": "\x1b[34m",  # Dark Blue
    "2": "\x1b[32m",  # Dark Green
    "3": "\x1b[36m",  # Dark Cyan
    "4": "\x1b[31m",  # Dark Red
    "5": "\x1b[35m",  # Dark Magenta
    "6": "\x1b[33m",  # Gold
    "7": "\x1b[37m",  # Gray
    "8": "\x1b[90m",  # Dark Gray
    "9": "\x1b[94m",  # Blue
    "a": "\x1b[92m",  # Green
    "b": "\x1b[96m",  # Cyan
    "c": "\x1b[91m",  # Red
    "d": "\x1b[95m",  # Magenta
    "e": "\x1b[93m",  # Yellow
    "f": "\x1b[97m",  # White
}

# Obfuscated text has no terminal equivalent, so it is left out.
ANSI_STYLES = {
    "bold": "\x1b[1m",
    "italic": "\x1b[3m",
    "underline": "\x1b[4m",
    "strikethrough": "\x1b[9m",
}
