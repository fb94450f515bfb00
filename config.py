# config.py
"""
Markup engine and preview server configuration settings.
"""

# --- Markup ---
TRIGGER_CHAR = "$"        # Introduces an embedded expression: $(...) or ${...}
AUTHOR_MARKER = "&"       # Color marker people actually type (&a, &#ff0000)
INTERNAL_MARKER = "§"     # Normalized marker after translation
BLOCK_DARK_COLORS = False # Default for parse_expression when not given explicitly
DARK_LUMINESCENCE_THRESHOLD = 16 # Hex colors darker than this are dropped when blocking

# --- Preview Server ---
HOST = "0.0.0.0"  # Listen on all available network interfaces
PORT = 4000       # Port for clients to connect to
ENCODING = "utf-8" # Encoding for network communication
LOG_FILE = "markup_preview.log"

# --- Input ---
MAX_INPUT_LENGTH = 512
