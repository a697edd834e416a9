import re

# Select Graphic Rendition only (colors, bold, ...); ':' covers 24-bit colors
_ANSI_SGR_RE = re.compile(r"\x1b\[[0-9;:]*m")


def strip_sgr(text: str) -> str:
    """Remove SGR escape sequences (text attributes) from text."""
    return _ANSI_SGR_RE.sub("", text)
