"""Word-boundary search for cursor jumps.

Boundaries are found with a bytes pattern over the UTF-8 encoded text. Bytes
patterns only know the ASCII word class ``[A-Za-z0-9_]``, so every non-ASCII
character counts as non-word: ``"héllo"`` splits into ``h``, ``é`` and ``llo``.
This is the documented behavior, not full Unicode word segmentation.
"""

from __future__ import annotations

import re

_WORD_BOUNDARY_RE = re.compile(rb"\b")


def char_offset(text: str, byte_offset: int) -> int:
    """Convert a UTF-8 byte offset into ``text`` to a character offset.

    Raises ValueError if the byte offset does not start a character.
    """
    pos = 0
    for index, ch in enumerate(text):
        if pos == byte_offset:
            return index
        pos += len(ch.encode("utf-8"))
    if pos == byte_offset:
        return len(text)
    raise ValueError(f"byte offset {byte_offset} is not on a character boundary")


def _boundaries(text: str) -> list[int]:
    return [m.start() for m in _WORD_BOUNDARY_RE.finditer(text.encode("utf-8"))]


def previous_boundary(text: str, cursor: int) -> int:
    """Return the nearest word boundary before ``cursor``, or 0."""
    before = text[:cursor]
    found = _boundaries(before)
    if not found:
        return 0
    boundary = found[-1]
    # Already sitting on a boundary: jump to the one before it
    if boundary == len(before.encode("utf-8")):
        if len(found) < 2:
            return 0
        boundary = found[-2]
    return char_offset(before, boundary)


def next_boundary(text: str, cursor: int) -> int:
    """Return the nearest word boundary after ``cursor``, or ``len(text)``."""
    after = text[cursor:]
    found = _boundaries(after)
    if not found:
        return len(text)
    boundary = found[0]
    if boundary == 0:
        if len(found) < 2:
            return len(text)
        boundary = found[1]
    return cursor + char_offset(after, boundary)
