"""Editing commands decoded from key events.

The set of command types is closed: the session handles every one of them,
and anything :func:`decode_key` cannot map is left for the host.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from shin import keys


@dataclass(frozen=True)
class InsertChar:
    char: str


@dataclass(frozen=True)
class MoveCursor:
    offset: int


@dataclass(frozen=True)
class MoveWord:
    direction: int  # -1 left, +1 right


@dataclass(frozen=True)
class MoveHome:
    pass


@dataclass(frozen=True)
class MoveEnd:
    pass


@dataclass(frozen=True)
class DeleteBefore:
    pass


@dataclass(frozen=True)
class DeleteAfter:
    pass


@dataclass(frozen=True)
class RecallUp:
    pass


@dataclass(frozen=True)
class RecallDown:
    pass


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


Command = Union[
    InsertChar, MoveCursor, MoveWord, MoveHome, MoveEnd, DeleteBefore,
    DeleteAfter, RecallUp, RecallDown, Submit, Cancel,
]

_FIXED_KEYS = {
    keys.KEY_RETURN: Submit(),
    keys.KEY_KP_ENTER: Submit(),
    keys.KEY_ESCAPE: Cancel(),
    keys.KEY_BACKSPACE: DeleteBefore(),
    keys.KEY_DELETE: DeleteAfter(),
    keys.KEY_KP_DELETE: DeleteAfter(),
    keys.KEY_UP: RecallUp(),
    keys.KEY_KP_UP: RecallUp(),
    keys.KEY_DOWN: RecallDown(),
    keys.KEY_KP_DOWN: RecallDown(),
    keys.KEY_HOME: MoveHome(),
    keys.KEY_KP_HOME: MoveHome(),
    keys.KEY_END: MoveEnd(),
    keys.KEY_KP_END: MoveEnd(),
}

_HORIZONTAL_KEYS = {
    keys.KEY_LEFT: -1,
    keys.KEY_KP_LEFT: -1,
    keys.KEY_RIGHT: 1,
    keys.KEY_KP_RIGHT: 1,
}


def is_insertable(keyval: int) -> bool:
    """Only printable Latin-1 characters are inserted literally."""
    return keyval <= 0xFF and chr(keyval).isprintable()


def decode_key(event: keys.KeyEvent) -> Command | None:
    """Map a key press to an editing command, or None if it is not ours.

    Releases are not decoded; the caller filters them first.
    """
    cmd = _FIXED_KEYS.get(event.keyval)
    if cmd is not None:
        return cmd
    direction = _HORIZONTAL_KEYS.get(event.keyval)
    if direction is not None:
        if event.control:
            return MoveWord(direction)
        return MoveCursor(direction)
    if is_insertable(event.keyval):
        return InsertChar(chr(event.keyval))
    return None
