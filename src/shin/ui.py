from __future__ import annotations

import curses

from shin import keys
from shin.keys import KeyEvent
from shin.surface import ATTR_UNDERLINE, Preedit, Surface

# Control characters that terminals send for editing keys
_CHAR_KEYS = {
    "\n": keys.KEY_RETURN,
    "\r": keys.KEY_RETURN,
    "\x1b": keys.KEY_ESCAPE,
    "\x7f": keys.KEY_BACKSPACE,
    "\x08": keys.KEY_BACKSPACE,
    "\x01": keys.KEY_HOME,  # Ctrl+A
    "\x05": keys.KEY_END,  # Ctrl+E
}

_CURSES_KEYS = {
    curses.KEY_ENTER: keys.KEY_RETURN,
    curses.KEY_BACKSPACE: keys.KEY_BACKSPACE,
    curses.KEY_DC: keys.KEY_DELETE,
    curses.KEY_UP: keys.KEY_UP,
    curses.KEY_DOWN: keys.KEY_DOWN,
    curses.KEY_LEFT: keys.KEY_LEFT,
    curses.KEY_RIGHT: keys.KEY_RIGHT,
    curses.KEY_HOME: keys.KEY_HOME,
    curses.KEY_END: keys.KEY_END,
}

# Ctrl+arrow key names; codes vary by terminal, names are portable
_CONTROL_KEYNAMES = {
    "kLFT5": keys.KEY_LEFT,
    "kRIT5": keys.KEY_RIGHT,
}


def key_event_from_curses(key: str | int, keyname: str = "") -> KeyEvent | None:
    """Translate a ``get_wch()`` result into a key press event.

    ``keyname`` is ``curses.keyname(key)`` for function keys (ints).
    """
    if isinstance(key, str):
        if key in _CHAR_KEYS:
            return KeyEvent(_CHAR_KEYS[key])
        return KeyEvent(keys.keysym_for_char(key))
    if key in _CURSES_KEYS:
        return KeyEvent(_CURSES_KEYS[key])
    if keyname in _CONTROL_KEYNAMES:
        return KeyEvent(_CONTROL_KEYNAMES[keyname], state=keys.CONTROL_MASK)
    return None


def _attr_for(kind: str) -> int:
    if kind == ATTR_UNDERLINE:
        return curses.A_UNDERLINE
    return curses.A_NORMAL


class CursesSurface(Surface):
    """Draws the preedit line in a curses window."""

    PROMPT = "$ "

    def __init__(self, stdscr):
        super().__init__()
        self.stdscr = stdscr
        self.status = "Enter run | Esc cancel | Up/Down history | Ctrl+Left/Right word"
        curses.curs_set(1)
        self.stdscr.timeout(25)
        self.stdscr.keypad(True)

    def update_preedit(self, preedit: Preedit):
        super().update_preedit(preedit)
        self.draw()

    def draw(self):
        self.stdscr.erase()
        h, w = self.stdscr.getmaxyx()
        max_visible = w - 1
        prompt = self.PROMPT
        text = self.preedit.text if self.preedit.visible else ""
        cursor_in_full = len(prompt) + self.preedit.cursor

        # Keep the cursor inside the window
        scroll_off = 0
        if len(prompt) + len(text) > max_visible and cursor_in_full >= max_visible:
            scroll_off = cursor_in_full - max_visible + 1

        try:
            self.stdscr.addnstr(0, 0, prompt, max_visible)
            for col, ch in enumerate(text):
                x = len(prompt) + col - scroll_off
                if x < 0 or x >= max_visible:
                    continue
                attr = curses.A_NORMAL
                for a in self.preedit.attributes:
                    if a.start <= col < a.end:
                        attr |= _attr_for(a.kind)
                self.stdscr.addstr(0, x, ch, attr)
            if h > 1:
                self.stdscr.addnstr(h - 1, 0, self.status, max_visible, curses.A_DIM)
            self.stdscr.move(0, max(0, cursor_in_full - scroll_off))
        except curses.error:
            pass
        self.stdscr.refresh()
