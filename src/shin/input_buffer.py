from shin.words import next_boundary, previous_boundary


class LineBuffer:
    """Editable single line with a character-indexed cursor.

    Editing methods return True when the text changed, motion methods
    return True when the cursor moved.
    """

    def __init__(self):
        self._text = ""
        self._cursor = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._text)

    def insert(self, ch: str) -> bool:
        """Insert text at the cursor position."""
        if not ch:
            return False
        self._text = self._text[: self._cursor] + ch + self._text[self._cursor :]
        self._cursor += len(ch)
        return True

    def delete_before(self) -> bool:
        """Delete the character before the cursor."""
        if self._cursor == 0:
            return False
        self._text = self._text[: self._cursor - 1] + self._text[self._cursor :]
        self._cursor -= 1
        return True

    def delete_after(self) -> bool:
        """Delete the character at the cursor."""
        if self._cursor >= len(self._text):
            return False
        self._text = self._text[: self._cursor] + self._text[self._cursor + 1 :]
        return True

    def _set_cursor(self, pos: int) -> bool:
        pos = max(0, min(pos, len(self._text)))
        moved = pos != self._cursor
        self._cursor = pos
        return moved

    def move(self, offset: int) -> bool:
        """Move the cursor by ``offset`` characters, clamped to the line."""
        return self._set_cursor(self._cursor + offset)

    def move_to_boundary(self, direction: int) -> bool:
        """Jump to the previous (direction < 0) or next word boundary."""
        if direction < 0:
            return self._set_cursor(previous_boundary(self._text, self._cursor))
        return self._set_cursor(next_boundary(self._text, self._cursor))

    def move_home(self) -> bool:
        return self._set_cursor(0)

    def move_end(self) -> bool:
        return self._set_cursor(len(self._text))

    def set_text(self, text: str) -> bool:
        """Replace buffer content and move cursor to end."""
        changed = text != self._text
        self._text = text
        self._cursor = len(text)
        return changed

    def clear(self) -> str:
        """Clear the buffer and return the previous content."""
        text = self._text
        self._text = ""
        self._cursor = 0
        return text
