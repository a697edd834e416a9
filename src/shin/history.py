from __future__ import annotations

from typing import TYPE_CHECKING

from shin.store import HistoryStoreError

if TYPE_CHECKING:
    from shin.debug_log import DebugLogger
    from shin.input_buffer import LineBuffer
    from shin.store import HistoryStore


class HistoryNavigator:
    """Prefix-filtered Up/Down recall over the history store.

    ``offset`` 0 means the buffer holds the user's own edit. ``offset`` n > 0
    means it holds the n-th most recent command starting with the prefix that
    was in the buffer when recall started.
    """

    def __init__(self, buffer: LineBuffer, store: HistoryStore,
                 logger: DebugLogger | None = None):
        self._buffer = buffer
        self._store = store
        self._logger = logger
        self.offset = 0
        self.frozen_prefix = ""  # prefix locked when recall starts

    @property
    def recalling(self) -> bool:
        return self.offset > 0

    def _lookup(self, skip: int) -> str | None:
        try:
            return self._store.lookup(self.frozen_prefix, skip)
        except HistoryStoreError as e:
            if self._logger:
                self._logger.log_error(str(e))
            return None

    def reset(self):
        """Leave recall mode, keeping whatever is in the buffer."""
        self.offset = 0

    def recall_up(self) -> bool:
        """Show the next older match. Returns True if the buffer changed."""
        if self.offset == 0:
            self.frozen_prefix = self._buffer.text
        command = self._lookup(self.offset)
        if command is None:
            # Oldest match already shown (or nothing matches)
            return False
        self._buffer.set_text(command)
        self.offset += 1
        return True

    def recall_down(self) -> bool:
        """Show the next newer match, or the original prefix after the newest."""
        if self.offset == 0:
            return False
        if self.offset == 1:
            self._buffer.set_text(self.frozen_prefix)
            self.offset = 0
            return True
        command = self._lookup(self.offset - 2)
        if command is None:
            if self._logger:
                self._logger.log_error(
                    f"history entry {self.offset - 2} for prefix {self.frozen_prefix!r} vanished"
                )
            return False
        self._buffer.set_text(command)
        self.offset -= 1
        return True

    def cancel(self) -> bool:
        """Restore the original prefix if recalling. Returns whether it was."""
        if self.offset == 0:
            return False
        self._buffer.set_text(self.frozen_prefix)
        self.offset = 0
        return True
