from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Callable

from shin.commands import (
    Cancel,
    Command,
    DeleteAfter,
    DeleteBefore,
    InsertChar,
    MoveCursor,
    MoveEnd,
    MoveHome,
    MoveWord,
    RecallDown,
    RecallUp,
    Submit,
    decode_key,
)
from shin.config import Config
from shin.executor import ExecResult, format_output, run_command
from shin.history import HistoryNavigator
from shin.input_buffer import LineBuffer
from shin.store import HistoryStoreError
from shin.surface import Preedit
from shin.types import text_preview

if TYPE_CHECKING:
    from shin.debug_log import DebugLogger
    from shin.keys import KeyEvent
    from shin.store import HistoryStore
    from shin.surface import Surface


class DeferredExit:
    """Runs ``action`` once, ``delay`` seconds after :meth:`schedule`.

    Holds nothing but the action, so it still fires after the session that
    scheduled it is gone. The delay lets pending host updates flush.
    """

    def __init__(self, action: Callable[[], None], delay: float = 0.1):
        self._action = action
        self.delay = delay
        self._timer: threading.Timer | None = None

    @property
    def scheduled(self) -> bool:
        return self._timer is not None

    def schedule(self):
        if self._timer is not None:
            return
        self._timer = threading.Timer(self.delay, self._action)
        self._timer.start()

    def cancel(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class Session:
    """One composition: a line buffer, its recall state and a host surface.

    Key events are handled one at a time; each call finishes all its edits,
    history access and renders before returning.
    """

    def __init__(
        self,
        surface: Surface,
        store: HistoryStore,
        config: Config | None = None,
        logger: DebugLogger | None = None,
        on_exit: DeferredExit | None = None,
        runner: Callable[[str, object], ExecResult] = run_command,
        clock: Callable[[], float] = time.monotonic,
        session_id: int = 0,
    ):
        self.surface = surface
        self.store = store
        self.config = config or Config()
        self.logger = logger
        self.on_exit = on_exit
        self.session_id = session_id
        self._runner = runner
        self._clock = clock
        self.buffer = LineBuffer()
        self.navigator = HistoryNavigator(self.buffer, store, logger)
        self.finished = False
        self._enabled_at: float | None = None

    def _log(self, text: str):
        if self.logger:
            self.logger.log_event(f"[{self.session_id}] {text}")

    def _log_error(self, text: str):
        if self.logger:
            self.logger.log_error(f"[{self.session_id}] {text}")

    def render(self):
        text, cursor = self.buffer.text, self.buffer.cursor
        self._log(f"render text={text_preview(text)!r} cursor={cursor}")
        self.surface.update_preedit(Preedit.underlined(text, cursor))

    def _clear(self):
        self.buffer.clear()
        self.navigator.reset()
        self.render()

    def finish(self):
        """End the session: tell the host, then schedule the exit."""
        if self.finished:
            return
        self._log("finish")
        self.finished = True
        self.surface.finish()
        if self.on_exit:
            self.on_exit.schedule()

    # --- Host lifecycle ---

    def enable(self):
        self._log("enable")
        self._enabled_at = self._clock()

    def focus_out(self):
        self._log("focus out")
        if self._enabled_at is not None and (
            self._clock() - self._enabled_at < self.config.session.focus_grace
        ):
            # Hosts send a spurious focus-out right after activation
            self._log("focus out too soon after enable, ignored")
            return
        self._clear()
        self.finish()

    def reset(self):
        self._log("reset")
        self._clear()
        self.finish()

    # --- Key handling ---

    def process_key_event(self, event: KeyEvent) -> bool:
        """Handle one key event. Returns False if the host should handle it."""
        self._log(f"key {event.describe()}")
        if event.released or self.finished:
            return True
        cmd = decode_key(event)
        if cmd is None:
            return False
        self.execute(cmd)
        return True

    def execute(self, cmd: Command):
        if isinstance(cmd, Submit):
            self._submit()
        elif isinstance(cmd, Cancel):
            self._cancel()
        elif isinstance(cmd, RecallUp):
            if self.navigator.recall_up():
                self.render()
        elif isinstance(cmd, RecallDown):
            if self.navigator.recall_down():
                self.render()
        elif isinstance(cmd, InsertChar):
            self._edit(self.buffer.insert(cmd.char))
        elif isinstance(cmd, DeleteBefore):
            self._edit(self.buffer.delete_before())
        elif isinstance(cmd, DeleteAfter):
            self._edit(self.buffer.delete_after())
        elif isinstance(cmd, MoveCursor):
            self._motion(self.buffer.move(cmd.offset))
        elif isinstance(cmd, MoveWord):
            self._motion(self.buffer.move_to_boundary(cmd.direction))
        elif isinstance(cmd, MoveHome):
            self._motion(self.buffer.move_home())
        elif isinstance(cmd, MoveEnd):
            self._motion(self.buffer.move_end())
        else:
            raise TypeError(f"unhandled command {cmd!r}")

    def _edit(self, changed: bool):
        # Any edit leaves recall mode, even one that changed nothing
        self.navigator.reset()
        if changed:
            self.render()

    def _motion(self, moved: bool):
        # Motion keys always redraw, even when clamped at an edge
        self.navigator.reset()
        if not moved:
            self._log("cursor already at edge")
        self.render()

    def _cancel(self):
        if self.navigator.recalling and not self.navigator.frozen_prefix:
            # Recall over the whole history has nothing to restore
            self._clear()
            self.finish()
            return
        if self.navigator.cancel():
            self.render()
            return
        self._clear()
        self.finish()

    def _submit(self):
        text = self.buffer.text
        if not text:
            self.finish()
            return

        try:
            self.store.record(text)
        except HistoryStoreError as e:
            self._log_error(str(e))

        self._log(f"run {text_preview(text)!r}")
        result = self._runner(text, self.config.exec)
        self._clear()

        if result.ran:
            self._log(f"exit status {result.returncode}, {len(result.output)} bytes")
            self.surface.commit_text(format_output(result.output))
        else:
            self._log_error(f"could not run {text_preview(text)!r}: {result.error}")

        self.finish()
