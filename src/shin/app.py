from __future__ import annotations

import curses
import threading
from typing import Callable

from shin.config import Config
from shin.debug_log import DebugLogger
from shin.executor import ExecResult, run_command
from shin.session import DeferredExit, Session
from shin.store import HistoryStore
from shin.surface import Surface
from shin.ui import CursesSurface, key_event_from_curses


class Composer:
    """Creates sessions that share one history store."""

    def __init__(self, store: HistoryStore, config: Config | None = None,
                 logger: DebugLogger | None = None,
                 runner: Callable[[str, object], ExecResult] = run_command):
        self.store = store
        self.config = config or Config()
        self.logger = logger or DebugLogger()
        self._runner = runner
        self._next_id = 0

    def new_session(self, surface: Surface,
                    exit_action: Callable[[], None] | None = None) -> Session:
        self._next_id += 1
        self.logger.log_event(f"creating session {self._next_id}")
        on_exit = None
        if exit_action is not None:
            on_exit = DeferredExit(exit_action, self.config.session.exit_delay)
        return Session(
            surface,
            self.store,
            config=self.config,
            logger=self.logger,
            on_exit=on_exit,
            runner=self._runner,
            session_id=self._next_id,
        )


def _read_key(stdscr):
    """Return (key, keyname) or None when no key arrived before the timeout."""
    try:
        key = stdscr.get_wch()
    except curses.error:
        return None
    keyname = ""
    if isinstance(key, int):
        try:
            keyname = curses.keyname(key).decode("ascii", errors="ignore")
        except (ValueError, curses.error):
            keyname = ""
    return key, keyname


def run_composer(stdscr, composer: Composer) -> CursesSurface:
    """Run one session in the terminal until it ends. Returns its surface."""
    surface = CursesSurface(stdscr)
    stop = threading.Event()
    session = composer.new_session(surface, exit_action=stop.set)
    session.enable()
    session.render()

    try:
        while not stop.is_set():
            read = _read_key(stdscr)
            if read is None:
                continue
            event = key_event_from_curses(*read)
            if event is None:
                composer.logger.log_event(f"ignored terminal key {read!r}")
                continue
            if not session.process_key_event(event):
                composer.logger.log_event(f"passed through {event.describe()}")
    except KeyboardInterrupt:
        session.reset()
        stop.wait(composer.config.session.exit_delay + 1)

    return surface
