"""Tests for terminal key translation and the composer loop, without a real terminal."""

from __future__ import annotations

import curses

import pytest

from shin import app as app_mod
from shin import keys
from shin.app import Composer, run_composer
from shin.debug_log import DebugLogger
from shin.executor import ExecResult
from shin.keys import KeyEvent
from shin.store import open_history
from shin.surface import Surface
from shin.ui import key_event_from_curses


class TestKeyTranslation:
    def test_printable_characters(self):
        assert key_event_from_curses("a") == KeyEvent(ord("a"))
        assert key_event_from_curses("é") == KeyEvent(0xE9)

    def test_wide_character_gets_unicode_keysym(self):
        assert key_event_from_curses("日") == KeyEvent(keys.UNICODE_KEYSYM_OFFSET + ord("日"))

    def test_control_characters(self):
        assert key_event_from_curses("\n") == KeyEvent(keys.KEY_RETURN)
        assert key_event_from_curses("\x1b") == KeyEvent(keys.KEY_ESCAPE)
        assert key_event_from_curses("\x7f") == KeyEvent(keys.KEY_BACKSPACE)
        assert key_event_from_curses("\x01") == KeyEvent(keys.KEY_HOME)
        assert key_event_from_curses("\x05") == KeyEvent(keys.KEY_END)

    def test_function_keys(self):
        assert key_event_from_curses(curses.KEY_UP) == KeyEvent(keys.KEY_UP)
        assert key_event_from_curses(curses.KEY_DC) == KeyEvent(keys.KEY_DELETE)
        assert key_event_from_curses(curses.KEY_ENTER) == KeyEvent(keys.KEY_RETURN)

    def test_control_arrows_by_keyname(self):
        ev = key_event_from_curses(560, "kLFT5")
        assert ev == KeyEvent(keys.KEY_LEFT, state=keys.CONTROL_MASK)
        assert key_event_from_curses(575, "kRIT5").control

    def test_unknown_function_key(self):
        assert key_event_from_curses(curses.KEY_F5, "KEY_F(5)") is None


class FakeSurface(Surface):
    def __init__(self, stdscr):
        super().__init__()
        self.stdscr = stdscr


class FakeScreen:
    """Feeds queued keys to get_wch(); raises curses.error when empty, like a timeout."""

    def __init__(self, keys_):
        self._keys = list(keys_)

    def get_wch(self):
        if not self._keys:
            raise curses.error("no input")
        return self._keys.pop(0)


class FakeRunner:
    def __init__(self):
        self.calls = []

    def __call__(self, text, exec_config):
        self.calls.append(text)
        return ExecResult(output=f"ran {text}\n".encode(), returncode=0)


@pytest.fixture
def store(tmp_path):
    s = open_history(tmp_path / "history.db")
    yield s
    s.close()


class TestComposer:
    def test_sessions_are_independent_and_share_history(self, store):
        runner = FakeRunner()
        composer = Composer(store, runner=runner)
        first = composer.new_session(Surface())
        second = composer.new_session(Surface())
        assert (first.session_id, second.session_id) == (1, 2)

        for ch in "make":
            first.process_key_event(KeyEvent(ord(ch)))
        second.process_key_event(KeyEvent(ord("m")))
        assert second.buffer.text == "m"

        first.process_key_event(KeyEvent(keys.KEY_RETURN))
        second.process_key_event(KeyEvent(keys.KEY_UP))
        assert second.buffer.text == "make"
        assert runner.calls == ["make"]

    def test_exit_action_runs_after_delay(self, store):
        composer = Composer(store, runner=FakeRunner())
        composer.config.session.exit_delay = 0.0
        fired = []
        session = composer.new_session(Surface(), exit_action=lambda: fired.append(True))
        session.process_key_event(KeyEvent(keys.KEY_ESCAPE))
        session.on_exit._timer.join(1)
        assert fired == [True]

    def test_run_composer_until_submit(self, store, monkeypatch):
        monkeypatch.setattr(app_mod, "CursesSurface", FakeSurface)
        runner = FakeRunner()
        composer = Composer(store, logger=DebugLogger(), runner=runner)
        composer.config.session.exit_delay = 0.0
        screen = FakeScreen(["l", "s", curses.KEY_F5, "\n"])
        surface = run_composer(screen, composer)
        assert runner.calls == ["ls"]
        assert surface.committed == ["ran ls"]
        assert surface.finished
        assert store.lookup("", 0) == "ls"
