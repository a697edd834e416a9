"""Persisted command history backed by SQLite."""

from __future__ import annotations

import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from platformdirs import user_data_dir

APP_NAME = "shin"
HISTORY_FILENAME = "history.db"

# Sorts after every character a composed command can contain (inserted
# characters are restricted to Latin-1), so BETWEEN acts as a prefix match.
PREFIX_RANGE_END = "\u00ff"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS history (
    command TEXT NOT NULL,
    last_used REAL NOT NULL,
    use_count INTEGER NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS command_index ON history (command);

CREATE INDEX IF NOT EXISTS last_used_index ON history (last_used);

CREATE INDEX IF NOT EXISTS use_count_index ON history (use_count);
"""


class HistoryStoreError(Exception):
    """Raised when the history database cannot be opened, read or written."""


@dataclass
class HistoryEntry:
    command: str
    last_used: float
    use_count: int


def default_history_path() -> Path:
    return Path(user_data_dir(APP_NAME)) / HISTORY_FILENAME


class HistoryStore:
    """Distinct commands with last-used time and use count.

    Writes are single statements in their own transaction, so concurrent
    sessions (in this or other processes) are serialized by SQLite itself.
    """

    def __init__(self, conn: sqlite3.Connection, path: Path,
                 clock: Callable[[], float] = time.time):
        self._conn = conn
        self.path = path
        self._clock = clock

    def record(self, command: str):
        """Insert ``command`` or bump its timestamp and use count."""
        if not command:
            return
        try:
            with self._conn:
                self._conn.execute(
                    """
                    INSERT INTO history (command, last_used, use_count)
                    VALUES (?, ?, 1)
                    ON CONFLICT (command) DO UPDATE
                    SET last_used = excluded.last_used, use_count = use_count + 1
                    """,
                    (command, self._clock()),
                )
        except sqlite3.Error as e:
            raise HistoryStoreError(f"could not record command: {e}") from e

    def lookup(self, prefix: str, skip: int = 0) -> str | None:
        """Return the ``skip``-th most recent command starting with ``prefix``.

        Returns None when there are not that many matches. Ties on
        ``last_used`` are broken by insertion order (oldest first).
        """
        # BETWEEN instead of LIKE: case sensitive, no escaping, uses the index
        try:
            row = self._conn.execute(
                """
                SELECT command FROM history
                WHERE command BETWEEN ? AND ?
                ORDER BY last_used DESC, rowid
                LIMIT 1 OFFSET ?
                """,
                (prefix, prefix + PREFIX_RANGE_END, skip),
            ).fetchone()
        except sqlite3.Error as e:
            raise HistoryStoreError(f"could not look up history: {e}") from e
        return row[0] if row else None

    def entry(self, command: str) -> HistoryEntry | None:
        try:
            row = self._conn.execute(
                "SELECT command, last_used, use_count FROM history WHERE command = ?",
                (command,),
            ).fetchone()
        except sqlite3.Error as e:
            raise HistoryStoreError(f"could not read history: {e}") from e
        return HistoryEntry(*row) if row else None

    def __len__(self) -> int:
        try:
            return self._conn.execute("SELECT COUNT(*) FROM history").fetchone()[0]
        except sqlite3.Error as e:
            raise HistoryStoreError(f"could not read history: {e}") from e

    def close(self):
        self._conn.close()

    def __enter__(self) -> HistoryStore:
        return self

    def __exit__(self, *exc):
        self.close()


def open_history(path: str | Path | None = None,
                 clock: Callable[[], float] = time.time,
                 timeout: float = 5.0) -> HistoryStore:
    """Open the history database, creating it on first use.

    The store is opened before the first key can be handled, so an existing
    database file is trusted and connected without touching the schema. An
    empty file, left by a first run that stopped before the schema was
    written, gets the schema.
    """
    db_path = Path(path).expanduser() if path else default_history_path()
    try:
        if db_path.exists() and db_path.stat().st_size > 0:
            conn = sqlite3.connect(db_path, timeout=timeout)
        else:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(db_path, timeout=timeout)
            conn.executescript(_SCHEMA)
    except (sqlite3.Error, OSError) as e:
        raise HistoryStoreError(f"cannot open history database {db_path}: {e}") from e
    return HistoryStore(conn, db_path, clock=clock)
