import time
from collections import deque

from shin.types import ts_str


class DebugLogger:
    """Optional debug log file for key events, renders and failures.

    Errors are additionally kept in memory so the CLI can report them after
    the terminal is restored, whether or not the log file is enabled.
    """

    MAX_ERRORS = 50

    def __init__(self, path: str = "shin.log"):
        self.path = path
        self.enabled = False
        self._fh = None
        self.errors: deque[str] = deque(maxlen=self.MAX_ERRORS)

    def start(self):
        self._fh = open(self.path, "a", encoding="utf-8")
        self.enabled = True
        sep = f"\n{'='*60}\n  Session started: {time.strftime('%Y-%m-%d %H:%M:%S')}\n{'='*60}\n"
        self._fh.write(sep)
        self._fh.flush()

    def stop(self):
        self.enabled = False
        if self._fh:
            try:
                self._fh.close()
            except OSError:
                pass
        self._fh = None

    def _write(self, text: str):
        if not self.enabled or not self._fh:
            return
        self._fh.write(f"{ts_str(time.time())} | {text}\n")
        self._fh.flush()

    def log_event(self, text: str):
        self._write(text)

    def log_error(self, text: str):
        self.errors.append(text)
        self._write(f"ERROR {text}")
