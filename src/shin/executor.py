"""Running a composed command through the shell."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass

from shin.ansi import strip_sgr
from shin.config import ExecConfig


@dataclass
class ExecResult:
    output: bytes = b""
    returncode: int | None = None
    error: OSError | None = None  # set when the shell could not be spawned

    @property
    def ran(self) -> bool:
        return self.error is None


def build_command_line(text: str, config: ExecConfig) -> str:
    bin_dir = config.resolved_bin_dir()
    prefix = f"{config.default_command} " if config.default_command else ""
    return f'PATH="{bin_dir}{os.pathsep}$PATH" && {prefix}{text}'


def run_command(text: str, config: ExecConfig) -> ExecResult:
    """Run ``text`` with the configured shell, capturing stdout and stderr together.

    Blocks until the command exits; no timeout is applied.
    """
    try:
        proc = subprocess.run(
            [config.shell, "-c", build_command_line(text, config)],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as e:
        return ExecResult(error=e)
    return ExecResult(output=proc.stdout, returncode=proc.returncode)


def format_output(output: bytes) -> str:
    """Prepare captured output for committing into the surrounding text."""
    # Some programs emit SGR sequences even when not writing to a TTY
    text = strip_sgr(output.decode("utf-8", errors="replace"))
    # Single-line output flows into the surrounding text
    text = text.strip("\n")
    # Multi-line output goes in its own block to keep tabular alignment
    if "\n" in text:
        text = f"\n{text}\n"
    return text
