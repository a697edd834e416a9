"""Configuration with a minimal YAML parser.

Config files are small YAML documents (no external dependency) supporting:
- Scalars (strings, numbers, booleans, null)
- Nested mappings (key: value syntax)
- Comments (# ...)
- Quoted strings (single and double)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "shin"
DEFAULT_COMMAND_ENV = "SHIN_DEFAULT_COMMAND"

# --- Minimal YAML Parser ---


def parse_simple_yaml(text: str) -> dict:
    """Parse a simple YAML mapping document into a Python dict."""
    lines = text.split("\n")
    return _parse_block(lines, 0, 0)[0]


def _parse_block(lines: list[str], start: int, base_indent: int) -> tuple[dict, int]:
    """Parse mapping lines starting at ``start`` indented at ``base_indent``."""
    result: dict = {}
    i = start

    while i < len(lines):
        line = lines[i]
        stripped = line.lstrip()

        if not stripped or stripped.startswith("#"):
            i += 1
            continue

        indent = len(line) - len(stripped)
        if indent < base_indent:
            break

        colon_pos = _find_unquoted_colon(stripped)
        if colon_pos <= 0:
            i += 1
            continue

        key = stripped[:colon_pos].strip()
        value_part = _remove_inline_comment(stripped[colon_pos + 1 :].strip())
        if value_part:
            result[key] = _parse_value(value_part)
            i += 1
            continue

        # Look past blank lines and comments for a nested block
        j = i + 1
        while j < len(lines) and (not lines[j].strip() or lines[j].lstrip().startswith("#")):
            j += 1
        if j < len(lines):
            next_indent = len(lines[j]) - len(lines[j].lstrip())
            if next_indent > indent:
                result[key], i = _parse_block(lines, j, next_indent)
                continue
        result[key] = None
        i += 1

    return result, i


def _find_unquoted_colon(s: str) -> int:
    """Find the position of the first colon not inside quotes."""
    in_single = False
    in_double = False
    for i, c in enumerate(s):
        if c == "'" and not in_double:
            in_single = not in_single
        elif c == '"' and not in_single:
            in_double = not in_double
        elif c == ":" and not in_single and not in_double:
            return i
    return -1


def _remove_inline_comment(s: str) -> str:
    """Remove a `` #`` comment that is not inside quotes."""
    in_single = False
    in_double = False
    for i, c in enumerate(s):
        if c == "'" and not in_double:
            in_single = not in_single
        elif c == '"' and not in_single:
            in_double = not in_double
        elif c == "#" and not in_single and not in_double and i > 0 and s[i - 1] == " ":
            return s[:i].rstrip()
    return s


_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"'}


def _parse_value(s: str) -> str | int | float | bool | None:
    """Parse a scalar YAML value."""
    s = s.strip()
    if not s or s.lower() in ("null", "~", "none"):
        return None
    if s.lower() in ("true", "yes", "on"):
        return True
    if s.lower() in ("false", "no", "off"):
        return False

    if len(s) >= 2:
        if s[0] == '"' and s[-1] == '"':
            out = []
            chars = iter(s[1:-1])
            for c in chars:
                if c == "\\":
                    nxt = next(chars, "")
                    out.append(_ESCAPES.get(nxt, c + nxt))
                else:
                    out.append(c)
            return "".join(out)
        if s[0] == "'" and s[-1] == "'":
            return s[1:-1].replace("''", "'")

    try:
        if "." in s:
            return float(s)
        return int(s)
    except ValueError:
        return s


# --- Configuration Dataclasses ---


@dataclass
class HistoryConfig:
    """Where the history database lives (None: per-user data directory)."""

    path: str | None = None


@dataclass
class ExecConfig:
    """How a submitted line is run."""

    shell: str = "bash"
    # Prepended to every command, e.g. "sudo" or "python -c"
    default_command: str = ""
    # Prepended to PATH (None: <user config dir>/bin)
    bin_dir: str | None = None

    def resolved_bin_dir(self) -> Path:
        if self.bin_dir:
            return Path(self.bin_dir).expanduser()
        return _get_user_config_dir() / "bin"


@dataclass
class SessionConfig:
    """Session lifecycle timing, in seconds."""

    exit_delay: float = 0.1
    # Focus-out events this soon after enabling do not end the session
    focus_grace: float = 0.25


@dataclass
class Config:
    """Complete application configuration."""

    history: HistoryConfig = field(default_factory=HistoryConfig)
    exec: ExecConfig = field(default_factory=ExecConfig)
    session: SessionConfig = field(default_factory=SessionConfig)


# --- Config Loading ---


def _get_user_config_dir() -> Path:
    return Path(user_config_dir(APP_NAME))


def _find_config_file(config_name_or_path: str) -> Path | None:
    """Find a config file by name or path.

    Search order:
    1. If it looks like a path (contains / or \\ or ends in .yml), treat as path
    2. <user config dir>/<name>.yml
    3. Current working directory configs/<name>.yml
    """
    is_path = (
        "/" in config_name_or_path
        or "\\" in config_name_or_path
        or config_name_or_path.endswith(".yml")
    )
    if is_path:
        path = Path(config_name_or_path).expanduser()
        return path if path.is_file() else None

    for candidate in _get_config_search_paths(config_name_or_path):
        if candidate.is_file():
            return candidate
    return None


def _get_config_search_paths(config_name: str) -> list[Path]:
    config_filename = f"{config_name}.yml"
    return [
        _get_user_config_dir() / config_filename,
        Path.cwd() / "configs" / config_filename,
    ]


def load_config(config_name_or_path: str | None = None, environ=None) -> Config:
    """Load configuration from a YAML file.

    Args:
        config_name_or_path: Name of config file (without .yml extension),
                            or path to a config file. If None or empty, uses 'default'.
        environ: Environment mapping for overrides (defaults to os.environ).

    Returns:
        Config object with loaded values merged over defaults.

    Raises:
        FileNotFoundError: If a non-default config is specified but not found.
    """
    if not config_name_or_path:
        config_name_or_path = "default"
    if environ is None:
        environ = os.environ

    config_path = _find_config_file(config_name_or_path)
    config = Config()

    # Only the default config is optional
    if config_path is None and config_name_or_path != "default":
        searched = _get_config_search_paths(config_name_or_path)
        paths_str = "\n  - ".join(str(p) for p in searched)
        raise FileNotFoundError(
            f"Config '{config_name_or_path}' not found. Searched:\n  - {paths_str}"
        )

    if config_path is not None:
        with open(config_path, encoding="utf-8") as f:
            _merge_config(config, parse_simple_yaml(f.read()))

    default_command = environ.get(DEFAULT_COMMAND_ENV)
    if default_command is not None:
        config.exec.default_command = default_command

    return config


def _merge_config(config: Config, data: dict):
    """Merge parsed YAML data into a Config object."""
    if not isinstance(data, dict):
        return

    if isinstance(data.get("history"), dict):
        h = data["history"]
        if "path" in h:
            config.history.path = str(h["path"]) if h["path"] is not None else None

    if isinstance(data.get("exec"), dict):
        ex = data["exec"]
        if "shell" in ex and ex["shell"]:
            config.exec.shell = str(ex["shell"])
        if "default_command" in ex:
            config.exec.default_command = str(ex["default_command"] or "")
        if "bin_dir" in ex:
            config.exec.bin_dir = str(ex["bin_dir"]) if ex["bin_dir"] is not None else None

    if isinstance(data.get("session"), dict):
        s = data["session"]
        if "exit_delay" in s:
            config.session.exit_delay = float(s["exit_delay"])
        if "focus_grace" in s:
            config.session.focus_grace = float(s["focus_grace"])
