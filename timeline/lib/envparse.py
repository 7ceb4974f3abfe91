"""
Parser for timeline.env files.

Only KEY=value lines are understood. Nothing is expanded or executed, and a
value containing a shell construct is refused instead of being passed along.
"""

import os
import re
from pathlib import Path
from typing import Optional

ENV_KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')

# Refused in values; the name is reported in the error
SHELL_CONSTRUCTS = {
    "`": "backtick",
    "$(": "command substitution",
    "${": "variable expansion",
    ";": "command separator",
    "&&": "AND list",
    "|": "pipe",
}

QUOTES = ('"', "'")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def _find_shell_construct(value: str) -> Optional[str]:
    for token, name in SHELL_CONSTRUCTS.items():
        if token in value:
            return name
    return None


def parse_env_line(line: str) -> Optional[tuple[str, str]]:
    """
    Parse one line into (key, value), or None for blanks and comments.

    Raises:
        ValueError: if the line is not KEY=value or the value is refused
    """
    line = line.strip()
    if not line or line.startswith('#'):
        return None

    line = line.removeprefix('export ').lstrip()
    key, sep, value = line.partition('=')
    if not sep:
        raise ValueError("Invalid syntax (no '=')")

    key = key.strip()
    if not ENV_KEY_PATTERN.match(key):
        raise ValueError(f"Invalid key '{key}'")

    value = _unquote(value.strip())
    construct = _find_shell_construct(value)
    if construct:
        raise ValueError(f"Forbidden pattern ({construct}) in value for {key}")
    return key, value


def parse_env_text(text: str, source: str = "<string>") -> dict[str, str]:
    """
    Parse KEY=value lines. Later lines win.

    Raises:
        ValueError: naming the source and line of the first bad line
    """
    values = {}
    for lineno, line in enumerate(text.splitlines(), 1):
        try:
            entry = parse_env_line(line)
        except ValueError as e:
            raise ValueError(f"{source} line {lineno}: {e}") from None
        if entry:
            key, value = entry
            values[key] = value
    return values


def load_env(filepath: Path) -> dict[str, str]:
    """
    Read and parse an env file.

    Raises:
        FileNotFoundError: if file doesn't exist
        ValueError: if a line is malformed or refused
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {filepath}")
    return parse_env_text(path.read_text(), source=str(path))


def environ_with_prefix(prefix: str, environ=None) -> dict[str, str]:
    """Process environment entries starting with prefix, prefix stripped."""
    environ = os.environ if environ is None else environ
    return {k[len(prefix):]: v for k, v in environ.items() if k.startswith(prefix) and len(k) > len(prefix)}
