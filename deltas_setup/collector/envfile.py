"""Reading previously generated ``.env`` files.

The parsed mapping (an "env snapshot") only seeds prompt defaults; it is
discarded once collection finishes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_QUOTES = ("'", '"')


def parse_env(content: str) -> dict[str, str]:
    """Parse ``.env`` text into a ``{KEY: value}`` mapping.

    Blank lines and ``#`` comments are skipped. Each remaining line must be
    ``KEY=VALUE``; one layer of matching single or double quotes is stripped
    from the value; escape sequences are not interpreted. Lines that do not
    fit are ignored.

    Examples::

        parse_env('A="1"\\n# note\\nB=two') -> {"A": "1", "B": "two"}
    """
    env: dict[str, str] = {}
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        key = key.strip()
        if not sep or not _KEY_RE.match(key):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
            value = value[1:-1]
        env[key] = value
    return env


@dataclass
class ExistingEnv:
    """``.env`` files found before prompting, keyed by path."""

    files: dict[Path, str] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return bool(self.files)

    def snapshot(self) -> dict[str, str]:
        """Parse the first non-empty file found (the app's ``.env`` wins)."""
        for content in self.files.values():
            if content.strip():
                return parse_env(content)
        return {}


def detect_existing_env(paths: list[Path]) -> ExistingEnv:
    """Read whichever of *paths* exist, preserving their order.

    Undecodable bytes are replaced; the files only seed defaults.
    """
    existing = ExistingEnv()
    for path in paths:
        if path.is_file():
            existing.files[path] = path.read_text(encoding="utf-8", errors="replace")
    return existing
