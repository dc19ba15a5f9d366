"""Fallback chain for prompt defaults."""

from __future__ import annotations

from typing import Optional


def resolve_default(*candidates: Optional[str]) -> str:
    """Return the first non-empty candidate, or ``""``.

    Candidates are tried in order, typically explicit input, then the value
    saved in an existing ``.env``, then a hardcoded literal::

        resolve_default(answer, snapshot.get("POSTGRES_PASSWORD"), "mysecretpassword")
    """
    for candidate in candidates:
        if candidate:
            return candidate
    return ""
