"""Interning of string literals."""

from __future__ import annotations

import sys
from typing import TextIO


class StringPool:
    """Assigns a stable integer id to each distinct string."""

    def __init__(self) -> None:
        self._strings: dict[int, str] = {}
        self._ids: dict[str, int] = {}

    def add(self, text: str) -> int:
        """Return the id of ``text``, adding it if it is new."""
        existing = self._ids.get(text)
        if existing is not None:
            return existing
        string_id = len(self._strings)
        self._ids[text] = string_id
        self._strings[string_id] = text
        return string_id

    def get(self, string_id: int) -> str:
        """Return the string with the given id; raises KeyError if unknown."""
        return self._strings[string_id]

    def print_all(self, out: TextIO | None = None) -> None:
        """Write every id and its string, ordered by id."""
        out = sys.stdout if out is None else out
        for string_id, text in sorted(self._strings.items()):
            out.write(f'{string_id}\t"{text}"\n')