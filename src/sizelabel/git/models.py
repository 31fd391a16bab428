"""Data models for diff parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

NO_FILE = "/dev/null"


class LineType(str, Enum):
    ADDED = "+"
    REMOVED = "-"
    CONTEXT = " "
    NO_NEWLINE = "\\"


@dataclass
class Hunk:
    """A contiguous block of changed lines, each kept with its prefix."""

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: List[str] = field(default_factory=list)

    def added_lines(self) -> List[str]:
        return [line for line in self.lines if line.startswith(LineType.ADDED.value)]


@dataclass
class DiffFile:
    """One file section of a unified diff.

    Paths are kept exactly as they appear in the ``---`` / ``+++`` headers,
    including the ``a/`` / ``b/`` prefix, ``/dev/null`` for a created or
    deleted side, and ``None`` when the diff has no file headers at all
    (binary or mode-only changes).
    """

    old_path: Optional[str] = None
    new_path: Optional[str] = None
    hunks: List[Hunk] = field(default_factory=list)

    @property
    def display_path(self) -> str:
        for path in (self.new_path, self.old_path):
            if path and path != NO_FILE:
                return path[2:] if path[:2] in ("a/", "b/") else path
        return "<unknown>"
