"""Diff parsing — models and the unified diff parser."""

from sizelabel.git.diff_parser import DiffParser, ParseError, parse_diff
from sizelabel.git.models import NO_FILE, DiffFile, Hunk, LineType

__all__ = [
    "NO_FILE",
    "DiffFile",
    "DiffParser",
    "Hunk",
    "LineType",
    "ParseError",
    "parse_diff",
]
