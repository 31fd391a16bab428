"""Unified diff parser.

Splits a patch into DiffFile records. Hunk bodies are read by the line
counts declared in their ``@@`` headers, so ``---``/``+++`` text inside a
hunk is content, never a file header. Handles BOM, CRLF, git extended
headers, binary markers and ``\\ No newline at end of file``.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from sizelabel.git.models import DiffFile, Hunk, LineType

# --- Regex patterns for diff parsing ---

_DIFF_HEADER_RE = re.compile(r"^diff --git ")
_INDEX_HEADER_RE = re.compile(r"^Index: ")
_FILE_HEADER_RE = re.compile(r"^(---|\+\+\+)\s+(.*)$")
_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
)


class ParseError(Exception):
    """Raised when diff text does not follow the unified diff grammar."""


def _split_lines(text: str) -> List[str]:
    """Split on LF only; a trailing CR is dropped from every line.

    ``str.splitlines`` would also break on characters such as U+2028 that
    can legitimately appear inside a content line.
    """
    text = text.lstrip("\ufeff")
    lines = [line.rstrip("\r") for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _header_path(raw: str) -> str:
    """Extract the path from a ``---``/``+++`` header value."""
    path = raw.split("\t", 1)[0].strip()
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        path = path[1:-1]
    return path


class DiffParser:
    """Parse unified diff text into DiffFile objects.

    Usage::

        for diff_file in DiffParser(diff_text).parse():
            for hunk in diff_file.hunks:
                ...
    """

    def __init__(self, diff_text: str) -> None:
        self._lines = _split_lines(diff_text)

    def parse(self) -> List[DiffFile]:
        """Return every file section of the diff, in order."""
        files: List[DiffFile] = []
        current: Optional[DiffFile] = None
        idx = 0
        total = len(self._lines)

        while idx < total:
            line = self._lines[idx]

            # --- diff --git / Index: separator → new file context ---
            if _DIFF_HEADER_RE.match(line) or _INDEX_HEADER_RE.match(line):
                current = DiffFile()
                files.append(current)
                idx += 1
                continue

            # --- File headers (--- a/x, +++ b/x) ---
            fm = _FILE_HEADER_RE.match(line)
            if fm:
                marker, path = fm.group(1), _header_path(fm.group(2))
                if marker == "---":
                    # A second '---' without a separator starts the next file
                    if current is None or current.hunks or current.old_path is not None:
                        current = DiffFile()
                        files.append(current)
                    current.old_path = path
                else:
                    if current is None or current.hunks:
                        current = DiffFile()
                        files.append(current)
                    current.new_path = path
                idx += 1
                continue

            # --- Hunk header ---
            if line.startswith("@@"):
                hm = _HUNK_HEADER_RE.match(line)
                if hm is None:
                    raise ParseError(f"Malformed hunk header at line {idx + 1}: {line!r}")
                if current is None:
                    current = DiffFile()
                    files.append(current)
                hunk, idx = self._read_hunk(hm, idx + 1)
                current.hunks.append(hunk)
                continue

            # git extended headers, "Binary files ... differ", preamble text
            idx += 1

        return files

    def _read_hunk(self, header: re.Match[str], idx: int) -> Tuple[Hunk, int]:
        """Consume one hunk body starting at *idx*; return it and the next index."""
        header_line = idx  # 1-based line number of the @@ header
        hunk = Hunk(
            old_start=int(header.group(1)),
            old_lines=int(header.group(2)) if header.group(2) is not None else 1,
            new_start=int(header.group(3)),
            new_lines=int(header.group(4)) if header.group(4) is not None else 1,
        )
        removed = 0
        added = 0
        total = len(self._lines)

        while idx < total:
            line = self._lines[idx]
            satisfied = removed >= hunk.old_lines and added >= hunk.new_lines
            if satisfied and not line.startswith(LineType.NO_NEWLINE.value):
                break

            # Some transports strip the single space of blank context lines
            op = line[0] if line else LineType.CONTEXT.value
            if op == LineType.ADDED.value:
                added += 1
            elif op == LineType.REMOVED.value:
                removed += 1
            elif op == LineType.CONTEXT.value:
                removed += 1
                added += 1
            elif op != LineType.NO_NEWLINE.value:
                break

            if removed > hunk.old_lines or added > hunk.new_lines:
                raise ParseError(
                    f"Hunk at line {header_line} has more lines than its header "
                    f"declares (-{hunk.old_lines} +{hunk.new_lines})"
                )
            hunk.lines.append(line or LineType.CONTEXT.value)
            idx += 1

        if removed < hunk.old_lines or added < hunk.new_lines:
            raise ParseError(
                f"Hunk at line {header_line} ended early: expected "
                f"-{hunk.old_lines} +{hunk.new_lines} lines, got -{removed} +{added}"
            )
        return hunk, idx


def parse_diff(diff_text: str) -> List[DiffFile]:
    """Parse *diff_text* in one call."""
    return DiffParser(diff_text).parse()
