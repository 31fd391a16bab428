"""Diff analysis — count target-script characters on added lines."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Union

from sizelabel.git.diff_parser import parse_diff
from sizelabel.git.models import DiffFile

logger = logging.getLogger(__name__)

# Cyrillic Unicode block
CYRILLIC_PATTERN = "[\u0400-\u04FF]"
MARKDOWN_SUFFIX = ".md"

PathPredicate = Callable[[Optional[str]], bool]


@dataclass(frozen=True)
class FileDelta:
    """Characters contributed by one counted file."""

    path: str
    delta: int


@dataclass
class DiffAnalysis:
    """Result of analysing one pull request diff."""

    total: int = 0
    per_file: List[FileDelta] = field(default_factory=list)
    touched_stable_markdown: bool = False
    files_seen: int = 0

    @property
    def counted_files(self) -> int:
        return len(self.per_file)


def is_counted(diff_file: DiffFile, is_ignored: PathPredicate) -> bool:
    """A file counts unless both of its sides are ignored."""
    return not is_ignored(diff_file.old_path) or not is_ignored(diff_file.new_path)


def touches_stable_markdown(diff_file: DiffFile) -> bool:
    """True for an edit or rename of an existing Markdown file."""
    old, new = diff_file.old_path, diff_file.new_path
    return bool(old and new and old.endswith(MARKDOWN_SUFFIX) and new.endswith(MARKDOWN_SUFFIX))


def _compile(pattern: Union[str, re.Pattern[str]]) -> re.Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def analyze_files(
    files: Iterable[DiffFile],
    is_ignored: PathPredicate,
    pattern: Union[str, re.Pattern[str]] = CYRILLIC_PATTERN,
) -> DiffAnalysis:
    """Analyse already parsed diff files."""
    regex = _compile(pattern)
    result = DiffAnalysis()

    for diff_file in files:
        result.files_seen += 1
        if touches_stable_markdown(diff_file):
            result.touched_stable_markdown = True
        if not is_counted(diff_file, is_ignored):
            logger.debug("Ignoring %s", diff_file.display_path)
            continue

        delta = 0
        for hunk in diff_file.hunks:
            for line in hunk.added_lines():
                logger.debug("Added line: %s", line)
                delta += len(regex.findall(line))
        logger.debug("Added characters in %s: %d", diff_file.display_path, delta)
        result.per_file.append(FileDelta(path=diff_file.display_path, delta=delta))
        result.total += delta

    logger.info("Counted characters: %d", result.total)
    return result


def analyze(
    diff_text: str,
    is_ignored: PathPredicate,
    pattern: Union[str, re.Pattern[str]] = CYRILLIC_PATTERN,
) -> DiffAnalysis:
    """Parse *diff_text* and analyse it. Raises ParseError on malformed input."""
    return analyze_files(parse_diff(diff_text), is_ignored, pattern)
