"""Ignore patterns — glob rules that exclude files from size accounting.

Pattern file format (one rule per line):
  - Blank lines and lines starting with ``#`` are skipped.
  - ``!pattern`` re-includes paths matched by an earlier rule.
  - ``*`` matches within a path segment, ``**`` as a whole segment crosses
    directories, ``?`` matches one character, ``[abc]`` / ``[!abc]`` are
    character classes, ``{a,b}`` alternates and ``@(a|b)``, ``?(..)``,
    ``*(..)``, ``+(..)``, ``!(..)`` are extglob groups.

Paths are taken straight from diff headers, so the two-character ``a/`` /
``b/`` prefix is stripped before matching.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

from sizelabel.git.models import NO_FILE

_LINE_SPLIT_RE = re.compile(r"\r|\n")

# Extglob operators and the regex that closes each group
_EXTGLOB_OPS = "@?*+!"
_EXTGLOB_CLOSE = {
    "@": ")",
    "?": ")?",
    "*": ")*",
    "+": ")+",
    "!": "))[^/]*)",
}

# Stands in for the pattern remainder closing a top-level "!(...)" group
_NEGATED_REST = object()


class PatternError(Exception):
    """Raised when an ignore pattern is not a valid glob."""


class RuleKind(str, Enum):
    EXCLUDE = "exclude"
    NEGATE = "negate"


@dataclass(frozen=True)
class IgnoreRule:
    """A compiled glob tagged as an exclude or negate (re-include) rule."""

    pattern: str
    kind: RuleKind
    regex: re.Pattern[str]

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(path) is not None


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the ``[...]`` class opening at *start*; return (regex, next index)."""
    idx = start + 1
    out = "["
    if idx < len(pattern) and pattern[idx] in "!^":
        out += "^"
        idx += 1
    # A leading ']' is a literal member
    if idx < len(pattern) and pattern[idx] == "]":
        out += r"\]"
        idx += 1
    while idx < len(pattern) and pattern[idx] != "]":
        c = pattern[idx]
        if c == "\\" and idx + 1 < len(pattern):
            out += re.escape(pattern[idx + 1])
            idx += 2
            continue
        out += "\\" + c if c in "[^\\" else c
        idx += 1
    if idx >= len(pattern):
        raise PatternError(f"Unterminated character class in {pattern!r}")
    return out + "]", idx + 1


def glob_to_regex(pattern: str) -> str:
    """Translate a glob into a regular expression string for ``fullmatch``."""
    out: List[object] = []
    brace_depth = 0
    groups: List[str] = []  # open extglob operators, innermost last
    idx = 0
    n = len(pattern)

    while idx < n:
        c = pattern[idx]
        nxt = pattern[idx + 1] if idx + 1 < n else None

        if c == "\\":
            if nxt is None:
                raise PatternError(f"Trailing backslash in {pattern!r}")
            out.append(re.escape(nxt))
            idx += 2
            continue

        if c in _EXTGLOB_OPS and nxt == "(":
            groups.append(c)
            out.append("(?:(?!(?:" if c == "!" else "(?:")
            idx += 2
            continue

        if c == "*":
            run = 1
            while idx + run < n and pattern[idx + run] == "*":
                run += 1
            prev = pattern[idx - 1] if idx > 0 else None
            after = pattern[idx + run] if idx + run < n else None
            if run > 1 and prev in (None, "/") and after in (None, "/"):
                out.append(r"(?:[^/]*(?:/|$))*")
                idx += run + (1 if after == "/" else 0)
            else:
                out.append("[^/]*")
                idx += run
            continue

        if c == "?":
            out.append("[^/]")
        elif c == "[":
            translated, idx = _translate_class(pattern, idx)
            out.append(translated)
            continue
        elif c == "{":
            brace_depth += 1
            out.append("(?:")
        elif c == "}" and brace_depth:
            brace_depth -= 1
            out.append(")")
        elif c == "," and brace_depth:
            out.append("|")
        elif c == "|" and groups:
            out.append("|")
        elif c == ")" and groups:
            op = groups.pop()
            if op == "!" and not groups and not brace_depth:
                out.append(_NEGATED_REST)
            else:
                out.append(_EXTGLOB_CLOSE[op])
        else:
            out.append(re.escape(c))
        idx += 1

    if brace_depth:
        raise PatternError(f"Unbalanced '{{' in {pattern!r}")
    if groups:
        raise PatternError(f"Unclosed extglob group in {pattern!r}")

    # "!(a).x" must reject only names where "a" is followed by the rest of the
    # pattern, so the lookahead carries that remainder. Resolve right to left.
    for pos in range(len(out) - 1, -1, -1):
        if out[pos] is _NEGATED_REST:
            rest = "".join(out[pos + 1:])
            out[pos] = ")" + rest + r"\Z)[^/]*)"
    return "".join(out)


def compile_rule(line: str) -> IgnoreRule:
    """Compile one non-comment pattern line into an IgnoreRule."""
    if len(line) > 1 and line.startswith("!"):
        kind, glob = RuleKind.NEGATE, line[1:]
    else:
        kind, glob = RuleKind.EXCLUDE, line
    try:
        regex = re.compile(glob_to_regex(glob))
    except re.error as exc:
        raise PatternError(f"Invalid pattern {line!r}: {exc}") from exc
    return IgnoreRule(pattern=line, kind=kind, regex=regex)


class IgnoreMatcher:
    """Ordered ignore rules evaluated left to right with early negate exit."""

    def __init__(self, rules: List[IgnoreRule]) -> None:
        self.rules = rules

    def is_ignored(self, path: Optional[str]) -> bool:
        """Return True if *path* (a raw diff header path) is excluded."""
        if path is None or path == NO_FILE:
            # The missing side of a created/deleted file has nothing to count
            return True
        pathname = path[2:]
        ignored = False
        for rule in self.rules:
            if rule.kind is RuleKind.NEGATE:
                if rule.matches(pathname):
                    return False
            elif not ignored and rule.matches(pathname):
                ignored = True
        return ignored

    __call__ = is_ignored


def iter_rule_lines(rule_lines: Union[str, Iterable[str]]) -> List[str]:
    """Split, trim, and drop blank and ``#`` comment lines."""
    chunks = [rule_lines] if isinstance(rule_lines, str) else list(rule_lines)
    lines: List[str] = []
    for chunk in chunks:
        for raw in _LINE_SPLIT_RE.split(chunk):
            line = raw.strip()
            if line and not line.startswith("#"):
                lines.append(line)
    return lines


def compile_ignore_rules(rule_lines: Union[str, Iterable[str], None] = None) -> IgnoreMatcher:
    """Compile pattern lines into an IgnoreMatcher. Raises PatternError."""
    if rule_lines is None:
        return IgnoreMatcher([])
    return IgnoreMatcher([compile_rule(line) for line in iter_rule_lines(rule_lines)])
