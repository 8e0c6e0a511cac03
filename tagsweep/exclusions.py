"""
tagsweep Exclusion Filter

Decides whether a walked path is skipped. Patterns use shell-glob rules
applied to the whole path string, exactly as the walk produced it:

    *       any run of characters except the path separator
    ?       one character except the path separator
    [abc]   character class; ranges (a-z) and negation ([^x] or [!x])
    \\x      the literal character x

Unlike fnmatch, a malformed pattern is an error rather than a literal.
Paths are not normalised: with a root of "./src" the walk yields
"./src/x.py", so a pattern must be written for that form to match.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from typing import Iterable

from loguru import logger

from tagsweep.errors import PatternError

_SEP = re.escape(os.sep)


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a glob into an anchored regex. Raises PatternError."""
    return re.compile(_translate(pattern), re.DOTALL)


def _translate(pattern: str) -> str:
    out: list[str] = []
    i, n = 0, len(pattern)

    while i < n:
        c = pattern[i]
        if c == "*":
            while i + 1 < n and pattern[i + 1] == "*":
                i += 1
            out.append(f"[^{_SEP}]*")
        elif c == "?":
            out.append(f"[^{_SEP}]")
        elif c == "\\":
            if i + 1 >= n:
                raise PatternError(pattern, "trailing backslash")
            i += 1
            out.append(re.escape(pattern[i]))
        elif c == "[":
            cls, i = _translate_class(pattern, i)
            out.append(cls)
            continue
        else:
            out.append(re.escape(c))
        i += 1

    return "".join(out) + r"\Z"


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the bracket class opening at start; return (regex, next index)."""
    n = len(pattern)
    j = start + 1
    negate = False
    if j < n and pattern[j] in "^!":
        negate = True
        j += 1

    items: list[str] = []
    while True:
        if j >= n:
            raise PatternError(pattern, "unclosed character class")
        if pattern[j] == "]":
            if not items:
                raise PatternError(pattern, "empty character class")
            j += 1
            break

        lo, j = _class_char(pattern, j)
        if j < n and pattern[j] == "-":
            hi, j = _class_char(pattern, j + 1)
            if hi < lo:
                raise PatternError(pattern, f"bad range {lo}-{hi}")
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
        else:
            items.append(re.escape(lo))

    return "[" + ("^" if negate else "") + "".join(items) + "]", j


def _class_char(pattern: str, j: int) -> tuple[str, int]:
    n = len(pattern)
    if j >= n:
        raise PatternError(pattern, "unclosed character class")
    c = pattern[j]
    if c in "-]":
        raise PatternError(pattern, f"unexpected {c!r} in character class")
    if c == "\\":
        j += 1
        if j >= n:
            raise PatternError(pattern, "trailing backslash")
        c = pattern[j]
    return c, j + 1


def is_excluded(path: str, patterns: Iterable[str]) -> bool:
    """
    True if path matches any pattern.

    Patterns are checked in order and the first match wins, so a bad
    pattern after a matching one is not reached for that path.
    """
    for pattern in patterns:
        if compile_glob(pattern).match(path):
            return True
    return False


class ExclusionFilter:
    """
    A fixed set of exclusion patterns, all compiled up front.

    Building the filter is where a malformed pattern surfaces, so a run
    fails before the first file is read.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns = list(patterns)
        self._compiled = [compile_glob(p) for p in self.patterns]
        if self.patterns:
            logger.debug(f"[EXCLUDE] {len(self.patterns)} patterns: {self.patterns}")

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def __call__(self, path: str) -> bool:
        return self.is_excluded(path)

    def is_excluded(self, path: str) -> bool:
        for pattern, rx in zip(self.patterns, self._compiled):
            if rx.match(path):
                logger.debug(f"[EXCLUDE] {path} matched {pattern!r}")
                return True
        return False
