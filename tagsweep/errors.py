"""
tagsweep Errors

Fatal kinds (config, I/O, pattern) propagate to the CLI and end the run.
Per-line kinds (unknown keyword, undecodable line) are recovered inside
the scanner and only ever reach the debug log.
"""

from __future__ import annotations


class TagSweepError(Exception):
    """Base class for everything tagsweep raises on purpose."""
    pass


# ---------------------------------------------------------------------------
# Fatal
# ---------------------------------------------------------------------------

class ConfigError(TagSweepError):
    """Overlay configuration is unreadable, malformed, or inconsistent."""
    pass


class ScanIOError(TagSweepError, OSError):
    """A path could not be listed, opened, or stat'd during the walk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


class PatternError(TagSweepError, ValueError):
    """An exclusion glob is syntactically invalid."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f"bad exclusion pattern {pattern!r}: {reason}")


# ---------------------------------------------------------------------------
# Recovered per line
# ---------------------------------------------------------------------------

class KeywordNotFound(TagSweepError, LookupError):
    """Matched text has no entry in the registry."""

    def __init__(self, keyword: str):
        self.keyword = keyword
        super().__init__(f"Keyword {keyword} not found")


class MatchDecodeError(TagSweepError, ValueError):
    """A raw line could not be decoded to text."""

    def __init__(self, row: int, reason: str):
        self.row = row
        super().__init__(f"line {row}: {reason}")
