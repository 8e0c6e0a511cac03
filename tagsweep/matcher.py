"""
tagsweep Line Matcher

One line in, at most one MatchRecord out. The leftmost keyword on the
line wins; the instruction is whatever follows the first colon after it.
"""

from __future__ import annotations

from dataclasses import dataclass

from tagsweep.errors import KeywordNotFound, MatchDecodeError
from tagsweep.registry import Registry


@dataclass(frozen=True)
class MatchRecord:
    annotation_text: str
    instruction: str
    filename: str
    row: int = 0  # 1-based; 0 is the not-found sentinel and is never rendered

    @property
    def location(self) -> str:
        return f"{self.filename}:{self.row}"

    def to_dict(self) -> dict:
        return {
            "instruction": self.instruction,
            "filename": self.filename,
            "row": self.row,
        }


def decode_line(raw: bytes, row: int = 0) -> str:
    """Decode one raw line as UTF-8 and drop its terminator."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MatchDecodeError(row, str(e)) from e
    return text.rstrip("\r\n")


def match_line(line: str, filename: str, row: int, registry: Registry) -> MatchRecord | None:
    """
    Look for a registered keyword in line.

    Returns None when the line holds no keyword.

    Raises:
        KeywordNotFound: the pattern matched text the registry does not know.
    """
    m = registry.pattern().search(line)
    if m is None:
        return None

    key = m.group(0)
    if registry.lookup(key) is None:
        raise KeywordNotFound(key)

    rest = line[m.end():]
    _, colon, instruction = rest.partition(":")
    if not colon:
        instruction = ""

    return MatchRecord(
        annotation_text=key,
        instruction=instruction.rstrip("\r\n"),
        filename=filename,
        row=row,
    )
