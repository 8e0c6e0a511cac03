"""Tests for single-line matching."""
import re

import pytest

from tagsweep.errors import KeywordNotFound, MatchDecodeError
from tagsweep.matcher import MatchRecord, decode_line, match_line
from tagsweep.registry import Annotation, Registry


class _StaleRegistry(Registry):
    """Registry whose pattern knows a keyword its lookup does not."""

    def pattern(self):
        return re.compile("GHOST")


def test_instruction_is_text_after_colon(registry):
    record = match_line("// TODO: fix this", "main.go", 7, registry)
    assert record == MatchRecord(
        annotation_text="TODO", instruction=" fix this", filename="main.go", row=7,
    )


def test_no_keyword_returns_none(registry):
    assert match_line("x := 1 // nothing to see", "main.go", 1, registry) is None
    assert match_line("", "main.go", 1, registry) is None


def test_no_colon_gives_empty_instruction(registry):
    record = match_line("# FIXME later maybe", "a.py", 2, registry)
    assert record.annotation_text == "FIXME"
    assert record.instruction == ""


def test_instruction_keeps_later_colons(registry):
    record = match_line("// BUG: see http://example.com: crashes", "a.go", 1, registry)
    assert record.instruction == " see http://example.com: crashes"


def test_colon_before_keyword_is_ignored(registry):
    record = match_line("x: 1  # TODO: y", "a.yaml", 4, registry)
    assert record.instruction == " y"


def test_leftmost_keyword_wins(registry):
    record = match_line("// URGENT BUG: both", "a.c", 1, registry)
    assert record.annotation_text == "URGENT"
    assert record.instruction == " both"


def test_keyword_inside_word_still_matches(registry):
    record = match_line("call DEBUGGER: now", "a.c", 1, registry)
    assert record.annotation_text == "BUG"


def test_line_terminator_is_dropped(registry):
    record = match_line("// TODO: trailing\r\n", "a.c", 1, registry)
    assert record.instruction == " trailing"


def test_unknown_keyword_raises():
    registry = _StaleRegistry([Annotation(text="TODO")])
    with pytest.raises(KeywordNotFound, match="Keyword GHOST not found"):
        match_line("// GHOST: boo", "a.c", 1, registry)


def test_record_helpers():
    record = MatchRecord("TODO", " x", "a.go", 3)
    assert record.location == "a.go:3"
    assert record.to_dict() == {"instruction": " x", "filename": "a.go", "row": 3}


def test_decode_line_strips_terminator():
    assert decode_line(b"// TODO: x\n") == "// TODO: x"
    assert decode_line("// TODO: é\r\n".encode("utf-8")) == "// TODO: é"


def test_decode_line_rejects_invalid_utf8():
    with pytest.raises(MatchDecodeError) as exc_info:
        decode_line(b"\xff\xfe TODO\n", row=12)
    assert exc_info.value.row == 12
