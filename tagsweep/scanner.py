"""
tagsweep File Scanner

Reads one file line by line and collects its annotations.

A single bad line never aborts a file: undecodable bytes or a keyword the
registry does not know are logged and skipped. Failing to open or stat
the file is fatal and raises ScanIOError.
"""

from __future__ import annotations

import os

from loguru import logger

from tagsweep.errors import KeywordNotFound, MatchDecodeError, ScanIOError
from tagsweep.matcher import MatchRecord, decode_line, match_line
from tagsweep.registry import Registry


def printable_name(path: str | os.PathLike) -> str:
    """Base name of path, with undecodable filesystem bytes shown as U+FFFD."""
    name = os.path.basename(os.fspath(path))
    return os.fsencode(name).decode("utf-8", "replace")


def scan_file(path: str | os.PathLike, registry: Registry) -> dict[str, list[MatchRecord]]:
    """
    Scan a file and group its matches by keyword.

    Records carry the file's base name, not the full path. Rows start at 1.
    A file without any keyword yields an empty dict.
    """
    found: dict[str, list[MatchRecord]] = {}

    try:
        f = open(path, "rb")
    except OSError as e:
        raise ScanIOError(os.fspath(path), e.strerror or str(e)) from e

    with f:
        try:
            os.fstat(f.fileno())
        except OSError as e:
            raise ScanIOError(os.fspath(path), e.strerror or str(e)) from e

        filename = printable_name(path)

        try:
            for row, raw in enumerate(f, start=1):
                try:
                    line = decode_line(raw, row)
                    record = match_line(line, filename, row, registry)
                except (KeywordNotFound, MatchDecodeError) as e:
                    logger.debug(f"[SCAN] {filename}:{row} skipped: {e}")
                    continue

                if record is not None:
                    found.setdefault(record.annotation_text, []).append(record)
        except OSError as e:
            raise ScanIOError(os.fspath(path), e.strerror or str(e)) from e

    if found:
        logger.debug(
            f"[SCAN] {filename}: "
            + ", ".join(f"{k}={len(v)}" for k, v in found.items())
        )
    return found
