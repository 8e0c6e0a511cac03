"""
tagsweep Tree Walker

Walks the tree depth-first in lexical order, skips excluded files, scans
the rest, and merges every file's matches into one ResultSet.

Fail-fast: a directory that cannot be listed, a malformed exclusion
pattern, or a file that cannot be opened ends the run with no partial
result.
"""

from __future__ import annotations

import os
from typing import Iterable, Iterator

from loguru import logger

from tagsweep.errors import ScanIOError
from tagsweep.exclusions import ExclusionFilter
from tagsweep.matcher import MatchRecord
from tagsweep.registry import Annotation, Registry
from tagsweep.scanner import scan_file


class ResultSet:
    """
    Keyword → records, in discovery order (walk order, then line order).

    Only the walker writes to it. ordered() gives the deterministic view
    used for rendering: sections in the registry's declared order.
    """

    def __init__(self):
        self._records: dict[str, list[MatchRecord]] = {}

    def merge(self, per_file: dict[str, list[MatchRecord]]) -> None:
        for key, records in per_file.items():
            self._records.setdefault(key, []).extend(records)

    def get(self, keyword: str) -> list[MatchRecord]:
        return list(self._records.get(keyword, []))

    def keywords(self) -> list[str]:
        return list(self._records)

    def items(self) -> Iterator[tuple[str, list[MatchRecord]]]:
        for key, records in self._records.items():
            yield key, list(records)

    def ordered(self, registry: Registry) -> list[tuple[Annotation, list[MatchRecord]]]:
        """Sections in registry order; keywords the registry lacks are dropped."""
        sections = []
        for annotation in registry:
            records = self._records.get(annotation.text)
            if records:
                sections.append((annotation, list(records)))
        return sections

    def to_dict(self) -> dict[str, list[dict]]:
        return {k: [r.to_dict() for r in v] for k, v in self._records.items()}

    def __len__(self) -> int:
        return sum(len(v) for v in self._records.values())

    def __bool__(self) -> bool:
        return any(self._records.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        counts = ", ".join(f"{k}={len(v)}" for k, v in self._records.items())
        return f"ResultSet({counts})"


def iter_files(root: str) -> Iterator[tuple[str, bool]]:
    """
    Yield (path, is_dir) for root and everything below it.

    Depth-first, entries sorted by name. Paths are joined onto root as
    given, never normalised. The root itself is followed if it is a
    symlink; symlinked directories below it are reported but not entered.
    """
    try:
        os.lstat(root)
    except OSError as e:
        raise ScanIOError(root, e.strerror or str(e)) from e

    is_dir = os.path.isdir(root)
    yield root, is_dir
    if is_dir:
        yield from _walk_dir(root)


def _list_dir(directory: str) -> Iterator[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise ScanIOError(directory, e.strerror or str(e)) from e
    return iter(entries)


def _walk_dir(directory: str) -> Iterator[tuple[str, bool]]:
    # One sorted listing per open directory, innermost last.
    stack = [(directory, _list_dir(directory))]
    while stack:
        parent, entries = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue

        path = os.path.join(parent, entry.name)
        try:
            real_dir = entry.is_dir(follow_symlinks=False)
            link_dir = not real_dir and entry.is_symlink() and entry.is_dir()
        except OSError as e:
            raise ScanIOError(path, e.strerror or str(e)) from e

        yield path, real_dir or link_dir
        if real_dir:
            stack.append((path, _list_dir(path)))


def run(
    root: str,
    registry: Registry,
    exclusions: ExclusionFilter | Iterable[str] = (),
) -> ResultSet:
    """
    Scan every eligible file under root and aggregate the matches.

    Raises:
        ScanIOError: root missing, a directory unreadable, or a file unopenable.
        PatternError: an exclusion pattern is malformed.
    """
    if not isinstance(exclusions, ExclusionFilter):
        exclusions = ExclusionFilter(exclusions)

    results = ResultSet()
    scanned = skipped = 0

    for path, is_dir in iter_files(root):
        if is_dir:
            continue
        if exclusions.is_excluded(path):
            skipped += 1
            continue

        results.merge(scan_file(path, registry))
        scanned += 1

    logger.info(
        f"[WALK] {root}: scanned {scanned} files, excluded {skipped}, "
        f"found {len(results)} annotations"
    )
    return results
