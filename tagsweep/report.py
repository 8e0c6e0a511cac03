"""
tagsweep Report Renderer

Turns a ResultSet into text. Sections follow the registry's declared
order, so the same tree always renders the same way.

Plain layout, one section per keyword with at least one record:

    BUG
      - null deref<TAB>a.go:3

The keyword label is colored with its registry color; the entry lines
are written untouched so the tab survives for downstream tools. Aligned
mode swaps the tab-separated lines for a borderless table.
"""

from __future__ import annotations

import json
from typing import TextIO

from loguru import logger
from rich.console import Console
from rich.table import Table
from rich.text import Text

from tagsweep.matcher import MatchRecord
from tagsweep.registry import Registry
from tagsweep.walker import ResultSet


def format_entry(record: MatchRecord) -> str:
    return f"  -{record.instruction}\t{record.filename}:{record.row}"


def make_console(sink: TextIO, color: bool | None = None) -> Console:
    """
    Console bound to sink.

    color=None leaves the decision to rich (terminal or not, NO_COLOR);
    True forces ANSI codes, False strips them.
    """
    if color is None:
        return Console(file=sink, highlight=False, soft_wrap=True)
    if color:
        return Console(
            file=sink, force_terminal=True, color_system="standard",
            highlight=False, soft_wrap=True,
        )
    return Console(file=sink, no_color=True, color_system=None, highlight=False, soft_wrap=True)


def render(
    results: ResultSet,
    registry: Registry,
    sink: TextIO,
    aligned: bool = False,
    color: bool | None = None,
) -> None:
    """Write the report for results to sink."""
    console = make_console(sink, color)
    sections = results.ordered(registry)

    dropped = [k for k in results.keywords() if k not in registry]
    if dropped:
        logger.debug(f"[REPORT] Skipping keywords missing from registry: {dropped}")

    for annotation, records in sections:
        visible = [r for r in records if r.row != 0]
        console.print(Text(annotation.text, style=annotation.color))

        if aligned:
            _render_table(console, visible)
        else:
            for record in visible:
                sink.write(format_entry(record) + "\n")

    sink.flush()
    logger.debug(f"[REPORT] Rendered {len(sections)} sections")


def _render_table(console: Console, records: list[MatchRecord]) -> None:
    table = Table(box=None, show_header=False, show_edge=False, padding=(0, 2))
    table.add_column("marker", no_wrap=True)
    table.add_column("instruction", overflow="fold")
    table.add_column("location", no_wrap=True, justify="right")
    for record in records:
        table.add_row("-", record.instruction.strip(), record.location)
    console.print(table)


def render_json(results: ResultSet, registry: Registry, sink: TextIO) -> None:
    """Write results as a JSON object, keywords in registry order."""
    payload = {
        annotation.text: [r.to_dict() for r in records if r.row != 0]
        for annotation, records in results.ordered(registry)
    }
    sink.write(json.dumps(payload, indent=2) + "\n")
    sink.flush()
