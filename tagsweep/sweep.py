"""
tagsweep Sweep — one run, start to finish

Wires a resolved SweepConfig to the walker and the renderer. The CLI is
a thin shell around this; library users can drive it directly:

    config = load_config("tagsweep.yaml", path="./src")
    sweep = Sweep(config, sink=buffer)
    results = sweep.start()
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

from tagsweep.config_loader import SweepConfig
from tagsweep.exclusions import ExclusionFilter
from tagsweep.report import render, render_json
from tagsweep.walker import ResultSet, run


class Sweep:
    """
    A configured scan.

    Lifecycle:
        sweep = Sweep(config, sink)
        results = sweep.collect()   # walk only, nothing written
        sweep.show(results)         # render to sink
    or simply sweep.start() for both.
    """

    def __init__(
        self,
        config: SweepConfig,
        sink: TextIO | None = None,
        aligned: bool = False,
        color: bool | None = None,
        as_json: bool = False,
    ):
        self.config = config
        self.sink = sink if sink is not None else sys.stdout
        self.aligned = aligned
        self.color = color
        self.as_json = as_json
        self.exclusions = ExclusionFilter(config.excluded)

    def collect(self) -> ResultSet:
        """Walk the tree. Raises on the first fatal error."""
        logger.debug(f"[SWEEP] Collecting under {self.config.path}")
        return run(self.config.path, self.config.registry, self.exclusions)

    def show(self, results: ResultSet) -> None:
        if self.as_json:
            render_json(results, self.config.registry, self.sink)
        else:
            render(results, self.config.registry, self.sink, aligned=self.aligned, color=self.color)

    def start(self) -> ResultSet:
        """Collect, then render. Nothing is written if the walk fails."""
        results = self.collect()
        self.show(results)
        return results
