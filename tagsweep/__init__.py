"""
tagsweep — inline annotation inventory

Walks a source tree, finds comment markers such as TODO, FIXME, URGENT
and BUG, and prints them grouped by keyword with their locations.

Usage:
    tagsweep --path ./src
    tagsweep --config tagsweep.yaml --indent
"""

from .config_loader import OverlayConfig, SweepConfig, load_config, load_overlay
from .errors import (
    ConfigError,
    KeywordNotFound,
    MatchDecodeError,
    PatternError,
    ScanIOError,
    TagSweepError,
)
from .exclusions import ExclusionFilter, is_excluded
from .matcher import MatchRecord, match_line
from .registry import DEFAULT_KEYWORDS, Annotation, Registry, load_registry
from .report import render, render_json
from .scanner import scan_file
from .sweep import Sweep
from .walker import ResultSet, run

__version__ = "0.1.0"

__all__ = [
    "Annotation", "Registry", "DEFAULT_KEYWORDS", "load_registry",
    "OverlayConfig", "SweepConfig", "load_config", "load_overlay",
    "ExclusionFilter", "is_excluded",
    "MatchRecord", "match_line", "scan_file",
    "ResultSet", "run",
    "render", "render_json", "Sweep",
    "TagSweepError", "ConfigError", "ScanIOError", "PatternError",
    "KeywordNotFound", "MatchDecodeError",
]
