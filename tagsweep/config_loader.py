"""
tagsweep Config Loader

Reads the optional overlay file and resolves the settings for one run.

The overlay is decoded into its own model first and only then applied:
a list that is present (even empty) replaces the default outright, a list
that is missing leaves the default alone. Nothing is merged.

Overlay format (JSON or YAML):

    path: ./src
    keywords:
      - {text: TODO, color: yellow, priority: 1}
      - {text: HACK, color: bright_red, priority: 2}
    excluded:
      - "*.min.js"
      - "./vendor/*"
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from tagsweep.errors import ConfigError
from tagsweep.registry import DEFAULT_KEYWORDS, Annotation, Registry, load_registry

DEFAULT_PATH = "./"


class OverlayConfig(BaseModel):
    """Raw overlay as found in the file. None means the key was absent."""
    model_config = ConfigDict(extra="ignore")

    path: str | None = None
    keywords: list[Annotation] | None = None
    excluded: list[str] | None = None


@dataclass
class SweepConfig:
    """Resolved settings for one run."""
    path: str = DEFAULT_PATH
    registry: Registry = field(default_factory=lambda: Registry(DEFAULT_KEYWORDS))
    excluded: list[str] = field(default_factory=list)


def load_overlay(config_path: str | Path) -> OverlayConfig:
    """
    Read and validate an overlay file.

    Files ending in .json go through json; anything else through
    yaml.safe_load, which accepts JSON as well.

    Raises:
        ConfigError: unreadable file, parse error, or invalid content.
    """
    config_path = Path(config_path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    try:
        if config_path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config {config_path} must be a mapping with path/keywords/excluded, "
            f"got {type(data).__name__}"
        )

    try:
        overlay = OverlayConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    logger.debug(
        f"[CONFIG] Loaded {config_path}: "
        f"keywords={'default' if overlay.keywords is None else len(overlay.keywords)}, "
        f"excluded={'default' if overlay.excluded is None else len(overlay.excluded)}"
    )
    return overlay


def load_config(
    config_path: str | Path | None = None,
    path: str | None = None,
) -> SweepConfig:
    """
    Resolve the settings for a run.

    Order: built-in defaults, then the overlay file (if any), then an
    explicit path argument. An empty path falls back to the current
    directory.
    """
    # An empty config path means no overlay, like an empty --path.
    overlay = load_overlay(config_path) if config_path else None

    registry = load_registry(overlay)
    excluded: list[str] = []
    root = DEFAULT_PATH

    if overlay is not None:
        if overlay.excluded is not None:
            excluded = list(overlay.excluded)
        if overlay.path:
            root = overlay.path

    if path:
        root = path

    logger.info(f"[CONFIG] Root {root}, keywords {registry.texts()}, {len(excluded)} exclusions")
    return SweepConfig(path=root, registry=registry, excluded=excluded)
