"""
tagsweep Annotation Registry

Holds the keywords the scanner looks for, each with a display color and
a priority, and builds the single alternation pattern used on every line.

A Registry is immutable. Reconfiguring means building a new one with
load_registry(); the compiled pattern lives exactly as long as the
registry that owns it.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, Iterator

from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator
from rich.color import Color, ColorParseError

from tagsweep.errors import ConfigError

if TYPE_CHECKING:
    from tagsweep.config_loader import OverlayConfig


class Annotation(BaseModel):
    """One recognized keyword."""
    model_config = ConfigDict(frozen=True)

    text: str                    # matched literally, case-sensitive
    color: str = "default"       # any rich color name, e.g. "yellow", "bright_red"
    priority: int = 1

    @field_validator("text")
    @classmethod
    def _text_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("keyword text must not be empty")
        return v

    @field_validator("color")
    @classmethod
    def _known_color(cls, v: str) -> str:
        try:
            Color.parse(v)
        except ColorParseError as e:
            raise ValueError(str(e)) from e
        return v


DEFAULT_KEYWORDS: tuple[Annotation, ...] = (
    Annotation(text="TODO", color="yellow", priority=1),
    Annotation(text="FIXME", color="cyan", priority=1),
    Annotation(text="URGENT", color="magenta", priority=1),
    Annotation(text="BUG", color="red", priority=1),
)

# Matches nothing; used when a registry has no keywords at all.
_NEVER = r"(?!x)x"


class Registry:
    """Ordered, immutable set of annotations plus their compiled pattern."""

    def __init__(self, annotations: Iterable[Annotation]):
        self._annotations = tuple(annotations)
        self._by_text: dict[str, Annotation] = {}
        for a in self._annotations:
            if a.text in self._by_text:
                raise ConfigError(f"Duplicate keyword in configuration: {a.text!r}")
            self._by_text[a.text] = a
        self._pattern: re.Pattern[str] | None = None

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self._annotations)

    def __len__(self) -> int:
        return len(self._annotations)

    def __contains__(self, text: object) -> bool:
        return text in self._by_text

    def __repr__(self) -> str:
        return f"Registry({', '.join(self.texts())})"

    def texts(self) -> list[str]:
        """Keyword texts in declared order."""
        return [a.text for a in self._annotations]

    def lookup(self, text: str) -> Annotation | None:
        """Exact, case-sensitive lookup."""
        return self._by_text.get(text)

    def pattern(self) -> re.Pattern[str]:
        """
        Alternation of every keyword, compiled on first use.

        Each keyword is escaped, so configuration text is always matched
        literally. Longer keywords come first in the alternation so that
        FIXME is not reported as FIX when both are registered.
        """
        if self._pattern is None:
            keys = sorted(self._by_text, key=len, reverse=True)
            if keys:
                source = "(" + "|".join(re.escape(k) for k in keys) + ")"
            else:
                source = _NEVER
            self._pattern = re.compile(source)
            logger.debug(f"[REGISTRY] Compiled pattern for {len(keys)} keywords: {source}")
        return self._pattern


def load_registry(
    overlay: OverlayConfig | None = None,
    defaults: Iterable[Annotation] = DEFAULT_KEYWORDS,
) -> Registry:
    """
    Build a registry from the defaults, or from the overlay's keyword list.

    An overlay keyword list replaces the defaults outright, even when it is
    empty. An overlay without a keyword list keeps the defaults.
    """
    if overlay is not None and overlay.keywords is not None:
        logger.debug(f"[REGISTRY] Overlay replaces defaults with {len(overlay.keywords)} keywords")
        return Registry(overlay.keywords)
    return Registry(defaults)

