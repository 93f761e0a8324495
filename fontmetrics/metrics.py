"""
FontMetrics - High-Level Width Interface
========================================
Picks a width source once, from explicit configuration, and answers
width queries through it.

Strategies:
    system  Rasterizer only; fails if the font cannot be loaded
    index   Precomputed width index only
    auto    Rasterizer if available, otherwise the width index

Usage:
    # From environment / defaults
    from fontmetrics import FontMetrics

    metrics = FontMetrics.from_config()
    metrics.width_of_text("Hello World!")

    # With dependency injection
    from fontmetrics.index import import_file

    metrics = FontMetrics(source=import_file("fontmetrics.bin"))
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Optional

from .config import (
    DEFAULT_INDEX_RESOURCE,
    STRATEGY_AUTO,
    STRATEGY_INDEX,
    STRATEGY_SYSTEM,
    FontMetricsConfig,
)
from .errors import SourceUnavailableError
from .index.codec import import_file
from .index.width_index import WidthIndex
from .sources.base import WidthSource
from .sources.system import SystemWidthSource

log = logging.getLogger(__name__)


def default_index_path(config: FontMetricsConfig) -> Path:
    """Configured index path, or the packaged data/fontmetrics.bin."""
    if config.index_path:
        return Path(config.index_path)
    resource = resources.files("fontmetrics") / "data" / DEFAULT_INDEX_RESOURCE
    return Path(str(resource))


def load_index(config: FontMetricsConfig) -> WidthIndex:
    """
    Decode the configured width index.

    Raises:
        SourceUnavailableError: If the index file does not exist
        IndexFormatError: If the file is not a valid index
    """
    path = default_index_path(config)
    if not path.is_file():
        raise SourceUnavailableError(
            f"Width index not found: {path} (build one with 'fontmetrics export')"
        )
    index = import_file(path, strict=config.strict)
    index.fallback_width = config.font_size
    return index


def resolve_width_source(config: Optional[FontMetricsConfig] = None) -> WidthSource:
    """
    Resolve the width source for a configuration.

    Args:
        config: Settings; defaults to FontMetricsConfig.from_env()

    Returns:
        SystemWidthSource or WidthIndex

    Raises:
        SourceUnavailableError: If the chosen strategy cannot be satisfied
    """
    if config is None:
        config = FontMetricsConfig.from_env()

    if config.strategy in (STRATEGY_SYSTEM, STRATEGY_AUTO):
        source = SystemWidthSource.create(config)
        if source is not None:
            log.debug("Using rasterizer widths from %s", config.font_file)
            return source
        if config.strategy == STRATEGY_SYSTEM:
            raise SourceUnavailableError(
                f"Rasterizer not available for font {config.font_file!r}"
            )

    index = load_index(config)
    log.debug("Using width index %r", index)
    return index


class FontMetrics:
    """
    Text width measurement in the reference font.

    Args:
        source: Width source to use as-is. If None, one is resolved from
            config.
        config: Settings used when source is None
    """

    def __init__(
        self,
        source: "WidthSource | None" = None,
        config: "FontMetricsConfig | None" = None,
    ):
        self.config = config if config is not None else FontMetricsConfig.from_env()
        if source is None:
            self._source = resolve_width_source(self.config)
            self._owns_source = True
        else:
            self._source = source
            self._owns_source = False

    @classmethod
    def from_config(cls, config: "FontMetricsConfig | None" = None) -> "FontMetrics":
        return cls(config=config)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False

    def close(self):
        """Release the width source if this instance created it."""
        if self._owns_source:
            self._source.close()

    @property
    def source(self) -> WidthSource:
        return self._source

    @property
    def strategy(self) -> str:
        """Name of the active source ("system", "index", ...)."""
        return getattr(self._source, "name", type(self._source).__name__)

    def width_of(self, cp: int) -> int:
        """Width of a single code point in pixels."""
        return self._source.width_of(cp)

    def width_of_text(self, text: str) -> int:
        """Width of a string in pixels."""
        return self._source.width_of_text(text)
