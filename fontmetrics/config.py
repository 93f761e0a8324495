"""
Configuration
=============
Reference font constants and the settings that decide which width
source a FontMetrics instance uses.

Settings come from constructor arguments or from the environment:

    FONTMETRICS_FONT         Font file or path for the rasterizer
    FONTMETRICS_FONT_SIZE    Reference size in pixels
    FONTMETRICS_INDEX        Path to a width index file
    FONTMETRICS_STRATEGY     auto | system | index
    FONTMETRICS_STRICT       1/true to reject inconsistent index files
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

FONT_NAME = "Verdana"
FONT_FILE = "Verdana.ttf"
FONT_SIZE = 110
DEFAULT_INDEX_RESOURCE = "fontmetrics.bin"

STRATEGY_AUTO = "auto"
STRATEGY_SYSTEM = "system"
STRATEGY_INDEX = "index"
STRATEGIES = (STRATEGY_AUTO, STRATEGY_SYSTEM, STRATEGY_INDEX)

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class FontMetricsConfig:
    """
    Width source settings.

    Attributes:
        font_file: Font file name or path passed to the rasterizer
        font_size: Reference size; also the fallback width for unknown
            code points
        index_path: Width index file. None means the packaged
            data/fontmetrics.bin
        strategy: "system" (rasterizer only), "index" (table only) or
            "auto" (rasterizer, falling back to the table)
        strict: Reject index files whose width count does not match
    """

    font_file: str = FONT_FILE
    font_size: int = FONT_SIZE
    index_path: Optional[str] = None
    strategy: str = STRATEGY_AUTO
    strict: bool = False

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown strategy {self.strategy!r}, expected one of {', '.join(STRATEGIES)}"
            )
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FontMetricsConfig":
        """
        Build a config from FONTMETRICS_* variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("FONTMETRICS_FONT"):
            kwargs["font_file"] = env["FONTMETRICS_FONT"]
        if env.get("FONTMETRICS_FONT_SIZE"):
            try:
                kwargs["font_size"] = int(env["FONTMETRICS_FONT_SIZE"])
            except ValueError:
                raise ValueError(
                    f"FONTMETRICS_FONT_SIZE must be an integer: {env['FONTMETRICS_FONT_SIZE']!r}"
                ) from None
        if env.get("FONTMETRICS_INDEX"):
            kwargs["index_path"] = env["FONTMETRICS_INDEX"]
        if env.get("FONTMETRICS_STRATEGY"):
            kwargs["strategy"] = env["FONTMETRICS_STRATEGY"].strip().lower()
        if "FONTMETRICS_STRICT" in env:
            kwargs["strict"] = _parse_bool(env["FONTMETRICS_STRICT"])
        return cls(**kwargs)


def _parse_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"Expected a boolean, got {value!r}")
