from __future__ import annotations

from dataclasses import dataclass, fields
import os


DEFAULT_MIN_X = 0.0
DEFAULT_MAX_X = 100.0
DEFAULT_MIN_Y = 0.0
DEFAULT_MAX_Y = 100.0

ENV_PREFIX = "GRAPHVIEW_"


@dataclass(frozen=True)
class GraphViewConfig:
    """Layout, gesture and fling tuning for one chart instance."""

    border: float = 20.0
    vertical_label_width: float = 100.0
    horizontal_label_height: float = 80.0
    default_min_x: float = DEFAULT_MIN_X
    default_max_x: float = DEFAULT_MAX_X
    default_min_y: float = DEFAULT_MIN_Y
    default_max_y: float = DEFAULT_MAX_Y
    touch_slop: float = 8.0
    min_fling_velocity: float = 50.0
    max_fling_velocity: float = 8000.0
    fling_deceleration: float = 2000.0

    def __post_init__(self) -> None:
        if self.border < 0:
            raise ValueError("border must be >= 0")
        if self.vertical_label_width <= 0 or self.horizontal_label_height <= 0:
            raise ValueError("label spacing must be > 0")
        if self.default_max_x <= self.default_min_x:
            raise ValueError("default x bounds must satisfy min < max")
        if self.default_max_y <= self.default_min_y:
            raise ValueError("default y bounds must satisfy min < max")
        if self.touch_slop < 0:
            raise ValueError("touch_slop must be >= 0")
        if self.min_fling_velocity < 0:
            raise ValueError("min_fling_velocity must be >= 0")
        if self.max_fling_velocity < self.min_fling_velocity:
            raise ValueError("max_fling_velocity must be >= min_fling_velocity")
        if self.fling_deceleration <= 0:
            raise ValueError("fling_deceleration must be > 0")

    @classmethod
    def from_env(cls, *, prefix: str = ENV_PREFIX) -> "GraphViewConfig":
        """Build a config, overriding fields from `GRAPHVIEW_<FIELD>` variables.

        Unparseable values are ignored so a bad shell export never breaks the
        widget; range validation still applies to parsed values.
        """
        overrides: dict[str, float] = {}
        for f in fields(cls):
            raw = os.getenv(prefix + f.name.upper(), "").strip()
            if raw == "":
                continue
            try:
                overrides[f.name] = float(raw)
            except ValueError:
                continue
        return cls(**overrides)
