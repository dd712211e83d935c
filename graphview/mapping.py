from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from graphview.errors import DegenerateRangeError, InvalidArgumentError
from graphview.series import Sample


@dataclass(frozen=True)
class PlotRect:
    """Pixel-space plot area; points land inside the rect inset by `border`."""

    x0: float
    y0: float
    width: float
    height: float
    border: float = 0.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidArgumentError("plot rect width/height must be > 0")
        if self.border < 0:
            raise InvalidArgumentError("plot rect border must be >= 0")


@dataclass(frozen=True)
class ViewTransform:
    """Affine data-to-screen transform: `sx * x + tx`, `sy * y + ty` with sy < 0."""

    sx: float
    tx: float
    sy: float
    ty: float


def build_view_transform(start: float, size: float, min_y: float, max_y: float, rect: PlotRect) -> ViewTransform:
    if size == 0:
        raise DegenerateRangeError("viewport size must be non-zero")
    diff_y = max_y - min_y
    if diff_y == 0:
        raise DegenerateRangeError(f"flat y range [{min_y}, {max_y}] cannot be mapped")
    sx = rect.width / size
    sy = rect.height / diff_y
    # translate, scale, flip vertically, then offset by the rect origin + border
    return ViewTransform(
        sx=sx,
        tx=-start * sx + rect.x0 + rect.border,
        sy=-sy,
        ty=rect.height + min_y * sy + rect.y0 + rect.border,
    )


def map_to_screen(
    sample: Sample | tuple[float, float],
    start: float,
    size: float,
    min_y: float,
    max_y: float,
    rect: PlotRect,
) -> tuple[float, float]:
    if isinstance(sample, Sample):
        x, y = sample.x, sample.y
    else:
        x, y = sample
    t = build_view_transform(start, size, min_y, max_y, rect)
    return (float(x) * t.sx + t.tx, float(y) * t.sy + t.ty)


def map_points(
    x: np.ndarray,
    y: np.ndarray,
    start: float,
    size: float,
    min_y: float,
    max_y: float,
    rect: PlotRect,
) -> tuple[np.ndarray, np.ndarray]:
    t = build_view_transform(start, size, min_y, max_y, rect)
    px = np.asarray(x, dtype=np.float64) * t.sx + t.tx
    py = np.asarray(y, dtype=np.float64) * t.sy + t.ty
    return px, py
