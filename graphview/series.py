from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Iterator

import numpy as np

from graphview.adapters import normalize_samples, normalize_xy
from graphview.config import DEFAULT_MAX_X, DEFAULT_MAX_Y, DEFAULT_MIN_X, DEFAULT_MIN_Y
from graphview.errors import EmptyStateError, InvalidArgumentError, OrderViolationError


RGBA = tuple[int, int, int, int]

DEFAULT_COLOR: RGBA = (0, 119, 204, 255)

_MIN_CAPACITY = 16


@dataclass(frozen=True)
class Sample:
    """One (x, y) data point. Samples order by `x` only."""

    x: float
    y: float

    def __lt__(self, other: "Sample") -> bool:
        return self.x < other.x

    def __le__(self, other: "Sample") -> bool:
        return self.x <= other.x

    def __gt__(self, other: "Sample") -> bool:
        return self.x > other.x

    def __ge__(self, other: "Sample") -> bool:
        return self.x >= other.x


@dataclass(frozen=True)
class SeriesBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float


DEFAULT_BOUNDS = SeriesBounds(min_x=DEFAULT_MIN_X, max_x=DEFAULT_MAX_X, min_y=DEFAULT_MIN_Y, max_y=DEFAULT_MAX_Y)


def coerce_color(color: tuple[int, int, int] | tuple[int, int, int, int] | None) -> RGBA:
    if color is None:
        return DEFAULT_COLOR
    if len(color) == 3:
        r, g, b = color
        return (int(r), int(g), int(b), 255)
    if len(color) == 4:
        r, g, b, a = color
        return (int(r), int(g), int(b), int(a))
    raise InvalidArgumentError(f"color must be an RGB or RGBA tuple, got {color!r}")


class Series:
    """x-sorted sample store with incrementally maintained bounds.

    Samples live in two growable float64 buffers. Bulk construction sorts once
    and scans for bounds; `append` only accepts samples to the right of the
    current last sample and updates the bounds in O(1).
    """

    def __init__(
        self,
        samples: Any = (),
        color: tuple[int, int, int] | tuple[int, int, int, int] | None = None,
        label: str | None = None,
        *,
        visible: bool = True,
    ) -> None:
        x, y = normalize_samples(samples)
        self._init_buffers(x, y)
        self.color = coerce_color(color)
        self.label = label
        self._visible = bool(visible)

    @classmethod
    def from_xy(
        cls,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] | None = None,
        label: str | None = None,
    ) -> "Series":
        """Build a series from separate x/y inputs (x defaults to the sample index)."""
        x_arr, y_arr = normalize_xy(y, x=x, data=data)
        series = cls((), color=color, label=label)
        series._init_buffers(x_arr, y_arr)
        return series

    def _init_buffers(self, x: np.ndarray, y: np.ndarray) -> None:
        order = np.argsort(x, kind="stable")
        n = int(x.size)
        capacity = max(_MIN_CAPACITY, n)
        self._x = np.empty(capacity, dtype=np.float64)
        self._y = np.empty(capacity, dtype=np.float64)
        self._x[:n] = x[order]
        self._y[:n] = y[order]
        self._size = n
        self._recompute_bounds()

    def _recompute_bounds(self) -> None:
        n = self._size
        if n == 0:
            self._bounds = DEFAULT_BOUNDS
            return
        ys = self._y[:n]
        self._bounds = SeriesBounds(
            min_x=float(self._x[0]),
            max_x=float(self._x[n - 1]),
            min_y=float(np.min(ys)),
            max_y=float(np.max(ys)),
        )

    def append(self, sample: Sample | tuple[float, float]) -> None:
        x, y = _sample_xy(sample)
        n = self._size
        if n > 0 and x <= self._x[n - 1]:
            raise OrderViolationError(
                f"x value must be larger than the last x value in the series ({x!r} <= {float(self._x[n - 1])!r})"
            )
        if n == self._x.size:
            self._grow()
        self._x[n] = x
        self._y[n] = y
        self._size = n + 1
        if n == 0:
            self._bounds = SeriesBounds(min_x=x, max_x=x, min_y=y, max_y=y)
            return
        prev = self._bounds
        self._bounds = SeriesBounds(
            min_x=prev.min_x,
            max_x=x,
            min_y=min(prev.min_y, y),
            max_y=max(prev.max_y, y),
        )

    def _grow(self) -> None:
        capacity = max(_MIN_CAPACITY, self._x.size * 2)
        grown_x = np.empty(capacity, dtype=np.float64)
        grown_y = np.empty(capacity, dtype=np.float64)
        grown_x[: self._size] = self._x[: self._size]
        grown_y[: self._size] = self._y[: self._size]
        self._x = grown_x
        self._y = grown_y

    def bounds(self) -> SeriesBounds:
        return self._bounds

    @property
    def min_x(self) -> float:
        return self._bounds.min_x

    @property
    def max_x(self) -> float:
        return self._bounds.max_x

    @property
    def min_y(self) -> float:
        return self._bounds.min_y

    @property
    def max_y(self) -> float:
        return self._bounds.max_y

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Sample]:
        for x, y in zip(self._x[: self._size].tolist(), self._y[: self._size].tolist()):
            yield Sample(x, y)

    def at(self, index: int) -> Sample:
        n = self._size
        i = int(index)
        if i < 0:
            i += n
        if i < 0 or i >= n:
            raise IndexError(f"sample index out of range: {index} (size={n})")
        return Sample(float(self._x[i]), float(self._y[i]))

    def last(self) -> Sample:
        if self._size == 0:
            raise EmptyStateError("series has no samples")
        return self.at(self._size - 1)

    @property
    def x(self) -> np.ndarray:
        return _readonly(self._x[: self._size])

    @property
    def y(self) -> np.ndarray:
        return _readonly(self._y[: self._size])

    def is_visible(self) -> bool:
        return self._visible

    def set_visible(self, visible: bool) -> None:
        self._visible = bool(visible)

    def toggle_visible(self) -> bool:
        self._visible = not self._visible
        return self._visible

    def __repr__(self) -> str:
        return f"Series(label={self.label!r}, size={self._size}, bounds={self._bounds})"


def _sample_xy(sample: Sample | tuple[float, float]) -> tuple[float, float]:
    if isinstance(sample, Sample):
        x, y = sample.x, sample.y
    else:
        try:
            x, y = sample
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"sample must be a Sample or an (x, y) pair, got {sample!r}") from exc
    try:
        x = float(x)
        y = float(y)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"sample is not numeric: {sample!r}") from exc
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidArgumentError(f"sample must be finite: {sample!r}")
    return x, y


def _readonly(view: np.ndarray) -> np.ndarray:
    view.flags.writeable = False
    return view
