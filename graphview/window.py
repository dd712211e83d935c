from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from graphview.errors import EmptyWindowError
from graphview.series import Sample, Series


# Samples kept outside the query interval so the segments crossing the window
# edges are still drawn.
LEFT_PAD = 2
RIGHT_PAD = 1


@dataclass(frozen=True)
class SeriesWindow:
    """Contiguous `[start_index, end_index)` range of a series.

    `x` and `y` are read-only views into the series buffers, valid until the
    next append to that series.
    """

    start_index: int
    end_index: int
    x: np.ndarray
    y: np.ndarray

    def __len__(self) -> int:
        return self.end_index - self.start_index

    def __iter__(self) -> Iterator[Sample]:
        for x, y in zip(self.x.tolist(), self.y.tolist()):
            yield Sample(x, y)

    def first(self) -> Sample:
        return Sample(float(self.x[0]), float(self.y[0]))

    def last(self) -> Sample:
        return Sample(float(self.x[-1]), float(self.y[-1]))


def select_window(series: Series, query_start: float, query_size: float) -> SeriesWindow:
    """Return the samples needed to draw `[query_start, query_start + query_size]`.

    `query_size == 0` disables windowing and returns the whole series. Raises
    `EmptyWindowError` when the interval lies entirely left or right of the
    series data.
    """
    xs = series.x
    ys = series.y
    n = xs.size
    if query_size == 0:
        return SeriesWindow(start_index=0, end_index=n, x=xs, y=ys)

    query_end = float(query_start) + float(query_size)
    start = int(np.searchsorted(xs, float(query_start), side="left"))
    if start >= n:
        raise EmptyWindowError(f"window [{query_start}, {query_end}] starts after the last sample")
    start = max(start - LEFT_PAD, 0)

    end = int(np.searchsorted(xs, query_end, side="right"))
    if end == 0:
        raise EmptyWindowError(f"window [{query_start}, {query_end}] ends before the first sample")
    end = min(end + RIGHT_PAD, n)

    return SeriesWindow(start_index=start, end_index=end, x=xs[start:end], y=ys[start:end])
