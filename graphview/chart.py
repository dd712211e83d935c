from __future__ import annotations

from dataclasses import dataclass
import itertools
import logging
from typing import Callable, Protocol

import numpy as np

from graphview.config import GraphViewConfig
from graphview.errors import DegenerateRangeError, EmptyWindowError, InvalidArgumentError
from graphview.gestures import GestureController
from graphview.mapping import PlotRect, map_points, map_to_screen
from graphview.series import RGBA, Sample, Series
from graphview.viewport import AxisLabels, DomainBounds, ViewportController
from graphview.window import SeriesWindow, select_window


LOGGER = logging.getLogger(__name__)

SeriesHandle = int
SeriesHook = Callable[[SeriesHandle, Series], None]
AppendHook = Callable[[SeriesHandle, Series, Sample], None]


@dataclass(frozen=True)
class SeriesDrawCall:
    """Screen-space points of one visible series for a single draw pass."""

    handle: SeriesHandle
    color: RGBA
    label: str | None
    px: np.ndarray
    py: np.ndarray
    window: SeriesWindow


class SeriesRenderer(Protocol):
    def draw_series(self, call: SeriesDrawCall) -> None:
        ...


class GraphView:
    """Scrollable, zoomable chart core: series collection, viewport and draw pipeline.

    Series are addressed by the integer handle returned from `add_series`;
    handles are never reused after removal.
    """

    def __init__(
        self,
        config: GraphViewConfig | None = None,
        *,
        scrollable: bool = False,
        scalable: bool = False,
    ) -> None:
        self.config = config or GraphViewConfig()
        self._series: dict[SeriesHandle, Series] = {}
        self._handles = itertools.count()
        self._manual_y: tuple[float, float] | None = None
        self.viewport = ViewportController(self.domain, self.config, scrollable=scrollable, scalable=scalable)
        self.gestures = GestureController(self.viewport, self.config)
        self.on_series_added: SeriesHook | None = None
        self.on_series_removed: SeriesHook | None = None
        self.on_sample_appended: AppendHook | None = None

    def add_series(self, series: Series) -> SeriesHandle:
        if not isinstance(series, Series):
            raise InvalidArgumentError(f"expected a Series, got {type(series)!r}")
        handle = next(self._handles)
        self._series[handle] = series
        self.viewport.invalidate_labels()
        if self.on_series_added is not None:
            self.on_series_added(handle, series)
        return handle

    def remove_series(self, handle: SeriesHandle) -> Series:
        series = self._series.pop(handle)
        self.viewport.invalidate_labels()
        if self.on_series_removed is not None:
            self.on_series_removed(handle, series)
        return series

    def series(self, handle: SeriesHandle) -> Series:
        return self._series[handle]

    def handles(self) -> list[SeriesHandle]:
        return list(self._series)

    def __len__(self) -> int:
        return len(self._series)

    def append_sample(self, handle: SeriesHandle | None, sample: Sample | tuple[float, float]) -> SeriesHandle:
        """Append to an existing series; on an empty chart a new series is created instead."""
        if not self._series:
            return self.add_series(Series([sample]))
        if handle is None:
            raise InvalidArgumentError("series handle is required once the chart has series")
        series = self._series[handle]
        series.append(sample)
        self.viewport.invalidate_labels()
        if self.on_sample_appended is not None:
            self.on_sample_appended(handle, series, series.last())
        return handle

    def set_visible(self, handle: SeriesHandle, visible: bool) -> None:
        self._series[handle].set_visible(visible)
        self.viewport.invalidate_labels()

    def toggle_series(self, handle: SeriesHandle) -> bool:
        visible = self._series[handle].toggle_visible()
        self.viewport.invalidate_labels()
        return visible

    def data(self, handle: SeriesHandle, index: int) -> Sample:
        return self._series[handle].at(index)

    def last_data(self, handle: SeriesHandle) -> Sample:
        return self._series[handle].last()

    def series_size(self, handle: SeriesHandle) -> int:
        return len(self._series[handle])

    def set_manual_y_bounds(self, min_y: float, max_y: float) -> None:
        if max_y < min_y:
            raise InvalidArgumentError("manual y bounds must satisfy min <= max")
        self._manual_y = (float(min_y), float(max_y))
        self.viewport.invalidate_labels()

    def clear_manual_y_bounds(self) -> None:
        self._manual_y = None
        self.viewport.invalidate_labels()

    @property
    def manual_y_bounds(self) -> tuple[float, float] | None:
        return self._manual_y

    def domain(self, ignore_viewport: bool = True) -> DomainBounds:
        """Union of non-empty series bounds; with `ignore_viewport=False` x comes from a set viewport."""
        cfg = self.config
        bounds = [s.bounds() for s in self._series.values() if len(s)]
        if bounds:
            min_x = min(b.min_x for b in bounds)
            max_x = max(b.max_x for b in bounds)
            min_y = min(b.min_y for b in bounds)
            max_y = max(b.max_y for b in bounds)
        else:
            min_x, max_x = cfg.default_min_x, cfg.default_max_x
            min_y, max_y = cfg.default_min_y, cfg.default_max_y
        if self._manual_y is not None:
            min_y, max_y = self._manual_y
        if not ignore_viewport and self.viewport.is_set:
            min_x = self.viewport.start
            max_x = self.viewport.start + self.viewport.size
        return DomainBounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y, series_count=len(self._series))

    def visible_slice(self, handle: SeriesHandle) -> SeriesWindow:
        vp = self.viewport
        return select_window(self._series[handle], vp.start, vp.size)

    def plot_rect(self, width: float, height: float) -> PlotRect:
        border = self.config.border
        graph_width = width - 2 * border
        graph_height = height - 2 * border
        if graph_width <= 0 or graph_height <= 0:
            raise InvalidArgumentError("content view too small for plotting area")
        return PlotRect(x0=0.0, y0=0.0, width=float(graph_width), height=float(graph_height), border=border)

    def map_to_screen(self, sample: Sample | tuple[float, float], rect: PlotRect) -> tuple[float, float]:
        bounds = self.domain(ignore_viewport=False)
        return map_to_screen(sample, bounds.min_x, bounds.width, bounds.min_y, bounds.max_y, rect)

    def set_size_px(self, width: float, height: float) -> PlotRect:
        rect = self.plot_rect(width, height)
        self.gestures.set_plot_width(rect.width)
        return rect

    def labels(self, width: float, height: float) -> AxisLabels:
        rect = self.plot_rect(width, height)
        return self.viewport.labels(rect.width, rect.height)

    def draw(self, renderer: SeriesRenderer, width: float, height: float) -> list[SeriesDrawCall]:
        rect = self.set_size_px(width, height)
        if not self._series:
            return []
        bounds = self.domain(ignore_viewport=False)
        if bounds.max_y == bounds.min_y:
            LOGGER.debug("draw skipped: flat y range %s", bounds.min_y)
            return []

        calls: list[SeriesDrawCall] = []
        for handle, series in self._series.items():
            if not series.is_visible():
                continue
            try:
                window = self.visible_slice(handle)
            except EmptyWindowError:
                LOGGER.debug("series %s has no samples in the viewport", handle)
                continue
            try:
                px, py = map_points(window.x, window.y, bounds.min_x, bounds.width, bounds.min_y, bounds.max_y, rect)
            except DegenerateRangeError:
                LOGGER.debug("series %s skipped: degenerate x span", handle)
                continue
            call = SeriesDrawCall(handle=handle, color=series.color, label=series.label, px=px, py=py, window=window)
            renderer.draw_series(call)
            calls.append(call)
        return calls
