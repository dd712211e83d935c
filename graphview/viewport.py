from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable

import numpy as np

from graphview.config import GraphViewConfig
from graphview.errors import InvalidArgumentError


LOGGER = logging.getLogger(__name__)

ViewportListener = Callable[[float, float], None]


@dataclass(frozen=True)
class DomainBounds:
    """Union of all non-empty series bounds, or the configured defaults when no series has samples."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    series_count: int = 0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x


@dataclass(frozen=True)
class AxisLabels:
    horizontal: np.ndarray
    vertical: np.ndarray


@dataclass
class LabelCache:
    """Label values derived from the viewport; dropped on every viewport or series change."""

    key: tuple[float, float] | None = None
    labels: AxisLabels | None = None

    def invalidate(self) -> None:
        self.key = None
        self.labels = None

    @property
    def valid(self) -> bool:
        return self.labels is not None


class ViewportController:
    """Visible x-interval `(start, size)` of a chart; `size == 0` shows the whole domain."""

    def __init__(
        self,
        domain: Callable[[], DomainBounds],
        config: GraphViewConfig | None = None,
        *,
        scrollable: bool = False,
        scalable: bool = False,
    ) -> None:
        self._domain = domain
        self._config = config or GraphViewConfig()
        self._start = 0.0
        self._size = 0.0
        self._listeners: list[ViewportListener] = []
        self.label_cache = LabelCache()
        self._scrollable = bool(scrollable)
        self._scalable = False
        self.set_scalable(scalable)

    @property
    def start(self) -> float:
        return self._start

    @property
    def size(self) -> float:
        return self._size

    @property
    def is_set(self) -> bool:
        return self._size != 0

    @property
    def scrollable(self) -> bool:
        return self._scrollable

    def set_scrollable(self, scrollable: bool) -> None:
        self._scrollable = bool(scrollable)

    @property
    def scalable(self) -> bool:
        return self._scalable

    def set_scalable(self, scalable: bool) -> None:
        # scalable implies scrollable
        self._scalable = bool(scalable)
        if self._scalable:
            self._scrollable = True

    def domain(self) -> DomainBounds:
        return self._domain()

    def visible_x_range(self) -> tuple[float, float]:
        if self._size != 0:
            return (self._start, self._start + self._size)
        bounds = self._domain()
        return (bounds.min_x, bounds.max_x)

    def can_scroll(self) -> bool:
        return self._scrollable and self._size < self._domain().width

    def pixel_scale(self, width_px: float) -> float:
        span = self._size if self._size != 0 else self._domain().width
        if span == 0:
            raise InvalidArgumentError("cannot derive a pixel scale from an empty x span")
        return float(width_px) / span

    def set_listener(self, listener: ViewportListener | None) -> None:
        self._listeners = [] if listener is None else [listener]

    def add_listener(self, listener: ViewportListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ViewportListener) -> None:
        self._listeners.remove(listener)

    def set_viewport(self, start: float, size: float) -> None:
        self._start = float(start)
        self._size = float(size)
        self._changed("set")

    def set_size(self, size: float) -> None:
        if self._size == 0:
            self._start = self._domain().min_x
        self._size = float(size)
        self._changed("resize")

    def move_to_start(self) -> None:
        self._start = self._domain().min_x
        self._changed("move_to_start")

    def move_to_end(self) -> None:
        bounds = self._domain()
        self._start = max(bounds.max_x - self._size, bounds.min_x)
        self._changed("move_to_end")

    def pan(self, delta_px: float, scale: float, *, from_fling: bool = False) -> bool:
        """Scroll by a screen-space delta; positive deltas move content right. False when nothing moved."""
        if self._size == 0:
            return False
        bounds = self._domain()
        if bounds.series_count == 0:
            return False
        if scale <= 0:
            raise InvalidArgumentError("pan scale must be > 0")
        if self._start + self._size >= bounds.max_x and delta_px < 0:
            if from_fling:
                LOGGER.debug("fling stopped at right domain edge (start=%s size=%s)", self._start, self._size)
            return False

        self._start -= float(delta_px) / float(scale)
        if self._start < bounds.min_x:
            self._start = bounds.min_x
        elif self._start + self._size > bounds.max_x:
            self._start = bounds.max_x - self._size
        self._changed("fling" if from_fling else "pan")
        return True

    def zoom(self, scale_factor: float) -> bool:
        if scale_factor <= 0:
            raise InvalidArgumentError("zoom factor must be > 0")
        if self._size == 0:
            LOGGER.warning("zoom ignored: viewport is not set")
            return False

        bounds = self._domain()
        new_size = self._size * float(scale_factor)
        diff = new_size - self._size
        self._start -= diff / 2.0
        self._size = new_size
        if diff > 0:
            if self._start < bounds.min_x:
                self._start = bounds.min_x
            overlap = self._start + self._size - bounds.max_x
            if overlap > 0:
                if self._start - overlap > bounds.min_x:
                    self._start -= overlap
                else:
                    self._start = bounds.min_x
                    self._size = bounds.max_x - self._start
        self._changed("zoom")
        return True

    def labels(self, graph_width: float, graph_height: float) -> AxisLabels:
        key = (float(graph_width), float(graph_height))
        cache = self.label_cache
        if cache.labels is not None and cache.key == key:
            return cache.labels

        x_min, x_max = self.visible_x_range()
        bounds = self._domain()
        num_h = max(1, int(graph_width / self._config.vertical_label_width))
        num_v = max(1, int(graph_height / self._config.horizontal_label_height))
        labels = AxisLabels(
            horizontal=np.linspace(x_min, x_max, num_h + 1, dtype=np.float64),
            vertical=np.linspace(bounds.max_y, bounds.min_y, num_v + 1, dtype=np.float64),
        )
        cache.key = key
        cache.labels = labels
        return labels

    def invalidate_labels(self) -> None:
        self.label_cache.invalidate()

    def _changed(self, reason: str) -> None:
        self.label_cache.invalidate()
        LOGGER.debug("viewport %s: start=%s size=%s", reason, self._start, self._size)
        for listener in list(self._listeners):
            listener(self._start, self._size)
