from __future__ import annotations

import logging
import time

from graphview.config import GraphViewConfig
from graphview.errors import InvalidArgumentError
from graphview.fling import FlingAnimation
from graphview.viewport import ViewportController


LOGGER = logging.getLogger(__name__)


class GestureController:
    """Applies pre-classified drag and pinch signals to a viewport; flings advance on `tick(now)`."""

    def __init__(self, viewport: ViewportController, config: GraphViewConfig | None = None) -> None:
        self._viewport = viewport
        self._config = config or GraphViewConfig()
        self._plot_width = 0.0
        self._dragging = False
        self._last_x = 0.0
        self._fling: FlingAnimation | None = None
        self._last_scroll = 0.0

    @property
    def is_dragging(self) -> bool:
        return self._dragging

    @property
    def is_flinging(self) -> bool:
        return self._fling is not None and not self._fling.is_finished

    @property
    def fling_animation(self) -> FlingAnimation | None:
        return self._fling

    @property
    def plot_width(self) -> float:
        return self._plot_width

    def set_plot_width(self, width_px: float) -> None:
        if width_px <= 0:
            raise InvalidArgumentError("plot width must be > 0")
        self._plot_width = float(width_px)

    def scale(self) -> float:
        if self._plot_width <= 0:
            raise InvalidArgumentError("plot width is not set")
        return self._viewport.pixel_scale(self._plot_width)

    def drag_start(self, x_px: float) -> bool:
        if not self._viewport.can_scroll():
            self._dragging = False
            return False
        # Touching a running fling stops it and starts dragging without slop.
        interrupted = self.is_flinging
        if self._fling is not None:
            self._fling.abort()
        self._last_x = float(x_px)
        self._dragging = interrupted
        return True

    def drag_move(self, x_px: float) -> bool:
        # No layout yet: nothing to convert pixels against.
        if self._plot_width <= 0 or not self._viewport.can_scroll():
            return False
        x = float(x_px)
        if not self._dragging:
            if abs(x - self._last_x) <= self._config.touch_slop:
                return False
            self._dragging = True
        delta = x - self._last_x
        self._last_x = x
        return self._viewport.pan(delta, self.scale())

    def drag_end(self, velocity_px_s: float, *, now: float | None = None) -> bool:
        """Release the drag; fast releases continue as a fling. Returns True when one started."""
        was_dragging = self._dragging
        self._dragging = False
        if not was_dragging or self._plot_width <= 0 or not self._viewport.can_scroll():
            return False
        limit = self._config.max_fling_velocity
        velocity = max(-limit, min(limit, float(velocity_px_s)))
        if abs(velocity) <= self._config.min_fling_velocity:
            return False
        # Content follows the finger, so the window start moves against it.
        self.fling(-velocity, now=now)
        return True

    def fling(self, velocity_px_s: float, *, now: float | None = None) -> FlingAnimation:
        now = time.monotonic() if now is None else float(now)
        scale = self.scale()
        bounds = self._viewport.domain()
        total_width = bounds.width * scale
        start_offset = (self._viewport.start - bounds.min_x) * scale
        self._fling = FlingAnimation(
            start_offset=start_offset,
            velocity=float(velocity_px_s),
            min_offset=0.0,
            max_offset=max(0.0, total_width - self._plot_width),
            deceleration=self._config.fling_deceleration,
            started_at=now,
        )
        self._last_scroll = self._fling.start_offset
        LOGGER.debug(
            "fling started: velocity=%s px/s offset=%s duration=%.3fs",
            velocity_px_s,
            start_offset,
            self._fling.duration,
        )
        return self._fling

    def tick(self, now: float | None = None) -> bool:
        fling = self._fling
        if fling is None or fling.is_finished:
            return False
        now = time.monotonic() if now is None else float(now)
        running, offset = fling.compute(now)
        delta = self._last_scroll - offset
        self._last_scroll = offset
        if delta != 0:
            moved = self._viewport.pan(delta, self.scale(), from_fling=True)
            if not moved:
                fling.abort()
                running = False
        if not running:
            LOGGER.debug("fling finished at offset=%s", offset)
        return running

    def stop_fling(self) -> None:
        if self._fling is not None:
            self._fling.abort()

    def pinch(self, scale_factor: float) -> bool:
        if not self._viewport.scalable:
            return False
        if scale_factor <= 0:
            raise InvalidArgumentError("pinch scale factor must be > 0")
        return self._viewport.zoom(1.0 / float(scale_factor))
