from graphview.chart import GraphView, SeriesDrawCall, SeriesHandle, SeriesRenderer
from graphview.config import GraphViewConfig
from graphview.errors import (
    DegenerateRangeError,
    EmptyStateError,
    EmptyWindowError,
    GraphViewError,
    InvalidArgumentError,
    OrderViolationError,
)
from graphview.fling import FlingAnimation
from graphview.gestures import GestureController
from graphview.mapping import PlotRect, map_points, map_to_screen
from graphview.series import Sample, Series, SeriesBounds
from graphview.viewport import AxisLabels, DomainBounds, LabelCache, ViewportController
from graphview.window import SeriesWindow, select_window

__all__ = [
    "AxisLabels",
    "DegenerateRangeError",
    "DomainBounds",
    "EmptyStateError",
    "EmptyWindowError",
    "FlingAnimation",
    "GestureController",
    "GraphView",
    "GraphViewConfig",
    "GraphViewError",
    "InvalidArgumentError",
    "LabelCache",
    "OrderViolationError",
    "PlotRect",
    "Sample",
    "Series",
    "SeriesBounds",
    "SeriesDrawCall",
    "SeriesHandle",
    "SeriesRenderer",
    "SeriesWindow",
    "ViewportController",
    "map_points",
    "map_to_screen",
    "select_window",
]
