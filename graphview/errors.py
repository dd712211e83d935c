from __future__ import annotations


class GraphViewError(Exception):
    """Base class for all graphview errors."""


class InvalidArgumentError(GraphViewError, ValueError):
    pass


class OrderViolationError(GraphViewError, ValueError):
    """Raised when an appended sample does not extend the series to the right."""


class EmptyStateError(GraphViewError, LookupError):
    pass


class EmptyWindowError(GraphViewError):
    """The requested x-window does not intersect the series.

    This is a per-frame control-flow signal: the caller skips the series for
    the current draw pass.
    """


class DegenerateRangeError(GraphViewError, ArithmeticError):
    pass
