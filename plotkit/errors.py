from __future__ import annotations


class PlotDataError(ValueError):
    """Input data cannot be used to lay out an axis."""


class EmptyDataError(PlotDataError):
    """No data point survived filtering against the requested bounds."""


class AxisLayoutError(ValueError):
    """Axis options cannot be resolved into a single consistent layout."""


class DegenerateIntervalError(AxisLayoutError):
    pass


class InvalidOptionCombinationError(AxisLayoutError):
    pass
