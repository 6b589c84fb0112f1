from __future__ import annotations


class PlotDataError(ValueError):
    """Invalid plot input or an unrenderable plot configuration."""


class MismatchedSeriesLengthError(PlotDataError):
    pass


class DegenerateRangeError(PlotDataError):
    """An axis range could not be inferred or resolved to a zero/negative span."""
