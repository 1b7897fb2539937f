# ColumnPlot
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Public package interface for ColumnPlot."""

from importlib import import_module

from columnplot.core import (
    Column,
    ColumnPoint,
    PlotConfiguration,
    PlotState,
    SeriesStream,
    columnar,
    max_divisor,
    plot_columns,
    static_divisor,
    sum_divisor,
)

__version__ = "0.1.0"

__all__ = [
    "Column",
    "ColumnChart",
    "ColumnPlot",
    "ColumnPoint",
    "InputSeries",
    "PlotConfiguration",
    "PlotState",
    "SeriesStream",
    "columnar",
    "max_divisor",
    "plot_columns",
    "static_divisor",
    "sum_divisor",
]

_LAZY = {
    "ColumnChart": "columnplot.ui.column_chart",
    "ColumnPlot": "columnplot.ui.plots.column_plot",
    "InputSeries": "columnplot.ui.plots.input_series",
}


def __getattr__(name: str):
    if name not in _LAZY:
        raise AttributeError(f"module 'columnplot' has no attribute {name!r}")
    value = getattr(import_module(_LAZY[name]), name)
    globals()[name] = value
    return value
