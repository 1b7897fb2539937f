# ColumnPlot
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

from importlib import import_module

__all__ = ["ColumnChart", "ColumnPlot"]


def __getattr__(name: str):
    if name == "ColumnChart":
        module = import_module("columnplot.ui.column_chart")
        value = module.ColumnChart
    elif name == "ColumnPlot":
        module = import_module("columnplot.ui.plots.column_plot")
        value = module.ColumnPlot
    else:
        raise AttributeError(f"module 'columnplot.ui' has no attribute {name!r}")
    globals()[name] = value
    return value
