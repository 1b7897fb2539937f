"""Data transforms and layout for column plots."""

from columnplot.core.columnar import Column, DivisorOperator, ValueSelector, columnar
from columnplot.core.config import (
    ConfigField,
    PlotConfiguration,
    PlotState,
    ShadowField,
    StateField,
)
from columnplot.core.divisors import max_divisor, static_divisor, sum_divisor
from columnplot.core.layout import ColumnPoint, plot_columns
from columnplot.core.streams import SeriesStream, Subscription, combine_latest, constant

__all__ = [
    "Column",
    "ColumnPoint",
    "ConfigField",
    "DivisorOperator",
    "PlotConfiguration",
    "PlotState",
    "SeriesStream",
    "ShadowField",
    "StateField",
    "Subscription",
    "ValueSelector",
    "columnar",
    "combine_latest",
    "constant",
    "max_divisor",
    "plot_columns",
    "static_divisor",
    "sum_divisor",
]
