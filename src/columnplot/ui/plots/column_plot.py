"""Column plot: input series to column geometry and rectangle specs."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import pandas as pd
from PyQt5.QtCore import QObject, pyqtSignal

from columnplot.core.columnar import Column, DivisorOperator, ValueSelector, columnar
from columnplot.core.config import (
    CONFIG_KEYS,
    ConfigField,
    PlotConfiguration,
    PlotState,
    make_fields,
)
from columnplot.core.layout import ColumnPoint, plot_columns
from columnplot.core.streams import SeriesStream, Subscription, constant
from columnplot.ui.plots.input_series import InputSeries

__all__ = ["ColumnPlot", "RectSpec"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RectSpec:
    """Rectangle to draw for one column; ``key`` is the column's input."""

    key: Any
    x: float
    y: float
    width: float
    height: float


class ColumnPlot(QObject):
    """Derive column geometry from a live input series.

    Subclasses may define ``value_selector(input)`` and
    ``divisor_operator(stream, value_selector)``; explicit ``value_selector`` /
    ``divisor_operator`` arguments take precedence. Without either, every
    value is ``0`` and the divisor is ``1``.

    When ``state`` is given the geometry settings live in that container,
    otherwise they are kept on the plot.
    """

    invalidated = pyqtSignal()
    series_failed = pyqtSignal(object)

    def __init__(
        self,
        source: InputSeries | None = None,
        *,
        config: PlotConfiguration | None = None,
        state: PlotState | None = None,
        value_selector: ValueSelector | None = None,
        divisor_operator: DivisorOperator | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._source = source if source is not None else InputSeries(parent=self)
        self._state = state
        self._fields: dict[str, ConfigField] = make_fields(config or PlotConfiguration(), state)
        self._value_selector = value_selector or self._default_value_selector
        self._divisor_operator = divisor_operator or self._default_divisor_operator

        # Empty until the input series delivers its first value.
        self._series: list[Column] = []
        self._columns: SeriesStream | None = None
        self._subscription: Subscription | None = None
        self._destroyed = False
        self._writing = False

        if state is not None:
            state.state_changed.connect(self._on_state_changed)

        # The source may already hold a stream from before this plot existed.
        if self._source.input_series is not None:
            self._subscribe(self._source.input_series)
        self._source.input_series_changed.connect(self._subscribe)

    # ------------------------------------------------------------------ strategies
    def _default_value_selector(self, item: Any) -> float:
        selector = getattr(self, "value_selector", None)
        if callable(selector):
            return selector(item)
        return 0

    def _default_divisor_operator(
        self, stream: SeriesStream, value_selector: ValueSelector
    ) -> SeriesStream:
        operator = getattr(self, "divisor_operator", None)
        if callable(operator):
            return operator(stream, value_selector)
        return constant(1)

    # ------------------------------------------------------------------ configuration
    def _read(self, name: str) -> Any:
        return self._fields[name].read()

    def _write(self, name: str, value: Any) -> None:
        self._writing = True
        try:
            self._fields[name].write(value)
        finally:
            self._writing = False
        self.invalidate()

    def _on_state_changed(self, changes: dict) -> None:
        # Writes made through the plot invalidate once, in _write.
        if self._writing or self._destroyed:
            return
        if any(key in changes for key in CONFIG_KEYS.values()):
            self.invalidate()

    @property
    def column_height(self) -> float:
        """Height of a column whose corrected relative value is ``1``."""
        return self._read("column_height")

    @column_height.setter
    def column_height(self, value: float) -> None:
        self._write("column_height", value)

    @property
    def column_spacing(self) -> float:
        return self._read("column_spacing")

    @column_spacing.setter
    def column_spacing(self, value: float) -> None:
        self._write("column_spacing", value)

    @property
    def column_width(self) -> float:
        return self._read("column_width")

    @column_width.setter
    def column_width(self, value: float) -> None:
        self._write("column_width", value)

    @property
    def domain_max(self) -> float:
        """Value plotted at full ``column_height``; ``0`` means no ceiling."""
        return self._read("domain_max")

    @domain_max.setter
    def domain_max(self, value: float) -> None:
        self._write("domain_max", value)

    @property
    def state(self) -> PlotState | None:
        return self._state

    # ------------------------------------------------------------------ input series
    @property
    def source(self) -> InputSeries:
        return self._source

    @property
    def input_series(self) -> SeriesStream | None:
        return self._source.input_series

    @input_series.setter
    def input_series(self, stream: SeriesStream | None) -> None:
        self._source.input_series = stream

    @property
    def series(self) -> tuple[Column, ...]:
        return tuple(self._series)

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def _release(self) -> None:
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.destroy()
        columns, self._columns = self._columns, None
        if columns is not None:
            columns.close()

    def _subscribe(self, stream: SeriesStream | None) -> None:
        if self._destroyed:
            return
        self._release()
        if stream is None:
            log.debug("Input series cleared; dropping %d columns", len(self._series))
            self._series = []
            self.invalidate()
            return

        log.debug("Subscribing column plot to %r", stream)
        self._columns = columnar(stream, self._value_selector, self._divisor_operator)
        self._subscription = self._columns.subscribe(self._on_columns, self._on_series_error)

    def _on_columns(self, series: list[Column]) -> None:
        self._series = series
        self.invalidate()

    def _on_series_error(self, error: Any) -> None:
        log.warning("Input series failed: %s", error)
        self.series_failed.emit(error)

    # ------------------------------------------------------------------ plotting
    def invalidate(self) -> None:
        self.invalidated.emit()

    def plot(self) -> list[ColumnPoint]:
        """Lay out the cached columns with the current settings."""

        return plot_columns(
            self._series,
            self.column_height,
            self.column_spacing,
            self.column_width,
            self.domain_max,
        )

    def render_plot(self, points: Sequence[ColumnPoint]) -> list[RectSpec]:
        """Create one rectangle spec per point, in the same order."""

        return [
            RectSpec(
                key=point.input,
                x=point.x1 + point.offset_left,
                y=point.y1,
                width=point.display_width,
                height=point.display_height,
            )
            for point in points
        ]

    def plot_bounds(self, points: Sequence[ColumnPoint]) -> tuple[float, float, float, float]:
        """Return ``(left, top, right, bottom)`` covering every column in ``points``.

        Columns overflowing the ceiling extend above ``0``; negative heights
        extend below ``column_height``.
        """

        if not points:
            return 0.0, 0.0, 0.0, 0.0
        edges = [point.y1 for point in points] + [point.y2 for point in points]
        return 0.0, min(edges), points[-1].x2, max(edges)

    def points_frame(self, points: Sequence[ColumnPoint] | None = None) -> pd.DataFrame:
        """Tabulate a layout pass (one row per column) for inspection."""

        if points is None:
            points = self.plot()
        columns = [
            "input",
            "value",
            "relative_value",
            "display_height",
            "display_width",
            "offset_left",
            "x1",
            "x2",
            "y1",
            "y2",
        ]
        rows = [{name: getattr(point, name) for name in columns} for point in points]
        return pd.DataFrame(rows, columns=columns)

    # ------------------------------------------------------------------ lifecycle
    def destroy(self) -> None:
        """Stop listening to the input series and drop cached columns."""

        if self._destroyed:
            return
        self._destroyed = True
        with contextlib.suppress(TypeError, RuntimeError):
            self._source.input_series_changed.disconnect(self._subscribe)
        if self._state is not None:
            with contextlib.suppress(TypeError, RuntimeError):
                self._state.state_changed.disconnect(self._on_state_changed)
        self._release()
        self._series = []
        log.debug("Column plot destroyed")
