"""Bootstrap a standalone window showing one column chart."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pandas as pd
from PyQt5.QtCore import QCoreApplication
from PyQt5.QtWidgets import QApplication

from columnplot.core.config import PlotConfiguration
from columnplot.core.divisors import max_divisor
from columnplot.core.streams import SeriesStream
from columnplot.ui.column_chart import ColumnChart
from columnplot.ui.plots.input_series import InputSeries

log = logging.getLogger(__name__)

SAMPLE_ROWS = [
    {"label": "Mon", "value": 4},
    {"label": "Tue", "value": 9},
    {"label": "Wed", "value": 6},
    {"label": "Thu", "value": 12},
    {"label": "Fri", "value": 7},
]


def load_rows(path: str | os.PathLike, value_column: str = "value") -> list[dict[str, Any]]:
    """Read a CSV into row dicts; ``value_column`` must be present."""

    frame = pd.read_csv(Path(path))
    if value_column not in frame.columns:
        raise ValueError(f"{path}: missing column {value_column!r}")
    return frame.to_dict("records")


class ColumnPlotLauncher:
    """Create (or reuse) the Qt application and a chart over ``rows``."""

    def __init__(
        self,
        rows: Sequence[dict[str, Any]] | None = None,
        *,
        value_column: str = "value",
        argv: Sequence[str] | None = None,
    ) -> None:
        QCoreApplication.setApplicationName("ColumnPlot")
        self.app = QApplication.instance() or QApplication(list(argv or []))
        self.rows = list(SAMPLE_ROWS if rows is None else rows)

        self.source = InputSeries(SeriesStream(self.rows))
        self.chart = ColumnChart(
            source=self.source,
            config=PlotConfiguration(column_height=300, column_width=24, column_spacing=8),
            value_selector=lambda row: row[value_column],
            divisor_operator=max_divisor,
        )
        self.chart.column_selected.connect(self._on_column_selected)
        self.chart.plot.series_failed.connect(self._on_series_failed)

        self.widget = self.chart.get_widget()
        self.widget.setWindowTitle("ColumnPlot")
        self.widget.resize(640, 420)

    # ------------------------------------------------------------------
    def _on_column_selected(self, selection) -> None:
        if selection.point is None:
            log.info("Click did not land on a column")
            return
        log.info("Selected %r (value=%s)", selection.point.input, selection.point.value)

    def _on_series_failed(self, error) -> None:
        log.error("Input series failed: %s", error)

    # ------------------------------------------------------------------
    def show(self) -> None:
        self.chart.render()
        self.widget.show()
        log.info("Showing %d columns", len(self.chart.points))

    def run(self) -> int:
        self.show()
        try:
            return self.app.exec_()
        finally:
            self.chart.destroy()
