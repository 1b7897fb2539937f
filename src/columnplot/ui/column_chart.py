# ColumnPlot
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Column chart widget: renders a ColumnPlot and reports column clicks."""

from __future__ import annotations

import logging
from typing import Any

import pyqtgraph as pg
from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from columnplot.app.flags import is_enabled
from columnplot.core.layout import ColumnPoint
from columnplot.ui.plots.column_plot import ColumnPlot
from columnplot.ui.plots.interactions import (
    ColumnSelectionMapper,
    RenderedNodeRegistry,
    SelectColumnEvent,
)
from columnplot.ui.plots.pyqtgraph_column_item import ColumnPlotItem

__all__ = ["ColumnChart"]

log = logging.getLogger(__name__)


class ColumnChart(QObject):
    """Host a :class:`ColumnPlot` inside a PyQtGraph plot widget.

    Invalidations from the plot are coalesced into a single render on the
    next event-loop turn. Clicks are mapped back to column points and
    reported through ``column_selected`` when the chart is interactive.
    """

    column_selected = pyqtSignal(object)  # SelectColumnEvent
    rendered = pyqtSignal(int)  # number of columns drawn

    def __init__(
        self,
        plot: ColumnPlot | None = None,
        *,
        interactive: bool | None = None,
        brush: Any = "#1D5CFF",
        parent: QObject | None = None,
        **plot_options: Any,
    ) -> None:
        super().__init__(parent)
        self._plot = plot if plot is not None else ColumnPlot(parent=self, **plot_options)

        self._widget = pg.PlotWidget()
        # Column geometry uses a downward Y axis.
        self._widget.getViewBox().invertY(True)
        self._item = ColumnPlotItem(brush=brush)
        self._widget.addItem(self._item)

        self._registry = RenderedNodeRegistry()
        self._mapper = ColumnSelectionMapper(self._registry)
        self._points: tuple[ColumnPoint, ...] = ()
        self._render_pending = False

        if interactive is None:
            interactive = is_enabled("column_select", default=True)
        self._interactive = bool(interactive)
        if self._interactive:
            self._item.sigColumnClicked.connect(self.handle_click)

        self._plot.invalidated.connect(self.schedule_render)

    # ------------------------------------------------------------------ accessors
    @property
    def plot(self) -> ColumnPlot:
        return self._plot

    @property
    def item(self) -> ColumnPlotItem:
        return self._item

    @property
    def registry(self) -> RenderedNodeRegistry:
        return self._registry

    @property
    def interactive(self) -> bool:
        return self._interactive

    @property
    def points(self) -> tuple[ColumnPoint, ...]:
        """Points drawn by the last render."""
        return self._points

    def get_widget(self) -> pg.PlotWidget:
        return self._widget

    # ------------------------------------------------------------------ rendering
    def schedule_render(self) -> None:
        if self._render_pending:
            return
        self._render_pending = True
        QTimer.singleShot(0, self.render)

    def render(self) -> int:
        """Lay out, draw and register the current columns; return how many."""

        self._render_pending = False
        points = tuple(self._plot.plot())
        specs = tuple(self._plot.render_plot(points))
        handles = self._item.set_rects(specs)
        self._registry.replace(points, handles)
        self._points = points

        if points:
            left, top, right, bottom = self._plot.plot_bounds(points)
            self._widget.setRange(xRange=(left, right), yRange=(top, bottom), padding=0.02)

        if is_enabled("debug_render"):
            log.info("Rendered %d columns", len(points))
        self.rendered.emit(len(points))
        return len(points)

    # ------------------------------------------------------------------ interaction
    def handle_click(self, target: Any, event: Any = None) -> SelectColumnEvent | None:
        selection = self._mapper.map_click(target, self._item, event)
        if selection is None:
            return None
        self.column_selected.emit(selection)
        return selection

    # ------------------------------------------------------------------ lifecycle
    def destroy(self) -> None:
        self._plot.destroy()
        self._item.set_rects(())
        self._registry.clear()
        self._points = ()
