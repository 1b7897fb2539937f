"""PyQtGraph graphics item that draws column rectangles."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Sequence
from typing import Any

import pyqtgraph as pg
from PyQt5.QtCore import QRectF, Qt, pyqtSignal
from PyQt5.QtWidgets import QGraphicsRectItem

from columnplot.ui.plots.column_plot import RectSpec

__all__ = ["ColumnPlotItem"]

log = logging.getLogger(__name__)


class ColumnPlotItem(pg.GraphicsObject):
    """Container item holding one ``QGraphicsRectItem`` child per column.

    Children are matched to specs by the identity of ``RectSpec.key`` so an
    unchanged input keeps its rectangle across renders.
    """

    sigColumnClicked = pyqtSignal(object, object)  # target item, click event

    def __init__(self, *, pen: Any = None, brush: Any = "#1D5CFF", parent: Any = None) -> None:
        super().__init__(parent)
        self._pen = pg.mkPen(pen) if pen is not None else pg.mkPen(None)
        self._brush = pg.mkBrush(brush)
        self._entries: list[tuple[Any, QGraphicsRectItem]] = []
        self._bounds = QRectF()

    # ------------------------------------------------------------------ rendering
    def set_rects(self, specs: Sequence[RectSpec]) -> list[QGraphicsRectItem]:
        """Materialize ``specs`` and return their rectangles in the same order."""

        pool: dict[int, list[tuple[Any, QGraphicsRectItem]]] = {}
        for key, rect_item in self._entries:
            pool.setdefault(id(key), []).append((key, rect_item))

        entries: list[tuple[Any, QGraphicsRectItem]] = []
        created = 0
        for spec in specs:
            candidates = pool.get(id(spec.key))
            if candidates:
                _, rect_item = candidates.pop(0)
            else:
                rect_item = self._create_rect()
                created += 1
            rect_item.setRect(spec.x, spec.y, spec.width, spec.height)
            entries.append((spec.key, rect_item))

        removed = 0
        for leftovers in pool.values():
            for _, rect_item in leftovers:
                self._remove_rect(rect_item)
                removed += 1

        self.prepareGeometryChange()
        self._entries = entries
        self._bounds = self.childrenBoundingRect()
        self.update()
        log.debug(
            "Column item now holds %d rects (%d created, %d removed)",
            len(entries),
            created,
            removed,
        )
        return [rect_item for _, rect_item in entries]

    def rects(self) -> list[QGraphicsRectItem]:
        return [rect_item for _, rect_item in self._entries]

    def set_style(self, pen: Any = None, brush: Any = None) -> None:
        if pen is not None:
            self._pen = pg.mkPen(pen)
        if brush is not None:
            self._brush = pg.mkBrush(brush)
        for _, rect_item in self._entries:
            rect_item.setPen(self._pen)
            rect_item.setBrush(self._brush)

    def _create_rect(self) -> QGraphicsRectItem:
        rect_item = QGraphicsRectItem(self)
        rect_item.setPen(self._pen)
        rect_item.setBrush(self._brush)
        return rect_item

    def _remove_rect(self, rect_item: QGraphicsRectItem) -> None:
        scene = rect_item.scene()
        with contextlib.suppress(RuntimeError):
            if scene is not None:
                scene.removeItem(rect_item)
            else:
                rect_item.setParentItem(None)

    # ------------------------------------------------------------------ QGraphicsItem
    def boundingRect(self) -> QRectF:
        return QRectF(self._bounds)

    def paint(self, painter, option, widget=None) -> None:
        # Children draw themselves.
        pass

    # ------------------------------------------------------------------ interaction
    def item_at(self, scene_pos) -> Any:
        """Topmost item under ``scene_pos`` that is this item or one of its children.

        View overlays (the ViewBox border sits at z=1000) are skipped.
        """

        scene = self.scene()
        if scene is None:
            return None
        for candidate in scene.items(scene_pos):
            if candidate is self or self.isAncestorOf(candidate):
                return candidate
        return None

    def mouseClickEvent(self, ev) -> None:
        if ev.button() != Qt.LeftButton:
            return
        ev.accept()
        self.sigColumnClicked.emit(self.item_at(ev.scenePos()), ev)
