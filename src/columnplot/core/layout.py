"""Column layout: place normalized columns in pixel space."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .columnar import Column

__all__ = ["ColumnPoint", "plot_columns"]


@dataclass(frozen=True)
class ColumnPoint:
    """Geometry of one column for a single layout pass."""

    datum: Column
    display_height: float
    display_width: float
    offset_left: float
    x1: float
    x2: float
    y1: float
    y2: float

    @property
    def input(self) -> Any:
        return self.datum.input

    @property
    def value(self) -> float:
        return self.datum.value

    @property
    def relative_value(self) -> float:
        return self.datum.relative_value


def plot_columns(
    series: Sequence[Column],
    column_height: float,
    column_spacing: float,
    column_width: float,
    domain_max: float,
) -> list[ColumnPoint]:
    """Compute one :class:`ColumnPoint` per column, preserving order.

    Relative values ignore ``domain_max``; when a ceiling is set they are
    scaled by ``max(value) / domain_max`` so that a column whose value equals
    the ceiling fills ``column_height``.
    """

    count = len(series)
    if count == 0:
        return []

    domain_correction = 1.0
    if domain_max > 0:
        values = np.fromiter((column.value for column in series), dtype=float, count=count)
        domain_correction = float(values.max()) / domain_max

    relative = np.fromiter((column.relative_value for column in series), dtype=float, count=count)
    heights = relative * domain_correction * column_height
    x1 = (column_width + column_spacing) * np.arange(count, dtype=float)
    x2 = x1 + column_width + column_spacing
    y1 = column_height - heights
    offset_left = column_spacing / 2

    return [
        ColumnPoint(
            datum=column,
            display_height=float(heights[index]),
            display_width=column_width,
            offset_left=offset_left,
            x1=float(x1[index]),
            x2=float(x2[index]),
            y1=float(y1[index]),
            y2=column_height,
        )
        for index, column in enumerate(series)
    ]
