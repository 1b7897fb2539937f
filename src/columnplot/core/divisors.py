"""Ready-made divisor operators for :func:`columnplot.core.columnar.columnar`."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .columnar import DivisorOperator, ValueSelector
from .streams import SeriesStream, constant

__all__ = ["max_divisor", "static_divisor", "sum_divisor"]


def static_divisor(divisor: float) -> DivisorOperator:
    """Always divide by ``divisor``."""

    def _operator(stream: SeriesStream, value_selector: ValueSelector) -> SeriesStream:
        return constant(divisor)

    return _operator


def max_divisor(stream: SeriesStream, value_selector: ValueSelector) -> SeriesStream:
    """Divide by the largest selected value, so the tallest column is ``1``.

    Empty inputs produce a divisor of ``1``.
    """

    def _largest(inputs: Sequence[Any] | None) -> float:
        values = [value_selector(item) for item in inputs or ()]
        return max(values) if values else 1

    return stream.map(_largest)


def sum_divisor(stream: SeriesStream, value_selector: ValueSelector) -> SeriesStream:
    """Divide by the total of the selected values (columns become shares)."""

    def _total(inputs: Sequence[Any] | None) -> float:
        values = [value_selector(item) for item in inputs or ()]
        return sum(values) if values else 1

    return stream.map(_total)
