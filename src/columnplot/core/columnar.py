"""Turn a stream of input sequences into a stream of normalized columns."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .streams import SeriesStream, Subscription, combine_latest

__all__ = ["Column", "DivisorOperator", "ValueSelector", "columnar", "make_columns"]

ValueSelector = Callable[[Any], float]
DivisorOperator = Callable[[SeriesStream, ValueSelector], SeriesStream]


@dataclass(frozen=True)
class Column:
    """One input element together with its selected and relative value."""

    input: Any
    value: float
    relative_value: float


def _relative(value: float, divisor: float) -> float:
    # Zero or non-finite divisors produce flat columns.
    if not divisor or not math.isfinite(divisor):
        return 0.0
    return value / divisor


def make_columns(
    inputs: Sequence[Any] | None,
    divisor: float,
    value_selector: ValueSelector,
) -> list[Column]:
    """Build columns for ``inputs`` in order, normalized by ``divisor``."""

    columns: list[Column] = []
    for item in inputs or ():
        value = value_selector(item)
        columns.append(Column(input=item, value=value, relative_value=_relative(value, divisor)))
    return columns


def columnar(
    input_stream: SeriesStream,
    value_selector: ValueSelector,
    divisor_operator: DivisorOperator,
) -> SeriesStream:
    """Return a stream of column lists derived from ``input_stream``.

    ``divisor_operator`` receives the input stream and the selector and must
    return a new stream of divisors. A fresh column list is emitted whenever
    either the inputs or the divisor change, once both are known. Closing the
    returned stream also closes the divisor stream.
    """

    divisors = divisor_operator(input_stream, value_selector)
    columns = combine_latest(
        input_stream,
        divisors,
        lambda inputs, divisor: make_columns(inputs, divisor, value_selector),
    )
    if divisors is not input_stream:
        columns.adopt(Subscription(divisors.close))
    return columns
