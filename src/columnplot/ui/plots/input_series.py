"""Holder for the input series a plot draws from."""

from __future__ import annotations

import logging
from typing import Any

from PyQt5.QtCore import QObject, pyqtSignal

from columnplot.core.streams import SeriesStream

__all__ = ["InputSeries"]

log = logging.getLogger(__name__)


class InputSeries(QObject):
    """Expose the current input stream and announce when it is replaced.

    ``input_series_changed`` fires once per actual replacement; assigning the
    stream that is already current is ignored.
    """

    input_series_changed = pyqtSignal(object)

    def __init__(
        self,
        input_series: SeriesStream | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._input_series = input_series

    @property
    def input_series(self) -> SeriesStream | None:
        return self._input_series

    @input_series.setter
    def input_series(self, stream: SeriesStream | None) -> None:
        if stream is self._input_series:
            return
        self._input_series = stream
        log.debug("Input series replaced: %r", stream)
        self.input_series_changed.emit(stream)

    def set_inputs(self, inputs: Any) -> SeriesStream:
        """Replace the input series with a stream holding ``inputs``."""

        stream = SeriesStream(list(inputs))
        self.input_series = stream
        return stream
