"""Signal-backed value streams used to feed column plots."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from typing import Any

from PyQt5.QtCore import QObject, pyqtSignal

__all__ = ["SeriesStream", "Subscription", "combine_latest", "constant"]

log = logging.getLogger(__name__)

_UNSET = object()


class Subscription:
    """Handle for one connection to a :class:`SeriesStream`.

    ``destroy()`` may be called any number of times.
    """

    def __init__(self, release: Callable[[], None] | None = None) -> None:
        self._release = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def destroy(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()


class SeriesStream(QObject):
    """Holds the latest value of a stream and notifies subscribers of new ones.

    Subscribers receive the current value immediately (when one exists) and
    then every value passed to :meth:`push`, in the order it was pushed.
    """

    emitted = pyqtSignal(object)
    failed = pyqtSignal(object)

    def __init__(self, initial: Any = _UNSET, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._value = initial
        self._sources: list[Subscription] = []

    # ------------------------------------------------------------------ state
    def has_value(self) -> bool:
        return self._value is not _UNSET

    def value(self, default: Any = None) -> Any:
        if self._value is _UNSET:
            return default
        return self._value

    # ------------------------------------------------------------------ producers
    def push(self, value: Any) -> None:
        self._value = value
        self.emitted.emit(value)

    def fail(self, error: Any) -> None:
        log.debug("Stream %r failed: %s", self, error)
        self.failed.emit(error)

    # ------------------------------------------------------------------ consumers
    def subscribe(
        self,
        on_next: Callable[[Any], None],
        on_error: Callable[[Any], None] | None = None,
    ) -> Subscription:
        """Connect ``on_next`` (and optionally ``on_error``) to this stream."""

        # Wrap the callbacks so each subscription owns a distinct connection.
        def _next(value: Any) -> None:
            on_next(value)

        def _error(error: Any) -> None:
            if on_error is not None:
                on_error(error)

        self.emitted.connect(_next)
        self.failed.connect(_error)

        def _release() -> None:
            with contextlib.suppress(TypeError, RuntimeError):
                self.emitted.disconnect(_next)
            with contextlib.suppress(TypeError, RuntimeError):
                self.failed.disconnect(_error)

        subscription = Subscription(_release)
        if self.has_value():
            on_next(self._value)
        return subscription

    def map(self, fn: Callable[[Any], Any]) -> SeriesStream:
        """Return a stream emitting ``fn(value)`` for every value of this one."""

        derived = SeriesStream()
        derived.adopt(self.subscribe(lambda value: derived.push(fn(value)), derived.fail))
        return derived

    # ------------------------------------------------------------------ lifecycle
    def adopt(self, subscription: Subscription) -> None:
        """Tie ``subscription`` to this stream; it is destroyed by :meth:`close`."""

        self._sources.append(subscription)

    def close(self) -> None:
        """Release every upstream subscription held by this stream."""

        sources, self._sources = self._sources, []
        for subscription in sources:
            subscription.destroy()


def constant(value: Any) -> SeriesStream:
    """Return a stream whose only value is ``value``."""

    return SeriesStream(value)


def combine_latest(
    first: SeriesStream,
    second: SeriesStream,
    fn: Callable[[Any, Any], Any],
) -> SeriesStream:
    """Emit ``fn(a, b)`` with the latest value of each stream.

    Nothing is emitted until both streams have produced a value; after that
    every emission of either side produces a new combined value.
    """

    derived = SeriesStream()
    latest: list[Any] = [_UNSET, _UNSET]

    def _update(index: int, value: Any) -> None:
        latest[index] = value
        if latest[0] is _UNSET or latest[1] is _UNSET:
            return
        derived.push(fn(latest[0], latest[1]))

    derived.adopt(first.subscribe(lambda value: _update(0, value), derived.fail))
    derived.adopt(second.subscribe(lambda value: _update(1, value), derived.fail))
    return derived
