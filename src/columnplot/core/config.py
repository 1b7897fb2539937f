"""Per-plot configuration fields with optional external state backing.

A plot either owns its settings privately or delegates them to a
:class:`PlotState` container shared with the rest of the application. The
choice is made once, when the plot is constructed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from PyQt5.QtCore import QObject, pyqtSignal

__all__ = [
    "ConfigField",
    "PlotConfiguration",
    "PlotState",
    "ShadowField",
    "StateField",
    "make_fields",
]

# Attribute name -> state key
CONFIG_KEYS = {
    "column_height": "columnHeight",
    "column_spacing": "columnSpacing",
    "column_width": "columnWidth",
    "domain_max": "domainMax",
}


@dataclass
class PlotConfiguration:
    """Initial geometry settings of a column plot.

    ``domain_max`` is the value drawn at full ``column_height``; ``0`` disables
    the ceiling. Values are not validated.
    """

    column_height: float = 0
    column_spacing: float = 0
    column_width: float = 0
    domain_max: float = 0


class PlotState(QObject):
    """External state container a plot can delegate its settings to."""

    state_changed = pyqtSignal(dict)

    def __init__(self, state: dict[str, Any] | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._state: dict[str, Any] = dict(state or {})

    @property
    def state(self) -> dict[str, Any]:
        return self._state

    def set_state(self, **changes: Any) -> None:
        self._state.update(changes)
        self.state_changed.emit(dict(changes))


class ConfigField(Protocol):
    def read(self) -> Any:
        ...

    def write(self, value: Any) -> None:
        ...


class ShadowField:
    """Setting stored privately on the plot."""

    def __init__(self, initial: Any = 0) -> None:
        self._value = initial

    def read(self) -> Any:
        return self._value

    def write(self, value: Any) -> None:
        self._value = value


class StateField:
    """Setting stored in a :class:`PlotState` under ``name``.

    Reads fall back to ``fallback`` while the container holds no value for
    the key.
    """

    def __init__(self, container: PlotState, name: str, fallback: ShadowField) -> None:
        self._container = container
        self._name = name
        self._fallback = fallback

    def read(self) -> Any:
        value = self._container.state.get(self._name)
        if value is None:
            return self._fallback.read()
        return value

    def write(self, value: Any) -> None:
        self._container.set_state(**{self._name: value})


def make_fields(
    config: PlotConfiguration, state: PlotState | None = None
) -> dict[str, ConfigField]:
    """Build one field per setting, backed by ``state`` when it is given."""

    fields: dict[str, ConfigField] = {}
    for attr, key in CONFIG_KEYS.items():
        shadow = ShadowField(getattr(config, attr))
        fields[attr] = shadow if state is None else StateField(state, key, shadow)
    return fields
