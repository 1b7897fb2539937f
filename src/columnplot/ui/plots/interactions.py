"""Map clicks on rendered columns back to the column points they came from."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from columnplot.core.layout import ColumnPoint

__all__ = [
    "ColumnSelectionMapper",
    "RenderedNodeRegistry",
    "SelectColumnEvent",
    "ancestor_path",
    "qt_parent",
]

log = logging.getLogger(__name__)


@dataclass
class SelectColumnEvent:
    """Result of a click inside the plot region.

    ``point`` is ``None`` when the click did not land on a rendered column.
    """

    point: Optional[ColumnPoint]
    event: Any

    @property
    def matched(self) -> bool:
        return self.point is not None


class ParentLookup(Protocol):
    def __call__(self, node: Any) -> Any:
        ...


def qt_parent(node: Any) -> Any:
    """Parent of a ``QGraphicsItem`` (``None`` at the top of the scene)."""
    return node.parentItem()


def ancestor_path(target: Any, container: Any, parent_of: ParentLookup = qt_parent) -> set[int]:
    """Identities of ``target`` and its ancestors, stopping below ``container``."""

    path: set[int] = set()
    node = target
    while node is not None and node is not container:
        path.add(id(node))
        node = parent_of(node)
    return path


class RenderedNodeRegistry:
    """Rendered node handles of the last render pass, aligned with its points."""

    def __init__(self) -> None:
        self._entries: tuple[tuple[ColumnPoint, Any], ...] = ()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def points(self) -> tuple[ColumnPoint, ...]:
        return tuple(point for point, _ in self._entries)

    @property
    def handles(self) -> tuple[Any, ...]:
        return tuple(handle for _, handle in self._entries)

    def replace(self, points: Sequence[ColumnPoint], handles: Sequence[Any]) -> None:
        if len(points) != len(handles):
            raise ValueError(
                f"Expected one rendered node per point, got {len(handles)} for {len(points)}"
            )
        self._entries = tuple(zip(points, handles))

    def clear(self) -> None:
        self._entries = ()

    def find(self, path: Iterable[int]) -> ColumnPoint | None:
        """First point whose handle identity is in ``path``."""

        members = path if isinstance(path, (set, frozenset)) else set(path)
        for point, handle in self._entries:
            if id(handle) in members:
                return point
        return None


class ColumnSelectionMapper:
    """Resolve the column point targeted by a click inside a container node."""

    def __init__(
        self,
        registry: RenderedNodeRegistry,
        parent_of: Callable[[Any], Any] = qt_parent,
    ) -> None:
        self._registry = registry
        self._parent_of = parent_of

    def map_click(self, target: Any, container: Any, event: Any = None) -> SelectColumnEvent | None:
        """Return the selection for a click on ``target``.

        Returns ``None`` when the container itself was clicked; otherwise a
        :class:`SelectColumnEvent` whose point may be ``None``.
        """

        if target is None or target is container:
            return None
        path = ancestor_path(target, container, self._parent_of)
        point = self._registry.find(path)
        if point is None:
            log.debug("Click on %r matched no rendered column", target)
        return SelectColumnEvent(point=point, event=event)
