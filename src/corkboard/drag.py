"""Drag gesture tracking and drop results."""

from __future__ import annotations

from dataclasses import dataclass

LIST_DRAG = "COLUMN"
CARD_DRAG = "CARD"


@dataclass(frozen=True)
class DragLocation:
    """A slot in a droppable: the board for lists, a list for cards."""

    droppable_id: str
    index: int


@dataclass(frozen=True)
class DropResult:
    """What a finished drag reports.

    destination.index is measured after the dragged item is removed from
    its source, matching drag-and-drop library semantics. destination is
    None when the item was dropped outside any droppable.
    """

    type: str
    draggable_id: str
    source: DragLocation
    destination: DragLocation | None = None

    @property
    def is_noop(self) -> bool:
        return self.destination is None or self.destination == self.source


class DragManager:
    """Tracks a single drag from pick-up to drop."""

    def __init__(self) -> None:
        self.kind: str | None = None
        self.draggable_id: str | None = None
        self.source: DragLocation | None = None
        self.over: DragLocation | None = None

    @property
    def active(self) -> bool:
        return self.draggable_id is not None

    def start(self, kind: str, draggable_id: str, droppable_id: str, index: int) -> None:
        if self.active:
            raise RuntimeError(f"already dragging {self.draggable_id}")
        if kind not in (LIST_DRAG, CARD_DRAG):
            raise ValueError(f"unknown drag type {kind!r}")
        self.kind = kind
        self.draggable_id = draggable_id
        self.source = DragLocation(droppable_id, index)
        self.over = self.source

    def hover(self, droppable_id: str | None, index: int = 0) -> None:
        """Update the slot under the pointer; None means outside any droppable."""
        if not self.active:
            return
        self.over = DragLocation(droppable_id, index) if droppable_id is not None else None

    def drop(self) -> DropResult:
        """Finish the drag at the last hovered slot."""
        if not self.active:
            raise RuntimeError("no drag in progress")
        result = DropResult(
            type=self.kind,
            draggable_id=self.draggable_id,
            source=self.source,
            destination=self.over,
        )
        self._clear()
        return result

    def cancel(self) -> DropResult:
        """Abort the drag; the result has no destination."""
        self.over = None
        return self.drop()

    def _clear(self) -> None:
        self.kind = None
        self.draggable_id = None
        self.source = None
        self.over = None
