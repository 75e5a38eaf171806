"""Observable holders for immutable client state."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, TypeVar

from corkboard.model.board import BoardData, CardRecord, ListRecord, check_integrity, normalize

T = TypeVar("T")

Callback = Callable[["Store", Any, Any], None]


class Store(Generic[T]):
    """Holds one immutable value and notifies watchers when it is replaced.

    The value is only ever swapped wholesale, never edited in place, so
    the value returned by snapshot() stays valid as a restore point for
    as long as anyone holds it.
    """

    def __init__(self, state: T) -> None:
        self._state = state
        self._watchers: list[Callback] = []

    @property
    def state(self) -> T:
        return self._state

    def snapshot(self) -> T:
        """Return the current value for a later restore."""
        return self._state

    def replace(self, new: T) -> None:
        """Install new as the current value and fire watchers."""
        old = self._state
        if new is old:
            return
        self._state = new
        for cb in list(self._watchers):
            cb(self, old, new)

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Watch for replacements. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._state!r}>"


class BoardStore(Store[BoardData]):
    """The normalized store for one open board.

    A replacement that breaks a structural invariant raises IntegrityError
    and leaves the current value in place.
    """

    def __init__(self, board_id: str, data: BoardData | None = None) -> None:
        super().__init__(data if data is not None else BoardData())
        self.board_id = board_id

    @classmethod
    def from_records(
        cls,
        board_id: str,
        lists: Iterable[ListRecord],
        cards: Iterable[CardRecord],
    ) -> BoardStore:
        """Build a store from the gateway's records for board_id."""
        return cls(board_id, normalize(lists, cards))

    def replace(self, new: BoardData) -> None:
        if new is not self._state:
            check_integrity(new)
        super().replace(new)

    def __repr__(self) -> str:
        return f"<BoardStore {self.board_id} [{len(self._state.list_order)} lists]>"
