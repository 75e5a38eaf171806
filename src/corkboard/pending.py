"""Count of in-flight mutations, driving the saving/saved indicator."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

STATUS_HIDDEN = "hidden"
STATUS_SAVING = "saving"
STATUS_SAVED = "saved"

LABELS = {
    STATUS_HIDDEN: "",
    STATUS_SAVING: "Saving...",
    STATUS_SAVED: "All changes saved",
}

Callback = Callable[["PendingCounter", int, int], None]


class PendingCounter:
    """Saturating counter of unsettled gateway calls.

    The indicator stays hidden until the first mutation; from then on it
    shows either "saving" or "saved" rather than disappearing between
    mutations.
    """

    def __init__(self) -> None:
        self._count = 0
        self._shown = False
        self._watchers: list[Callback] = []

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_pending(self) -> bool:
        return self._count > 0

    @property
    def shown(self) -> bool:
        return self._shown

    @property
    def status(self) -> str:
        if not self._shown:
            return STATUS_HIDDEN
        return STATUS_SAVING if self._count else STATUS_SAVED

    @property
    def label(self) -> str:
        return LABELS[self.status]

    def increment(self) -> None:
        self._shown = True
        self._set(self._count + 1)

    def decrement(self) -> None:
        if self._count == 0:
            logger.warning("pending counter decremented below zero")
            return
        self._set(self._count - 1)

    def reset(self) -> None:
        self._shown = False
        self._set(0)

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Watch count changes. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def _set(self, value: int) -> None:
        old = self._count
        self._count = value
        if old != value:
            for cb in list(self._watchers):
                cb(self, old, value)

    def __repr__(self) -> str:
        return f"<PendingCounter {self._count} {self.status}>"
