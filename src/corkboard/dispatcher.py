"""Optimistic mutation dispatch with rollback.

Every mutating action runs the same four steps: apply its transform to the
store, await the gateway, and on success fold the transform into the
last-known-good state or on failure drop it and notify. The store never
keeps a failed mutation's effects once its call has settled.

Several mutations may be in flight at once. Each keeps its transform in an
ordered ledger; a failure rebuilds the state from the last-known-good base
by replaying the remaining transforms in the order they were issued, so
neither an earlier nor a later mutation's outcome is lost.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable

from corkboard.drag import LIST_DRAG, DropResult
from corkboard.errors import (
    CreateBoardFailed,
    CreateCardFailed,
    CreateListFailed,
    DeleteBoardFailed,
    DeleteCardFailed,
    DeleteListFailed,
    GatewayTimeout,
    OperationFailed,
    RenameBoardFailed,
    RenameCardFailed,
    RenameListFailed,
    ReorderCardsFailed,
    ReorderListsFailed,
)
from corkboard.gateway.base import (
    CreateBoardRequest,
    CreateCardRequest,
    CreateListRequest,
    DeleteBoardRequest,
    DeleteCardRequest,
    DeleteListRequest,
    GatewayResult,
    PersistenceGateway,
    RenameBoardRequest,
    RenameCardRequest,
    RenameListRequest,
    ReorderCardRequest,
    ReorderListsRequest,
)
from corkboard.ids import new_id
from corkboard.model.board import Board
from corkboard.model.cards import add_card, move_card, plan_card_move, remove_card, rename_card
from corkboard.model.lists import add_list, move_list, plan_list_move, remove_list, rename_list
from corkboard.model.ordering import plan_move
from corkboard.pending import PendingCounter
from corkboard.store import BoardStore, Store

logger = logging.getLogger(__name__)

UNEXPECTED = "An unexpected error occurred."
UNEXPECTED_REORDER = "An unexpected error occurred during reorder."
TIMED_OUT = "The server did not respond in time."

Notify = Callable[[OperationFailed], None]
Transform = Callable[[object], object]


def log_failure(error: OperationFailed) -> None:
    """Default notifier: log the failure for the user to see."""
    logger.warning("%s: %s", error.action, error.message)


@dataclass
class _InFlight:
    action: str
    transform: Transform
    done: bool = False


def _replay(state, entries: list[_InFlight]):
    """Apply each entry's transform to state in order.

    A transform that no longer applies (its target went away with a
    rejected mutation) is skipped; its own call still settles on its own.
    """
    for entry in entries:
        try:
            state = entry.transform(state)
        except (KeyError, ValueError, IndexError) as exc:
            logger.warning("%s no longer applies after rollback: %r", entry.action, exc)
    return state


class _Dispatcher:
    def __init__(
        self,
        store: Store,
        gateway: PersistenceGateway,
        pending: PendingCounter | None = None,
        notify: Notify | None = None,
        timeout: float | None = None,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.pending = pending if pending is not None else PendingCounter()
        self.notify = notify or log_failure
        self.timeout = timeout or None
        self._base = None
        self._in_flight: list[_InFlight] = []

    async def _call(self, call: Callable[[], Awaitable[GatewayResult]]) -> GatewayResult:
        if self.timeout is None:
            return await call()
        try:
            return await asyncio.wait_for(call(), self.timeout)
        except asyncio.TimeoutError:
            raise GatewayTimeout(f"no response after {self.timeout}s") from None

    def _begin(self, action: str, transform: Transform) -> _InFlight:
        """Apply transform optimistically and record it in the ledger."""
        before = self.store.snapshot()
        self.store.replace(transform(before))
        if not self._in_flight:
            self._base = before
        entry = _InFlight(action, transform)
        self._in_flight.append(entry)
        return entry

    def _settle(self, entry: _InFlight, ok: bool) -> None:
        if ok:
            entry.done = True
        else:
            self._in_flight.remove(entry)
        # Confirmed mutations at the head of the ledger become the new base
        while self._in_flight and self._in_flight[0].done:
            self._base = _replay(self._base, [self._in_flight.pop(0)])
        if not ok:
            self.store.replace(_replay(self._base, self._in_flight))
        if not self._in_flight:
            self._base = None

    def _reject(self, entry: _InFlight, error: OperationFailed) -> None:
        self._settle(entry, ok=False)
        self.notify(error)

    async def _run(
        self,
        failed: type[OperationFailed],
        transform: Transform,
        call: Callable[[], Awaitable[GatewayResult]],
        unexpected: str = UNEXPECTED,
    ) -> GatewayResult | None:
        """Apply transform optimistically and persist it via call.

        Returns the gateway result on success, None after a rollback.
        """
        entry = self._begin(failed.action, transform)
        self.pending.increment()
        try:
            result = await self._call(call)
        except asyncio.CancelledError:
            self._settle(entry, ok=False)
            raise
        except GatewayTimeout as exc:
            logger.warning("%s timed out: %s", failed.action, exc)
            self._reject(entry, failed(TIMED_OUT))
            return None
        except Exception:
            logger.exception("%s failed", failed.action)
            self._reject(entry, failed(unexpected))
            return None
        finally:
            self.pending.decrement()

        if not result.ok:
            logger.warning("%s rejected: %s", failed.action, result.error)
            self._reject(entry, failed(result.error))
            return None
        self._settle(entry, ok=True)
        return result


def _check_echo(kind: str, client_id: str, result: GatewayResult) -> None:
    server_id = getattr(result.data, "id", None)
    if server_id is not None and server_id != client_id:
        logger.warning("server returned id %s for %s %s; keeping the client id", server_id, kind, client_id)


class BoardDispatcher(_Dispatcher):
    """Dispatches list and card mutations for one open board."""

    store: BoardStore

    @property
    def board_id(self) -> str:
        return self.store.board_id

    async def add_list(self, title: str, list_id: str | None = None) -> bool:
        """Append a new list. Blank titles are ignored."""
        title = title.strip()
        if not title:
            return True
        list_id = list_id or new_id()
        request = CreateListRequest(id=list_id, board_id=self.board_id, title=title)
        result = await self._run(
            CreateListFailed,
            lambda data: add_list(data, list_id, title),
            lambda: self.gateway.create_list(request),
        )
        if result is None:
            return False
        _check_echo("list", list_id, result)
        return True

    async def add_card(self, list_id: str, title: str, card_id: str | None = None) -> bool:
        """Append a new card to list_id. Blank titles are ignored."""
        title = title.strip()
        if not title:
            return True
        card_id = card_id or new_id()
        request = CreateCardRequest(id=card_id, list_id=list_id, board_id=self.board_id, title=title)
        result = await self._run(
            CreateCardFailed,
            lambda data: add_card(data, list_id, card_id, title),
            lambda: self.gateway.create_card(request),
        )
        if result is None:
            return False
        _check_echo("card", card_id, result)
        return True

    async def rename_list(self, list_id: str, title: str) -> bool:
        old = self.store.state.lists[list_id]
        title = title.strip()
        if not title or title == old.title:
            return True
        request = RenameListRequest(list_id=list_id, board_id=self.board_id, title=title)
        result = await self._run(
            RenameListFailed,
            lambda data: rename_list(data, list_id, title),
            lambda: self.gateway.rename_list(request),
        )
        return result is not None

    async def rename_card(self, card_id: str, title: str) -> bool:
        old = self.store.state.cards[card_id]
        title = title.strip()
        if not title or title == old.title:
            return True
        request = RenameCardRequest(card_id=card_id, board_id=self.board_id, title=title)
        result = await self._run(
            RenameCardFailed,
            lambda data: rename_card(data, card_id, title),
            lambda: self.gateway.rename_card(request),
        )
        return result is not None

    async def move_list(self, list_id: str, index: int) -> bool:
        """Move a list to index (0-based, counted after removal)."""
        plan = plan_list_move(self.store.state, list_id, index)
        if plan is None:
            return True
        request = ReorderListsRequest(board_id=self.board_id, ordered_ids=plan.dest_ids)
        result = await self._run(
            ReorderListsFailed,
            lambda data: move_list(data, list_id, index),
            lambda: self.gateway.reorder_lists(request),
            unexpected=UNEXPECTED_REORDER,
        )
        return result is not None

    async def move_card(self, card_id: str, list_id: str, index: int) -> bool:
        """Move a card into list_id at index (0-based, counted after removal)."""
        source_list_id, plan = plan_card_move(self.store.state, card_id, list_id, index)
        if plan is None:
            return True
        request = ReorderCardRequest(
            board_id=self.board_id,
            source_list_id=source_list_id,
            dest_list_id=list_id,
            source_card_ids=plan.source_ids,
            dest_card_ids=plan.dest_ids,
        )
        result = await self._run(
            ReorderCardsFailed,
            lambda data: move_card(data, card_id, list_id, index),
            lambda: self.gateway.reorder_card(request),
            unexpected=UNEXPECTED_REORDER,
        )
        return result is not None

    async def drag_end(self, result: DropResult) -> bool:
        """Persist a finished drag. Drops in place or outside are no-ops."""
        if result.is_noop:
            return True
        if result.type == LIST_DRAG:
            plan = plan_move(
                self.store.state.list_order,
                result.source.index,
                result.destination.index,
                result.draggable_id,
            )
            if plan is None:
                return True
            return await self.move_list(result.draggable_id, result.destination.index)
        source = self.store.state.lists[result.source.droppable_id]
        if source.card_ids.index(result.draggable_id) != result.source.index:
            raise ValueError(f"{result.draggable_id!r} is not at index {result.source.index}")
        return await self.move_card(result.draggable_id, result.destination.droppable_id, result.destination.index)

    async def delete_list(self, list_id: str) -> bool:
        """Delete a list together with its cards."""
        request = DeleteListRequest(list_id=list_id, board_id=self.board_id)
        result = await self._run(
            DeleteListFailed,
            lambda data: remove_list(data, list_id),
            lambda: self.gateway.delete_list(request),
        )
        return result is not None

    async def delete_card(self, card_id: str) -> bool:
        request = DeleteCardRequest(card_id=card_id, board_id=self.board_id)
        result = await self._run(
            DeleteCardFailed,
            lambda data: remove_card(data, card_id),
            lambda: self.gateway.delete_card(request),
        )
        return result is not None


def _find_board(boards: tuple[Board, ...], board_id: str) -> Board:
    for board in boards:
        if board.id == board_id:
            return board
    raise KeyError(board_id)


class WorkspaceDispatcher(_Dispatcher):
    """Dispatches board-level mutations over a Store of boards."""

    store: Store[tuple[Board, ...]]

    async def create_board(self, title: str, board_id: str | None = None) -> bool:
        title = title.strip()
        if not title:
            return True
        board_id = board_id or new_id()
        request = CreateBoardRequest(id=board_id, title=title)
        result = await self._run(
            CreateBoardFailed,
            lambda boards: boards + (Board(id=board_id, title=title),),
            lambda: self.gateway.create_board(request),
        )
        if result is None:
            return False
        _check_echo("board", board_id, result)
        return True

    async def rename_board(self, board_id: str, title: str) -> bool:
        old = _find_board(self.store.state, board_id)
        title = title.strip()
        if not title or title == old.title:
            return True

        def rename(boards):
            _find_board(boards, board_id)
            return tuple(replace(b, title=title) if b.id == board_id else b for b in boards)

        request = RenameBoardRequest(board_id=board_id, title=title)
        result = await self._run(RenameBoardFailed, rename, lambda: self.gateway.rename_board(request))
        return result is not None

    async def delete_board(self, board_id: str) -> bool:
        def delete(boards):
            _find_board(boards, board_id)
            return tuple(b for b in boards if b.id != board_id)

        request = DeleteBoardRequest(board_id=board_id)
        result = await self._run(DeleteBoardFailed, delete, lambda: self.gateway.delete_board(request))
        return result is not None
