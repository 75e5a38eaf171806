"""App-wide client state with an explicit lifecycle."""

from __future__ import annotations

import logging

from corkboard.dispatcher import BoardDispatcher, Notify, WorkspaceDispatcher
from corkboard.gateway.base import PersistenceGateway
from corkboard.model.board import Board
from corkboard.pending import PendingCounter
from corkboard.store import BoardStore, Store

logger = logging.getLogger(__name__)


class Session:
    """Everything a running client shares: boards, the open board, the counter.

    Create one at startup and pass it to whoever needs it. reset() returns
    it to the signed-out state. All mutations go through the dispatchers.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        notify: Notify | None = None,
        timeout: float | None = None,
    ) -> None:
        self.gateway = gateway
        self.notify = notify
        self.timeout = timeout
        self.pending = PendingCounter()
        self.boards: Store[tuple[Board, ...]] = Store(())
        self.workspace = WorkspaceDispatcher(self.boards, gateway, self.pending, notify, timeout)
        self.board: BoardStore | None = None
        self.dispatcher: BoardDispatcher | None = None

    async def load_boards(self) -> tuple[Board, ...]:
        """Replace the boards list with the gateway's."""
        boards = tuple(await self.gateway.list_boards())
        self.boards.replace(boards)
        return boards

    async def open_board(self, board_id: str) -> BoardStore:
        """Load board_id from the gateway and make it the active board."""
        lists, cards = await self.gateway.fetch_board(board_id)
        self.board = BoardStore.from_records(board_id, lists, cards)
        self.dispatcher = BoardDispatcher(self.board, self.gateway, self.pending, self.notify, self.timeout)
        logger.info("opened board %s: %d lists, %d cards", board_id, len(lists), len(cards))
        return self.board

    def close_board(self) -> None:
        self.board = None
        self.dispatcher = None

    def reset(self) -> None:
        """Forget all client state, e.g. on sign-out."""
        self.close_board()
        self.boards.replace(())
        self.pending.reset()
