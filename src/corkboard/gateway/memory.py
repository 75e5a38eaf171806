"""In-process gateway holding records in memory."""

from __future__ import annotations

import logging

from corkboard.gateway.base import GatewayResult, failure
from corkboard.gateway.records import FAILURE_MESSAGES, BoardRecords
from corkboard.model.board import Board, CardRecord, ListRecord

logger = logging.getLogger(__name__)


class MemoryGateway:
    """PersistenceGateway backed by a BoardRecords instance.

    Used for tests and for running a board without a repository. Every
    call records its request in `calls` as (operation, request).
    """

    def __init__(self, records: BoardRecords | None = None) -> None:
        self.records = records if records is not None else BoardRecords()
        self.calls: list[tuple[str, object]] = []

    def _apply(self, operation: str, request) -> GatewayResult:
        self.calls.append((operation, request))
        staged = self.records.copy()
        try:
            result = getattr(staged, operation)(request)
        except Exception:
            logger.exception("%s failed", operation)
            return failure(FAILURE_MESSAGES[operation])
        if result.ok:
            self.records = staged
        return result

    async def list_boards(self) -> list[Board]:
        return list(self.records.boards.values())

    async def fetch_board(self, board_id: str) -> tuple[list[ListRecord], list[CardRecord]]:
        if board_id not in self.records.boards:
            raise KeyError(board_id)
        return self.records.board_lists(board_id), self.records.board_cards(board_id)

    async def create_board(self, request) -> GatewayResult:
        return self._apply("create_board", request)

    async def rename_board(self, request) -> GatewayResult:
        return self._apply("rename_board", request)

    async def delete_board(self, request) -> GatewayResult:
        return self._apply("delete_board", request)

    async def create_list(self, request) -> GatewayResult:
        return self._apply("create_list", request)

    async def rename_list(self, request) -> GatewayResult:
        return self._apply("rename_list", request)

    async def reorder_lists(self, request) -> GatewayResult:
        return self._apply("reorder_lists", request)

    async def delete_list(self, request) -> GatewayResult:
        return self._apply("delete_list", request)

    async def create_card(self, request) -> GatewayResult:
        return self._apply("create_card", request)

    async def rename_card(self, request) -> GatewayResult:
        return self._apply("rename_card", request)

    async def reorder_card(self, request) -> GatewayResult:
        return self._apply("reorder_card", request)

    async def delete_card(self, request) -> GatewayResult:
        return self._apply("delete_card", request)
