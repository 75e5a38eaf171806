"""Server-side record set and the rules every gateway enforces.

All mutations validate their request first and answer with
GatewayResult(error=...) rather than raising. Gateways apply an operation
to a copy() and keep the copy only when the result is ok, which makes each
operation all-or-nothing.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any

from corkboard.gateway.base import (
    CreateBoardRequest,
    CreateCardRequest,
    CreateListRequest,
    DeleteBoardRequest,
    DeleteCardRequest,
    DeleteListRequest,
    GatewayResult,
    RenameBoardRequest,
    RenameCardRequest,
    RenameListRequest,
    ReorderCardRequest,
    ReorderListsRequest,
    failure,
    success,
)
from corkboard.model.board import Board, CardRecord, ListRecord
from corkboard.model.ordering import enumerate_order, is_dense

MISSING_FIELDS = "Missing required fields."

FAILURE_MESSAGES = {
    "create_board": "Failed to create board.",
    "rename_board": "Failed to rename board.",
    "delete_board": "Failed to delete board.",
    "create_list": "Failed to create list.",
    "rename_list": "Failed to rename list.",
    "reorder_lists": "Failed to reorder lists.",
    "delete_list": "Failed to delete list.",
    "create_card": "Failed to create card.",
    "rename_card": "Failed to rename card.",
    "reorder_card": "Failed to reorder card.",
    "delete_card": "Failed to delete card.",
}

OPERATIONS = tuple(FAILURE_MESSAGES)


def _next_order(orders: list[int]) -> int:
    """Order for a new sibling: one past the highest, or 0."""
    return max(orders) + 1 if orders else 0


@dataclass
class BoardRecords:
    """Every board, list and card row, keyed by id."""

    boards: dict[str, Board] = field(default_factory=dict)
    lists: dict[str, ListRecord] = field(default_factory=dict)
    cards: dict[str, CardRecord] = field(default_factory=dict)

    def copy(self) -> BoardRecords:
        return BoardRecords(boards=dict(self.boards), lists=dict(self.lists), cards=dict(self.cards))

    # --- Queries ---

    def board_lists(self, board_id: str) -> list[ListRecord]:
        """Lists of a board sorted by order."""
        return sorted((r for r in self.lists.values() if r.board_id == board_id), key=lambda r: r.order)

    def list_cards(self, list_id: str) -> list[CardRecord]:
        """Cards of a list sorted by order."""
        return sorted((r for r in self.cards.values() if r.list_id == list_id), key=lambda r: r.order)

    def board_cards(self, board_id: str) -> list[CardRecord]:
        """Cards of a board, grouped by list order then card order."""
        result = []
        for lst in self.board_lists(board_id):
            result.extend(self.list_cards(lst.id))
        return result

    def _renumber_lists(self, board_id: str) -> None:
        recs = self.board_lists(board_id)
        if is_dense(r.order for r in recs):
            return
        for list_id, order in enumerate_order(r.id for r in recs).items():
            self.lists[list_id] = replace(self.lists[list_id], order=order)

    def _renumber_cards(self, list_id: str) -> None:
        recs = self.list_cards(list_id)
        if is_dense(r.order for r in recs):
            return
        for card_id, order in enumerate_order(r.id for r in recs).items():
            self.cards[card_id] = replace(self.cards[card_id], order=order)

    # --- Boards ---

    def create_board(self, request: CreateBoardRequest) -> GatewayResult:
        if not request.id or not request.title:
            return failure(MISSING_FIELDS)
        if request.id in self.boards:
            return failure(FAILURE_MESSAGES["create_board"])
        board = Board(id=request.id, title=request.title)
        self.boards[board.id] = board
        return success(board)

    def rename_board(self, request: RenameBoardRequest) -> GatewayResult:
        if not request.board_id or not request.title:
            return failure(MISSING_FIELDS)
        board = self.boards.get(request.board_id)
        if board is None:
            return failure("Board not found.")
        self.boards[board.id] = replace(board, title=request.title)
        return success()

    def delete_board(self, request: DeleteBoardRequest) -> GatewayResult:
        if not request.board_id:
            return failure("Missing board ID.")
        if request.board_id not in self.boards:
            return failure("Board not found.")
        del self.boards[request.board_id]
        self.lists = {k: v for k, v in self.lists.items() if v.board_id != request.board_id}
        self.cards = {k: v for k, v in self.cards.items() if v.board_id != request.board_id}
        return success()

    # --- Lists ---

    def create_list(self, request: CreateListRequest) -> GatewayResult:
        if not request.id or not request.board_id or not request.title:
            return failure("Client ID, Board ID, and title are required.")
        if request.board_id not in self.boards:
            return failure("Board not found.")
        if request.id in self.lists:
            return failure(FAILURE_MESSAGES["create_list"])
        order = _next_order([r.order for r in self.board_lists(request.board_id)])
        rec = ListRecord(id=request.id, board_id=request.board_id, title=request.title, order=order)
        self.lists[rec.id] = rec
        return success(rec)

    def rename_list(self, request: RenameListRequest) -> GatewayResult:
        if not request.list_id or not request.board_id or not request.title:
            return failure(MISSING_FIELDS)
        rec = self.lists.get(request.list_id)
        if rec is None or rec.board_id != request.board_id:
            return failure("List not found.")
        self.lists[rec.id] = replace(rec, title=request.title)
        return success()

    def reorder_lists(self, request: ReorderListsRequest) -> GatewayResult:
        if not request.board_id:
            return failure("Missing board ID.")
        if request.board_id not in self.boards:
            return failure("Board not found.")
        ids = [i for i in request.ordered_ids if i]
        current = {r.id for r in self.board_lists(request.board_id)}
        if len(set(ids)) != len(ids) or set(ids) != current:
            return failure(FAILURE_MESSAGES["reorder_lists"])
        for list_id, order in enumerate_order(ids).items():
            self.lists[list_id] = replace(self.lists[list_id], order=order)
        return success()

    def delete_list(self, request: DeleteListRequest) -> GatewayResult:
        if not request.list_id or not request.board_id:
            return failure(MISSING_FIELDS)
        rec = self.lists.get(request.list_id)
        if rec is None or rec.board_id != request.board_id:
            return failure("List not found.")
        del self.lists[rec.id]
        self.cards = {k: v for k, v in self.cards.items() if v.list_id != rec.id}
        self._renumber_lists(rec.board_id)
        return success()

    # --- Cards ---

    def create_card(self, request: CreateCardRequest) -> GatewayResult:
        if not request.id or not request.list_id or not request.board_id or not request.title:
            return failure(MISSING_FIELDS)
        lst = self.lists.get(request.list_id)
        if lst is None or lst.board_id != request.board_id:
            return failure("List not found.")
        if request.id in self.cards:
            return failure(FAILURE_MESSAGES["create_card"])
        order = _next_order([r.order for r in self.list_cards(request.list_id)])
        rec = CardRecord(
            id=request.id,
            list_id=request.list_id,
            board_id=request.board_id,
            title=request.title,
            order=order,
        )
        self.cards[rec.id] = rec
        return success(rec)

    def rename_card(self, request: RenameCardRequest) -> GatewayResult:
        if not request.card_id or not request.board_id or not request.title:
            return failure(MISSING_FIELDS)
        rec = self.cards.get(request.card_id)
        if rec is None or rec.board_id != request.board_id:
            return failure("Card not found.")
        self.cards[rec.id] = replace(rec, title=request.title)
        return success()

    def reorder_card(self, request: ReorderCardRequest) -> GatewayResult:
        if not request.board_id or not request.source_list_id or not request.dest_list_id:
            return failure("Missing required fields for card reordering.")
        for list_id in (request.source_list_id, request.dest_list_id):
            lst = self.lists.get(list_id)
            if lst is None or lst.board_id != request.board_id:
                return failure("List not found.")

        source_ids = [i for i in request.source_card_ids if i]
        dest_ids = [i for i in request.dest_card_ids if i]
        current_source = {r.id for r in self.list_cards(request.source_list_id)}
        current_dest = {r.id for r in self.list_cards(request.dest_list_id)}
        rejected = failure(FAILURE_MESSAGES["reorder_card"])

        if len(set(dest_ids)) != len(dest_ids) or len(set(source_ids)) != len(source_ids):
            return rejected

        if request.source_list_id == request.dest_list_id:
            if set(dest_ids) != current_dest:
                return rejected
            for card_id, order in enumerate_order(dest_ids).items():
                self.cards[card_id] = replace(self.cards[card_id], order=order)
            return success()

        if set(source_ids) & set(dest_ids):
            return rejected
        if set(source_ids) | set(dest_ids) != current_source | current_dest:
            return rejected
        if not set(source_ids) <= current_source or not current_dest <= set(dest_ids):
            return rejected

        for card_id, order in enumerate_order(dest_ids).items():
            self.cards[card_id] = replace(self.cards[card_id], order=order, list_id=request.dest_list_id)
        for card_id, order in enumerate_order(source_ids).items():
            self.cards[card_id] = replace(self.cards[card_id], order=order)
        return success()

    def delete_card(self, request: DeleteCardRequest) -> GatewayResult:
        if not request.card_id or not request.board_id:
            return failure(MISSING_FIELDS)
        rec = self.cards.get(request.card_id)
        if rec is None or rec.board_id != request.board_id:
            return failure("Card not found.")
        del self.cards[rec.id]
        self._renumber_cards(rec.list_id)
        return success()

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form, ordered for stable YAML diffs."""
        return {
            "boards": [asdict(b) for b in self.boards.values()],
            "lists": [asdict(r) for b in self.boards for r in self.board_lists(b)],
            "cards": [asdict(r) for b in self.boards for r in self.board_cards(b)],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> BoardRecords:
        data = data or {}
        records = cls()
        for raw in data.get("boards") or []:
            board = Board(id=str(raw["id"]), title=str(raw["title"]))
            records.boards[board.id] = board
        for raw in data.get("lists") or []:
            rec = ListRecord(
                id=str(raw["id"]),
                board_id=str(raw["board_id"]),
                title=str(raw["title"]),
                order=int(raw["order"]),
            )
            records.lists[rec.id] = rec
        for raw in data.get("cards") or []:
            rec = CardRecord(
                id=str(raw["id"]),
                list_id=str(raw["list_id"]),
                board_id=str(raw["board_id"]),
                title=str(raw["title"]),
                order=int(raw["order"]),
            )
            records.cards[rec.id] = rec
        return records
