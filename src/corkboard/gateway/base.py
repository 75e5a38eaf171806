"""Typed requests, results and the protocol every persistence gateway follows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from corkboard.model.board import Board, CardRecord, ListRecord


# --- Requests ---


@dataclass(frozen=True)
class CreateBoardRequest:
    id: str
    title: str


@dataclass(frozen=True)
class RenameBoardRequest:
    board_id: str
    title: str


@dataclass(frozen=True)
class DeleteBoardRequest:
    board_id: str


@dataclass(frozen=True)
class CreateListRequest:
    id: str
    board_id: str
    title: str


@dataclass(frozen=True)
class RenameListRequest:
    list_id: str
    board_id: str
    title: str


@dataclass(frozen=True)
class ReorderListsRequest:
    board_id: str
    ordered_ids: tuple[str, ...]


@dataclass(frozen=True)
class DeleteListRequest:
    list_id: str
    board_id: str


@dataclass(frozen=True)
class CreateCardRequest:
    id: str
    list_id: str
    board_id: str
    title: str


@dataclass(frozen=True)
class RenameCardRequest:
    card_id: str
    board_id: str
    title: str


@dataclass(frozen=True)
class ReorderCardRequest:
    """Full new sequences for the source and destination lists.

    For a move within one list both sequences are the same.
    """

    board_id: str
    source_list_id: str
    dest_list_id: str
    source_card_ids: tuple[str, ...]
    dest_card_ids: tuple[str, ...]


@dataclass(frozen=True)
class DeleteCardRequest:
    card_id: str
    board_id: str


# --- Results ---


@dataclass(frozen=True)
class GatewayResult:
    """Outcome of one gateway call: data on success, error otherwise."""

    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def success(data: Any = True) -> GatewayResult:
    return GatewayResult(data=data)


def failure(message: str) -> GatewayResult:
    return GatewayResult(error=message)


class PersistenceGateway(Protocol):
    """Server operations the dispatcher calls.

    Implementations report validation and business problems as
    GatewayResult(error=...) instead of raising. Each call is atomic.
    """

    async def list_boards(self) -> list[Board]: ...

    async def fetch_board(self, board_id: str) -> tuple[list[ListRecord], list[CardRecord]]: ...

    async def create_board(self, request: CreateBoardRequest) -> GatewayResult: ...

    async def rename_board(self, request: RenameBoardRequest) -> GatewayResult: ...

    async def delete_board(self, request: DeleteBoardRequest) -> GatewayResult: ...

    async def create_list(self, request: CreateListRequest) -> GatewayResult: ...

    async def rename_list(self, request: RenameListRequest) -> GatewayResult: ...

    async def reorder_lists(self, request: ReorderListsRequest) -> GatewayResult: ...

    async def delete_list(self, request: DeleteListRequest) -> GatewayResult: ...

    async def create_card(self, request: CreateCardRequest) -> GatewayResult: ...

    async def rename_card(self, request: RenameCardRequest) -> GatewayResult: ...

    async def reorder_card(self, request: ReorderCardRequest) -> GatewayResult: ...

    async def delete_card(self, request: DeleteCardRequest) -> GatewayResult: ...
