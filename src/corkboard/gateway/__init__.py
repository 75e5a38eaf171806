"""Persistence gateways."""

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
    failure,
    success,
)
from corkboard.gateway.gitstore import GitGateway
from corkboard.gateway.memory import MemoryGateway
from corkboard.gateway.records import BoardRecords

__all__ = [
    "BoardRecords",
    "CreateBoardRequest",
    "CreateCardRequest",
    "CreateListRequest",
    "DeleteBoardRequest",
    "DeleteCardRequest",
    "DeleteListRequest",
    "GatewayResult",
    "GitGateway",
    "MemoryGateway",
    "PersistenceGateway",
    "RenameBoardRequest",
    "RenameCardRequest",
    "RenameListRequest",
    "ReorderCardRequest",
    "ReorderListsRequest",
    "failure",
    "success",
]
