"""Gateway that keeps all records in a YAML document on a git branch.

Every successful mutation is exactly one commit on the branch, so a
reorder either lands completely or not at all. The working tree is never
touched.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path

import yaml

from corkboard.gateway.base import GatewayResult, failure
from corkboard.gateway.records import FAILURE_MESSAGES, BoardRecords
from corkboard.git import BRANCH_NAME, branch_tip, commit_file, read_file_at
from corkboard.model.board import Board, CardRecord, ListRecord

logger = logging.getLogger(__name__)

DOCUMENT_NAME = "corkboard.yaml"

COMMIT_MESSAGES = {
    "create_board": "Create board {0.title}",
    "rename_board": "Rename board to {0.title}",
    "delete_board": "Delete board {0.board_id}",
    "create_list": "Create list {0.title}",
    "rename_list": "Rename list to {0.title}",
    "reorder_lists": "Reorder lists",
    "delete_list": "Delete list {0.list_id}",
    "create_card": "Create card {0.title}",
    "rename_card": "Rename card to {0.title}",
    "reorder_card": "Reorder cards",
    "delete_card": "Delete card {0.card_id}",
}


def dump_records(records: BoardRecords) -> str:
    """Serialize records to YAML."""
    return yaml.safe_dump(records.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True)


def load_records(text: str | None) -> BoardRecords:
    """Parse YAML text into records. None or empty text is an empty board set."""
    if not text:
        return BoardRecords()
    return BoardRecords.from_dict(yaml.safe_load(text))


def load_records_sync(repo_path: str | Path, branch: str = BRANCH_NAME) -> tuple[BoardRecords, str | None]:
    """Read records at the branch tip. Returns (records, tip commit)."""
    tip = branch_tip(repo_path, branch)
    if tip is None:
        return BoardRecords(), None
    return load_records(read_file_at(repo_path, tip, DOCUMENT_NAME)), tip


def save_records_sync(
    repo_path: str | Path,
    records: BoardRecords,
    message: str,
    parent: str | None,
    branch: str = BRANCH_NAME,
) -> str:
    """Commit records on top of parent. Returns the new commit hash."""
    return commit_file(repo_path, DOCUMENT_NAME, dump_records(records), message, parent, branch)


class GitGateway:
    """PersistenceGateway storing records in a git repository.

    Mutations from one gateway run one at a time: each reads the tip,
    applies the operation and commits before the next one reads. Writers
    in other processes are caught by the compare-and-swap on update-ref
    and fail instead of overwriting.
    """

    def __init__(self, repo_path: str | Path, branch: str = BRANCH_NAME) -> None:
        self.repo_path = str(repo_path)
        self.branch = branch
        self.commit: str | None = None
        self._write_lock = threading.Lock()

    def _apply_sync(self, operation: str, request, cancelled: threading.Event | None = None) -> GatewayResult:
        with self._write_lock:
            records, tip = load_records_sync(self.repo_path, self.branch)
            result = getattr(records, operation)(request)
            if not result.ok:
                logger.info("%s rejected: %s", operation, result.error)
                return result
            # The caller stopped waiting; committing now would outlive its rollback
            if cancelled is not None and cancelled.is_set():
                logger.info("%s abandoned before commit", operation)
                return failure(FAILURE_MESSAGES[operation])
            message = COMMIT_MESSAGES[operation].format(request)
            self.commit = save_records_sync(self.repo_path, records, message, tip, self.branch)
        return result

    async def _apply(self, operation: str, request) -> GatewayResult:
        cancelled = threading.Event()
        try:
            return await asyncio.to_thread(self._apply_sync, operation, request, cancelled)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        except Exception:
            logger.exception("%s failed", operation)
            return failure(FAILURE_MESSAGES[operation])

    async def initialize(self) -> str:
        """Create the branch with an empty document if it does not exist."""

        def _init():
            with self._write_lock:
                records, tip = load_records_sync(self.repo_path, self.branch)
                if tip is not None:
                    return tip
                return save_records_sync(self.repo_path, records, "Initialize corkboard", None, self.branch)

        self.commit = await asyncio.to_thread(_init)
        return self.commit

    async def load(self) -> BoardRecords:
        """Read every record at the branch tip."""
        records, tip = await asyncio.to_thread(load_records_sync, self.repo_path, self.branch)
        self.commit = tip
        return records

    async def list_boards(self) -> list[Board]:
        records = await self.load()
        return list(records.boards.values())

    async def fetch_board(self, board_id: str) -> tuple[list[ListRecord], list[CardRecord]]:
        records = await self.load()
        if board_id not in records.boards:
            raise KeyError(board_id)
        return records.board_lists(board_id), records.board_cards(board_id)

    async def create_board(self, request) -> GatewayResult:
        return await self._apply("create_board", request)

    async def rename_board(self, request) -> GatewayResult:
        return await self._apply("rename_board", request)

    async def delete_board(self, request) -> GatewayResult:
        return await self._apply("delete_board", request)

    async def create_list(self, request) -> GatewayResult:
        return await self._apply("create_list", request)

    async def rename_list(self, request) -> GatewayResult:
        return await self._apply("rename_list", request)

    async def reorder_lists(self, request) -> GatewayResult:
        return await self._apply("reorder_lists", request)

    async def delete_list(self, request) -> GatewayResult:
        return await self._apply("delete_list", request)

    async def create_card(self, request) -> GatewayResult:
        return await self._apply("create_card", request)

    async def rename_card(self, request) -> GatewayResult:
        return await self._apply("rename_card", request)

    async def reorder_card(self, request) -> GatewayResult:
        return await self._apply("reorder_card", request)

    async def delete_card(self, request) -> GatewayResult:
        return await self._apply("delete_card", request)
