"""Shared fixtures for CLI tests."""

import asyncio

import pytest
from git import Repo

from corkboard.gateway.base import CreateBoardRequest, CreateCardRequest, CreateListRequest
from corkboard.gateway.gitstore import GitGateway

BOARD = "board-0001"
LISTS = {"list-todo": "Backlog", "list-doing": "Doing", "list-done": "Done"}


async def _seed(repo_path):
    gateway = GitGateway(repo_path)
    await gateway.initialize()
    await gateway.create_board(CreateBoardRequest(id=BOARD, title="Test Board"))
    for list_id, title in LISTS.items():
        await gateway.create_list(CreateListRequest(id=list_id, board_id=BOARD, title=title))
    for card_id, title in (("card-one", "First card"), ("card-two", "Second card")):
        await gateway.create_card(CreateCardRequest(id=card_id, list_id="list-todo", board_id=BOARD, title=title))


@pytest.fixture
def empty_repo(tmp_path):
    """Create an empty git repo."""
    repo = Repo.init(tmp_path)
    (tmp_path / ".gitkeep").write_text("")
    repo.index.add([".gitkeep"])
    repo.index.commit("Initial commit")
    return tmp_path


@pytest.fixture
def initialized_repo(empty_repo):
    """Create a repo with one board (3 lists, 2 cards in the first)."""
    asyncio.run(_seed(empty_repo))
    return empty_repo
