"""Tests for the git-backed gateway."""

import asyncio
import threading

import pytest
from git import Repo

from corkboard.gateway.base import (
    CreateBoardRequest,
    CreateCardRequest,
    CreateListRequest,
    RenameListRequest,
    ReorderCardRequest,
    ReorderListsRequest,
)
from corkboard.gateway.gitstore import DOCUMENT_NAME, GitGateway, dump_records, load_records
from corkboard.git import BRANCH_NAME, branch_tip, read_file_at


@pytest.fixture
def repo_path(tmp_path):
    repo = Repo.init(tmp_path)
    (tmp_path / "README.md").write_text("# Test")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    return tmp_path


async def _seed(repo_path):
    """A gateway with one board holding two lists and two cards."""
    gateway = GitGateway(repo_path)
    await gateway.initialize()
    await gateway.create_board(CreateBoardRequest(id="b", title="Board"))
    await gateway.create_list(CreateListRequest(id="l1", board_id="b", title="Todo"))
    await gateway.create_list(CreateListRequest(id="l2", board_id="b", title="Done"))
    await gateway.create_card(CreateCardRequest(id="c1", list_id="l1", board_id="b", title="One"))
    await gateway.create_card(CreateCardRequest(id="c2", list_id="l1", board_id="b", title="Two"))
    return gateway


def test_yaml_round_trip(records):
    assert load_records(dump_records(records)) == records


def test_load_records_empty():
    assert load_records(None).boards == {}
    assert load_records("").boards == {}


@pytest.mark.asyncio
async def test_initialize_creates_branch(repo_path):
    gateway = GitGateway(repo_path)
    commit = await gateway.initialize()
    assert branch_tip(repo_path, BRANCH_NAME) == commit
    assert await gateway.list_boards() == []


@pytest.mark.asyncio
async def test_initialize_is_idempotent(repo_path):
    gateway = GitGateway(repo_path)
    first = await gateway.initialize()
    assert await gateway.initialize() == first


@pytest.mark.asyncio
async def test_working_tree_untouched(repo_path):
    await _seed(repo_path)
    repo = Repo(repo_path)
    assert repo.active_branch.name != BRANCH_NAME
    assert not (repo_path / DOCUMENT_NAME).exists()
    assert not repo.is_dirty(untracked_files=True)


@pytest.mark.asyncio
async def test_one_commit_per_mutation(repo_path):
    seeded = await _seed(repo_path)
    repo = Repo(repo_path)
    before = len(list(repo.iter_commits(BRANCH_NAME)))
    await seeded.rename_list(RenameListRequest(list_id="l1", board_id="b", title="Backlog"))
    commits = list(repo.iter_commits(BRANCH_NAME))
    assert len(commits) == before + 1
    assert commits[0].message.strip() == "Rename list to Backlog"
    assert seeded.commit == commits[0].hexsha


@pytest.mark.asyncio
async def test_reorder_persists(repo_path):
    seeded = await _seed(repo_path)
    result = await seeded.reorder_card(
        ReorderCardRequest(
            board_id="b",
            source_list_id="l1",
            dest_list_id="l2",
            source_card_ids=("c1",),
            dest_card_ids=("c2",),
        )
    )
    assert result.ok

    lists, cards = await GitGateway(repo_path).fetch_board("b")
    assert [r.id for r in lists] == ["l1", "l2"]
    assert [(r.id, r.list_id, r.order) for r in cards] == [("c1", "l1", 0), ("c2", "l2", 0)]


@pytest.mark.asyncio
async def test_rejected_mutation_makes_no_commit(repo_path):
    seeded = await _seed(repo_path)
    tip = branch_tip(repo_path, BRANCH_NAME)
    result = await seeded.reorder_lists(ReorderListsRequest(board_id="b", ordered_ids=("l2",)))
    assert result.error == "Failed to reorder lists."
    assert branch_tip(repo_path, BRANCH_NAME) == tip


@pytest.mark.asyncio
async def test_document_is_yaml(repo_path):
    await _seed(repo_path)
    text = read_file_at(repo_path, branch_tip(repo_path, BRANCH_NAME), DOCUMENT_NAME)
    assert "title: Board" in text
    assert load_records(text).lists["l2"].order == 1


@pytest.mark.asyncio
async def test_storage_error_becomes_failure(repo_path, monkeypatch):
    seeded = await _seed(repo_path)

    def boom(*args, **kwargs):
        raise OSError("read-only")

    monkeypatch.setattr("corkboard.gateway.gitstore.commit_file", boom)
    result = await seeded.create_list(CreateListRequest(id="l3", board_id="b", title="Later"))
    assert result.error == "Failed to create list."
    lists, _ = await seeded.fetch_board("b")
    assert [r.id for r in lists] == ["l1", "l2"]


@pytest.mark.asyncio
async def test_fetch_unknown_board(repo_path):
    seeded = await _seed(repo_path)
    with pytest.raises(KeyError):
        await seeded.fetch_board("nope")


# --- concurrent writes ---


@pytest.mark.asyncio
async def test_concurrent_creates_all_land(repo_path):
    seeded = await _seed(repo_path)
    repo = Repo(repo_path)
    before = len(list(repo.iter_commits(BRANCH_NAME)))
    requests = [CreateCardRequest(id=f"n{i}", list_id="l2", board_id="b", title=f"New {i}") for i in range(4)]

    results = await asyncio.gather(*(seeded.create_card(r) for r in requests))

    assert [r.ok for r in results] == [True] * 4
    assert len(list(repo.iter_commits(BRANCH_NAME))) == before + 4
    _, cards = await seeded.fetch_board("b")
    in_l2 = [r for r in cards if r.list_id == "l2"]
    assert sorted(r.id for r in in_l2) == ["n0", "n1", "n2", "n3"]
    assert [r.order for r in in_l2] == [0, 1, 2, 3]


@pytest.mark.asyncio
async def test_abandoned_call_makes_no_commit(repo_path):
    """A caller that stopped waiting before the commit leaves the branch alone."""
    seeded = await _seed(repo_path)
    tip = branch_tip(repo_path, BRANCH_NAME)
    cancelled = threading.Event()
    cancelled.set()

    result = seeded._apply_sync("create_list", CreateListRequest(id="l3", board_id="b", title="Late"), cancelled)

    assert result.error == "Failed to create list."
    assert branch_tip(repo_path, BRANCH_NAME) == tip
