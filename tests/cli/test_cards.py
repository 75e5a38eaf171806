"""Tests for 'corkboard card' commands."""

import json
from argparse import Namespace

import pytest

from corkboard.cli.card import card_add, card_delete, card_move, card_rename
from corkboard.gateway.gitstore import load_records_sync


def _layout(repo):
    records, _ = load_records_sync(repo)
    return {
        lst.title: [(c.title, c.order) for c in records.list_cards(lst.id)] for lst in records.board_lists("board-0001")
    }


def test_card_add_defaults_to_first_list(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=False, board=None, title="Third card", list=None)
    assert card_add(args) == 0
    assert 'Created card "Third card" in "Backlog"' in capsys.readouterr().out
    assert _layout(initialized_repo)["Backlog"][-1] == ("Third card", 2)


def test_card_add_to_list(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=True, board=None, title="Task", list="Done")
    assert card_add(args) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["list"]["title"] == "Done"
    assert data["order"] == 0


def test_card_rename(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=False, board=None, id="card-one", new_title="Renamed")
    assert card_rename(args) == 0
    assert _layout(initialized_repo)["Backlog"][0] == ("Renamed", 0)


def test_card_move_within_list(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=False, board=None, id="First card", list=None, position=2)
    assert card_move(args) == 0
    assert 'Moved card "First card" to "Backlog" position 2' in capsys.readouterr().out
    assert _layout(initialized_repo)["Backlog"] == [("Second card", 0), ("First card", 1)]


def test_card_move_to_other_list(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=False, board=None, id="card-two", list="Doing", position=None)
    assert card_move(args) == 0
    layout = _layout(initialized_repo)
    assert layout["Backlog"] == [("First card", 0)]
    assert layout["Doing"] == [("Second card", 0)]


def test_card_move_out_of_range(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=False, board=None, id="card-one", list="Doing", position=3)
    with pytest.raises(SystemExit):
        card_move(args)
    assert "between 1 and 1" in capsys.readouterr().err


def test_card_delete(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=False, board=None, id="card-one")
    assert card_delete(args) == 0
    assert 'Deleted card "First card"' in capsys.readouterr().out
    assert _layout(initialized_repo)["Backlog"] == [("Second card", 0)]


def test_card_unknown(initialized_repo, capsys):
    args = Namespace(repo=str(initialized_repo), json=True, board=None, id="nope")
    with pytest.raises(SystemExit):
        card_delete(args)
    assert json.loads(capsys.readouterr().err) == {"error": "Card 'nope' not found."}
