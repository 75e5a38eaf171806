"""Tests for normalizing records into BoardData and back."""

import pytest

from corkboard.errors import IntegrityError
from corkboard.model.board import (
    BoardData,
    CardMeta,
    CardRecord,
    ListMeta,
    ListRecord,
    card_position,
    check_integrity,
    denormalize,
    list_position,
    normalize,
)


def _list(list_id, order, board_id="b"):
    return ListRecord(id=list_id, board_id=board_id, title=list_id.upper(), order=order)


def _card(card_id, list_id, order, board_id="b"):
    return CardRecord(id=card_id, list_id=list_id, board_id=board_id, title=card_id.upper(), order=order)


def test_normalize_sorts_lists_and_cards():
    lists = [_list("l2", 1), _list("l1", 0)]
    cards = [_card("c2", "l1", 1), _card("c1", "l1", 0), _card("c3", "l2", 0)]
    data = normalize(lists, cards)
    assert data.list_order == ("l1", "l2")
    assert data.lists["l1"].card_ids == ("c1", "c2")
    assert data.lists["l2"].card_ids == ("c3",)
    assert data.cards["c1"] == CardMeta(id="c1", title="C1")


def test_normalize_drops_orphan_cards():
    data = normalize([_list("l1", 0)], [_card("c1", "gone", 0)])
    assert data.cards == {}
    assert data.lists["l1"].card_ids == ()


def test_normalize_empty():
    assert normalize([], []) == BoardData()


def test_denormalize_derives_dense_order():
    data = BoardData(
        lists={"l1": ListMeta("l1", "One", ("c2", "c1")), "l2": ListMeta("l2", "Two")},
        cards={"c1": CardMeta("c1", "A"), "c2": CardMeta("c2", "B")},
        list_order=("l2", "l1"),
    )
    lists, cards = denormalize("b", data)
    assert [(r.id, r.order) for r in lists] == [("l2", 0), ("l1", 1)]
    assert [(r.id, r.list_id, r.order) for r in cards] == [("c2", "l1", 0), ("c1", "l1", 1)]


def test_normalize_then_denormalize_repairs_gaps():
    """Sparse persisted orders come back dense."""
    lists = [_list("l1", 3), _list("l2", 7)]
    cards = [_card("c1", "l1", 5), _card("c2", "l1", 9)]
    out_lists, out_cards = denormalize("b", normalize(lists, cards))
    assert [r.order for r in out_lists] == [0, 1]
    assert [r.order for r in out_cards] == [0, 1]


def test_positions():
    data = normalize([_list("l1", 0), _list("l2", 1)], [_card("c1", "l2", 0), _card("c2", "l2", 1)])
    assert list_position(data, "l2") == 1
    assert card_position(data, "c2") == ("l2", 1)
    with pytest.raises(KeyError):
        list_position(data, "nope")
    with pytest.raises(KeyError):
        card_position(data, "nope")


def test_ordered_views():
    data = normalize([_list("l1", 0)], [_card("c1", "l1", 0)])
    assert [lst.id for lst in data.ordered_lists()] == ["l1"]
    assert [c.id for c in data.cards_in("l1")] == ["c1"]


# --- integrity ---


def test_check_integrity_ok():
    check_integrity(normalize([_list("l1", 0)], [_card("c1", "l1", 0)]))


def test_check_integrity_card_in_two_lists():
    data = BoardData(
        lists={"l1": ListMeta("l1", "A", ("c1",)), "l2": ListMeta("l2", "B", ("c1",))},
        cards={"c1": CardMeta("c1", "x")},
        list_order=("l1", "l2"),
    )
    with pytest.raises(IntegrityError, match="both"):
        check_integrity(data)


def test_check_integrity_orphan_card():
    data = BoardData(lists={"l1": ListMeta("l1", "A")}, cards={"c1": CardMeta("c1", "x")}, list_order=("l1",))
    with pytest.raises(IntegrityError, match="without a list"):
        check_integrity(data)


def test_check_integrity_unknown_card():
    data = BoardData(lists={"l1": ListMeta("l1", "A", ("c9",))}, list_order=("l1",))
    with pytest.raises(IntegrityError, match="unknown card"):
        check_integrity(data)


def test_check_integrity_list_order_mismatch():
    data = BoardData(lists={"l1": ListMeta("l1", "A")}, list_order=("l1", "l2"))
    with pytest.raises(IntegrityError):
        check_integrity(data)
