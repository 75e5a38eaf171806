"""Tests for drag tracking."""

import pytest

from corkboard.drag import CARD_DRAG, LIST_DRAG, DragLocation, DragManager, DropResult


def test_drop_reports_last_hover():
    drag = DragManager()
    drag.start(CARD_DRAG, "c1", "l1", 0)
    drag.hover("l2", 3)
    result = drag.drop()
    assert result == DropResult(CARD_DRAG, "c1", DragLocation("l1", 0), DragLocation("l2", 3))
    assert not result.is_noop
    assert not drag.active


def test_drop_without_moving_is_noop():
    drag = DragManager()
    drag.start(LIST_DRAG, "l1", "board", 2)
    assert drag.drop().is_noop


def test_drop_outside_is_noop():
    drag = DragManager()
    drag.start(CARD_DRAG, "c1", "l1", 0)
    drag.hover(None)
    result = drag.drop()
    assert result.destination is None
    assert result.is_noop


def test_cancel():
    drag = DragManager()
    drag.start(CARD_DRAG, "c1", "l1", 0)
    drag.hover("l2", 1)
    assert drag.cancel().destination is None
    assert not drag.active


def test_one_drag_at_a_time():
    drag = DragManager()
    drag.start(CARD_DRAG, "c1", "l1", 0)
    with pytest.raises(RuntimeError):
        drag.start(CARD_DRAG, "c2", "l1", 1)


def test_unknown_kind():
    with pytest.raises(ValueError):
        DragManager().start("ROW", "x", "y", 0)


def test_drop_without_drag():
    with pytest.raises(RuntimeError):
        DragManager().drop()


def test_hover_without_drag_is_ignored():
    drag = DragManager()
    drag.hover("l1", 0)
    assert drag.over is None
