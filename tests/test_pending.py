"""Tests for the pending-operation counter."""

from corkboard.pending import STATUS_HIDDEN, STATUS_SAVED, STATUS_SAVING, PendingCounter


def test_starts_hidden():
    counter = PendingCounter()
    assert counter.count == 0
    assert counter.status == STATUS_HIDDEN
    assert counter.label == ""


def test_saving_then_saved():
    counter = PendingCounter()
    counter.increment()
    assert counter.status == STATUS_SAVING
    assert counter.label == "Saving..."
    counter.decrement()
    assert counter.status == STATUS_SAVED
    assert counter.label == "All changes saved"


def test_saved_stays_after_idle():
    counter = PendingCounter()
    counter.increment()
    counter.increment()
    counter.decrement()
    assert counter.is_pending
    counter.decrement()
    assert not counter.is_pending
    assert counter.shown


def test_decrement_saturates(caplog):
    counter = PendingCounter()
    counter.decrement()
    assert counter.count == 0
    assert "below zero" in caplog.text


def test_reset_hides():
    counter = PendingCounter()
    counter.increment()
    counter.reset()
    assert counter.count == 0
    assert counter.status == STATUS_HIDDEN


def test_watch():
    counter = PendingCounter()
    seen = []
    unwatch = counter.watch(lambda c, old, new: seen.append((old, new)))
    counter.increment()
    counter.decrement()
    unwatch()
    counter.increment()
    assert seen == [(0, 1), (1, 0)]
