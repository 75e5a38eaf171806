"""Shared fixtures: a seeded board, gateways and a dispatcher."""

import asyncio

import pytest

from corkboard.dispatcher import BoardDispatcher
from corkboard.gateway.base import failure
from corkboard.gateway.memory import MemoryGateway
from corkboard.gateway.records import BoardRecords
from corkboard.model.board import Board, CardRecord, ListRecord
from corkboard.pending import PendingCounter
from corkboard.store import BoardStore

BOARD_ID = "board-1"

# L1: C1, C2, C3    L2: C4
LAYOUT = {"L1": ["C1", "C2", "C3"], "L2": ["C4"]}


def seed_records() -> BoardRecords:
    records = BoardRecords()
    records.boards[BOARD_ID] = Board(id=BOARD_ID, title="Test board")
    for order, (list_id, card_ids) in enumerate(LAYOUT.items()):
        records.lists[list_id] = ListRecord(id=list_id, board_id=BOARD_ID, title=f"List {list_id}", order=order)
        for card_order, card_id in enumerate(card_ids):
            records.cards[card_id] = CardRecord(
                id=card_id,
                list_id=list_id,
                board_id=BOARD_ID,
                title=f"Card {card_id}",
                order=card_order,
            )
    return records


class ScriptedGateway:
    """Wraps a MemoryGateway so calls can be made to fail, raise or wait.

    errors: operation -> message returned as {error}
    exceptions: operation -> exception raised from the call
    gate: when set, every call waits for the event before proceeding
    """

    def __init__(self, inner: MemoryGateway) -> None:
        self.inner = inner
        self.errors: dict[str, str] = {}
        self.exceptions: dict[str, Exception] = {}
        self.gate: asyncio.Event | None = None
        self.started = 0

    @property
    def calls(self):
        return self.inner.calls

    def __getattr__(self, name):
        target = getattr(self.inner, name)

        async def call(*args):
            self.started += 1
            if self.gate is not None:
                await self.gate.wait()
            if name in self.exceptions:
                self.inner.calls.append((name, args[0] if args else None))
                raise self.exceptions[name]
            if name in self.errors:
                self.inner.calls.append((name, args[0] if args else None))
                return failure(self.errors[name])
            return await target(*args)

        return call


@pytest.fixture
def records():
    return seed_records()


@pytest.fixture
def gateway(records):
    return MemoryGateway(records)


@pytest.fixture
def scripted(gateway):
    return ScriptedGateway(gateway)


@pytest.fixture
def store(gateway):
    records = gateway.records
    return BoardStore.from_records(BOARD_ID, records.board_lists(BOARD_ID), records.board_cards(BOARD_ID))


@pytest.fixture
def notes():
    """Failures reported by the dispatcher."""
    return []


@pytest.fixture
def pending():
    return PendingCounter()


@pytest.fixture
def dispatcher(store, scripted, pending, notes):
    return BoardDispatcher(store, scripted, pending=pending, notify=notes.append)
