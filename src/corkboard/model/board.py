"""Board records and the normalized client-side board."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from corkboard.errors import IntegrityError


# --- Persisted records ---


@dataclass(frozen=True)
class Board:
    """A board. Same shape on the client and in storage."""

    id: str
    title: str


BoardRecord = Board


@dataclass(frozen=True)
class ListRecord:
    """A list row. order is dense among lists sharing board_id."""

    id: str
    board_id: str
    title: str
    order: int


@dataclass(frozen=True)
class CardRecord:
    """A card row. order is dense among cards sharing list_id."""

    id: str
    list_id: str
    board_id: str
    title: str
    order: int


# --- Normalized client state ---


@dataclass(frozen=True)
class ListMeta:
    id: str
    title: str
    card_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class CardMeta:
    id: str
    title: str


@dataclass(frozen=True)
class BoardData:
    """Flat, immutable view of one board.

    Ordering lives in list_order and each list's card_ids, so moving an
    item is a splice of one or two tuples. Updates build a new BoardData
    sharing every untouched ListMeta/CardMeta with the old one; the maps
    are never mutated after construction.
    """

    lists: dict[str, ListMeta] = field(default_factory=dict)
    cards: dict[str, CardMeta] = field(default_factory=dict)
    list_order: tuple[str, ...] = ()

    def ordered_lists(self) -> list[ListMeta]:
        """Lists in display order."""
        return [self.lists[list_id] for list_id in self.list_order]

    def cards_in(self, list_id: str) -> list[CardMeta]:
        """Cards of a list in display order."""
        return [self.cards[card_id] for card_id in self.lists[list_id].card_ids]

    def with_list(self, lst: ListMeta, list_order: tuple[str, ...] | None = None) -> BoardData:
        return BoardData(
            lists={**self.lists, lst.id: lst},
            cards=self.cards,
            list_order=self.list_order if list_order is None else list_order,
        )

    def with_card(self, card: CardMeta) -> BoardData:
        return BoardData(lists=self.lists, cards={**self.cards, card.id: card}, list_order=self.list_order)


def normalize(lists: Iterable[ListRecord], cards: Iterable[CardRecord]) -> BoardData:
    """Build a BoardData from persisted records.

    Lists are sorted by order, cards grouped by list and sorted by order.
    Cards pointing at an unknown list are dropped.
    """
    sorted_lists = sorted(lists, key=lambda r: r.order)
    by_list: dict[str, list[CardRecord]] = {r.id: [] for r in sorted_lists}
    for card in cards:
        if card.list_id in by_list:
            by_list[card.list_id].append(card)

    list_map: dict[str, ListMeta] = {}
    card_map: dict[str, CardMeta] = {}
    for rec in sorted_lists:
        members = sorted(by_list[rec.id], key=lambda r: r.order)
        for card in members:
            card_map[card.id] = CardMeta(id=card.id, title=card.title)
        list_map[rec.id] = ListMeta(id=rec.id, title=rec.title, card_ids=tuple(c.id for c in members))

    return BoardData(lists=list_map, cards=card_map, list_order=tuple(r.id for r in sorted_lists))


def denormalize(board_id: str, data: BoardData) -> tuple[list[ListRecord], list[CardRecord]]:
    """Turn a BoardData back into records, deriving order from position."""
    list_records = []
    card_records = []
    for list_order, list_id in enumerate(data.list_order):
        lst = data.lists[list_id]
        list_records.append(ListRecord(id=lst.id, board_id=board_id, title=lst.title, order=list_order))
        for card_order, card_id in enumerate(lst.card_ids):
            card = data.cards[card_id]
            card_records.append(
                CardRecord(id=card.id, list_id=lst.id, board_id=board_id, title=card.title, order=card_order)
            )
    return list_records, card_records


def list_position(data: BoardData, list_id: str) -> int:
    """Index of list_id in the board's list order."""
    try:
        return data.list_order.index(list_id)
    except ValueError:
        raise KeyError(list_id) from None


def card_position(data: BoardData, card_id: str) -> tuple[str, int]:
    """Return (list_id, index) for a card."""
    for list_id in data.list_order:
        card_ids = data.lists[list_id].card_ids
        if card_id in card_ids:
            return list_id, card_ids.index(card_id)
    raise KeyError(card_id)


def check_integrity(data: BoardData) -> None:
    """Raise IntegrityError if data breaks a structural invariant."""
    if len(set(data.list_order)) != len(data.list_order):
        raise IntegrityError("duplicate id in list order")
    if set(data.list_order) != set(data.lists):
        raise IntegrityError("list order does not match the lists map")

    owner: dict[str, str] = {}
    for list_id in data.list_order:
        for card_id in data.lists[list_id].card_ids:
            if card_id not in data.cards:
                raise IntegrityError(f"list {list_id} references unknown card {card_id}")
            if card_id in owner:
                raise IntegrityError(f"card {card_id} is in both {owner[card_id]} and {list_id}")
            owner[card_id] = list_id

    orphans = set(data.cards) - set(owner)
    if orphans:
        raise IntegrityError(f"cards without a list: {', '.join(sorted(orphans))}")
