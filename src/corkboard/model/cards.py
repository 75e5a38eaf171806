"""Card mutation operations for normalized boards."""

from corkboard.model.board import BoardData, CardMeta, ListMeta, card_position
from corkboard.model.ordering import MovePlan, insert, plan_move, remove


def find_card_list(data: BoardData, card_id: str) -> ListMeta | None:
    """Find the list containing a card."""
    for list_id in data.list_order:
        lst = data.lists[list_id]
        if card_id in lst.card_ids:
            return lst
    return None


def add_card(data: BoardData, list_id: str, card_id: str, title: str, position: int | None = None) -> BoardData:
    """Create a card in list_id, at the end unless position is given."""
    lst = data.lists.get(list_id)
    if lst is None:
        raise KeyError(list_id)
    if card_id in data.cards:
        raise ValueError(f"card {card_id} already exists")
    updated = ListMeta(id=lst.id, title=lst.title, card_ids=insert(lst.card_ids, position, card_id))
    return BoardData(
        lists={**data.lists, list_id: updated},
        cards={**data.cards, card_id: CardMeta(id=card_id, title=title)},
        list_order=data.list_order,
    )


def rename_card(data: BoardData, card_id: str, title: str) -> BoardData:
    """Replace a card's title."""
    if card_id not in data.cards:
        raise KeyError(card_id)
    return data.with_card(CardMeta(id=card_id, title=title))


def plan_card_move(
    data: BoardData,
    card_id: str,
    target_list_id: str,
    position: int,
) -> tuple[str, MovePlan | None]:
    """Plan a card move. Returns (source_list_id, plan or None for no-op)."""
    source_list_id, index = card_position(data, card_id)
    source = data.lists[source_list_id]
    if target_list_id == source_list_id:
        return source_list_id, plan_move(source.card_ids, index, position, card_id)
    target = data.lists.get(target_list_id)
    if target is None:
        raise KeyError(target_list_id)
    return source_list_id, plan_move(source.card_ids, index, position, card_id, dest_ids=target.card_ids)


def apply_card_plan(data: BoardData, source_list_id: str, target_list_id: str, plan: MovePlan) -> BoardData:
    """Install a planned move.

    Both lists are replaced in one new BoardData, so the card is never
    observable in both lists or in neither.
    """
    source = data.lists[source_list_id]
    lists = dict(data.lists)
    lists[source_list_id] = ListMeta(id=source.id, title=source.title, card_ids=plan.source_ids)
    if plan.cross:
        target = data.lists[target_list_id]
        lists[target_list_id] = ListMeta(id=target.id, title=target.title, card_ids=plan.dest_ids)
    return BoardData(lists=lists, cards=data.cards, list_order=data.list_order)


def move_card(data: BoardData, card_id: str, target_list_id: str, position: int) -> BoardData:
    """Move a card to target_list_id at position (0-based, after removal)."""
    source_list_id, plan = plan_card_move(data, card_id, target_list_id, position)
    if plan is None:
        return data
    return apply_card_plan(data, source_list_id, target_list_id, plan)


def remove_card(data: BoardData, card_id: str) -> BoardData:
    """Remove a card from the board and its list."""
    lst = find_card_list(data, card_id)
    if lst is None:
        raise KeyError(card_id)
    updated = ListMeta(id=lst.id, title=lst.title, card_ids=remove(lst.card_ids, card_id))
    return BoardData(
        lists={**data.lists, lst.id: updated},
        cards={k: v for k, v in data.cards.items() if k != card_id},
        list_order=data.list_order,
    )
