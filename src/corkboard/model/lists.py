"""List mutation operations for normalized boards."""

from corkboard.model.board import BoardData, ListMeta, list_position
from corkboard.model.ordering import MovePlan, plan_move, remove


def _get_list(data: BoardData, list_id: str) -> ListMeta:
    lst = data.lists.get(list_id)
    if lst is None:
        raise KeyError(list_id)
    return lst


def add_list(data: BoardData, list_id: str, title: str) -> BoardData:
    """Append a new empty list to the end of the board."""
    if list_id in data.lists:
        raise ValueError(f"list {list_id} already exists")
    return data.with_list(ListMeta(id=list_id, title=title), data.list_order + (list_id,))


def rename_list(data: BoardData, list_id: str, title: str) -> BoardData:
    """Replace a list's title."""
    lst = _get_list(data, list_id)
    return data.with_list(ListMeta(id=lst.id, title=title, card_ids=lst.card_ids))


def plan_list_move(data: BoardData, list_id: str, new_index: int) -> MovePlan | None:
    """Plan moving list_id to new_index; None if it would not move."""
    return plan_move(data.list_order, list_position(data, list_id), new_index, list_id)


def move_list(data: BoardData, list_id: str, new_index: int) -> BoardData:
    """Move a list to new_index in the board's list order."""
    plan = plan_list_move(data, list_id, new_index)
    if plan is None:
        return data
    return apply_list_plan(data, plan)


def apply_list_plan(data: BoardData, plan: MovePlan) -> BoardData:
    return BoardData(lists=data.lists, cards=data.cards, list_order=plan.dest_ids)


def remove_list(data: BoardData, list_id: str) -> BoardData:
    """Remove a list and every card in it."""
    lst = _get_list(data, list_id)
    lists = {k: v for k, v in data.lists.items() if k != list_id}
    dropped = set(lst.card_ids)
    cards = {k: v for k, v in data.cards.items() if k not in dropped}
    return BoardData(lists=lists, cards=cards, list_order=remove(data.list_order, list_id))
