"""Normalized board model."""

from corkboard.model.board import (
    Board,
    BoardData,
    BoardRecord,
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
from corkboard.model.cards import add_card, find_card_list, move_card, remove_card, rename_card
from corkboard.model.lists import add_list, move_list, remove_list, rename_list
from corkboard.model.ordering import MovePlan, enumerate_order, is_dense, plan_move, splice

__all__ = [
    "Board",
    "BoardData",
    "BoardRecord",
    "CardMeta",
    "CardRecord",
    "ListMeta",
    "ListRecord",
    "MovePlan",
    "add_card",
    "add_list",
    "card_position",
    "check_integrity",
    "denormalize",
    "enumerate_order",
    "find_card_list",
    "is_dense",
    "list_position",
    "move_card",
    "move_list",
    "normalize",
    "plan_move",
    "remove_card",
    "remove_list",
    "rename_card",
    "rename_list",
    "splice",
]
