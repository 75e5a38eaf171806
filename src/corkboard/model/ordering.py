"""Dense ordering of sibling groups.

A sibling group (cards in a list, lists on a board) is an ordered sequence
of ids. Its persisted order values are always the positions 0..n-1, so a
move rewrites every sibling's order instead of patching a few of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class MovePlan:
    """Result of moving one id inside or across sibling groups.

    For a move within one group, source_ids and dest_ids are the same
    sequence and cross is False.
    """

    item_id: str
    source_ids: tuple[str, ...]
    dest_ids: tuple[str, ...]
    cross: bool = False


def enumerate_order(ids: Iterable[str]) -> dict[str, int]:
    """Assign dense order values by position.

    ["a", "b", "c"] → {"a": 0, "b": 1, "c": 2}
    """
    return {id_: i for i, id_ in enumerate(ids)}


def is_dense(orders: Iterable[int]) -> bool:
    """True if orders is a permutation of 0..n-1."""
    values = list(orders)
    return sorted(values) == list(range(len(values)))


def _check_source(ids: Sequence[str], index: int, item_id: str | None) -> str:
    if not 0 <= index < len(ids):
        raise IndexError(f"source index {index} out of range for {len(ids)} items")
    if item_id is not None and ids[index] != item_id:
        raise ValueError(f"{item_id!r} is not at index {index}")
    return ids[index]


def splice(
    ids: Sequence[str],
    source_index: int,
    destination_index: int,
    item_id: str | None = None,
) -> tuple[str, ...]:
    """Move the id at source_index to destination_index.

    destination_index is measured after the removal, the way drag-and-drop
    libraries report it. It is clamped to the end of the sequence.
    """
    moving = _check_source(ids, source_index, item_id)
    if destination_index < 0:
        raise IndexError(f"destination index {destination_index} is negative")
    result = list(ids)
    del result[source_index]
    result.insert(min(destination_index, len(result)), moving)
    return tuple(result)


def insert(ids: Sequence[str], index: int | None, item_id: str) -> tuple[str, ...]:
    """Insert item_id at index (append when None, clamp past the end)."""
    if item_id in ids:
        raise ValueError(f"{item_id!r} is already in the group")
    result = list(ids)
    pos = len(result) if index is None else min(index, len(result))
    if pos < 0:
        raise IndexError(f"destination index {index} is negative")
    result.insert(pos, item_id)
    return tuple(result)


def remove(ids: Sequence[str], item_id: str) -> tuple[str, ...]:
    """Return ids without item_id. Raises KeyError if it is absent."""
    if item_id not in ids:
        raise KeyError(item_id)
    return tuple(i for i in ids if i != item_id)


def plan_move(
    source_ids: Sequence[str],
    source_index: int,
    destination_index: int,
    item_id: str | None = None,
    dest_ids: Sequence[str] | None = None,
) -> MovePlan | None:
    """Plan a single-item move and return None if it changes nothing.

    Pass dest_ids only for a move into another group. The source group is
    then recomputed without the item and the destination group with the
    item spliced in at destination_index; both are enumerated from zero.
    """
    moving = _check_source(source_ids, source_index, item_id)

    if dest_ids is None:
        if min(destination_index, len(source_ids) - 1) == source_index:
            return None
        new_ids = splice(source_ids, source_index, destination_index, moving)
        return MovePlan(item_id=moving, source_ids=new_ids, dest_ids=new_ids)

    new_source = remove(source_ids, moving)
    new_dest = insert(dest_ids, destination_index, moving)
    return MovePlan(item_id=moving, source_ids=new_source, dest_ids=new_dest, cross=True)
