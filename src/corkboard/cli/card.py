"""Handlers for 'corkboard card' commands."""

import asyncio

from corkboard.cli._common import (
    connect,
    error,
    fail_if_rejected,
    find_card,
    find_list,
    open_board_or_die,
    output_result,
    require_title,
)
from corkboard.model.board import card_position


def card_add(args) -> int:
    """Append a card to a list."""
    title = require_title(args.title, args.json)
    session, failures = connect(args)
    open_board_or_die(session, args.board, args.json)
    data = session.board.state
    if not data.list_order:
        error("Board has no lists. Add one with 'corkboard list add'.", args.json)
    list_id = find_list(data, args.list, args.json) if args.list else data.list_order[0]

    ok = asyncio.run(session.dispatcher.add_card(list_id, title))
    fail_if_rejected(ok, failures, args.json)

    lst = session.board.state.lists[list_id]
    card_id = lst.card_ids[-1]
    output_result(
        {"id": card_id, "title": title, "list": {"id": list_id, "title": lst.title}, "order": len(lst.card_ids) - 1},
        f'Created card "{title}" in "{lst.title}" ({card_id[:8]})',
        args.json,
    )
    return 0


def card_rename(args) -> int:
    """Rename a card."""
    title = require_title(args.new_title, args.json)
    session, failures = connect(args)
    open_board_or_die(session, args.board, args.json)
    card_id = find_card(session.board.state, args.id, args.json)
    old_title = session.board.state.cards[card_id].title

    ok = asyncio.run(session.dispatcher.rename_card(card_id, title))
    fail_if_rejected(ok, failures, args.json)

    output_result(
        {"id": card_id, "old_title": old_title, "new_title": title},
        f'Renamed card "{old_title}" to "{title}"',
        args.json,
    )
    return 0


def card_move(args) -> int:
    """Move a card within its list or into another one."""
    session, failures = connect(args)
    open_board_or_die(session, args.board, args.json)
    data = session.board.state
    card_id = find_card(data, args.id, args.json)
    source_list_id, _ = card_position(data, card_id)
    list_id = find_list(data, args.list, args.json) if args.list else source_list_id

    # CLI uses 1-indexed positions, model uses 0-indexed; default is the end
    size = len(data.lists[list_id].card_ids)
    limit = size if list_id == source_list_id else size + 1
    position = args.position if args.position is not None else limit
    if not 1 <= position <= limit:
        error(f"Position must be between 1 and {limit}.", args.json)

    ok = asyncio.run(session.dispatcher.move_card(card_id, list_id, position - 1))
    fail_if_rejected(ok, failures, args.json)

    card = data.cards[card_id]
    lst = data.lists[list_id]
    output_result(
        {"id": card_id, "title": card.title, "list": {"id": list_id, "title": lst.title}, "position": position},
        f'Moved card "{card.title}" to "{lst.title}" position {position}',
        args.json,
    )
    return 0


def card_delete(args) -> int:
    """Delete a card."""
    session, failures = connect(args)
    open_board_or_die(session, args.board, args.json)
    card_id = find_card(session.board.state, args.id, args.json)
    title = session.board.state.cards[card_id].title

    ok = asyncio.run(session.dispatcher.delete_card(card_id))
    fail_if_rejected(ok, failures, args.json)

    output_result({"id": card_id, "title": title}, f'Deleted card "{title}"', args.json)
    return 0
