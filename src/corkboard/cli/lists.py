"""Handlers for 'corkboard list' commands."""

import asyncio

from corkboard.cli._common import (
    connect,
    error,
    fail_if_rejected,
    find_list,
    open_board_or_die,
    output_result,
    require_title,
)


def list_add(args) -> int:
    """Append a list to the board."""
    title = require_title(args.title, args.json)
    session, failures = connect(args)
    open_board_or_die(session, args.board, args.json)

    ok = asyncio.run(session.dispatcher.add_list(title))
    fail_if_rejected(ok, failures, args.json)

    data = session.board.state
    list_id = data.list_order[-1]
    output_result(
        {"id": list_id, "title": title, "order": len(data.list_order) - 1},
        f'Created list "{title}" ({list_id[:8]})',
        args.json,
    )
    return 0


def list_rename(args) -> int:
    """Rename a list."""
    title = require_title(args.new_title, args.json)
    session, failures = connect(args)
    open_board_or_die(session, args.board, args.json)
    list_id = find_list(session.board.state, args.id, args.json)
    old_title = session.board.state.lists[list_id].title

    ok = asyncio.run(session.dispatcher.rename_list(list_id, title))
    fail_if_rejected(ok, failures, args.json)

    output_result(
        {"id": list_id, "old_title": old_title, "new_title": title},
        f'Renamed list "{old_title}" to "{title}"',
        args.json,
    )
    return 0


def list_move(args) -> int:
    """Move a list to a new position."""
    session, failures = connect(args)
    open_board_or_die(session, args.board, args.json)
    data = session.board.state
    list_id = find_list(data, args.id, args.json)

    # CLI uses 1-indexed positions, model uses 0-indexed
    if not 1 <= args.position <= len(data.list_order):
        error(f"Position must be between 1 and {len(data.list_order)}.", args.json)

    ok = asyncio.run(session.dispatcher.move_list(list_id, args.position - 1))
    fail_if_rejected(ok, failures, args.json)

    title = data.lists[list_id].title
    output_result(
        {"id": list_id, "title": title, "position": args.position},
        f'Moved list "{title}" to position {args.position}',
        args.json,
    )
    return 0


def list_delete(args) -> int:
    """Delete a list and its cards."""
    session, failures = connect(args)
    open_board_or_die(session, args.board, args.json)
    list_id = find_list(session.board.state, args.id, args.json)
    lst = session.board.state.lists[list_id]

    ok = asyncio.run(session.dispatcher.delete_list(list_id))
    fail_if_rejected(ok, failures, args.json)

    output_result(
        {"id": list_id, "title": lst.title, "cards": len(lst.card_ids)},
        f'Deleted list "{lst.title}"',
        args.json,
    )
    return 0
