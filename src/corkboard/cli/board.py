"""Handlers for 'corkboard board' commands."""

import asyncio

from corkboard.cli._common import (
    board_to_dict,
    config_value,
    connect,
    fail_if_rejected,
    find_board,
    open_board_or_die,
    output_json,
    output_result,
    require_title,
)


def board_list(args) -> int:
    """List all boards."""
    session, _ = connect(args)
    boards = asyncio.run(session.load_boards())

    if args.json:
        output_json([{"id": b.id, "title": b.title} for b in boards])
    else:
        for b in boards:
            print(f"{b.id[:8]}  {b.title}")

    return 0


def board_show(args) -> int:
    """Print a board's lists and cards."""
    session, _ = connect(args)
    board = open_board_or_die(session, args.board, args.json)
    data = session.board.state

    if args.json:
        output_json(board_to_dict(board, data))
        return 0

    show_order = config_value(args, "show_order")
    print(board.title)
    for i, lst in enumerate(data.ordered_lists()):
        prefix = f"[{i}] " if show_order else ""
        print(f"\n{prefix}{lst.title}")
        for j, card in enumerate(data.cards_in(lst.id)):
            marker = f"[{j}]" if show_order else f"{j + 1}."
            print(f"  {marker} {card.title}  ({card.id[:8]})")

    return 0


def board_add(args) -> int:
    """Create a board."""
    title = require_title(args.title, args.json)
    session, failures = connect(args)
    asyncio.run(session.load_boards())

    ok = asyncio.run(session.workspace.create_board(title))
    fail_if_rejected(ok, failures, args.json)

    board = session.boards.state[-1]
    output_result({"id": board.id, "title": board.title}, f'Created board "{board.title}" ({board.id[:8]})', args.json)
    return 0


def board_rename(args) -> int:
    """Rename a board."""
    title = require_title(args.new_title, args.json)
    session, failures = connect(args)
    boards = asyncio.run(session.load_boards())
    board = find_board(boards, args.id, args.json)

    ok = asyncio.run(session.workspace.rename_board(board.id, title))
    fail_if_rejected(ok, failures, args.json)

    output_result(
        {"id": board.id, "old_title": board.title, "new_title": title},
        f'Renamed board "{board.title}" to "{title}"',
        args.json,
    )
    return 0


def board_delete(args) -> int:
    """Delete a board with all its lists and cards."""
    session, failures = connect(args)
    boards = asyncio.run(session.load_boards())
    board = find_board(boards, args.id, args.json)

    ok = asyncio.run(session.workspace.delete_board(board.id))
    fail_if_rejected(ok, failures, args.json)

    output_result({"id": board.id, "title": board.title}, f'Deleted board "{board.title}"', args.json)
    return 0
