"""CLI argument parser and dispatch for corkboard."""

import argparse

from corkboard.cli.board import board_add, board_delete, board_list, board_rename, board_show
from corkboard.cli.card import card_add, card_delete, card_move, card_rename
from corkboard.cli.config import config_get, config_set
from corkboard.cli.init import init_board
from corkboard.cli.lists import list_add, list_delete, list_move, list_rename


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--repo", default=".", help="Path to git repository (default: .)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")

    on_board = argparse.ArgumentParser(add_help=False)
    on_board.add_argument("--board", help="Board ID, ID prefix or title (default: the only board)")

    parser = argparse.ArgumentParser(
        prog="corkboard",
        description="Kanban boards stored in git",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- init ---
    init_p = nouns.add_parser("init", help="Initialize corkboard in a repository", parents=[common])
    init_p.add_argument("--title", help="Title of the first board (default: directory name)")
    init_p.set_defaults(func=init_board)

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_list_p = board_verbs.add_parser("list", help="List boards", parents=[common])
    board_list_p.set_defaults(func=board_list)

    board_show_p = board_verbs.add_parser("show", help="Show lists and cards", parents=[common, on_board])
    board_show_p.set_defaults(func=board_show)

    board_add_p = board_verbs.add_parser("add", help="Create a board", parents=[common])
    board_add_p.add_argument("title", help="Board title")
    board_add_p.set_defaults(func=board_add)

    board_rename_p = board_verbs.add_parser("rename", help="Rename a board", parents=[common])
    board_rename_p.add_argument("id", help="Board ID, ID prefix or title")
    board_rename_p.add_argument("new_title", help="New board title")
    board_rename_p.set_defaults(func=board_rename)

    board_delete_p = board_verbs.add_parser("delete", help="Delete a board", parents=[common])
    board_delete_p.add_argument("id", help="Board ID, ID prefix or title")
    board_delete_p.set_defaults(func=board_delete)

    # board with no verb = show
    board_p.set_defaults(func=board_show, board=None)

    # --- list ---
    list_p = nouns.add_parser("list", help="List operations", parents=[common])
    list_verbs = list_p.add_subparsers(dest="verb")

    list_add_p = list_verbs.add_parser("add", help="Append a list", parents=[common, on_board])
    list_add_p.add_argument("title", help="List title")
    list_add_p.set_defaults(func=list_add)

    list_rename_p = list_verbs.add_parser("rename", help="Rename a list", parents=[common, on_board])
    list_rename_p.add_argument("id", help="List ID, ID prefix or title")
    list_rename_p.add_argument("new_title", help="New list title")
    list_rename_p.set_defaults(func=list_rename)

    list_move_p = list_verbs.add_parser("move", help="Move a list", parents=[common, on_board])
    list_move_p.add_argument("id", help="List ID, ID prefix or title")
    list_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    list_move_p.set_defaults(func=list_move)

    list_delete_p = list_verbs.add_parser("delete", help="Delete a list and its cards", parents=[common, on_board])
    list_delete_p.add_argument("id", help="List ID, ID prefix or title")
    list_delete_p.set_defaults(func=list_delete)

    # --- card ---
    card_p = nouns.add_parser("card", help="Card operations", parents=[common])
    card_verbs = card_p.add_subparsers(dest="verb")

    card_add_p = card_verbs.add_parser("add", help="Create a card", parents=[common, on_board])
    card_add_p.add_argument("title", help="Card title")
    card_add_p.add_argument("--list", dest="list", help="Target list (default: first list)")
    card_add_p.set_defaults(func=card_add)

    card_rename_p = card_verbs.add_parser("rename", help="Rename a card", parents=[common, on_board])
    card_rename_p.add_argument("id", help="Card ID, ID prefix or title")
    card_rename_p.add_argument("new_title", help="New card title")
    card_rename_p.set_defaults(func=card_rename)

    card_move_p = card_verbs.add_parser("move", help="Move a card", parents=[common, on_board])
    card_move_p.add_argument("id", help="Card ID, ID prefix or title")
    card_move_p.add_argument("--list", dest="list", help="Target list (default: current list)")
    card_move_p.add_argument("--position", type=int, help="Position in list (1-indexed, default: end)")
    card_move_p.set_defaults(func=card_move)

    card_delete_p = card_verbs.add_parser("delete", help="Delete a card", parents=[common, on_board])
    card_delete_p.add_argument("id", help="Card ID, ID prefix or title")
    card_delete_p.set_defaults(func=card_delete)

    # --- config ---
    config_p = nouns.add_parser("config", help="Read or write settings", parents=[common])
    config_verbs = config_p.add_subparsers(dest="verb")

    config_get_p = config_verbs.add_parser("get", help="Show settings", parents=[common])
    config_get_p.add_argument("key", nargs="?", help="Setting name")
    config_get_p.set_defaults(func=config_get)

    config_set_p = config_verbs.add_parser("set", help="Change a setting", parents=[common])
    config_set_p.add_argument("key", help="Setting name")
    config_set_p.add_argument("value", help="New value")
    config_set_p.set_defaults(func=config_set)

    # config with no verb = get
    config_p.set_defaults(func=config_get, key=None)

    return parser
