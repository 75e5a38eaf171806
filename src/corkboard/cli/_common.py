"""Shared helpers for CLI command handlers."""

import asyncio
import json
import logging
import sys
from pathlib import Path

from corkboard.errors import OperationFailed
from corkboard.gateway.gitstore import GitGateway
from corkboard.git import is_git_repo, read_git_config
from corkboard.model.board import Board, BoardData
from corkboard.session import Session


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
        level=logging.INFO if verbose else logging.WARNING,
    )


def repo_path_or_die(repo: str, json_mode: bool) -> Path:
    """Resolve the repo path. Exit 1 if it is not a git repository."""
    repo_path = Path(repo).resolve()
    if not is_git_repo(repo_path):
        error(f"{repo_path} is not a git repository. Run 'corkboard init' first.", json_mode)
    return repo_path


def read_settings(repo_path: Path, json_mode: bool) -> dict:
    """Read the corkboard config section. Exit 1 if a value is malformed."""
    try:
        return read_git_config(repo_path)["corkboard"]
    except ValueError as e:
        error(f"Invalid git config: {e}", json_mode)


def connect(args) -> tuple[Session, list[OperationFailed]]:
    """Build a Session over the repository's git gateway.

    Returns the session and the list its failures are collected into.
    """
    repo_path = repo_path_or_die(args.repo, args.json)
    config = read_settings(repo_path, args.json)
    failures: list[OperationFailed] = []
    gateway = GitGateway(repo_path, branch=config["branch"])
    session = Session(gateway, notify=failures.append, timeout=config["request_timeout"])
    return session, failures


def config_value(args, key: str):
    """Read one corkboard config value for the repo in args."""
    return read_settings(Path(args.repo).resolve(), args.json)[key]


def _match(items, key: str, title_of):
    """Find an item by exact id, unique id prefix, or case-insensitive title."""
    for item in items:
        if item.id == key:
            return item
    by_prefix = [item for item in items if item.id.startswith(key)]
    if len(by_prefix) == 1:
        return by_prefix[0]
    lowered = key.strip().lower()
    by_title = [item for item in items if title_of(item).lower() == lowered]
    if len(by_title) == 1:
        return by_title[0]
    return None


def find_board(boards: tuple[Board, ...], key: str | None, json_mode: bool) -> Board:
    """Lookup a board. With no key, the only board is used.

    Exit 1 listing available boards if not found.
    """
    if key is None and len(boards) == 1:
        return boards[0]
    board = _match(boards, key, lambda b: b.title) if key is not None else None
    if board is not None:
        return board
    available = [f"  {b.id[:8]}  {b.title}" for b in boards]
    what = f"Board '{key}' not found." if key is not None else "Several boards exist; pass --board."
    error(f"{what} Available:\n" + "\n".join(available), json_mode)


def find_list(data: BoardData, key: str, json_mode: bool) -> str:
    """Lookup a list id by id, prefix or title. Exit 1 if not found."""
    lst = _match(data.ordered_lists(), key, lambda item: item.title)
    if lst is not None:
        return lst.id
    available = [f"  {item.id[:8]}  {item.title}" for item in data.ordered_lists()]
    error(f"List '{key}' not found. Available:\n" + "\n".join(available), json_mode)


def find_card(data: BoardData, key: str, json_mode: bool) -> str:
    """Lookup a card id by id, prefix or title. Exit 1 if not found."""
    card = _match(list(data.cards.values()), key, lambda item: item.title)
    if card is not None:
        return card.id
    error(f"Card '{key}' not found.", json_mode)


def board_to_dict(board: Board, data: BoardData) -> dict:
    """Board with its lists and cards, order taken from position."""
    return {
        "id": board.id,
        "title": board.title,
        "lists": [
            {
                "id": lst.id,
                "title": lst.title,
                "order": i,
                "cards": [{"id": c.id, "title": c.title, "order": j} for j, c in enumerate(data.cards_in(lst.id))],
            }
            for i, lst in enumerate(data.ordered_lists())
        ],
    }


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def fail_if_rejected(ok: bool, failures: list[OperationFailed], json_mode: bool) -> None:
    """Exit 1 with the dispatcher's failure message if the mutation rolled back."""
    if ok:
        return
    message = failures[-1].message if failures else "Operation failed."
    error(message, json_mode)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def open_board_or_die(session: Session, key: str | None, json_mode: bool) -> Board:
    """Load the boards, pick one by key and make it the session's open board."""
    boards = asyncio.run(session.load_boards())
    board = find_board(boards, key, json_mode)
    asyncio.run(session.open_board(board.id))
    return board


def require_title(title: str, json_mode: bool) -> str:
    """Return the trimmed title. Exit 1 if it is blank."""
    title = title.strip()
    if not title:
        error("Title must not be empty.", json_mode)
    return title
