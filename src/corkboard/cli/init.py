"""Handler for 'corkboard init'."""

import asyncio
from pathlib import Path

from corkboard.cli._common import error, output_json, read_settings
from corkboard.gateway.gitstore import GitGateway
from corkboard.git import has_branch_sync, init_repo, is_git_repo
from corkboard.session import Session

DEFAULT_LISTS = ("Todo", "Doing", "Done")


async def _create_board(session: Session, title: str) -> bool:
    """Create a board with the default lists."""
    if not await session.workspace.create_board(title):
        return False
    board = session.boards.state[-1]
    await session.open_board(board.id)
    for name in DEFAULT_LISTS:
        if not await session.dispatcher.add_list(name):
            return False
    return True


def init_board(args) -> int:
    """Initialize a corkboard branch with one board in the repository."""
    repo_path = Path(args.repo).resolve()

    if not is_git_repo(repo_path):
        init_repo(repo_path)

    branch = read_settings(repo_path, args.json)["branch"]
    gateway = GitGateway(repo_path, branch=branch)

    if has_branch_sync(repo_path, branch):
        boards = asyncio.run(gateway.list_boards())
        if args.json:
            output_json({"repo_path": str(repo_path), "boards": [b.title for b in boards], "created": False})
        else:
            print(f"Board already initialized at {repo_path}")
        return 0

    asyncio.run(gateway.initialize())
    title = args.title or repo_path.name
    failures = []
    session = Session(gateway, notify=failures.append)
    if not asyncio.run(_create_board(session, title)):
        error(failures[-1].message if failures else "Failed to create board.", args.json)

    if args.json:
        output_json({"repo_path": str(repo_path), "boards": [title], "lists": list(DEFAULT_LISTS), "created": True})
    else:
        print(f"Initialized corkboard at {repo_path}")
        print(f"Board: {title}")
        print(f"Lists: {', '.join(DEFAULT_LISTS)}")

    return 0
