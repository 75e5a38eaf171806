"""Git config and plumbing for corkboard, with sync and async variants."""

import asyncio
import os
import subprocess
from pathlib import Path
from typing import Any

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

BRANCH_NAME = "corkboard"
NULL_SHA = "0" * 40

CORKBOARD_DEFAULTS = {
    "request-timeout": 30,
    "branch": BRANCH_NAME,
    "show-order": False,
}


def _python_key(git_key: str) -> str:
    """Convert git-style key (hyphenated) to Python-style (underscored)."""
    return git_key.replace("-", "_")


def to_git_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to git-style (hyphenated)."""
    return python_key.replace("_", "-")


def coerce_value(git_key: str, raw: str):
    """Type-coerce corkboard section values using defaults."""
    default = CORKBOARD_DEFAULTS.get(git_key)
    if default is None:
        return raw
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"corkboard.{git_key} must be a whole number, not {raw!r}") from None
    return raw


def read_git_config(repo_path: str | Path) -> dict[str, dict[str, Any]]:
    """Read git config into {section: {key: value}} dict.

    Skips subsectioned entries (e.g. remote "origin").
    Converts key hyphens to underscores. Applies type coercion
    for the corkboard section and fills in its defaults.
    """
    repo = _get_repo(repo_path)
    reader = repo.config_reader()
    result: dict[str, dict[str, Any]] = {}
    for section in reader.sections():
        if '"' in section:
            continue
        items: dict[str, Any] = {}
        for git_k, raw in reader.items(section):
            py_key = _python_key(git_k)
            if section == "corkboard":
                items[py_key] = coerce_value(git_k, raw)
            else:
                items[py_key] = raw
        result[section] = items
    corkboard = result.setdefault("corkboard", {})
    for git_k, default in CORKBOARD_DEFAULTS.items():
        corkboard.setdefault(_python_key(git_k), default)
    return result


def write_git_config_key(repo_path: str | Path, section: str, key: str, value) -> None:
    """Write one key to git config. key is python-style (underscores)."""
    git_k = to_git_key(key)
    repo = _get_repo(repo_path)
    writer = repo.config_writer("repository")
    if isinstance(value, bool):
        writer.set_value(section, git_k, str(value).lower())
    else:
        writer.set_value(section, git_k, str(value))
    writer.release()


def _get_repo(repo_path: str | Path) -> Repo:
    return Repo(repo_path)


def is_git_repo(path: str | Path) -> bool:
    """Check if path is a git repository."""
    try:
        Repo(path)
        return True
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False


def init_repo(path: str | Path) -> Repo:
    """Initialize a new git repository at path."""
    return Repo.init(path)


# --- Plumbing ---


def _commit_env(repo_path: str | Path) -> dict[str, str]:
    """Environment for commit-tree, with a fallback identity if none is set."""
    env = dict(os.environ)
    reader = _get_repo(repo_path).config_reader()
    name = reader.get_value("user", "name", default="")
    email = reader.get_value("user", "email", default="")
    if not name:
        env.setdefault("GIT_AUTHOR_NAME", "corkboard")
        env.setdefault("GIT_COMMITTER_NAME", "corkboard")
    if not email:
        env.setdefault("GIT_AUTHOR_EMAIL", "corkboard@localhost")
        env.setdefault("GIT_COMMITTER_EMAIL", "corkboard@localhost")
    return env


def _git(repo_path: str | Path, args: list[str], stdin: str | None = None, env=None) -> str:
    """Run a git command and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        input=stdin.encode("utf-8") if stdin is not None else None,
        capture_output=True,
        check=True,
        env=env,
    )
    return result.stdout.decode("utf-8").strip()


def has_branch_sync(repo_path: str | Path, branch: str = BRANCH_NAME) -> bool:
    """Check if a local branch exists."""
    repo = _get_repo(repo_path)
    return branch in [h.name for h in repo.heads]


def branch_tip(repo_path: str | Path, branch: str = BRANCH_NAME) -> str | None:
    """Commit hash at the tip of branch, or None if it does not exist."""
    repo = _get_repo(repo_path)
    if branch not in [h.name for h in repo.heads]:
        return None
    return repo.heads[branch].commit.hexsha


def read_file_at(repo_path: str | Path, commit: str, name: str) -> str | None:
    """Read a top-level file from a commit's tree, or None if absent."""
    repo = _get_repo(repo_path)
    tree = repo.commit(commit).tree
    try:
        blob = tree[name]
    except KeyError:
        return None
    return blob.data_stream.read().decode("utf-8")


def commit_file(
    repo_path: str | Path,
    name: str,
    content: str,
    message: str,
    parent: str | None,
    branch: str = BRANCH_NAME,
) -> str:
    """Commit a single-file tree on branch without touching the working tree.

    The ref only moves if it still points at parent, so a concurrent
    writer makes this raise CalledProcessError instead of being
    overwritten. Returns the new commit hash.
    """
    blob = _git(repo_path, ["hash-object", "-w", "--stdin"], stdin=content)
    tree = _git(repo_path, ["mktree"], stdin=f"100644 blob {blob}\t{name}\n")
    args = ["commit-tree", tree, "-m", message]
    if parent:
        args += ["-p", parent]
    commit = _git(repo_path, args, env=_commit_env(repo_path))
    _git(repo_path, ["update-ref", f"refs/heads/{branch}", commit, parent or NULL_SHA])
    return commit


# --- Async wrappers ---


async def has_branch(repo_path: str | Path, branch: str = BRANCH_NAME) -> bool:
    """Check if a branch exists in the repository."""
    return await asyncio.to_thread(has_branch_sync, repo_path, branch)
