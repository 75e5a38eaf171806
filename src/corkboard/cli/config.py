"""Handlers for 'corkboard config' commands."""

from corkboard.cli._common import error, output_json, read_settings, repo_path_or_die
from corkboard.git import CORKBOARD_DEFAULTS, coerce_value, to_git_key, write_git_config_key


def config_get(args) -> int:
    """Print corkboard settings, or one of them."""
    repo_path = repo_path_or_die(args.repo, args.json)
    settings = read_settings(repo_path, args.json)

    if args.key:
        key = args.key.replace("-", "_")
        if key not in settings:
            error(f"Unknown setting '{args.key}'.", args.json)
        settings = {key: settings[key]}

    if args.json:
        output_json(settings)
    else:
        for key, value in settings.items():
            print(f"{to_git_key(key)} = {value}")

    return 0


def config_set(args) -> int:
    """Write one corkboard setting to the repository's git config."""
    repo_path = repo_path_or_die(args.repo, args.json)
    git_key = args.key.replace("_", "-")
    if git_key not in CORKBOARD_DEFAULTS:
        error(f"Unknown setting '{args.key}'. Known: {', '.join(CORKBOARD_DEFAULTS)}", args.json)
    try:
        value = coerce_value(git_key, args.value)
    except ValueError:
        error(f"Invalid value for {git_key}: {args.value!r}", args.json)

    write_git_config_key(repo_path, "corkboard", git_key.replace("-", "_"), value)

    if args.json:
        output_json({git_key.replace("-", "_"): value})
    else:
        print(f"{git_key} = {value}")
    return 0
