"""Handlers for config subcommands."""

import sys

import yaml

from ghbuild.config.loader import get_config_value
from ghbuild.exceptions import ConfigError
from ghbuild.lib.command_helpers import require_config
from ghbuild.lib.output import dim, error, print_dict
from ghbuild.lib.paths import get_config_file, get_project_config_file


def handle(ctx: dict) -> int:
    """Handle config command.

    Parameters
    ----------
    ctx : dict
        Command context

    Returns
    -------
    int
        Exit code
    """
    args = ctx["args"]
    subcommand = getattr(args, "config_subcommand", None)

    if not subcommand:
        if hasattr(args, "_config_parser"):
            args._config_parser.print_help()
        else:
            error("No subcommand provided. Use 'ghbuild config --help' for usage.")
        return 1

    if subcommand == "show":
        return handle_show(ctx)
    elif subcommand == "path":
        return handle_path(ctx)
    elif subcommand == "get":
        return handle_get(ctx)
    else:
        error(f"Unknown subcommand: {subcommand}")
        return 1


def handle_show(ctx: dict) -> int:
    """Show current configuration.

    Parameters
    ----------
    ctx : dict
        Command context

    Returns
    -------
    int
        Exit code
    """
    args = ctx["args"]

    try:
        config = require_config(ctx)
    except ConfigError as e:
        error(str(e))
        return 1

    settings = {key: value for key, value in config.items() if key != "_meta"}

    if getattr(args, "raw", False):
        yaml.dump(settings, sys.stdout, default_flow_style=False, sort_keys=False)
        return 0

    print("Configuration:")
    print_dict(settings)

    sources = config.get("_meta", {}).get("config_sources", [])
    print()
    if sources:
        print("Loaded from:")
        for source in sources:
            print(f"  - {source}")
    else:
        print("Loaded from: built-in defaults only")

    return 0


def handle_path(ctx: dict) -> int:
    """Show configuration file locations and whether they exist.

    Parameters
    ----------
    ctx : dict
        Command context

    Returns
    -------
    int
        Exit code
    """
    args = ctx["args"]
    user_config = getattr(args, "config", None) or get_config_file()

    for label, path in (("User config", user_config), ("Project config", get_project_config_file())):
        state = "exists" if path.exists() else "not found"
        print(f"{label}: {path}")
        dim(state)
    return 0


def handle_get(ctx: dict) -> int:
    """Get config value.

    Parameters
    ----------
    ctx : dict
        Command context

    Returns
    -------
    int
        Exit code
    """
    config = ctx["config"] or {}
    args = ctx["args"]

    value = get_config_value(config, args.key)
    if value is None:
        error(f"Key not found: {args.key}")
        return 1

    if isinstance(value, dict):
        print_dict(value)
    else:
        print(value)
    return 0
