"""
Command Helper Functions.

Helpers shared by ghbuild command handlers.

Functions
---------
require_config : Get configuration with validation
"""

from typing import TypedDict

from ghbuild.exceptions import ConfigError


class CommandContext(TypedDict):
    """
    Type-safe command context dictionary.

    Attributes
    ----------
    config : dict
        Loaded configuration dictionary.
    verbose : bool
        Enable verbose output.
    quiet : bool
        Suppress informational output.
    dry_run : bool
        Print mutating commands instead of running them.
    args : argparse.Namespace
        Parsed command-line arguments.
    """

    config: dict
    verbose: bool
    quiet: bool
    dry_run: bool
    args: object  # argparse.Namespace


def require_config(ctx: CommandContext) -> dict:
    """
    Ensure configuration is loaded and return it.

    Parameters
    ----------
    ctx : CommandContext
        Command context dictionary.

    Returns
    -------
    dict
        Configuration dictionary.

    Raises
    ------
    ConfigError
        If configuration is not loaded or is empty.
    """
    config = ctx.get("config")
    if not config:
        raise ConfigError("Configuration not loaded")
    return config
