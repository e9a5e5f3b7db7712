"""Main CLI entry point for ghbuild."""

import argparse
import sys
from pathlib import Path

from ghbuild import __version__
from ghbuild.config.loader import ConfigLoader
from ghbuild.exceptions import ConfigError
from ghbuild.lib.formatters import CapitalizedHelpFormatter, UsageErrorParser, create_subparsers
from ghbuild.lib.logger import setup_logger
from ghbuild.lib.output import error, set_color_enabled, set_quiet


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser with all commands and subcommands.

    Usage errors (including a missing required argument) exit with status 1.

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser with all commands registered.
    """
    parser = UsageErrorParser(
        prog="ghbuild",
        description="Build container images straight from GitHub repositories",
        formatter_class=CapitalizedHelpFormatter,
    )

    # Global options
    parser.add_argument("--version", "-v", action="version", version=f"ghbuild {__version__}")
    parser.add_argument("--config", "-c", type=Path, help="Config file path (default: auto-detect)")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet mode (errors only)")
    parser.add_argument("--dry-run", action="store_true", help="Show what would happen")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    parser._optionals.title = "Options"

    subparsers = create_subparsers(parser, "command", help="Available commands", title="Commands")

    from ghbuild.commands import config_cmd, github

    github.register_parser(subparsers)
    config_cmd.register_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point for the ghbuild command.

    Parses command-line arguments, loads configuration, creates command context,
    and routes execution to the appropriate command handler.

    Parameters
    ----------
    argv : list of str, optional
        Arguments to parse instead of ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code: 0 for success, 1 for command failure, 2 for configuration error,
        130 for keyboard interrupt, or the build tool's own exit status.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        set_color_enabled(False)
    if args.quiet:
        set_quiet(True)

    setup_logger(verbose=args.verbose)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = ConfigLoader(config_path=args.config).load()
    except ConfigError as e:
        error(f"Failed to load configuration: {e}")
        return 2

    ctx = {
        "config": config,
        "verbose": args.verbose,
        "quiet": args.quiet,
        "dry_run": args.dry_run,
        "args": args,
    }

    try:
        return dispatch(ctx)
    except KeyboardInterrupt:
        print()
        return 130
    except Exception as e:
        error(f"Command failed: {e}")
        if ctx["verbose"]:
            import traceback

            traceback.print_exc()
        return 1


def dispatch(ctx: dict) -> int:
    """Route to the handler of the selected command."""
    command = ctx["args"].command

    if command == "github":
        from ghbuild.commands import github

        return github.handle(ctx)
    elif command == "config":
        from ghbuild.commands import config_cmd

        return config_cmd.handle(ctx)

    error(f"Command '{command}' not yet implemented")
    return 1


if __name__ == "__main__":
    sys.exit(main())
