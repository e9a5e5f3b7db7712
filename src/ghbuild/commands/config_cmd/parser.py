"""Argument parser for config command."""

from typing import Any

from ghbuild.lib.formatters import CapitalizedHelpFormatter, create_subparsers


def register_parser(subparsers: Any) -> None:
    """Register config command parser.

    Parameters
    ----------
    subparsers : Any
        Subparsers from main argument parser
    """
    parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
        description="Inspect the configuration ghbuild runs with.",
        epilog="""Examples:
  ghbuild config show
  ghbuild config path
  ghbuild config get cache.dir
""",
        formatter_class=CapitalizedHelpFormatter,
    )
    # Store parser for help printing
    parser.set_defaults(_config_parser=parser)

    config_subparsers = create_subparsers(parser, "config_subcommand")

    show_parser = config_subparsers.add_parser("show", help="Show merged configuration")
    show_parser.add_argument("--raw", action="store_true", help="Show raw YAML")

    config_subparsers.add_parser("path", help="Show configuration file locations")

    get_parser = config_subparsers.add_parser("get", help="Get config value")
    get_parser.add_argument("key", help="Config key in dot notation (e.g., build.command)")
