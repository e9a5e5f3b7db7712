"""Configuration inspection commands.

Available subcommands:
    ghbuild config show    Show merged configuration
    ghbuild config path    Show configuration file locations
    ghbuild config get     Get one config value
"""

from .handlers import handle
from .parser import register_parser

__all__ = ["register_parser", "handle"]
