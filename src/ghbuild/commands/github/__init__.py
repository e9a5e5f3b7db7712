"""Build a container image from a GitHub repository.

Usage:
    ghbuild github <owner>/<repo>[:branch] [image_name]
"""

from .handlers import handle
from .parser import register_parser

__all__ = ["register_parser", "handle"]
