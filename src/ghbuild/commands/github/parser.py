"""Argument parser for the github command."""

from typing import Any

from ghbuild.lib.formatters import CapitalizedHelpFormatter

from .credentials import CredentialMode


def register_parser(subparsers: Any) -> None:
    """Register the github command parser.

    Parameters
    ----------
    subparsers : Any
        Subparsers from main argument parser
    """
    parser = subparsers.add_parser(
        "github",
        help="Build an image from a GitHub repository",
        description=(
            "Clone (or update) a GitHub repository, check out a branch and build\n"
            "its Dockerfile into <image_name>:<branch>."
        ),
        epilog="""Examples:
  ghbuild github acme/widgets
  ghbuild github acme/widgets:dev
  ghbuild github acme/widgets:dev custom-name
""",
        formatter_class=CapitalizedHelpFormatter,
    )
    parser.add_argument(
        "repo",
        metavar="OWNER/REPO[:BRANCH]",
        help="GitHub repository, optionally followed by :branch (default: master)",
    )
    parser.add_argument(
        "image_name",
        nargs="?",
        metavar="IMAGE_NAME",
        help="Image name (default: repository name)",
    )
    parser.add_argument(
        "--credentials",
        choices=[mode.value for mode in CredentialMode],
        help="Answer the first-run credential question without prompting",
    )
