"""
Git Command Wrappers.

Thin wrappers around the git operations ghbuild needs. Each wrapper runs one
command through a :class:`~ghbuild.lib.process.CommandRunner` and raises a
specific :class:`~ghbuild.exceptions.GhbuildError` subclass on failure.

Functions
---------
parse_git_version : Extract the numeric version from ``git --version`` output
version_tuple : Turn "1.7.9.0" into (1, 7, 9, 0)
check_git : Verify git is installed and recent enough
clone : Clone a remote into a directory
fetch : Fetch updates in an existing clone
checkout_force : Force-checkout ``origin/<branch>``
set_credential_helper : Set the global ``credential.helper``
"""

import logging
import re
from itertools import zip_longest
from pathlib import Path

from ghbuild.exceptions import CheckoutError, CloneError, CommandError, ConfigError, FetchError, PreflightError

logger = logging.getLogger(__name__)

GIT = "git"

_VERSION_RE = re.compile(r"(\d+(?:\.\d+)*)")


def version_tuple(version: str) -> tuple[int, ...]:
    """
    Convert a dotted version string into a tuple of integers.

    Examples
    --------
    >>> version_tuple("1.7.9.0")
    (1, 7, 9, 0)
    """
    return tuple(int(part) for part in version.split("."))


def parse_git_version(output: str) -> tuple[int, ...]:
    """
    Extract the version from ``git --version`` output.

    Parameters
    ----------
    output : str
        Output such as ``git version 2.39.2`` or
        ``git version 2.39.3 (Apple Git-145)``.

    Returns
    -------
    tuple of int
        Version components, e.g. ``(2, 39, 2)``.

    Raises
    ------
    PreflightError
        If no version number is present.

    Examples
    --------
    >>> parse_git_version("git version 2.43.0.windows.1")
    (2, 43, 0)
    """
    match = _VERSION_RE.search(output)
    if not match:
        raise PreflightError(f"Could not determine git version from: {output.strip()!r}")
    return version_tuple(match.group(1))


def is_version_below(version: tuple[int, ...], minimum: tuple[int, ...]) -> bool:
    """Compare two version tuples, padding the shorter one with zeros."""
    for have, want in zip_longest(version, minimum, fillvalue=0):
        if have != want:
            return have < want
    return False


def check_git(runner, min_version: str) -> tuple[int, ...]:
    """
    Verify that git is installed and at least ``min_version``.

    Parameters
    ----------
    runner : CommandRunner
        Runner used to call ``git --version``.
    min_version : str
        Minimum acceptable version, dotted (e.g. "1.7.9.0").

    Returns
    -------
    tuple of int
        The installed git version.

    Raises
    ------
    ConfigError
        If ``min_version`` is not a dotted list of numbers.
    PreflightError
        If git is missing, its version cannot be read, or it is too old.
    """
    try:
        minimum = version_tuple(str(min_version))
    except ValueError as e:
        raise ConfigError(
            f"Invalid git.min_version {min_version!r}, expected dotted numbers such as 1.7.9.0"
        ) from e

    if runner.which(GIT) is None:
        raise PreflightError("git is not installed or not in PATH")

    result = runner.run([GIT, "--version"], read_only=True)
    if not result.ok:
        raise PreflightError("git is installed but 'git --version' failed", {"exit_code": result.returncode})

    version = parse_git_version(result.stdout)
    logger.debug("Found git %s", ".".join(map(str, version)))

    if is_version_below(version, minimum):
        raise PreflightError(
            f"git {'.'.join(map(str, version))} is too old, "
            f"version {min_version} or newer is required"
        )
    return version


def clone(runner, url: str, destination: Path) -> None:
    """Clone ``url`` into ``destination``, raising CloneError on failure."""
    runner.run([GIT, "clone", url, str(destination)]).check(
        CloneError, f"Failed to clone {url} into {destination}"
    )


def fetch(runner, repo_path: Path) -> None:
    """Fetch updates for the clone at ``repo_path``. Nothing is merged."""
    runner.run([GIT, "fetch"], cwd=repo_path).check(FetchError, f"Failed to fetch updates in {repo_path}")


def checkout_force(runner, repo_path: Path, branch: str) -> None:
    """
    Force-checkout ``origin/<branch>`` in ``repo_path``.

    Local modifications are discarded: the clone is a disposable cache.

    Raises
    ------
    CheckoutError
        If git cannot check out the branch.
    """
    runner.run([GIT, "checkout", "-f", f"origin/{branch}"], cwd=repo_path).check(
        CheckoutError,
        f"Could not check out origin/{branch}. Does the branch '{branch}' exist?",
    )


def set_credential_helper(runner, helper: str) -> None:
    """Set the global git ``credential.helper`` to ``helper``."""
    runner.run([GIT, "config", "--global", "credential.helper", helper]).check(
        CommandError, f"Failed to set git credential.helper to '{helper}'"
    )
