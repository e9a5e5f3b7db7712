"""Repository reference parsing, sync and build operations for the github command."""

import logging
from dataclasses import dataclass
from pathlib import Path

from ghbuild.exceptions import BuildDescriptorError, ValidationError
from ghbuild.lib import git
from ghbuild.lib.output import info

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "master"
DEFAULT_REMOTE_URL = "https://github.com/{repo}.git"


@dataclass(frozen=True)
class RepoRef:
    """
    A GitHub repository and the branch to build.

    Attributes
    ----------
    repo : str
        ``owner/name`` identifier.
    branch : str
        Branch to check out.
    """

    repo: str
    branch: str = DEFAULT_BRANCH


def parse_repo_ref(value: str, default_branch: str = DEFAULT_BRANCH) -> RepoRef:
    """
    Parse ``owner/repo`` or ``owner/repo:branch``.

    Only the colon split is performed; the identifier itself is not checked,
    a malformed one shows up as a clone failure.

    Parameters
    ----------
    value : str
        Repository reference from the command line.
    default_branch : str, optional
        Branch used when none is given, by default "master".

    Returns
    -------
    RepoRef
        Parsed reference.

    Raises
    ------
    ValidationError
        If the repository part is empty.

    Examples
    --------
    >>> parse_repo_ref("acme/widgets")
    RepoRef(repo='acme/widgets', branch='master')
    >>> parse_repo_ref("acme/widgets:dev")
    RepoRef(repo='acme/widgets', branch='dev')
    """
    parts = value.split(":")
    repo = parts[0].strip()
    if not repo:
        raise ValidationError(f"Missing repository in {value!r}, expected <owner>/<repo>[:branch]")

    branch = parts[1].strip() if len(parts) > 1 else ""
    return RepoRef(repo=repo, branch=branch or default_branch)


def derive_image_name(repo: str, image_name: str | None = None) -> str:
    """
    Return the image name: the explicit one, else the text after the last ``/``.

    Examples
    --------
    >>> derive_image_name("acme/widgets")
    'widgets'
    >>> derive_image_name("acme/widgets", "custom-name")
    'custom-name'
    """
    if image_name:
        return image_name

    derived = repo.rsplit("/", 1)[-1]
    if not derived:
        raise ValidationError(f"Cannot derive an image name from {repo!r}, pass one explicitly")
    return derived


def sync_repository(
    ref: RepoRef,
    repo_path: Path,
    runner,
    remote_url: str = DEFAULT_REMOTE_URL,
) -> str:
    """
    Bring the local clone up to date and check out the requested branch.

    Clones when ``repo_path`` does not exist, fetches when it does, then
    force-checks-out ``origin/<branch>`` discarding local changes.

    Parameters
    ----------
    ref : RepoRef
        Repository and branch.
    repo_path : Path
        Clone location.
    runner : CommandRunner
        Runner for git.
    remote_url : str, optional
        URL template with a ``{repo}`` placeholder.

    Returns
    -------
    str
        "cloned" or "fetched".

    Raises
    ------
    CloneError, FetchError, CheckoutError
        If the corresponding git step fails.
    """
    url = remote_url.format(repo=ref.repo)

    if repo_path.exists():
        info(f"Fetching updates for {ref.repo} in {repo_path}")
        git.fetch(runner, repo_path)
        action = "fetched"
    else:
        info(f"Cloning {url} into {repo_path}")
        git.clone(runner, url, repo_path)
        action = "cloned"

    info(f"Checking out origin/{ref.branch}")
    git.checkout_force(runner, repo_path, ref.branch)

    logger.debug("Repository %s %s at %s", ref.repo, action, repo_path)
    return action


def find_build_descriptor(repo_path: Path, name: str = "Dockerfile") -> Path:
    """
    Locate the build descriptor directly inside ``repo_path``.

    Raises
    ------
    BuildDescriptorError
        If the file is missing.
    """
    descriptor = repo_path / name
    if not descriptor.is_file():
        raise BuildDescriptorError(
            f"No {name} found in {repo_path}, the repository can't be built as a container image"
        )
    return descriptor


def build_command(
    tool: str,
    image_name: str,
    tag: str,
    context_path: Path,
    no_cache: bool = True,
    remove_intermediate: bool = True,
) -> list[str]:
    """
    Assemble the container build command line.

    Examples
    --------
    >>> build_command("docker", "widgets", "master", Path("/var/lib/ghbuild/widgets"))
    ['docker', 'build', '--no-cache', '--rm', '-t', 'widgets:master', '/var/lib/ghbuild/widgets']
    """
    cmd = [tool, "build"]
    if no_cache:
        cmd.append("--no-cache")
    if remove_intermediate:
        cmd.append("--rm")
    cmd.extend(["-t", f"{image_name}:{tag}", str(context_path)])
    return cmd


def build_image(runner, cmd: list[str]) -> int:
    """
    Run the build, streaming its output, and return its exit status.

    The status is not interpreted here; it becomes the process exit status.
    """
    result = runner.run(cmd, capture=False)
    return result.returncode
