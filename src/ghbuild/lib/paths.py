"""Path management for ghbuild: XDG config files, credential files and the repository cache."""

import logging
import os
from pathlib import Path

from ghbuild.exceptions import CacheDirError
from ghbuild.lib.output import info, success

logger = logging.getLogger(__name__)

APP_NAME = "ghbuild"
DEFAULT_CACHE_DIR = "/var/lib/ghbuild"


def get_config_dir() -> Path:
    """
    Get the configuration directory following XDG Base Directory spec.

    Returns
    -------
    Path
        Path to ~/.config/ghbuild/ or $XDG_CONFIG_HOME/ghbuild/.
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"

    return base / APP_NAME


def get_config_file() -> Path:
    """
    Get path to the user configuration file.

    Returns
    -------
    Path
        Path to config.yaml in the configuration directory.
    """
    return get_config_dir() / "config.yaml"


def get_project_config_file() -> Path:
    """
    Get path to project-local configuration file.

    Returns
    -------
    Path
        Path to ./ghbuild.yaml in the current working directory.
    """
    return Path.cwd() / "ghbuild.yaml"


def expand_path(value: str | Path) -> Path:
    """Expand ``~`` and environment variables in a configured path."""
    return Path(os.path.expandvars(os.path.expanduser(str(value))))


def get_cache_dir(config: dict) -> Path:
    """
    Get the base directory holding cloned repositories.

    Parameters
    ----------
    config : dict
        Loaded configuration. ``cache.dir`` is used when set; the
        ``GHBUILD_CACHE_DIR`` environment variable overrides it at load time.

    Returns
    -------
    Path
        Base cache directory (not necessarily existing yet).
    """
    cache_dir = config.get("cache", {}).get("dir") or DEFAULT_CACHE_DIR
    return expand_path(cache_dir)


def get_repo_path(cache_dir: Path, image_name: str) -> Path:
    """
    Get the clone location for one image.

    The path depends only on the image name, so repeated builds of the same
    image reuse the same clone.

    Parameters
    ----------
    cache_dir : Path
        Base cache directory.
    image_name : str
        Image name the clone is built into.

    Returns
    -------
    Path
        ``cache_dir / image_name``.
    """
    return cache_dir / image_name


def ensure_cache_dir(cache_dir: Path, runner, use_sudo: bool = True) -> Path:
    """
    Ensure the repository cache directory exists and return it.

    The default location lives under /var/lib, which normally needs root to
    create. With ``use_sudo`` the directory is created with ``sudo mkdir -p``
    and handed over to the current user with ``sudo chown`` so git can clone
    into it afterwards.

    Parameters
    ----------
    cache_dir : Path
        Directory to create.
    runner : CommandRunner
        Runner used for the privileged commands.
    use_sudo : bool, optional
        Create the directory through sudo, by default True.

    Returns
    -------
    Path
        The cache directory.

    Raises
    ------
    CacheDirError
        If the directory could not be created.
    """
    if cache_dir.is_dir():
        logger.debug("Cache directory %s already exists", cache_dir)
        return cache_dir

    info(f"Repository cache {cache_dir} does not exist, creating it...")

    if use_sudo:
        owner = f"{os.getuid()}:{os.getgid()}"
        for cmd in (["sudo", "mkdir", "-p", str(cache_dir)], ["sudo", "chown", owner, str(cache_dir)]):
            result = runner.run(cmd)
            if not result.ok:
                detail = result.stderr.strip() or f"exit code {result.returncode}"
                raise CacheDirError(f"Failed to create cache directory {cache_dir}: {detail}")
    elif not runner.dry_run:
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheDirError(f"Failed to create cache directory {cache_dir}: {e}") from e

    if not runner.dry_run:
        success(f"Created {cache_dir}")
    return cache_dir
