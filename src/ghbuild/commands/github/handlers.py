"""Handler for the github command."""

from typing import Any

from ghbuild.config.loader import as_bool
from ghbuild.exceptions import ConfigError, GhbuildError
from ghbuild.lib import git
from ghbuild.lib.command_helpers import require_config
from ghbuild.lib.output import error, header, info, success, warning
from ghbuild.lib.paths import ensure_cache_dir, get_cache_dir, get_repo_path
from ghbuild.lib.process import CommandRunner, format_command

from .credentials import CredentialMode, CredentialSettings, choose_credential_mode, setup_credentials
from .operations import (
    build_command,
    build_image,
    derive_image_name,
    find_build_descriptor,
    parse_repo_ref,
    sync_repository,
)


def handle(ctx: dict[str, Any]) -> int:
    """Handle the github command.

    Runs the whole pipeline: preflight, credential setup, cache directory,
    sync, build.

    Parameters
    ----------
    ctx : dict[str, Any]
        Command context with config and args

    Returns
    -------
    int
        2 for a configuration error, 1 for any other detected failure,
        otherwise the build tool's exit status
    """
    args = ctx["args"]

    try:
        config = require_config(ctx)
    except ConfigError as e:
        error(str(e))
        return 2

    runner = CommandRunner(dry_run=ctx["dry_run"], verbose=ctx["verbose"])

    try:
        return run_pipeline(config, args, runner)
    except ConfigError as e:
        error(str(e))
        return 2
    except GhbuildError as e:
        error(str(e))
        return 1


def run_pipeline(config: dict, args: Any, runner: CommandRunner) -> int:
    """Run every stage in order; any stage error propagates as GhbuildError.

    Parameters
    ----------
    config : dict
        Loaded configuration
    args : Any
        Parsed arguments with ``repo``, ``image_name`` and ``credentials``
    runner : CommandRunner
        Runner for every external command

    Returns
    -------
    int
        The build tool's exit status
    """
    git_config = config.get("git", {})
    build_config = config.get("build", {})
    cache_config = config.get("cache", {})

    # Pure parsing first so bad input fails before anything touches disk
    ref = parse_repo_ref(args.repo, default_branch=git_config.get("default_branch") or "master")
    image_name = derive_image_name(ref.repo, getattr(args, "image_name", None))

    git.check_git(runner, git_config.get("min_version", "1.7.9.0"))

    settings = CredentialSettings.from_config(config)
    preset = getattr(args, "credentials", None)
    chooser = (lambda: CredentialMode(preset)) if preset else choose_credential_mode
    setup_credentials(settings, runner, chooser=chooser)

    cache_dir = ensure_cache_dir(
        get_cache_dir(config),
        runner,
        use_sudo=as_bool(cache_config.get("use_sudo", True), "cache.use_sudo"),
    )
    repo_path = get_repo_path(cache_dir, image_name)

    header(f"Building {image_name}:{ref.branch} from {ref.repo}")
    sync_repository(
        ref,
        repo_path,
        runner,
        remote_url=git_config.get("remote_url") or "https://github.com/{repo}.git",
    )

    dockerfile = build_config.get("dockerfile") or "Dockerfile"
    if runner.dry_run and not repo_path.exists():
        warning(f"Skipping {dockerfile} check, {repo_path} does not exist yet (--dry-run)")
    else:
        find_build_descriptor(repo_path, dockerfile)

    cmd = build_command(
        build_config.get("command") or "docker",
        image_name,
        ref.branch,
        repo_path,
        no_cache=as_bool(build_config.get("no_cache", True), "build.no_cache"),
        remove_intermediate=as_bool(build_config.get("remove_intermediate", True), "build.remove_intermediate"),
    )
    if not runner.dry_run:
        info(f"Running: {format_command(cmd)}")
    returncode = build_image(runner, cmd)

    if returncode == 0:
        if not runner.dry_run:
            success(f"Image built: {image_name}:{ref.branch}")
    else:
        error(f"Build failed with exit code {returncode}")
    return returncode
