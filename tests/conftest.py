"""Pytest configuration and shared fixtures."""

import copy
import logging
import os
from pathlib import Path
from unittest.mock import Mock

import pytest

from ghbuild.commands.github.credentials import CredentialSettings
from ghbuild.config.loader import DEFAULT_CONFIG
from ghbuild.lib import output


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep every test away from the real home directory and config.

    HOME, XDG_CONFIG_HOME and the working directory point into ``tmp_path``
    and any GHBUILD_* / LOG_* variables from the outer environment are removed.

    Returns
    -------
    Path
        The fake home directory.
    """
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    for name in ("LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("GHBUILD_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(work)

    return home


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """Disable colors and quiet mode so assertions see plain text."""
    monkeypatch.setattr(output, "_color_enabled", False)
    monkeypatch.setattr(output, "_quiet", False)


@pytest.fixture(autouse=True)
def reset_logger():
    """Undo setup_logger() so handlers never outlive the capture they were bound to."""
    yield
    logger = logging.getLogger("ghbuild")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def credential_settings(tmp_path):
    """Credential settings rooted in a temporary directory.

    Returns
    -------
    CredentialSettings
        Settings whose store and marker files do not exist yet.
    """
    return CredentialSettings(
        store_file=tmp_path / "creds" / ".git-credentials",
        marker_file=tmp_path / "creds" / ".no_prompting_for_credentials",
    )


@pytest.fixture
def cache_dir(tmp_path):
    """Existing repository cache directory."""
    path = tmp_path / "repos"
    path.mkdir()
    return path


@pytest.fixture
def mock_config(tmp_path, cache_dir, credential_settings):
    """Standard test configuration.

    Uses the built-in defaults with the cache and credential files moved into
    ``tmp_path`` and the marker already present, so the credential prompt is
    skipped unless a test removes it.

    Returns
    -------
    dict
        Test configuration dictionary.
    """
    credential_settings.marker_file.parent.mkdir(parents=True, exist_ok=True)
    credential_settings.marker_file.touch()

    config = copy.deepcopy(DEFAULT_CONFIG)
    config["cache"]["dir"] = str(cache_dir)
    config["cache"]["use_sudo"] = False
    config["credentials"]["store_file"] = str(credential_settings.store_file)
    config["credentials"]["marker_file"] = str(credential_settings.marker_file)
    config["_meta"] = {"config_sources": []}
    return config


def completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> Mock:
    """Build a stand-in for ``subprocess.CompletedProcess``."""
    return Mock(returncode=returncode, stdout=stdout, stderr=stderr)


class FakeTools:
    """Scripted replacement for ``subprocess.run`` covering git and docker.

    ``git clone`` creates the destination directory (with a Dockerfile unless
    ``dockerfile`` is False). Return codes can be overridden per subcommand
    through ``fail``, e.g. ``fail={"checkout": 1}``; the build tool uses
    the ``"build"`` key and any other program its own name (``"sudo"``).

    Attributes
    ----------
    calls : list of list of str
        Every command line received, in order.
    """

    def __init__(self, git_version: str = "2.43.0", dockerfile: bool = True, fail: dict | None = None):
        self.git_version = git_version
        self.dockerfile = dockerfile
        self.fail = fail or {}
        self.calls = []

    def __call__(self, cmd, cwd=None, capture_output=True, text=True, check=False):
        self.calls.append(list(cmd))
        program = Path(cmd[0]).name

        if program == "git":
            sub = cmd[1]
            if sub == "--version":
                return completed(stdout=f"git version {self.git_version}\n")
            if self.fail.get(sub):
                return completed(returncode=self.fail[sub], stderr=f"fatal: {sub} failed\n")
            if sub == "clone":
                destination = Path(cmd[3])
                destination.mkdir(parents=True)
                if self.dockerfile:
                    (destination / "Dockerfile").write_text("FROM scratch\n")
            return completed()

        if program in ("docker", "podman"):
            return completed(returncode=self.fail.get("build", 0))

        if self.fail.get(program):
            return completed(returncode=self.fail[program], stderr=f"{program}: permission denied\n")
        return completed()

    def commands(self, program: str) -> list[list[str]]:
        """Return the recorded calls to ``program``."""
        return [call for call in self.calls if Path(call[0]).name == program]


@pytest.fixture
def fake_tools(monkeypatch):
    """Patch subprocess.run and shutil.which with :class:`FakeTools`.

    Returns
    -------
    FakeTools
        The installed fake; tests may adjust its attributes before running.
    """
    tools = FakeTools()
    monkeypatch.setattr("ghbuild.lib.process.subprocess.run", tools)
    monkeypatch.setattr("ghbuild.lib.process.shutil.which", lambda program: f"/usr/bin/{program}")
    return tools
