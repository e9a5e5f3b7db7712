"""Unit tests for paths module."""

import os
from unittest.mock import patch

import pytest

from ghbuild.exceptions import CacheDirError
from ghbuild.lib.paths import (
    DEFAULT_CACHE_DIR,
    ensure_cache_dir,
    get_cache_dir,
    get_config_dir,
    get_config_file,
    get_project_config_file,
    get_repo_path,
)
from ghbuild.lib.process import CommandRunner


@pytest.mark.unit
class TestConfigPaths:
    """Tests for XDG config file locations."""

    def test_config_dir_uses_xdg(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert get_config_dir() == tmp_path / "xdg" / "ghbuild"

    def test_config_dir_falls_back_to_home(self, monkeypatch, isolated_environment):
        monkeypatch.delenv("XDG_CONFIG_HOME")
        assert get_config_dir() == isolated_environment / ".config" / "ghbuild"

    def test_config_file(self):
        assert get_config_file().name == "config.yaml"

    def test_project_config_in_cwd(self, tmp_path):
        assert get_project_config_file() == tmp_path / "work" / "ghbuild.yaml"


@pytest.mark.unit
class TestCacheDir:
    """Tests for cache directory resolution."""

    def test_default(self):
        assert str(get_cache_dir({})) == DEFAULT_CACHE_DIR

    def test_configured(self, tmp_path):
        assert get_cache_dir({"cache": {"dir": str(tmp_path / "repos")}}) == tmp_path / "repos"

    def test_expands_user(self, isolated_environment):
        assert get_cache_dir({"cache": {"dir": "~/repos"}}) == isolated_environment / "repos"

    def test_repo_path_keyed_by_image_name(self, tmp_path):
        assert get_repo_path(tmp_path, "widgets") == tmp_path / "widgets"
        assert get_repo_path(tmp_path, "widgets") == get_repo_path(tmp_path, "widgets")
        assert get_repo_path(tmp_path, "widgets") != get_repo_path(tmp_path, "gadgets")


@pytest.mark.unit
class TestEnsureCacheDir:
    """Tests for ensure_cache_dir()."""

    def test_existing_dir_runs_nothing(self, fake_tools, cache_dir):
        assert ensure_cache_dir(cache_dir, CommandRunner()) == cache_dir
        assert fake_tools.calls == []

    def test_creates_with_sudo(self, fake_tools, tmp_path, capsys):
        target = tmp_path / "var" / "lib" / "ghbuild"

        ensure_cache_dir(target, CommandRunner(), use_sudo=True)

        owner = f"{os.getuid()}:{os.getgid()}"
        assert fake_tools.calls == [
            ["sudo", "mkdir", "-p", str(target)],
            ["sudo", "chown", owner, str(target)],
        ]
        assert "does not exist, creating it" in capsys.readouterr().out

    def test_creates_without_sudo(self, fake_tools, tmp_path):
        target = tmp_path / "repos-new"

        ensure_cache_dir(target, CommandRunner(), use_sudo=False)

        assert target.is_dir()
        assert fake_tools.calls == []

    def test_sudo_failure(self, fake_tools, tmp_path):
        target = tmp_path / "denied"
        fake_tools.fail = {"sudo": 1}

        with pytest.raises(CacheDirError, match="permission denied"):
            ensure_cache_dir(target, CommandRunner(), use_sudo=True)

        assert fake_tools.calls == [["sudo", "mkdir", "-p", str(target)]]

    def test_mkdir_failure(self, tmp_path):
        target = tmp_path / "blocked"

        with patch("pathlib.Path.mkdir", side_effect=PermissionError("denied")):
            with pytest.raises(CacheDirError, match="denied"):
                ensure_cache_dir(target, CommandRunner(), use_sudo=False)

    def test_dry_run_creates_nothing(self, fake_tools, tmp_path):
        target = tmp_path / "later"

        ensure_cache_dir(target, CommandRunner(dry_run=True), use_sudo=False)

        assert not target.exists()
