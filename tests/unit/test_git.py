"""Unit tests for git command wrappers and the preflight check."""

from unittest.mock import Mock, patch

import pytest

from ghbuild.exceptions import CommandError, ConfigError, PreflightError
from ghbuild.lib import git
from ghbuild.lib.process import CommandRunner


@pytest.mark.unit
class TestParseGitVersion:
    """Tests for parse_git_version()."""

    @pytest.mark.parametrize(
        "output, expected",
        [
            ("git version 2.39.2\n", (2, 39, 2)),
            ("git version 1.7.9\n", (1, 7, 9)),
            ("git version 2.39.3 (Apple Git-145)\n", (2, 39, 3)),
            ("git version 2.43.0.windows.1\n", (2, 43, 0)),
        ],
    )
    def test_parses_common_outputs(self, output, expected):
        assert git.parse_git_version(output) == expected

    def test_unparseable_output(self):
        with pytest.raises(PreflightError, match="Could not determine git version"):
            git.parse_git_version("command not recognised")


@pytest.mark.unit
class TestIsVersionBelow:
    """Tests for is_version_below()."""

    def test_older(self):
        assert git.is_version_below((1, 7, 8, 6), (1, 7, 9, 0))

    def test_equal_with_padding(self):
        assert not git.is_version_below((1, 7, 9), (1, 7, 9, 0))

    def test_newer_major_with_smaller_digits(self):
        # 2.0 is newer than 1.7.9.0 even though "20" < "1790"
        assert not git.is_version_below((2, 0), (1, 7, 9, 0))

    def test_two_digit_minor(self):
        assert not git.is_version_below((1, 10, 0), (1, 7, 9, 0))


@pytest.mark.unit
class TestCheckGit:
    """Tests for check_git()."""

    def test_missing_git(self):
        runner = CommandRunner()

        with patch("ghbuild.lib.process.shutil.which", return_value=None):
            with pytest.raises(PreflightError, match="git is not installed"):
                git.check_git(runner, "1.7.9.0")

    def test_too_old(self, fake_tools):
        fake_tools.git_version = "1.7.8"

        with pytest.raises(PreflightError, match="too old") as exc_info:
            git.check_git(CommandRunner(), "1.7.9.0")

        assert "1.7.9.0" in str(exc_info.value)
        assert fake_tools.calls == [["git", "--version"]]

    def test_recent_enough(self, fake_tools):
        assert git.check_git(CommandRunner(), "1.7.9.0") == (2, 43, 0)

    def test_runs_in_dry_run(self, fake_tools):
        git.check_git(CommandRunner(dry_run=True), "1.7.9.0")

        assert fake_tools.calls == [["git", "--version"]]

    def test_malformed_min_version(self, fake_tools):
        with pytest.raises(ConfigError, match="1.7.9-rc1"):
            git.check_git(CommandRunner(), "1.7.9-rc1")

        assert fake_tools.calls == []

    def test_version_command_fails(self):
        runner = CommandRunner()

        with patch("ghbuild.lib.process.shutil.which", return_value="/usr/bin/git"), patch(
            "ghbuild.lib.process.subprocess.run", return_value=Mock(returncode=1, stdout="", stderr="boom")
        ):
            with pytest.raises(PreflightError):
                git.check_git(runner, "1.7.9.0")


@pytest.mark.unit
class TestCredentialHelper:
    """Tests for set_credential_helper()."""

    def test_sets_global_helper(self, fake_tools):
        git.set_credential_helper(CommandRunner(), "cache")

        assert fake_tools.calls == [["git", "config", "--global", "credential.helper", "cache"]]

    def test_failure_raises(self, fake_tools):
        fake_tools.fail = {"config": 255}

        with pytest.raises(CommandError, match="credential.helper"):
            git.set_credential_helper(CommandRunner(), "store")
