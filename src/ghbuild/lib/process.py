"""
External command execution.

Every external program ghbuild touches (git, sudo, the container build tool)
goes through :class:`CommandRunner`. A run never raises on a non-zero exit
status: it returns a :class:`CommandResult` and the caller decides, usually by
calling :meth:`CommandResult.check`, whether the failure halts the pipeline.
"""

import logging
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ghbuild.exceptions import CommandError
from ghbuild.lib.output import info

logger = logging.getLogger(__name__)

# Shell convention for "command not found"
COMMAND_NOT_FOUND = 127


@dataclass
class CommandResult:
    """
    Outcome of one external command.

    Attributes
    ----------
    args : list of str
        Command line that was run.
    returncode : int
        Exit status (127 if the executable was not found).
    stdout : str
        Captured standard output, empty when output was not captured.
    stderr : str
        Captured standard error, empty when output was not captured.
    """

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    dry_run: bool = field(default=False, repr=False)

    @property
    def ok(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0

    def check(self, error_cls: type[CommandError] = CommandError, message: str | None = None) -> "CommandResult":
        """
        Raise ``error_cls`` if the command failed.

        Parameters
        ----------
        error_cls : type of CommandError, optional
            Exception class to raise, by default CommandError.
        message : str, optional
            Error message. Defaults to ``Command failed: <command line>``.
            Captured stderr (or stdout) is appended when available.

        Returns
        -------
        CommandResult
            ``self``, so calls can be chained.

        Raises
        ------
        CommandError
            If ``returncode`` is non-zero.
        """
        if self.ok:
            return self

        message = message or f"Command failed: {format_command(self.args)}"
        output = (self.stderr or "").strip() or (self.stdout or "").strip()
        if output:
            message = f"{message}\n{output}"
        raise error_cls(message, args=self.args, returncode=self.returncode)


def format_command(args: Sequence[str]) -> str:
    """Return a shell-quoted, copy-pasteable rendering of ``args``."""
    return " ".join(shlex.quote(str(arg)) for arg in args)


class CommandRunner:
    """
    Run external commands with optional dry-run and verbose echo.

    Parameters
    ----------
    dry_run : bool, optional
        Print mutating commands instead of running them, by default False.
    verbose : bool, optional
        Echo each command before running it, by default False.

    Examples
    --------
    >>> runner = CommandRunner()
    >>> result = runner.run(["git", "--version"], read_only=True)
    >>> result.ok
    True
    """

    def __init__(self, dry_run: bool = False, verbose: bool = False):
        self.dry_run = dry_run
        self.verbose = verbose

    def which(self, program: str) -> str | None:
        """Return the full path of ``program`` on PATH, or None."""
        return shutil.which(program)

    def run(
        self,
        args: Sequence[str],
        cwd: Path | str | None = None,
        capture: bool = True,
        read_only: bool = False,
    ) -> CommandResult:
        """
        Run one command and return its result.

        Parameters
        ----------
        args : sequence of str
            Command and arguments.
        cwd : Path or str, optional
            Working directory for the command.
        capture : bool, optional
            Capture stdout/stderr as text, by default True. When False the
            command writes straight to the terminal (used for long builds).
        read_only : bool, optional
            The command changes nothing and runs even in dry-run mode,
            by default False.

        Returns
        -------
        CommandResult
            Result of the command. Never raises for a non-zero exit.
        """
        cmd = [str(arg) for arg in args]
        display = format_command(cmd)
        location = f" (in {cwd})" if cwd else ""

        if self.dry_run and not read_only:
            info(f"Would execute: {display}{location}")
            return CommandResult(args=cmd, returncode=0, dry_run=True)

        if self.verbose:
            info(f"Executing: {display}{location}")
        logger.debug("Running %s%s", display, location)

        try:
            completed = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                capture_output=capture,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            logger.debug("Executable not found for %s: %s", display, e)
            return CommandResult(args=cmd, returncode=COMMAND_NOT_FOUND, stderr=str(e))

        logger.debug("%s exited with %s", cmd[0], completed.returncode)
        return CommandResult(
            args=cmd,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
