"""Custom exceptions for the ghbuild CLI tool.

Every error the pipeline detects is raised as a subclass of
:class:`GhbuildError`. Command handlers catch the base class, print the
message and exit with status 1.
"""

from collections.abc import Sequence


class GhbuildError(Exception):
    """Base exception for all ghbuild errors.

    Parameters
    ----------
    message : str
        Error message describing what went wrong.
    details : dict, optional
        Additional structured information about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Dictionary containing additional error context.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        """Format error message with optional details.

        Returns
        -------
        str
            Formatted error message.
        """
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(GhbuildError):
    """Configuration loading or validation error.

    Raised when:
    - A configuration file contains invalid YAML
    - A configuration value has the wrong type
    """

    pass


class ValidationError(GhbuildError):
    """Input validation error.

    Raised when a user-provided repository reference or image name cannot
    be used at all (for example an empty string).
    """

    pass


class PreflightError(GhbuildError):
    """Required tool missing or too old.

    Raised when:
    - git is not installed or not in PATH
    - git reports a version below the configured minimum
    - git's version output cannot be parsed
    """

    pass


class CacheDirError(GhbuildError):
    """The repository cache directory could not be created."""

    pass


class CredentialError(GhbuildError):
    """Credential setup failed (marker, store file or git config)."""

    pass


class CommandError(GhbuildError):
    """An external command exited with a non-zero status.

    Parameters
    ----------
    message : str
        Error message describing what the command was meant to do.
    args : sequence of str, optional
        Command line that failed.
    returncode : int, optional
        Exit status of the command.

    Attributes
    ----------
    command : list of str
        Command line that failed.
    returncode : int or None
        Exit status of the command.
    """

    def __init__(self, message: str, args: Sequence[str] = None, returncode: int = None):
        details = {}
        if returncode is not None:
            details["exit_code"] = returncode

        super().__init__(message, details)
        self.command = list(args or [])
        self.returncode = returncode


class CloneError(CommandError):
    """``git clone`` failed."""


class FetchError(CommandError):
    """``git fetch`` failed."""


class CheckoutError(CommandError):
    """``git checkout`` failed, usually because the branch does not exist."""


class BuildDescriptorError(GhbuildError):
    """The checked-out repository has no build descriptor (Dockerfile)."""

    pass
