"""Error types raised by proton-call.

Every error carries the process exit code the command line maps it to.
"""

from __future__ import annotations

from typing import Optional


class ProtonCallError(Exception):
    """Base class for every error proton-call reports to the user."""

    exit_code: int = 1


class ProtonIOError(ProtonCallError):
    """Raised when the filesystem or the OS refuses an operation.

    Covers an unreadable index root, an uncreatable data directory and a
    Proton entry point that cannot be executed.
    """

    exit_code = 1


class ConfigError(ProtonCallError):
    """Raised when the configuration file is missing or invalid."""

    exit_code = 1


class UsageError(ProtonCallError):
    """Raised for malformed user input, before anything touches the disk."""

    exit_code = 2


class VersionNotFoundError(ProtonCallError):
    """Raised when a requested version is still missing after a reindex."""

    exit_code = 3


class ChildExitError(ProtonCallError):
    """Raised when the launched program terminates unsuccessfully."""

    exit_code = 4

    def __init__(self, code: Optional[int] = None):
        self.code = code
        if code is None:
            message = "Proton exited with an error (terminated by signal)"
        else:
            message = f"Proton exited with an error, code: {code}"
        super().__init__(message)
