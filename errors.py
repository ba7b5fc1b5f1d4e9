#!/usr/bin/env python3
"""Error types for bonjour-github."""

from __future__ import annotations

from typing import Optional, Sequence

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1


class MigrationError(Exception):
    """Base class for every failure that aborts a migration run."""

    exit_code = EXIT_EXECUTION_ERROR


class InvalidInput(MigrationError):
    """Raised when the migration request is missing or malformed."""


class AuthenticationRequired(MigrationError):
    """Raised when the gh CLI has no valid session."""

    def __init__(self, detail: str = "") -> None:
        message = "you need to log in using: gh auth login"
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message)


class ExternalCommandFailure(MigrationError):
    """Raised when git or gh exits non-zero."""

    def __init__(
        self,
        stage: str,
        command: Sequence[str],
        stderr: str,
        returncode: Optional[int] = None,
    ) -> None:
        self.stage = stage
        self.command = list(command)
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(f"{stage} failed: {stderr.strip() or 'no error output'}")


class EnvironmentFailure(MigrationError):
    """Raised when the local environment cannot support a migration."""
