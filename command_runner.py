#!/usr/bin/env python3
"""Execution of the external git and gh commands."""

from __future__ import annotations

import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from errors import EnvironmentFailure
from logging_utils import Logger

# Answer fed to commands that ask for confirmation
CONFIRMATION_INPUT = "y\n"
# Exit code reported for commands killed by the timeout, as coreutils timeout(1) does
EXIT_TIMEOUT = 124


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""
    command: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Runs one external program at a time and captures its output.

    Every command is logged before it runs. With ``dry_run`` the command is
    only logged and reported as successful.
    """

    def __init__(
        self,
        *,
        dry_run: bool = False,
        timeout_s: Optional[float] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> None:
        self.dry_run = dry_run
        self.timeout_s = timeout_s
        self.env = env or {}

    def run(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: Optional[str] = None,
        confirm: bool = False,
    ) -> CommandResult:
        command = [program, *args]
        printable = shlex.join(command)

        if self.dry_run:
            Logger.info(f"would run: {printable}")
            return CommandResult(command, 0)

        Logger.debug(f"exec: {printable}")
        env = None
        if self.env:
            env = os.environ.copy()
            env.update(self.env)

        try:
            completed = subprocess.run(
                command,
                cwd=cwd,
                input=CONFIRMATION_INPUT if confirm else None,
                stdin=None if confirm else subprocess.DEVNULL,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
                env=env,
            )
        except FileNotFoundError as e:
            raise EnvironmentFailure(
                f"'{program}' not found; make sure it is installed and on PATH"
            ) from e
        except subprocess.TimeoutExpired:
            return CommandResult(
                command,
                EXIT_TIMEOUT,
                stderr=f"{program} timed out after {self.timeout_s}s",
            )

        return CommandResult(
            command, completed.returncode, completed.stdout or "", completed.stderr or ""
        )
