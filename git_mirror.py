#!/usr/bin/env python3
"""Mirror clone and mirror push through the git CLI."""

from __future__ import annotations

from command_runner import CommandResult, CommandRunner
from logging_utils import Logger


class GitMirror:
    """Copies every ref of a repository through a bare mirror clone."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def clone(self, source_url: str, workspace: str) -> CommandResult:
        """Clone all refs of ``source_url`` into ``workspace`` without a working tree."""
        Logger.info(f"cloning mirror of {source_url}")
        return self.runner.run("git", ["clone", "--mirror", source_url, workspace])

    def push(self, workspace: str, push_url: str) -> CommandResult:
        """Push all refs from ``workspace`` to ``push_url``."""
        Logger.info(f"pushing mirror to {push_url}")
        return self.runner.run("git", ["push", "--mirror", push_url], cwd=workspace)
