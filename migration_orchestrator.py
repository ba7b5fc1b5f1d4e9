#!/usr/bin/env python3
"""Main orchestrator for migrating repositories to GitHub."""

from __future__ import annotations

import shlex
from typing import Callable, Iterable, List, Optional, Tuple

from command_runner import CommandResult, CommandRunner
from config import Config, MigrationRequest
from errors import (EXIT_SUCCESS, AuthenticationRequired,
                    ExternalCommandFailure, MigrationError)
from git_mirror import GitMirror
from github_target import GitHubCli
from logging_utils import Logger
from utils import github_push_url, github_web_url
from workspace import EphemeralWorkspace

Step = Callable[[], CommandResult]


def run_in_order(steps: Iterable[Step]) -> CommandResult:
    """Run ``steps`` one after another, stopping at the first failure.

    Returns the failing result, or the last result when all succeed.
    """
    result = CommandResult([], 0)
    for step in steps:
        result = step()
        if not result.success:
            break
    return result


class MigrationOrchestrator:
    """Runs the auth check once, then every migration of the config in order."""

    def __init__(self, cfg: Config, runner: Optional[CommandRunner] = None) -> None:
        self.cfg = cfg
        options = cfg.options
        self.runner = runner or CommandRunner(
            dry_run=options.dry_run,
            timeout_s=options.timeout_s,
            env={"GH_HOST": options.github_host},
        )
        self.git = GitMirror(self.runner)
        self.gh = GitHubCli(self.runner)

    def run(self) -> int:
        try:
            self.check_auth()

            total = len(self.cfg.requests)
            for idx, request in enumerate(self.cfg.requests, start=1):
                Logger.info(
                    f"[{idx}/{total}] migrate: {request.source_url} -> {request.slug}"
                )
                url = self.migrate(request)
                Logger.success(
                    f"migration successful for {request.destination_name}: {url}"
                )

            if self.cfg.options.dry_run:
                Logger.info("dry-run completed")
            return EXIT_SUCCESS
        except ExternalCommandFailure as e:
            Logger.error(f"{e.stage} failed: {shlex.join(e.command)}")
            Logger.relay(e.stderr or "no error output")
            return e.exit_code
        except MigrationError as e:
            Logger.error(str(e))
            return e.exit_code

    def check_auth(self) -> None:
        result = self.gh.check_auth()
        if not result.success:
            raise AuthenticationRequired(result.stderr.strip())

    def migrate(self, request: MigrationRequest) -> str:
        """Migrate one repository and return its GitHub URL."""
        host = self.cfg.options.github_host
        created = False

        with EphemeralWorkspace(
            request.destination_name, self.cfg.options.workspace_dir
        ) as workspace:
            try:
                for stage, step in self._stages(request, workspace):
                    result = step()
                    if not result.success:
                        raise ExternalCommandFailure(
                            stage, result.command, result.stderr, result.returncode
                        )
                    if stage == "repository creation":
                        created = True
            except MigrationError:
                if created:
                    self._handle_partial_repo(request)
                raise

        return github_web_url(host, request.slug)

    def _stages(
        self, request: MigrationRequest, workspace: str
    ) -> List[Tuple[str, Step]]:
        """Ordered pipeline for one request; nothing runs until a step is called."""
        push_url = github_push_url(self.cfg.options.github_host, request.slug)
        return [
            ("mirror clone", lambda: self.git.clone(request.source_url, workspace)),
            (
                "repository creation",
                lambda: self.gh.create_repo(
                    request.destination_name, request.visibility, request.description
                ),
            ),
            (
                "topic assignment",
                lambda: run_in_order(
                    (lambda topic=topic: self.gh.add_topic(request.slug, topic))
                    for topic in request.topics
                ),
            ),
            (
                "permission assignment",
                lambda: run_in_order(
                    (lambda grant=grant: self.gh.grant_permission(request.slug, grant))
                    for grant in request.permissions
                ),
            ),
            ("mirror push", lambda: self.git.push(workspace, push_url)),
        ]

    def _handle_partial_repo(self, request: MigrationRequest) -> None:
        """Deal with a repository created by a migration that then failed."""
        if not self.cfg.options.delete_on_failure:
            Logger.warn(
                f"repository {request.slug} was created but the migration failed; "
                f"remove it with: gh repo delete {request.slug} --yes"
            )
            return

        result = self.gh.delete_repo(request.slug)
        if not result.success:
            Logger.error(
                f"could not delete {request.slug}: {result.stderr.strip()}"
            )
