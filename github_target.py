#!/usr/bin/env python3
"""GitHub CLI wrapper for creating and configuring the destination repo."""

from __future__ import annotations

from typing import List, Optional

from command_runner import CommandResult, CommandRunner
from config import TeamPermission, Visibility
from logging_utils import Logger


def qualified_slug(slug: str, grant: TeamPermission) -> str:
    """Return ``slug`` if it names an owner; grants need the exact repository."""
    if "/" in slug:
        return slug
    raise ValueError(
        f"granting '{grant.grantee}' access needs an owner-qualified slug, got '{slug}'"
    )


class GitHubCli:
    """Thin wrapper around the ``gh`` commands the migration needs."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def check_auth(self) -> CommandResult:
        Logger.info("checking gh authentication")
        return self.runner.run("gh", ["auth", "status"])

    def create_repo(
        self, name: str, visibility: Visibility, description: Optional[str]
    ) -> CommandResult:
        Logger.info(f"creating {visibility.value} repository: {name}")
        args: List[str] = ["repo", "create", name, f"--{visibility.value}"]
        if description:
            args += ["--description", description]
        return self.runner.run("gh", args)

    def add_topic(self, slug: str, topic: str) -> CommandResult:
        Logger.info(f"adding topic '{topic}' to {slug}")
        return self.runner.run("gh", ["repo", "edit", slug, "--add-topic", topic])

    def grant_permission(self, slug: str, grant: TeamPermission) -> CommandResult:
        """Give a team or a collaborator access to the repository.

        Teams are granted through ``orgs/<org>/teams/<team>/repos/<owner>/<repo>``,
        users through ``repos/<owner>/<repo>/collaborators/<user>``.
        """
        repo = qualified_slug(slug, grant)
        if grant.is_team:
            org, team = grant.grantee.split("/", 1)
            endpoint = f"orgs/{org}/teams/{team}/repos/{repo}"
        else:
            endpoint = f"repos/{repo}/collaborators/{grant.grantee}"

        Logger.info(
            f"granting {grant.permission.value} on {repo} to {grant.grantee}"
        )
        return self.runner.run(
            "gh",
            [
                "api",
                "--method",
                "PUT",
                endpoint,
                "-f",
                f"permission={grant.permission.value}",
            ],
            confirm=True,
        )

    def delete_repo(self, slug: str) -> CommandResult:
        Logger.warn(f"deleting repository: {slug}")
        return self.runner.run("gh", ["repo", "delete", slug, "--yes"])
