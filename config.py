#!/usr/bin/env python3
"""Configuration dataclasses for bonjour-github."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

DEFAULT_GITHUB_HOST = "github.com"


class Visibility(Enum):
    """Enumeration for repository visibility levels."""
    PRIVATE = "private"
    PUBLIC = "public"


class Permission(Enum):
    """Access levels GitHub accepts for teams and collaborators."""
    PULL = "pull"
    TRIAGE = "triage"
    PUSH = "push"
    MAINTAIN = "maintain"
    ADMIN = "admin"


@dataclass(frozen=True)
class TeamPermission:
    """A grant of ``permission`` to a team (``org/team``) or a user."""
    grantee: str
    permission: Permission = Permission.PULL

    @property
    def is_team(self) -> bool:
        return "/" in self.grantee


@dataclass(frozen=True)
class MigrationRequest:
    """Everything needed to migrate one repository."""
    source_url: str
    destination_name: str
    slug_override: Optional[str] = None
    description: Optional[str] = None
    visibility: Visibility = Visibility.PRIVATE
    topics: Tuple[str, ...] = ()
    permissions: Tuple[TeamPermission, ...] = ()

    @property
    def slug(self) -> str:
        """Path of the destination repository on GitHub."""
        return self.slug_override or self.destination_name

    @property
    def owner(self) -> Optional[str]:
        if "/" in self.slug:
            return self.slug.split("/", 1)[0]
        return None


@dataclass(frozen=True)
class RunOptions:
    """Settings shared by every migration in a run."""
    github_host: str = DEFAULT_GITHUB_HOST
    dry_run: bool = False
    timeout_s: Optional[float] = None
    delete_on_failure: bool = False
    workspace_dir: Optional[str] = None


@dataclass(frozen=True)
class Config:
    """Main configuration for a migration run."""
    requests: Tuple[MigrationRequest, ...]
    options: RunOptions = field(default_factory=RunOptions)
