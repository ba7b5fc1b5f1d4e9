#!/usr/bin/env python3
"""Utility functions for bonjour-github."""

from typing import Iterable, List, Tuple

from config import Permission, TeamPermission
from security import SecurityValidator


def split_csv(value: str) -> List[str]:
    """Split a comma separated value, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_topics(values: Iterable[str]) -> Tuple[str, ...]:
    """Parse ``--topics`` values into an ordered tuple without duplicates.

    Example: ['foo,bar', 'foo'] -> ('foo', 'bar')
    """
    topics: List[str] = []
    for value in values:
        for topic in split_csv(value):
            SecurityValidator.validate_topic(topic)
            if topic not in topics:
                topics.append(topic)
    return tuple(topics)


def parse_team_permission(token: str) -> TeamPermission:
    """Parse a ``team-or-org[:permission]`` token.

    Example: 'acme/frontend:maintain' -> TeamPermission('acme/frontend', MAINTAIN)
             'acme/frontend'          -> TeamPermission('acme/frontend', PULL)
    """
    grantee, sep, level = token.strip().rpartition(":")
    if not sep:
        grantee, level = level, ""

    SecurityValidator.validate_grantee(grantee)

    if not level:
        return TeamPermission(grantee)

    try:
        permission = Permission(level.lower())
    except ValueError:
        allowed = ", ".join(p.value for p in Permission)
        raise ValueError(
            f"unknown permission '{level}' for '{grantee}' (expected one of: {allowed})"
        ) from None
    return TeamPermission(grantee, permission)


def parse_team_permissions(values: Iterable[str]) -> Tuple[TeamPermission, ...]:
    """Parse every ``--team`` value, keeping the order given."""
    return tuple(
        parse_team_permission(token) for value in values for token in split_csv(value)
    )


def github_push_url(host: str, slug: str) -> str:
    """Return the SSH remote used for the mirror push."""
    return f"git@{host}:{slug}.git"


def github_web_url(host: str, slug: str) -> str:
    return f"https://{host}/{slug}"
