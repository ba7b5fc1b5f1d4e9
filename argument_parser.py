#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import copy
import os
import shlex
import sys
from typing import List, Optional, Sequence

from config import (DEFAULT_GITHUB_HOST, Config, MigrationRequest,
                    Permission, RunOptions, Visibility)
from errors import InvalidInput
from logging_utils import Logger
from security import SecurityValidator
from utils import parse_team_permissions, parse_topics

PERMISSION_HELP = "|".join(p.value for p in Permission)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser reporting usage errors as InvalidInput."""

    def error(self, message: str):
        raise InvalidInput(f"{self.prog}: error: {message}")


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = _ArgumentParser(
        prog="bonjour-github",
        description="Mirror a GitLab repository into a new GitHub repository",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s git@gitlab.com:example/app.git app
  %(prog)s git@gitlab.com:example/app.git app --visibility public --topics foo,bar
  %(prog)s https://gitlab.com/example/app.git app -s acme/app \\
           --team acme/frontend:maintain --team acme/ops
  %(prog)s --batch migrations.txt --dry-run

Batch files hold one migration per line, written like the command line:
  git@gitlab.com:example/app.git app --topics foo
  git@gitlab.com:example/lib.git lib --visibility public
        """,
    )
    return parser


def _add_request_arguments(
    parser: argparse.ArgumentParser, *, positionals_optional: bool
) -> None:
    """Add the arguments describing one migration."""
    nargs = "?" if positionals_optional else None
    parser.add_argument(
        "source_url",
        nargs=nargs,
        help="URL of the GitLab repository to mirror",
    )
    parser.add_argument(
        "destination_name",
        nargs=nargs,
        help="Name of the GitHub repository to create (name or owner/name)",
    )
    parser.add_argument(
        "-s",
        "--override-github-slug",
        dest="slug_override",
        help="owner/name to push to and configure (default: destination name)",
    )
    parser.add_argument(
        "-t",
        "--team",
        dest="teams",
        action="append",
        default=[],
        help=(
            "Grant access as team-or-org[:permission], permission one of "
            f"{PERMISSION_HELP} (default: pull). Repeatable"
        ),
    )
    parser.add_argument(
        "--description",
        dest="description",
        help="Description of the GitHub repository",
    )
    parser.add_argument(
        "--topics",
        dest="topics",
        action="append",
        default=[],
        help="Comma separated topics to add to the GitHub repository",
    )
    parser.add_argument(
        "--visibility",
        dest="visibility",
        choices=[visibility.value for visibility in Visibility],
        default=Visibility.PRIVATE.value,
        help="Visibility of the GitHub repository (default: private)",
    )


def _add_run_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared by every migration of the run."""
    parser.add_argument(
        "-b",
        "--batch",
        dest="batch",
        help="Read one migration per line from FILE ('-' for stdin)",
    )
    parser.add_argument(
        "--github-host",
        dest="github_host",
        default=os.getenv("GH_HOST") or DEFAULT_GITHUB_HOST,
        help="GitHub host (or set GH_HOST env var, default: github.com)",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="List commands without running them",
    )
    parser.add_argument(
        "--timeout",
        dest="timeout_s",
        type=float,
        help="Seconds after which a git or gh command is aborted (default: none)",
    )
    parser.add_argument(
        "--delete-on-failure",
        action="store_true",
        dest="delete_on_failure",
        help="Delete the GitHub repository again if configuring or pushing fails",
    )
    parser.add_argument(
        "--workspace-dir",
        dest="workspace_dir",
        help="Directory for temporary mirror clones (default: system temp dir)",
    )


def build_request(args: argparse.Namespace) -> MigrationRequest:
    """Resolve and validate the parsed arguments of one migration."""
    if not args.source_url or not args.destination_name:
        raise InvalidInput("source_url and destination_name are required")

    try:
        source_url = SecurityValidator.validate_source_url(args.source_url)
        destination_name = SecurityValidator.validate_slug(args.destination_name)
        slug_override = None
        if args.slug_override:
            slug_override = SecurityValidator.validate_slug(
                args.slug_override, "GitHub slug"
            )
        description = None
        if args.description:
            description = SecurityValidator.validate_description(args.description)
        topics = parse_topics(args.topics)
        permissions = parse_team_permissions(args.teams)
    except ValueError as e:
        raise InvalidInput(str(e)) from e

    request = MigrationRequest(
        source_url=source_url,
        destination_name=destination_name,
        slug_override=slug_override,
        description=description,
        visibility=Visibility(args.visibility),
        topics=topics,
        permissions=permissions,
    )

    for grant in request.permissions:
        if request.owner is None:
            raise InvalidInput(
                f"granting '{grant.grantee}' access needs an owner-qualified "
                f"destination, use --override-github-slug owner/{request.slug}"
            )

    return request


def _read_batch_lines(path: str) -> List[str]:
    if path == "-":
        return sys.stdin.read().splitlines()
    try:
        with open(path, encoding="utf-8") as handle:
            return handle.read().splitlines()
    except OSError as e:
        raise InvalidInput(f"cannot read batch file '{path}': {e}") from e


def _parse_batch(
    path: str, defaults: argparse.Namespace
) -> List[MigrationRequest]:
    """Build one request per batch line.

    Options given on the command line act as defaults for every line;
    repeatable options (``--team``, ``--topics``) add up.
    """
    parser = _ArgumentParser(prog="bonjour-github batch")
    _add_request_arguments(parser, positionals_optional=False)

    requests = []
    for lineno, line in enumerate(_read_batch_lines(path), start=1):
        try:
            tokens = shlex.split(line, comments=True)
            if not tokens:
                continue
            args = parser.parse_args(tokens, namespace=copy.copy(defaults))
            requests.append(build_request(args))
        except (ValueError, InvalidInput) as e:
            raise InvalidInput(f"{path}:{lineno}: {e}") from e

    if not requests:
        raise InvalidInput(f"batch file '{path}' holds no migrations")
    return requests


def _build_run_options(args: argparse.Namespace) -> RunOptions:
    try:
        github_host = SecurityValidator.validate_host(args.github_host)
        workspace_dir = None
        if args.workspace_dir:
            workspace_dir = SecurityValidator.validate_file_path(args.workspace_dir)
    except ValueError as e:
        raise InvalidInput(str(e)) from e

    if args.timeout_s is not None and args.timeout_s <= 0:
        raise InvalidInput("timeout must be a positive number of seconds")

    return RunOptions(
        github_host=github_host,
        dry_run=args.dry_run,
        timeout_s=args.timeout_s,
        delete_on_failure=args.delete_on_failure,
        workspace_dir=workspace_dir,
    )


def parse_arguments(argv: Optional[Sequence[str]] = None) -> Config:
    """Parse command line arguments and return configuration object.

    Raises InvalidInput for anything that cannot be resolved.
    """
    parser = _create_argument_parser()
    _add_request_arguments(parser, positionals_optional=True)
    _add_run_arguments(parser)

    args = parser.parse_args(argv)
    options = _build_run_options(args)

    if args.batch:
        if args.source_url or args.destination_name:
            raise InvalidInput("give either source_url/destination_name or --batch")
        if args.slug_override:
            raise InvalidInput("--override-github-slug cannot apply to a whole batch")
        requests = _parse_batch(args.batch, args)
    else:
        requests = [build_request(args)]

    Logger.security_event(
        "CONFIG_VALIDATION",
        f"validated {len(requests)} migration request(s)",
    )
    return Config(requests=tuple(requests), options=options)
