#!/usr/bin/env python3
"""
Bonjour GitHub - Migrate a GitLab repository to a new GitHub repository.

This tool mirror-clones a repository (all branches, tags and refs), creates
the destination repository with the GitHub CLI, optionally adds topics and
team/collaborator permissions, and mirror-pushes the history into it.

Licensed under the MIT License. See LICENSE file for details.

License: MIT
"""

from __future__ import annotations

import sys
from typing import NoReturn, Optional, Sequence

from argument_parser import parse_arguments
from errors import InvalidInput
from logging_utils import Logger
from migration_orchestrator import MigrationOrchestrator


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    try:
        cfg = parse_arguments(argv)
    except InvalidInput as e:
        Logger.error(str(e))
        sys.exit(e.exit_code)

    orchestrator = MigrationOrchestrator(cfg)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
