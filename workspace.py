#!/usr/bin/env python3
"""Temporary directory holding the mirror clone of one migration."""

from __future__ import annotations

import os
import shutil
import tempfile
from typing import Optional

from errors import EnvironmentFailure
from logging_utils import Logger


class EphemeralWorkspace:
    """Owner-only temporary directory removed when the ``with`` block exits.

    Usage:
        with EphemeralWorkspace("app") as path:
            ...
    """

    def __init__(self, name: str, base_dir: Optional[str] = None) -> None:
        self.name = name
        self.base_dir = base_dir
        self.path: Optional[str] = None

    def __enter__(self) -> str:
        prefix = f"bonjour-github_{self.name.replace('/', '_')}_"
        try:
            if self.base_dir:
                os.makedirs(self.base_dir, mode=0o700, exist_ok=True)
            self.path = tempfile.mkdtemp(prefix=prefix, dir=self.base_dir)
            os.chmod(self.path, 0o700)
        except OSError as e:
            self.cleanup()
            raise EnvironmentFailure(f"cannot create temporary directory: {e}") from e

        Logger.security_event(
            "WORKSPACE_CREATED", f"temporary directory created for {self.name}"
        )
        return self.path

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        """Remove the directory; calling it again is a no-op."""
        path, self.path = self.path, None
        if not path or not os.path.exists(path):
            return

        # Make read-only pack files removable
        for root, dirs, files in os.walk(path):
            for d in dirs:
                os.chmod(os.path.join(root, d), 0o700)
            for f in files:
                os.chmod(os.path.join(root, f), 0o600)

        try:
            shutil.rmtree(path)
            Logger.security_event(
                "CLEANUP_SUCCESS", f"temporary directory cleaned up for {self.name}"
            )
        except OSError as e:
            Logger.security_event(
                "CLEANUP_FAILED",
                f"failed to clean up temporary directory for {self.name}",
            )
            Logger.warn(f"failed to remove temporary directory {path}: {e}")
            shutil.rmtree(path, ignore_errors=True)
