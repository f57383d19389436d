"""Build and runtime version information."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass

VERSION = ""
COMMIT = ""
BRANCH = ""


@dataclass(frozen=True)
class VersionInfo:
    """Versioning information of the library and its runtime."""

    iavl: str
    git_commit: str
    branch: str
    runtime: str

    def __str__(self) -> str:
        return (
            f"iavl: {self.iavl}\n"
            f"git commit: {self.git_commit}\n"
            f"git branch: {self.branch}\n"
            f"{self.runtime}"
        )


def get_version_info() -> VersionInfo:
    """Return the version information filled in from the module constants."""
    runtime = f"python version {platform.python_version()} {sys.platform}/{platform.machine()}\n"
    return VersionInfo(VERSION, COMMIT, BRANCH, runtime)