# src/buildbake/meta.py
"""Program identity shared by the CLI, the logger and the tests."""

import subprocess
from contextlib import suppress
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path


PROGRAM_PACKAGE = "buildbake"
PROGRAM_SCRIPT = "buildbake"
PROGRAM_DISPLAY = "Buildbake"
PROGRAM_ENV = "BUILDBAKE"
DESCRIPTION = "Resolve multi-file build target definitions into build instructions."


@dataclass(frozen=True)
class Metadata:
    version: str
    commit: str

    def __str__(self) -> str:
        return f"{self.version} ({self.commit})"


def get_metadata() -> Metadata:
    """Return the installed version and, for source checkouts, the git commit."""
    version = "unknown"
    commit = "unknown"

    with suppress(metadata.PackageNotFoundError):
        version = metadata.version(PROGRAM_PACKAGE)

    root = Path(__file__).resolve().parents[2]
    with suppress(OSError, subprocess.SubprocessError):
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        commit = result.stdout.strip() or commit

    return Metadata(version, commit)
