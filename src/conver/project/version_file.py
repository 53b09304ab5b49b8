"""Plain-text version file handling.

The version file holds a single prefixed version string, e.g. ``v1.2.3``.
An empty file means nothing has been released yet.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from conver.exceptions import VersionFileError

if TYPE_CHECKING:
    from pathlib import Path

INITIAL_VERSION = "0.0.0"


def read_version_file(path: Path, prefix: str = "v") -> str:
    """Read the current version from ``path``.

    Args:
        path: Version file to read
        prefix: Prefix used for the initial version of an empty file

    Returns:
        The stripped version string, or ``<prefix>0.0.0`` for an empty file

    Raises:
        VersionFileError: If the file does not exist or cannot be read
    """
    if not path.is_file():
        raise VersionFileError(f"Version file not found: {path}")
    try:
        content = path.read_text().strip()
    except OSError as e:
        raise VersionFileError(f"Could not read {path}: {e}") from e
    return content or f"{prefix}{INITIAL_VERSION}"


def write_version_file(path: Path, version: str) -> None:
    """Replace the contents of ``path`` with ``version``.

    Raises:
        VersionFileError: If the file cannot be written
    """
    try:
        path.write_text(version)
    except OSError as e:
        raise VersionFileError(f"Could not write {path}: {e}") from e
