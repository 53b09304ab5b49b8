"""Project file handling for conver."""

from __future__ import annotations

from conver.project.version_file import read_version_file, write_version_file

__all__ = ["read_version_file", "write_version_file"]
