"""Tests for version file handling."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from conver.exceptions import VersionFileError
from conver.project.version_file import read_version_file, write_version_file

if TYPE_CHECKING:
    from pathlib import Path


class TestReadVersionFile:
    """Tests for read_version_file()."""

    def test_read_version(self, tmp_path: Path):
        """Read and strip the version."""
        path = tmp_path / "VERSION"
        path.write_text("v1.2.3\n")

        assert read_version_file(path) == "v1.2.3"

    def test_empty_file_is_initial_version(self, tmp_path: Path):
        """An empty file reads as the initial version with the prefix."""
        path = tmp_path / "VERSION"
        path.write_text("")

        assert read_version_file(path, "v") == "v0.0.0"
        assert read_version_file(path, "") == "0.0.0"

    def test_missing_file_raises(self, tmp_path: Path):
        """A missing version file raises."""
        with pytest.raises(VersionFileError, match="not found"):
            read_version_file(tmp_path / "VERSION")


class TestWriteVersionFile:
    """Tests for write_version_file()."""

    def test_write_version(self, tmp_path: Path):
        """Write the version without a trailing newline."""
        path = tmp_path / "VERSION"
        write_version_file(path, "v1.3.0")

        assert path.read_text() == "v1.3.0"

    def test_write_into_missing_directory_raises(self, tmp_path: Path):
        """Report write failures as VersionFileError."""
        with pytest.raises(VersionFileError):
            write_version_file(tmp_path / "missing" / "VERSION", "v1.3.0")
