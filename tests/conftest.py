"""Shared fixtures for conver tests."""

from __future__ import annotations

from datetime import UTC, datetime
from itertools import count
from typing import TYPE_CHECKING

import pytest

from conver.vcs.git import Commit

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

_sha_counter = count(1)


def make_commit(message: str, sha: str | None = None) -> Commit:
    """Build a commit with a unique 40-character SHA."""
    if sha is None:
        sha = f"{next(_sha_counter):040x}"
    return Commit(
        sha=sha,
        message=message,
        author_name="Test",
        author_email="test@test.com",
        date=datetime(2026, 10, 1, 12, 0, tzinfo=UTC),
    )


@pytest.fixture
def commit_factory() -> Callable[..., Commit]:
    return make_commit


@pytest.fixture
def feat_commit() -> Commit:
    return make_commit("feat(auth): add login", sha="feat123" + "0" * 33)


@pytest.fixture
def fix_commit() -> Commit:
    return make_commit("fix(core): null check", sha="fix4567" + "0" * 33)


@pytest.fixture
def breaking_commit() -> Commit:
    return make_commit(
        "feat!: remove old API\n\nBREAKING CHANGE: the v1 client is gone",
        sha="brk8901" + "0" * 33,
    )


@pytest.fixture
def chore_commit() -> Commit:
    return make_commit("chore: cleanup", sha="chr2345" + "0" * 33)


@pytest.fixture
def sample_commits(
    feat_commit: Commit,
    fix_commit: Commit,
    breaking_commit: Commit,
    chore_commit: Commit,
) -> list[Commit]:
    """Newest first, as returned by the repository."""
    return [
        breaking_commit,
        make_commit("docs: update readme"),
        fix_commit,
        chore_commit,
        feat_commit,
    ]


@pytest.fixture
def temp_project_with_pyproject(tmp_path: Path) -> Path:
    """A project directory with a [tool.conver] section."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.conver.version]
prefix = "release-"
file_path = "VERSION.txt"

[tool.conver.changelog]
path = "CHANGELOG.md"
"""
    )
    return tmp_path
