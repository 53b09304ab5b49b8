"""Version control access for conver."""

from __future__ import annotations

from conver.vcs.git import Commit, GitRepository, Tag

__all__ = ["Commit", "GitRepository", "Tag"]
