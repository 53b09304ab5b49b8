"""Core business logic for conver.

This module contains the pure building blocks:
- Conventional commit parsing
- Semantic version parsing and bumping
- Release aggregation (bump decision and changelog grouping)
- Changelog rendering
"""

from __future__ import annotations

from conver.core.changelog import category_label, prepend_changelog, render_changelog
from conver.core.commits import Footer, ParsedCommit, ParseResult, paragraphs, parse_commit
from conver.core.release import (
    BumpDecision,
    GroupedCommits,
    MultiLineHeaderPolicy,
    ReleaseCommit,
    ReleasePlan,
    aggregate_release,
    calculate_bump,
    group_commits,
    parse_commits,
)
from conver.core.version import BumpType, Version, bump_version

__all__ = [
    # Version
    "BumpType",
    "Version",
    "bump_version",
    # Commits
    "Footer",
    "ParseResult",
    "ParsedCommit",
    "paragraphs",
    "parse_commit",
    # Release
    "BumpDecision",
    "GroupedCommits",
    "MultiLineHeaderPolicy",
    "ReleaseCommit",
    "ReleasePlan",
    "aggregate_release",
    "calculate_bump",
    "group_commits",
    "parse_commits",
    # Changelog
    "category_label",
    "prepend_changelog",
    "render_changelog",
]
