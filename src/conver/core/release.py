"""Release aggregation.

Turns the commits created since the latest tag into a release plan: the
version bump to apply and the commits grouped for the changelog.

The bump follows semantic-versioning intent, first matching rule wins:

1. any breaking change -> major
2. any ``feat`` commit -> minor
3. anything else, including no commits at all -> patch
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from conver.core.commits import ParsedCommit, parse_commit
from conver.core.version import BumpType, bump_version
from conver.exceptions import (
    CommitParseError,
    MultiLineHeaderError,
    NoTagsFoundError,
    NothingToReleaseError,
)

if TYPE_CHECKING:
    from conver.vcs.git import Commit

logger = logging.getLogger(__name__)

BREAKING_CATEGORY = "breaking"
DEFAULT_EXCLUDED_TYPES: tuple[str, ...] = ("chore",)


class MultiLineHeaderPolicy(str, Enum):
    """What to do with a commit whose header spans several lines."""

    SKIP = "skip"
    ABORT = "abort"


@dataclass(frozen=True)
class ReleaseCommit:
    """A raw commit paired with its parsed message."""

    commit: Commit
    parsed: ParsedCommit

    @property
    def sha(self) -> str:
        return self.commit.sha

    @property
    def short_sha(self) -> str:
        return self.commit.sha[:7]


GroupedCommits = dict[str, list[ReleaseCommit]]


@dataclass(frozen=True)
class ParsedBatch:
    """Result of parsing a sequence of commits."""

    commits: list[ReleaseCommit] = field(default_factory=list)
    skipped: list[Commit] = field(default_factory=list)
    warnings: list[tuple[Commit, CommitParseError]] = field(default_factory=list)


@dataclass(frozen=True)
class BumpDecision:
    bump: BumpType
    current_version: str
    new_version: str


@dataclass(frozen=True)
class ReleasePlan:
    """Everything needed to cut a release, computed in one pass."""

    decision: BumpDecision
    grouped: GroupedCommits
    commits: list[ReleaseCommit]
    skipped: list[Commit] = field(default_factory=list)
    warnings: list[tuple[Commit, CommitParseError]] = field(default_factory=list)

    @property
    def version(self) -> str:
        return self.decision.new_version


def parse_commits(
    commits: Iterable[Commit],
    policy: MultiLineHeaderPolicy = MultiLineHeaderPolicy.SKIP,
) -> ParsedBatch:
    """Parse raw commits, keeping degraded results.

    Commits with a missing or malformed type or scope are kept and their
    error is recorded as a warning. Commits with a multi-line header are
    skipped, or abort the batch under :attr:`MultiLineHeaderPolicy.ABORT`.

    Raises:
        MultiLineHeaderError: Only with the ``ABORT`` policy
    """
    batch = ParsedBatch()
    for commit in commits:
        try:
            result = parse_commit(commit.message)
        except MultiLineHeaderError:
            if policy is MultiLineHeaderPolicy.ABORT:
                raise
            logger.warning("Skipping commit %s: header has multiple lines", commit.sha[:7])
            batch.skipped.append(commit)
            continue

        if result.error is not None:
            logger.warning("Commit %s: %s", commit.sha[:7], result.error)
            batch.warnings.append((commit, result.error))
        batch.commits.append(ReleaseCommit(commit=commit, parsed=result.commit))
    return batch


def calculate_bump(parsed: Iterable[ParsedCommit]) -> BumpType:
    """Decide the bump for a set of commits, independent of their order."""
    commits = list(parsed)
    if any(pc.is_breaking for pc in commits):
        return BumpType.MAJOR
    if any(pc.commit_type == "feat" for pc in commits):
        return BumpType.MINOR
    return BumpType.PATCH


def category_of(parsed: ParsedCommit) -> str:
    """Changelog category: ``breaking`` wins over the commit type."""
    if parsed.is_breaking:
        return BREAKING_CATEGORY
    return parsed.commit_type


def group_commits(
    commits: Iterable[ReleaseCommit],
    exclude_types: Iterable[str] = DEFAULT_EXCLUDED_TYPES,
) -> GroupedCommits:
    """Group commits by changelog category, preserving input order.

    Commits whose type is in ``exclude_types`` are left out entirely,
    breaking or not.
    """
    excluded = set(exclude_types)
    grouped: GroupedCommits = {}
    for rc in commits:
        if rc.parsed.commit_type in excluded:
            continue
        grouped.setdefault(category_of(rc.parsed), []).append(rc)
    return grouped


def aggregate_release(
    commits: Sequence[Commit],
    current_version: str,
    *,
    latest_tag: str | None,
    prefix: str = "v",
    bump_override: BumpType | None = None,
    exclude_types: Iterable[str] = DEFAULT_EXCLUDED_TYPES,
    policy: MultiLineHeaderPolicy = MultiLineHeaderPolicy.SKIP,
) -> ReleasePlan:
    """Compute the release for the commits since the latest tag.

    Args:
        commits: Commits after the latest tag, newest first
        current_version: Current (prefixed) version, usually the tag name
        latest_tag: Name of the latest tag, None if the repository has none
        prefix: Version prefix to strip and re-attach
        bump_override: Use this bump instead of detecting one
        exclude_types: Commit types left out of the changelog
        policy: Handling of commits with a multi-line header

    Returns:
        The release plan

    Raises:
        NoTagsFoundError: If there is no tag to release from
        NothingToReleaseError: If there are no commits after the tag
        InvalidCurrentVersionError: If ``current_version`` cannot be parsed
        MultiLineHeaderError: Only with the ``ABORT`` policy
    """
    if latest_tag is None:
        raise NoTagsFoundError("No tags found; create an initial tag first")
    if not commits:
        raise NothingToReleaseError(f"HEAD is already tagged as {latest_tag}")

    batch = parse_commits(commits, policy)
    parsed = [rc.parsed for rc in batch.commits]

    detected = calculate_bump(parsed)
    bump = bump_override or detected
    if bump_override is not None and bump_override is not detected:
        logger.info("Using %s bump instead of detected %s", bump_override, detected)

    new_version = bump_version(current_version, bump, prefix)
    logger.info("Bumping %s -> %s (%s)", current_version, new_version, bump)

    return ReleasePlan(
        decision=BumpDecision(bump=bump, current_version=current_version, new_version=new_version),
        grouped=group_commits(batch.commits, exclude_types),
        commits=batch.commits,
        skipped=batch.skipped,
        warnings=batch.warnings,
    )
