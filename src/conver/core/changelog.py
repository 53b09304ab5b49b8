"""Changelog rendering.

Renders grouped release commits as a Markdown section and prepends it to
an existing changelog file::

    ## v1.3.0 (2026-10-18)

    ### Features

    - **auth:** add login (1a2b3c4)
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from conver.core.release import BREAKING_CATEGORY
from conver.exceptions import ChangelogError

if TYPE_CHECKING:
    from pathlib import Path

    from conver.core.release import GroupedCommits, ReleaseCommit

logger = logging.getLogger(__name__)

CATEGORY_LABELS: dict[str, str] = {
    BREAKING_CATEGORY: "Breaking Changes",
    "feat": "Features",
    "fix": "Bug Fixes",
    "build": "Build System",
    "ci": "Continuous Integration",
    "docs": "Documentation",
    "style": "Styling",
    "refactor": "Code Refactoring",
    "perf": "Performance Improvements",
    "test": "Tests",
}

# Commits without a conventional type.
UNTYPED_LABEL = "Other Changes"


def category_label(category: str) -> str:
    """Human readable heading for a category; unknown types pass through."""
    if not category:
        return UNTYPED_LABEL
    return CATEGORY_LABELS.get(category, category)


def ordered_categories(grouped: GroupedCommits) -> list[str]:
    """Known categories in label order, then the rest as first seen."""
    known = [c for c in CATEGORY_LABELS if c in grouped]
    return known + [c for c in grouped if c not in CATEGORY_LABELS]


def format_commit(rc: ReleaseCommit) -> str:
    scope = f"**{rc.parsed.scope}:** " if rc.parsed.scope else ""
    return f"- {scope}{rc.parsed.subject} ({rc.short_sha})"


def render_changelog(
    version: str,
    grouped: GroupedCommits,
    release_date: date | None = None,
) -> str:
    """Render one release section.

    Args:
        version: The new version, including its prefix
        grouped: Commits grouped by category
        release_date: Date shown in the heading, defaults to today (UTC)

    Returns:
        Markdown text ending with a newline
    """
    if release_date is None:
        release_date = datetime.now(UTC).date()

    lines = [f"## {version} ({release_date.isoformat()})", ""]
    for category in ordered_categories(grouped):
        commits = grouped[category]
        if not commits:
            continue
        lines.append(f"### {category_label(category)}")
        lines.append("")
        lines.extend(format_commit(rc) for rc in commits)
        lines.append("")

    return "\n".join(lines)


def prepend_changelog(path: Path, content: str) -> None:
    """Insert a new section in front of the existing changelog.

    A missing changelog file is created.

    Raises:
        ChangelogError: If the file cannot be read or written
    """
    try:
        existing = path.read_text() if path.exists() else ""
        merged = f"{content}\n{existing}" if existing else content
        path.write_text(merged)
    except OSError as e:
        raise ChangelogError(f"Could not update changelog {path}: {e}") from e
    logger.info("Updated %s", path)
