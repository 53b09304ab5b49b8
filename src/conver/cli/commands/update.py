"""Implementation of the 'update' command.

The update command computes the next version from the commits since the
latest tag, then updates the changelog, the version file and the git tags
as requested. Everything is computed and checked, including that the new
tag is still free, before the first write.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from conver.config import load_config
from conver.core.changelog import prepend_changelog, render_changelog
from conver.core.release import aggregate_release
from conver.core.version import BumpType, bump_version
from conver.exceptions import ConverError, NoTagsFoundError, TagExistsError
from conver.project.version_file import read_version_file, write_version_file
from conver.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from conver.config import ConverConfig
    from conver.core.release import ReleasePlan

TAG_MESSAGE = "chore(version): bump version to {version}"


def resolve_manual_bump(major: bool, minor: bool, patch: bool) -> BumpType | None:
    """Pick the largest of the manually requested bumps."""
    if major:
        return BumpType.MAJOR
    if minor:
        return BumpType.MINOR
    if patch:
        return BumpType.PATCH
    return None


def apply_overrides(
    config: ConverConfig,
    *,
    version_prefix: str | None = None,
    file_path: str | None = None,
    changelog_path: str | None = None,
) -> ConverConfig:
    """Return a copy of ``config`` with command line values applied."""
    version_updates: dict[str, object] = {}
    if version_prefix is not None:
        version_updates["prefix"] = version_prefix
    if file_path:
        version_updates["file_path"] = Path(file_path)

    updates: dict[str, object] = {}
    if version_updates:
        updates["version"] = config.version.model_copy(update=version_updates)
    if changelog_path:
        updates["changelog"] = config.changelog.model_copy(update={"path": Path(changelog_path)})
    return config.model_copy(update=updates)


def run_update(
    path: str | None,
    *,
    bump_auto: bool,
    bump_major: bool,
    bump_minor: bool,
    bump_patch: bool,
    file_update: bool,
    file_path: str | None,
    changelog_update: bool,
    changelog_path: str | None,
    git_tag_update: bool,
    version_prefix: str | None,
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the update command.

    Args:
        path: Optional path to the project directory
        bump_auto: Detect the bump from conventional commits
        bump_major: Force a major bump
        bump_minor: Force a minor bump
        bump_patch: Force a patch bump
        file_update: Bump the version file
        file_path: Version file override
        changelog_update: Prepend a section to the changelog
        changelog_path: Changelog file override
        git_tag_update: Create a tag for the new version
        version_prefix: Version prefix override
        dry_run: Only show what would change
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = apply_overrides(
            load_config(project_path),
            version_prefix=version_prefix,
            file_path=file_path,
            changelog_path=changelog_path,
        )
    except ConverError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    prefix = config.version.prefix
    version_file = project_path / config.version.file_path
    changelog_file = project_path / config.changelog.path

    if not (file_update or changelog_update or git_tag_update):
        console.print(
            "[yellow]Nothing to update.[/] "
            "Use [cyan]--changelog-update[/], [cyan]--file-update[/] or [cyan]--git-tag-update[/]."
        )
        return

    # Auto-detection replaces any manual bump; without either, bump patch.
    manual_bump = None if bump_auto else resolve_manual_bump(bump_major, bump_minor, bump_patch)
    if not bump_auto and manual_bump is None:
        manual_bump = BumpType.PATCH

    # Compute everything first
    try:
        plan = None
        repo = None
        if bump_auto or changelog_update or git_tag_update:
            repo = GitRepository(project_path, timeout=config.git.timeout)
            plan = _plan_release(repo, config, manual_bump)
            if git_tag_update and repo.tag_exists(plan.version):
                raise TagExistsError(f"Tag {plan.version} already exists")

        bump = plan.decision.bump if plan else manual_bump
        new_file_version = None
        if file_update:
            current_file_version = read_version_file(version_file, prefix)
            new_file_version = bump_version(current_file_version, bump, prefix)

        changelog_content = None
        if changelog_update and plan:
            changelog_content = render_changelog(plan.version, plan.grouped)
    except ConverError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if plan:
        _print_plan(plan, console)

    changes = []
    if changelog_content is not None:
        changes.append(f"Prepend {plan.version} to [cyan]{changelog_file}[/]")
    if new_file_version is not None:
        changes.append(f"Write [green]{new_file_version}[/] to [cyan]{version_file}[/]")
    if git_tag_update and plan:
        changes.append(f"Create tag [green]{plan.version}[/]")

    if dry_run:
        preview = "\n".join(f"  • {change}" for change in changes)
        console.print(
            Panel(
                f"[bold]Would make the following changes:[/]\n\n{preview}",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        if changelog_content:
            console.print(changelog_content, markup=False, highlight=False)
        return

    # Apply: changelog, version file, then tag
    try:
        if changelog_content is not None:
            prepend_changelog(changelog_file, changelog_content)
            console.print(f"  [green]✓[/] Updated {changelog_file}")
        if new_file_version is not None:
            write_version_file(version_file, new_file_version)
            console.print(f"  [green]✓[/] Wrote {new_file_version} to {version_file}")
        if git_tag_update and plan and repo:
            repo.create_tag(plan.version, TAG_MESSAGE.format(version=plan.version))
            console.print(f"  [green]✓[/] Created tag {plan.version}")
    except ConverError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(
        Panel(
            "[green]Update complete![/]\n\n" + "\n".join(f"  • {change}" for change in changes),
            title="[green]conver[/]",
            border_style="green",
        )
    )


def _plan_release(
    repo: GitRepository,
    config: ConverConfig,
    manual_bump: BumpType | None,
) -> ReleasePlan:
    tag_pattern = config.effective_tag_pattern
    latest_tag = repo.get_latest_tag(tag_pattern)
    if latest_tag is None:
        raise NoTagsFoundError(f"No tags matching {tag_pattern or '*'} found; create an initial tag first")
    commits = [] if repo.head_sha() == latest_tag.sha else repo.get_commits_since_tag(latest_tag)
    return aggregate_release(
        commits,
        latest_tag.name,
        latest_tag=latest_tag.name,
        prefix=config.version.prefix,
        bump_override=manual_bump,
        exclude_types=config.changelog.exclude_types,
        policy=config.commits.multiline_header,
    )


def _print_plan(plan: ReleasePlan, console: Console) -> None:
    decision = plan.decision
    console.print(
        f"\nBumping [cyan]{decision.current_version}[/] to [green]{decision.new_version}[/] "
        f"([bold]{decision.bump}[/], {len(plan.commits)} commit(s))"
    )
    if plan.skipped:
        console.print(f"[yellow]Skipped {len(plan.skipped)} commit(s) with a multi-line header[/]")
    if plan.warnings:
        console.print(f"[yellow]{len(plan.warnings)} commit(s) are not well-formed conventional commits[/]")
