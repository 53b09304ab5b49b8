"""Command line entry point for conver."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from conver import __version__

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


@click.group(name="conver")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="conver", message="%(prog)s %(version)s")
def app(verbose: bool) -> None:
    """Semantic version bumps and changelogs from conventional commits."""
    setup_logging(verbose)


@app.command()
@click.option("--path", default=None, help="Project directory (defaults to cwd).")
@click.option("--bump-auto", is_flag=True, help="Bump version based on semantic commits.")
@click.option("--bump-major", is_flag=True, help="Bump major.")
@click.option("--bump-minor", is_flag=True, help="Bump minor.")
@click.option("--bump-patch", is_flag=True, help="Bump patch.")
@click.option("--file-update", is_flag=True, help="Update the version file.")
@click.option("--file-path", default=None, help="Version file path.")
@click.option("--changelog-update", is_flag=True, help="Update the changelog.")
@click.option("--changelog-path", default=None, help="Changelog file path.")
@click.option("--git-tag-update", is_flag=True, help="Tag HEAD with the new version.")
@click.option("--version-prefix", default=None, help="Version prefix.")
@click.option("--dry-run", is_flag=True, help="Show changes without applying them.")
def update(
    path: str | None,
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
) -> None:
    """Compute the next version and update changelog, version file and tags."""
    from conver.cli.commands.update import run_update

    run_update(
        path,
        bump_auto=bump_auto,
        bump_major=bump_major,
        bump_minor=bump_minor,
        bump_patch=bump_patch,
        file_update=file_update,
        file_path=file_path,
        changelog_update=changelog_update,
        changelog_path=changelog_path,
        git_tag_update=git_tag_update,
        version_prefix=version_prefix,
        dry_run=dry_run,
        console=console,
        err_console=err_console,
    )


if __name__ == "__main__":
    app()
