"""Git repository access.

Thin wrapper around the ``git`` executable. It lists tags, walks the
history since the latest tag and creates release tags. Every command runs
through :meth:`GitRepository._run` so tests can patch ``subprocess.run``.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from conver.core.version import Version
from conver.exceptions import GitError, InvalidCurrentVersionError

logger = logging.getLogger(__name__)

# Field and record separators for machine-readable git output.
_FS = "\x1f"
_RS = "\x1e"

_TAG_VERSION = re.compile(r"\d+\.\d+\.\d+\S*$")

_LOG_FORMAT = f"%H{_FS}%an{_FS}%ae{_FS}%cI{_FS}%B{_RS}"
_TAG_FORMAT = "%09".join(
    [
        "%(refname:short)",
        "%(objectname)",
        "%(*objectname)",
        "%(committerdate:unix)",
        "%(*committerdate:unix)",
    ]
)


@dataclass(frozen=True)
class Commit:
    """A raw commit as read from the repository."""

    sha: str
    message: str
    author_name: str
    author_email: str
    date: datetime

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True)
class Tag:
    """A tag and the commit it points at."""

    name: str
    sha: str
    date: datetime


def _tag_precedence(name: str) -> tuple[int, int, int, bool]:
    match = _TAG_VERSION.search(name)
    if not match:
        return (-1, -1, -1, False)
    try:
        return Version.parse(match.group()).precedence
    except InvalidCurrentVersionError:
        return (-1, -1, -1, False)


class GitRepository:
    """A git working tree."""

    def __init__(self, path: Path, timeout: float = 30.0) -> None:
        self.path = path
        self.timeout = timeout
        result = self._run(["rev-parse", "--is-inside-work-tree"])
        if result.strip() != "true":
            raise GitError(f"Not a git work tree: {path}")

    def _run(self, args: list[str]) -> str:
        """Run a git command and return its stdout.

        Raises:
            GitError: If git is missing, times out or exits non-zero
        """
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise GitError(f"git {args[0]} timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            raise GitError(f"git {args[0]} failed with exit code {e.returncode}", stderr=e.stderr) from e
        return result.stdout

    def head_sha(self) -> str:
        return self._run(["rev-parse", "HEAD"]).strip()

    def get_latest_tag(self, pattern: str | None = None) -> Tag | None:
        """Find the tag whose commit has the newest committer date.

        Committer dates only have second resolution. Ties go to the tag
        pointing at HEAD, then to the highest version in the tag name.

        Args:
            pattern: Optional glob such as ``v*``

        Returns:
            The latest tag, or None if the repository has no matching tag
        """
        ref = f"refs/tags/{pattern}" if pattern else "refs/tags"
        output = self._run(["for-each-ref", f"--format={_TAG_FORMAT}", ref])

        tags: list[Tag] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            name, obj, peeled, date, peeled_date = line.split("\t")
            # Annotated tags point at a tag object; use the peeled commit.
            sha = peeled or obj
            timestamp = int(peeled_date or date or 0)
            tags.append(Tag(name=name, sha=sha, date=datetime.fromtimestamp(timestamp, tz=UTC)))
        if not tags:
            return None

        head = self.head_sha()
        latest = max(tags, key=lambda tag: (tag.date, tag.sha == head, _tag_precedence(tag.name)))
        logger.debug("Latest tag is %s (%s)", latest.name, latest.sha[:7])
        return latest

    def tag_exists(self, name: str) -> bool:
        """Whether ``refs/tags/<name>`` exists."""
        ref = f"refs/tags/{name}"
        output = self._run(["for-each-ref", "--format=%(refname)", ref])
        return ref in output.splitlines()

    def get_commits_since_tag(self, tag: Tag | None) -> list[Commit]:
        """List commits after ``tag``, newest first.

        The tagged commit itself is not included. With no tag, the whole
        history of HEAD is returned.
        """
        revision = f"{tag.sha}..HEAD" if tag else "HEAD"
        output = self._run(["log", f"--format={_LOG_FORMAT}", revision])

        commits: list[Commit] = []
        for record in output.split(_RS):
            record = record.strip("\n")
            if not record:
                continue
            sha, author_name, author_email, date, message = record.split(_FS, 4)
            commits.append(
                Commit(
                    sha=sha,
                    message=message,
                    author_name=author_name,
                    author_email=author_email,
                    date=datetime.fromisoformat(date),
                )
            )
        logger.debug("Found %d commit(s) since %s", len(commits), tag.name if tag else "root")
        return commits

    def create_tag(self, name: str, message: str) -> None:
        """Create an annotated tag at HEAD."""
        self._run(["tag", "--annotate", name, "--message", message, "HEAD"])
        logger.info("Created tag %s", name)
