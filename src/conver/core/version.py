"""Semantic version parsing and bumping.

Versions are plain ``MAJOR.MINOR.PATCH`` triples. Tags and version files
usually carry a prefix such as ``v``; it is stripped before parsing and
re-attached when formatting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from conver.exceptions import InvalidCurrentVersionError

SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z.-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)


class BumpType(str, Enum):
    """Size of a version increment, largest first."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Version:
    """A three-component semantic version.

    Pre-release and build suffixes are accepted when parsing and dropped
    by :meth:`bump`.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``MAJOR.MINOR.PATCH[-pre][+build]``.

        Raises:
            InvalidCurrentVersionError: If the text is not a semantic version
        """
        match = SEMVER_PATTERN.match(text.strip())
        if not match:
            raise InvalidCurrentVersionError(f"Invalid semantic version: {text!r}")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )

    @property
    def precedence(self) -> tuple[int, int, int, bool]:
        """Sort key; a pre-release ranks below the release it precedes.

        Build metadata is ignored and pre-release identifiers are not
        compared with each other.
        """
        return (self.major, self.minor, self.patch, self.prerelease is None)

    def bump(self, bump_type: BumpType) -> Version:
        """Apply exactly one increment."""
        if bump_type is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


def parse_prefixed_version(text: str, prefix: str = "v") -> Version:
    """Strip ``prefix`` from ``text`` (when present) and parse the rest."""
    text = text.strip()
    if prefix and text.startswith(prefix):
        text = text[len(prefix) :]
    return Version.parse(text)


def format_prefixed_version(version: Version, prefix: str = "v") -> str:
    return f"{prefix}{version}"


def bump_version(current: str, bump_type: BumpType, prefix: str = "v") -> str:
    """Bump a prefixed version string.

    >>> bump_version("v1.2.3", BumpType.MINOR)
    'v1.3.0'

    Raises:
        InvalidCurrentVersionError: If ``current`` is not a semantic version
    """
    return format_prefixed_version(parse_prefixed_version(current, prefix).bump(bump_type), prefix)
