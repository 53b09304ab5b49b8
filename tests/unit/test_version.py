"""Tests for semantic version handling."""

from __future__ import annotations

import pytest

from conver.core.version import (
    BumpType,
    Version,
    bump_version,
    format_prefixed_version,
    parse_prefixed_version,
)
from conver.exceptions import InvalidCurrentVersionError, ReleaseError


class TestVersionParse:
    """Tests for Version.parse()."""

    def test_parse_simple(self):
        """Parse a plain triple."""
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_parse_prerelease_and_build(self):
        """Keep pre-release and build suffixes."""
        version = Version.parse("1.2.3-rc.1+build.5")

        assert version.prerelease == "rc.1"
        assert version.build == "build.5"
        assert str(version) == "1.2.3-rc.1+build.5"

    @pytest.mark.parametrize("text", ["", "1.2", "1.2.3.4", "v1.2.3", "01.2.3", "a.b.c", "1.2.x"])
    def test_parse_invalid(self, text: str):
        """Reject anything that is not a semantic version."""
        with pytest.raises(InvalidCurrentVersionError):
            Version.parse(text)


class TestVersionBump:
    """Tests for Version.bump()."""

    @pytest.mark.parametrize(
        ("bump", "expected"),
        [
            (BumpType.MAJOR, Version(2, 0, 0)),
            (BumpType.MINOR, Version(1, 3, 0)),
            (BumpType.PATCH, Version(1, 2, 4)),
        ],
    )
    def test_single_increment(self, bump: BumpType, expected: Version):
        """Each bump increments exactly once and resets lower parts."""
        assert Version(1, 2, 3).bump(bump) == expected

    def test_bump_drops_prerelease(self):
        """Bumping drops the pre-release suffix."""
        assert Version.parse("1.2.3-beta").bump(BumpType.PATCH) == Version(1, 2, 4)


class TestVersionPrecedence:
    """Tests for Version.precedence."""

    def test_prerelease_ranks_below_release(self):
        """A pre-release sorts before the release it leads up to."""
        assert Version.parse("1.0.0-rc.1").precedence < Version.parse("1.0.0").precedence

    def test_numeric_components_compare_as_numbers(self):
        """1.0.10 is newer than 1.0.9."""
        assert Version(1, 0, 9).precedence < Version(1, 0, 10).precedence

    def test_build_metadata_is_ignored(self):
        """Build metadata does not affect precedence."""
        assert Version.parse("1.0.0+a").precedence == Version.parse("1.0.0+b").precedence

    def test_versions_are_not_orderable(self):
        """Comparison goes through precedence, never the dataclass fields."""
        with pytest.raises(TypeError):
            Version.parse("1.0.0-rc") < Version(1, 0, 0)  # noqa: B015


class TestPrefixedVersions:
    """Tests for prefix handling."""

    def test_strip_prefix(self):
        """Strip the prefix before parsing."""
        assert parse_prefixed_version("v1.2.3", "v") == Version(1, 2, 3)

    def test_missing_prefix_is_tolerated(self):
        """A version without the prefix still parses."""
        assert parse_prefixed_version("1.2.3", "v") == Version(1, 2, 3)

    def test_empty_prefix(self):
        """An empty prefix leaves the text alone."""
        assert parse_prefixed_version("1.2.3", "") == Version(1, 2, 3)

    def test_format_prefix(self):
        """Re-attach the prefix when formatting."""
        assert format_prefixed_version(Version(1, 0, 0), "release-") == "release-1.0.0"

    @pytest.mark.parametrize(
        ("current", "bump", "expected"),
        [
            ("v1.2.3", BumpType.MINOR, "v1.3.0"),
            ("v2.0.0", BumpType.MAJOR, "v3.0.0"),
            ("v0.9.9", BumpType.PATCH, "v0.9.10"),
            ("v0.0.0\n", BumpType.PATCH, "v0.0.1"),
        ],
    )
    def test_bump_version(self, current: str, bump: BumpType, expected: str):
        """Bump a prefixed version string."""
        assert bump_version(current, bump, "v") == expected

    def test_bump_version_invalid(self):
        """An invalid current version raises a ReleaseError."""
        with pytest.raises(InvalidCurrentVersionError) as exc_info:
            bump_version("vnext", BumpType.PATCH, "v")

        assert isinstance(exc_info.value, ReleaseError)


class TestBumpType:
    """Tests for BumpType."""

    def test_str(self):
        """BumpType converts to and from its string value."""
        assert str(BumpType.MINOR) == "minor"
        assert BumpType("major") is BumpType.MAJOR
