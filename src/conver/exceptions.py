"""Exception hierarchy for conver.

Every error raised by conver derives from :class:`ConverError`, so callers
can catch the whole family at once. Subsystems add their own branch:

- Commit parsing: :class:`CommitParseError` and its kinds
- Release aggregation: :class:`ReleaseError` and its kinds
- Configuration, git, version file and changelog I/O

Callers should branch on the exception class, not on the message text.
"""

from __future__ import annotations


class ConverError(Exception):
    """Base class for all conver errors."""


# =============================================================================
# Commit parsing
# =============================================================================


class CommitParseError(ConverError):
    """A commit message could not be fully classified."""


class CommitFormatError(CommitParseError):
    """The commit message has an invalid overall format."""


class MultiLineHeaderError(CommitFormatError):
    """The header paragraph spans more than one line.

    This is the only strict parse failure: no commit is produced.
    """

    def __init__(self, message: str = "invalid format: header has multiple lines") -> None:
        super().__init__(message)


class CommitTypeError(CommitParseError):
    """The commit type is missing or malformed."""


class TypeMissingError(CommitTypeError):
    """The header matched but carries no type."""

    def __init__(self, message: str = "type is missing") -> None:
        super().__init__(message)


class TypeFormatError(CommitTypeError):
    """The commit type contains invalid characters."""


class CommitScopeError(CommitParseError):
    """The commit scope is malformed."""


class ScopeFormatError(CommitScopeError):
    """The commit scope contains invalid characters."""


# =============================================================================
# Release aggregation
# =============================================================================


class ReleaseError(ConverError):
    """A release cannot be computed. No partial result is produced."""


class NoTagsFoundError(ReleaseError):
    """The repository has no tag to release from."""


class NothingToReleaseError(ReleaseError):
    """HEAD is already the latest tag."""


class TagExistsError(ReleaseError):
    """The tag for the new version already exists."""


class InvalidCurrentVersionError(ReleaseError):
    """The current version is not a three-component semantic version."""


# =============================================================================
# Collaborators
# =============================================================================


class ConfigError(ConverError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """A configuration file was expected but not found."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


class GitError(ConverError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.args[0]}: {self.stderr.strip()}"
        return str(self.args[0])


class VersionFileError(ConverError):
    """The version file could not be read or written."""


class ChangelogError(ConverError):
    """The changelog could not be generated or written."""
