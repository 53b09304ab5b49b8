"""Configuration models for conver.

Configuration lives in ``[tool.conver]`` of ``pyproject.toml``::

    [tool.conver.version]
    prefix = "v"
    file_path = "VERSION"

    [tool.conver.changelog]
    path = "CHANGELOG"
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from conver.core.release import DEFAULT_EXCLUDED_TYPES, MultiLineHeaderPolicy


class VersionConfig(BaseModel):
    """Version string handling."""

    model_config = ConfigDict(extra="forbid")

    prefix: str = Field(default="v", description="Prefix of tags and version strings")
    file_path: Path = Field(default=Path("VERSION"), description="Plain-text version file")
    tag_pattern: str | None = Field(
        default=None,
        description="Glob restricting which tags count as releases (defaults to '<prefix>*')",
    )


class ChangelogConfig(BaseModel):
    """Changelog generation."""

    model_config = ConfigDict(extra="forbid")

    path: Path = Field(default=Path("CHANGELOG"))
    exclude_types: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_TYPES))


class CommitsConfig(BaseModel):
    """Commit parsing."""

    model_config = ConfigDict(extra="forbid")

    multiline_header: MultiLineHeaderPolicy = Field(
        default=MultiLineHeaderPolicy.SKIP,
        description="Skip commits with a multi-line header, or abort the release",
    )


class GitConfig(BaseModel):
    """Git subprocess settings."""

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(default=30.0, gt=0)


class ConverConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    version: VersionConfig = Field(default_factory=VersionConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    git: GitConfig = Field(default_factory=GitConfig)

    @property
    def effective_tag_pattern(self) -> str | None:
        if self.version.tag_pattern:
            return self.version.tag_pattern
        return f"{self.version.prefix}*" if self.version.prefix else None
