"""Configuration management for conver."""

from __future__ import annotations

from conver.config.loader import load_config
from conver.config.models import (
    ChangelogConfig,
    CommitsConfig,
    ConverConfig,
    GitConfig,
    VersionConfig,
)

__all__ = [
    "ChangelogConfig",
    "CommitsConfig",
    "ConverConfig",
    "GitConfig",
    "VersionConfig",
    "load_config",
]
