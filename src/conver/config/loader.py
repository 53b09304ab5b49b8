"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from conver.config.models import ConverConfig
from conver.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_SECTION = "conver"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find the nearest pyproject.toml, walking up from ``start``.

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and decode a TOML file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_conver_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.conver]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_SECTION, {})


def load_config(path: Path | None = None) -> ConverConfig:
    """Load configuration for the project at ``path``.

    Defaults are used when there is no pyproject.toml or it has no
    ``[tool.conver]`` section.

    Raises:
        ConfigValidationError: If the section holds invalid values
    """
    try:
        pyproject_path = find_pyproject_toml(path)
    except ConfigNotFoundError:
        logger.debug("No pyproject.toml found, using default configuration")
        return ConverConfig()

    data = extract_conver_config(load_pyproject_toml(pyproject_path))
    try:
        config = ConverConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_SECTION}] in {pyproject_path}:\n{e}") from e

    logger.debug("Loaded configuration from %s", pyproject_path)
    return config
