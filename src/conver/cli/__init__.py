"""Command line interface for conver."""

from __future__ import annotations

from conver.cli.main import app

__all__ = ["app"]
