"""Exception hierarchy for sass-dep.

Library code raises these; the CLI turns them into readable error messages.
"""

from __future__ import annotations

from pathlib import Path


class SassDepError(Exception):
    """Base class for all sass-dep errors."""


class ResolveError(SassDepError):
    """A module reference could not be resolved."""


class NotFoundError(ResolveError):
    """No candidate file exists for a target (recoverable during a build)."""

    def __init__(self, base: Path, target: str) -> None:
        self.base = base
        self.target = target
        super().__init__(f"Could not resolve '{target}' from '{base}'")


class InvalidBasePathError(ResolveError):
    """The resolution base is neither an existing file nor a directory."""

    def __init__(self, base: Path) -> None:
        self.base = base
        super().__init__(f"Invalid base path: {base}")


class BuildError(SassDepError):
    """Fatal failure while building the graph from one entry point."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{message}: {path}")


class ConfigError(SassDepError):
    """The project configuration file is unreadable or invalid."""
