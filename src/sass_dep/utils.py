"""Shared utilities for sass-dep."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

# Directories to skip during file discovery
SKIP_DIRS = {
    ".git", ".hg", ".svn", "node_modules", ".sass-cache",
}


def file_id(path: Path, root: Path) -> str:
    """Node id for ``path``: relative to ``root`` with forward slashes.

    Files outside the root keep their full path.
    """
    try:
        rel = path.relative_to(root)
    except ValueError:
        rel = path
    return rel.as_posix().replace("\\", "/")


def discover_stylesheets(root: Path, extensions: Iterable[str] = ("scss", "sass")) -> list[Path]:
    """Walk root and return stylesheet files in sorted order.

    Directories in SKIP_DIRS are pruned, never entered.
    """
    suffixes = {f".{ext.lstrip('.').lower()}" for ext in extensions}
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
        for name in filenames:
            item = Path(dirpath) / name
            if item.suffix.lower() in suffixes and item.is_file():
                files.append(item)
    return sorted(files)
