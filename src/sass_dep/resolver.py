"""Resolve module references to stylesheet files on disk.

For ``@use "foo"`` from ``/project/src/main.scss`` the candidates are, in
order:

    /project/src/foo.scss
    /project/src/_foo.scss
    /project/src/foo.sass
    /project/src/_foo.sass
    /project/src/foo/index.scss
    /project/src/foo/_index.scss
    /project/src/foo/index.sass
    /project/src/foo/_index.sass

then the same list rooted at each load path. The first existing file wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from sass_dep.errors import InvalidBasePathError, NotFoundError

log = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("scss", "sass")


@dataclass
class ResolverConfig:
    # Searched after the importing file's directory. Relative entries are
    # taken relative to that directory.
    load_paths: list[Path] = field(default_factory=list)
    # Earlier entries win over later ones.
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))


class Resolver:
    """Deterministic file lookup for @use / @forward / @import targets."""

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self.config = config or ResolverConfig()

    @property
    def load_paths(self) -> list[Path]:
        return self.config.load_paths

    @property
    def extensions(self) -> list[str]:
        return self.config.extensions

    def resolve(self, base: Path, target: str) -> Path:
        """Resolve ``target`` as referenced from ``base`` (a file or directory).

        Returns:
            The canonical absolute path of the matching file.

        Raises:
            InvalidBasePathError: base is neither an existing file nor directory.
            NotFoundError: no candidate exists in the base directory or any
                load path.
        """
        base = Path(base)
        if base.is_file():
            base_dir = base.parent
        elif base.is_dir():
            base_dir = base
        else:
            raise InvalidBasePathError(base)

        found = self._resolve_in_dir(base_dir, target)
        if found is not None:
            return found

        for load_path in self.load_paths:
            load_dir = load_path if load_path.is_absolute() else base_dir / load_path
            found = self._resolve_in_dir(load_dir, target)
            if found is not None:
                log.debug("Resolved '%s' via load path %s", target, load_path)
                return found

        raise NotFoundError(base_dir, target)

    def _resolve_in_dir(self, directory: Path, target: str) -> Path | None:
        target_path = PurePosixPath(target)
        name = target_path.name
        if not name:
            return None
        parent = str(target_path.parent)
        search_dir = directory if parent == "." else directory / parent

        for ext in self.extensions:
            for filename in (f"{name}.{ext}", f"_{name}.{ext}"):
                candidate = search_dir / filename
                if candidate.is_file():
                    return candidate.resolve()

        index_dir = search_dir / name
        if index_dir.is_dir():
            for ext in self.extensions:
                for filename in (f"index.{ext}", f"_index.{ext}"):
                    candidate = index_dir / filename
                    if candidate.is_file():
                        return candidate.resolve()

        return None
