"""Build a DependencyGraph by crawling from entry files.

Each visited file is scanned for directives, every target is resolved to a
file, and the referenced files are crawled in turn. The crawl is depth-first
in discovery order but runs on an explicit stack, and a visited set (not node
state) decides whether a file still needs processing, so cycles of any length
terminate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from sass_dep.errors import BuildError, NotFoundError, SassDepError
from sass_dep.graph.model import DependencyGraph
from sass_dep.graph.nodes import EdgeMeta, NodeFlag
from sass_dep.parser import Directive, Location, UseDirective, scan_file
from sass_dep.resolver import DEFAULT_EXTENSIONS, Resolver
from sass_dep.utils import discover_stylesheets, file_id

log = logging.getLogger(__name__)

# Modules provided by the Sass compiler itself (``@use "sass:math"``)
BUILTIN_MODULES = frozenset({
    "math", "map", "list", "string", "color", "selector", "meta",
})


def is_builtin_module(target: str) -> bool:
    scheme, sep, name = target.partition(":")
    return bool(sep) and scheme == "sass" and name in BUILTIN_MODULES


@dataclass(frozen=True)
class ResolutionWarning:
    """A reference that could not be resolved. The build carried on without it."""
    source: str        # id of the referencing file
    target: str        # the unresolved target string
    location: Location
    message: str

    def __str__(self) -> str:
        return f"{self.source}:{self.location.line}:{self.location.column}: {self.message}"


class GraphBuilder:
    """Populates a DependencyGraph from one or more entry points.

    Usage:
        builder = GraphBuilder()
        builder.build_from_entry(root / "main.scss", Resolver(), root)
        builder.build_from_entry(root / "admin.scss", Resolver(), root)
        graph = builder.graph
        for w in builder.warnings: ...
    """

    def __init__(self, graph: DependencyGraph | None = None) -> None:
        self.graph = graph if graph is not None else DependencyGraph()
        self.warnings: list[ResolutionWarning] = []
        # Ids fully crawled by earlier successful calls; never scanned again
        self._processed: set[str] = set()

    def build_from_entry(self, entry_path: Path, resolver: Resolver, root: Path) -> str:
        """Crawl everything reachable from ``entry_path`` into the graph.

        Returns:
            The id of the entry node, which is flagged as an entry point.

        Raises:
            BuildError: the entry cannot be canonicalized, or a visited file
                cannot be read or decoded. On this or any other exception the
                graph and warning list are restored to their state before the
                call.
        """
        root = Path(root).resolve()
        try:
            entry = Path(entry_path).resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise BuildError(Path(entry_path), "Failed to canonicalize entry path") from exc
        if not entry.is_file():
            raise BuildError(entry, "Entry point is not a file")

        checkpoint = self.graph.checkpoint()
        warnings_before = len(self.warnings)
        try:
            entry_id = file_id(entry, root)
            self.graph.add_node(entry_id, entry)
            self.graph.mark_entry_point(entry_id)
            visited = self._crawl(entry, entry_id, resolver, root)
        except Exception:
            self.graph.rollback(checkpoint)
            del self.warnings[warnings_before:]
            raise
        self._processed |= visited

        log.info(
            "Built from %s: graph has %d nodes, %d edges (%d unresolved references)",
            entry_id, self.graph.node_count(), self.graph.edge_count(),
            len(self.warnings) - warnings_before,
        )
        return entry_id

    def discover_orphans(
        self,
        root: Path,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ) -> list[str]:
        """Add every stylesheet under ``root`` that is not yet a node, flagged orphan.

        Returns the ids of the added nodes. Never adds edges.
        """
        root = Path(root).resolve()
        added: list[str] = []
        for path in discover_stylesheets(root, extensions):
            absolute = path.resolve()
            node_id = file_id(absolute, root)
            if node_id in self.graph:
                continue
            node = self.graph.add_node(node_id, absolute)
            node.add_flag(NodeFlag.ORPHAN)
            added.append(node_id)

        log.info("Orphan discovery under %s: %d files not reachable", root, len(added))
        return added

    # ── Crawl ────────────────────────────────────────────────────────────

    def _crawl(self, entry: Path, entry_id: str, resolver: Resolver, root: Path) -> set[str]:
        """Process every file reachable from the entry. Returns the ids scanned.

        Files crawled by an earlier call already have their edges in the graph
        and are skipped, so their unresolved references are reported once.
        """
        # Each stack frame yields the files its source references, in order.
        # Pushing a new frame before resuming the parent keeps the node
        # insertion order identical to a recursive depth-first walk.
        if entry_id in self._processed:
            return set()
        visited: set[str] = {entry_id}
        stack: list[Iterator[tuple[Path, str]]] = [
            self._process_file(entry, entry_id, resolver, root),
        ]
        while stack:
            try:
                path, node_id = next(stack[-1])
            except StopIteration:
                stack.pop()
                continue
            if node_id in visited or node_id in self._processed:
                continue
            visited.add(node_id)
            stack.append(self._process_file(path, node_id, resolver, root))
        return visited

    def _process_file(
        self,
        path: Path,
        node_id: str,
        resolver: Resolver,
        root: Path,
    ) -> Iterator[tuple[Path, str]]:
        """Add the edges of one file, yielding each resolved target."""
        try:
            directives = scan_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise BuildError(path, f"Failed to read ({exc.__class__.__name__})") from exc

        for directive in directives:
            for target in directive.targets:
                if is_builtin_module(target):
                    continue
                try:
                    resolved = resolver.resolve(path, target)
                except NotFoundError as exc:
                    self._warn(node_id, target, directive.location, str(exc))
                    continue

                target_id = file_id(resolved, root)
                self.graph.add_node(target_id, resolved)
                self.graph.add_edge(
                    node_id, target_id, directive.kind, directive.location, _edge_meta(directive),
                )
                yield resolved, target_id

    def _warn(self, source: str, target: str, location: Location, message: str) -> None:
        log.warning(
            "Could not resolve '%s' referenced from %s:%d", target, source, location.line,
        )
        self.warnings.append(
            ResolutionWarning(source=source, target=target, location=location, message=message),
        )


def _edge_meta(directive: Directive) -> EdgeMeta:
    if isinstance(directive, UseDirective):
        return EdgeMeta(namespace=directive.namespace, configured=directive.configured)
    return EdgeMeta()
