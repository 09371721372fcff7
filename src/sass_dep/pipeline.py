"""One-call pipeline: build from every entry point, then analyze."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sass_dep.analyzer import Analyzer, AnalyzerConfig
from sass_dep.graph import DependencyGraph, GraphBuilder, ResolutionWarning
from sass_dep.resolver import Resolver, ResolverConfig

log = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """The analyzed graph plus everything worth reporting about the run."""
    graph: DependencyGraph
    root: Path
    warnings: list[ResolutionWarning] = field(default_factory=list)
    orphans: list[str] = field(default_factory=list)


def run_analysis(
    root: Path,
    entry_points: list[Path],
    *,
    resolver_config: ResolverConfig | None = None,
    analyzer_config: AnalyzerConfig | None = None,
    include_orphans: bool = False,
) -> AnalysisResult:
    """Build the dependency graph for ``entry_points`` and analyze it.

    Args:
        root: Project root. Node ids are relative to it, and relative entry
              points are taken relative to it.
        entry_points: Entry stylesheets.
        resolver_config: Load paths and extensions.
        analyzer_config: Flag thresholds.
        include_orphans: Also add stylesheets under root that no entry reaches.

    Raises:
        BuildError: an entry point or a referenced file could not be read.
    """
    root = Path(root).resolve()
    log.info("Analyzing %d entry points under %s", len(entry_points), root)

    resolver = Resolver(resolver_config)
    builder = GraphBuilder()
    for entry in entry_points:
        entry = Path(entry)
        builder.build_from_entry(entry if entry.is_absolute() else root / entry, resolver, root)

    orphans: list[str] = []
    if include_orphans:
        orphans = builder.discover_orphans(root, resolver.extensions)

    Analyzer(analyzer_config).analyze(builder.graph)

    return AnalysisResult(
        graph=builder.graph,
        root=root,
        warnings=list(builder.warnings),
        orphans=orphans,
    )
