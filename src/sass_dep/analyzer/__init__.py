"""Graph analysis: cycles, metrics and flags.

Usage:
    from sass_dep.analyzer import Analyzer

    Analyzer().analyze(graph)   # mutates graph in place
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sass_dep.analyzer.check import Constraints, Violation, check_constraints
from sass_dep.analyzer.cycles import detect_cycles, strongly_connected_components
from sass_dep.analyzer.flags import ANALYZER_FLAGS, FlagThresholds, assign_flags
from sass_dep.analyzer.metrics import (
    UNREACHABLE_DEPTH,
    calculate_depths,
    calculate_fan_in_out,
    calculate_transitive_deps,
)
from sass_dep.graph.model import DependencyGraph

log = logging.getLogger(__name__)


@dataclass
class AnalyzerConfig:
    thresholds: FlagThresholds = field(default_factory=FlagThresholds)


class Analyzer:
    """Runs every analysis stage, in order, on a built graph."""

    def __init__(self, config: AnalyzerConfig | None = None) -> None:
        self.config = config or AnalyzerConfig()

    def analyze(self, graph: DependencyGraph) -> None:
        """Detect cycles, compute metrics, then assign flags.

        Deterministic: re-running on an unchanged graph yields the same result.
        """
        graph.set_cycles(detect_cycles(graph))
        calculate_fan_in_out(graph)
        calculate_depths(graph)
        calculate_transitive_deps(graph)
        assign_flags(graph, self.config.thresholds)

        log.info(
            "Analysis complete: %d nodes, %d edges, %d cycles",
            graph.node_count(), graph.edge_count(), len(graph.cycles),
        )


__all__ = [
    "ANALYZER_FLAGS",
    "Analyzer",
    "AnalyzerConfig",
    "Constraints",
    "FlagThresholds",
    "UNREACHABLE_DEPTH",
    "Violation",
    "assign_flags",
    "calculate_depths",
    "calculate_fan_in_out",
    "calculate_transitive_deps",
    "check_constraints",
    "detect_cycles",
    "strongly_connected_components",
]
