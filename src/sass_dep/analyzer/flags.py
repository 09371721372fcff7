"""Flag assignment from metrics and cycle membership."""

from __future__ import annotations

from dataclasses import dataclass

from sass_dep.graph.model import DependencyGraph
from sass_dep.graph.nodes import NodeFlag

# Flags owned by the analyzer. EntryPoint and Orphan are set by the builder.
ANALYZER_FLAGS = frozenset({
    NodeFlag.LEAF, NodeFlag.HIGH_FAN_IN, NodeFlag.HIGH_FAN_OUT, NodeFlag.IN_CYCLE,
})


@dataclass
class FlagThresholds:
    high_fan_in: int = 5
    high_fan_out: int = 10


def assign_flags(graph: DependencyGraph, thresholds: FlagThresholds) -> None:
    """Set Leaf, HighFanIn, HighFanOut and InCycle on every node.

    Expects metrics and cycles to be computed already. Analyzer flags from a
    previous run are cleared first; builder flags are left alone.
    """
    cycle_members = {node_id for cycle in graph.cycles for node_id in cycle}

    for node in graph.nodes():
        node.flags -= ANALYZER_FLAGS
        m = node.metrics
        if m.fan_out == 0:
            node.add_flag(NodeFlag.LEAF)
        if m.fan_in >= thresholds.high_fan_in:
            node.add_flag(NodeFlag.HIGH_FAN_IN)
        if m.fan_out >= thresholds.high_fan_out:
            node.add_flag(NodeFlag.HIGH_FAN_OUT)
        if node.id in cycle_members:
            node.add_flag(NodeFlag.IN_CYCLE)
