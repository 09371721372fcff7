"""Architecture constraints checked against an analyzed graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from sass_dep.analyzer.metrics import UNREACHABLE_DEPTH
from sass_dep.graph.model import DependencyGraph


@dataclass
class Constraints:
    no_cycles: bool = False
    max_depth: int | None = None
    max_fan_out: int | None = None
    max_fan_in: int | None = None


@dataclass
class Violation:
    kind: Literal["cycle", "max_depth", "max_fan_out", "max_fan_in"]
    files: list[str] = field(default_factory=list)
    value: int = 0   # the offending metric (cycle length for cycles)
    limit: int = 0

    def __str__(self) -> str:
        if self.kind == "cycle":
            return "Cycle detected: " + " -> ".join(self.files)
        label = {
            "max_depth": "Depth",
            "max_fan_out": "Fan-out",
            "max_fan_in": "Fan-in",
        }[self.kind]
        return f"{label} violation: {self.files[0]} has {label.lower()} {self.value} (max: {self.limit})"


def check_constraints(graph: DependencyGraph, constraints: Constraints) -> list[Violation]:
    """Return every violation, cycles first, then per-node limits in node order.

    The graph must already be analyzed. Files no entry point reaches have no
    depth and never violate max_depth.
    """
    violations: list[Violation] = []

    if constraints.no_cycles:
        for cycle in graph.cycles:
            violations.append(Violation(kind="cycle", files=list(cycle), value=len(cycle)))

    limits = (
        ("max_depth", constraints.max_depth, lambda m: m.depth),
        ("max_fan_out", constraints.max_fan_out, lambda m: m.fan_out),
        ("max_fan_in", constraints.max_fan_in, lambda m: m.fan_in),
    )
    for kind, limit, metric in limits:
        if limit is None:
            continue
        for node in graph.nodes():
            value = metric(node.metrics)
            if kind == "max_depth" and value == UNREACHABLE_DEPTH:
                continue
            if value > limit:
                violations.append(Violation(kind=kind, files=[node.id], value=value, limit=limit))

    return violations
