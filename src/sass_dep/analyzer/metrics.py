"""Per-node metrics: fan-in/out, depth from entry points, transitive deps."""

from __future__ import annotations

import sys
from collections import deque

from sass_dep.graph.model import DependencyGraph

# Depth of a node no entry point can reach
UNREACHABLE_DEPTH = sys.maxsize


def calculate_fan_in_out(graph: DependencyGraph) -> None:
    for h in range(graph.node_count()):
        metrics = graph.node_at(h).metrics
        metrics.fan_in = graph.in_degree(h)
        metrics.fan_out = graph.out_degree(h)


def calculate_depths(graph: DependencyGraph) -> None:
    """Multi-source BFS from every entry point at depth 0."""
    n = graph.node_count()
    depth = [UNREACHABLE_DEPTH] * n
    queue: deque[int] = deque()

    # Seed in node order, not set order
    entry_points = graph.entry_points
    for h in range(n):
        if graph.node_at(h).id in entry_points:
            depth[h] = 0
            queue.append(h)

    while queue:
        current = queue.popleft()
        next_depth = depth[current] + 1
        for neighbor in graph.successors(current):
            if depth[neighbor] == UNREACHABLE_DEPTH:
                depth[neighbor] = next_depth
                queue.append(neighbor)

    for h in range(n):
        graph.node_at(h).metrics.depth = depth[h]


def calculate_transitive_deps(graph: DependencyGraph) -> None:
    """Count the distinct files reachable from each node, excluding itself."""
    n = graph.node_count()
    successors = [graph.successors(h) for h in range(n)]
    for h in range(n):
        visited = {h}
        stack = [h]
        while stack:
            current = stack.pop()
            for neighbor in successors[current]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)
        graph.node_at(h).metrics.transitive_deps = len(visited) - 1
