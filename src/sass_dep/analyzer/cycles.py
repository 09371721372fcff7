"""Cycle detection via strongly connected components (Tarjan)."""

from __future__ import annotations

from sass_dep.graph.model import DependencyGraph


def strongly_connected_components(graph: DependencyGraph) -> list[list[int]]:
    """Tarjan's algorithm over node handles, without recursion.

    Components come out in completion order (reverse topological); members
    of a component are in stack-pop order. Roots are tried in node insertion
    order and successors in edge insertion order, so the result is stable.
    """
    n = graph.node_count()
    successors = [graph.successors(h) for h in range(n)]
    index = [-1] * n
    low = [0] * n
    on_stack = [False] * n
    stack: list[int] = []
    components: list[list[int]] = []
    counter = 0

    for root in range(n):
        if index[root] >= 0:
            continue
        index[root] = low[root] = counter
        counter += 1
        stack.append(root)
        on_stack[root] = True
        work = [(root, iter(successors[root]))]

        while work:
            v, it = work[-1]
            for w in it:
                if index[w] < 0:
                    index[w] = low[w] = counter
                    counter += 1
                    stack.append(w)
                    on_stack[w] = True
                    work.append((w, iter(successors[w])))
                    break
                if on_stack[w]:
                    low[v] = min(low[v], index[w])
            else:
                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[v])
                if low[v] == index[v]:
                    component: list[int] = []
                    while True:
                        w = stack.pop()
                        on_stack[w] = False
                        component.append(w)
                        if w == v:
                            break
                    components.append(component)

    return components


def detect_cycles(graph: DependencyGraph) -> list[list[str]]:
    """Return every dependency cycle as a list of node ids.

    A cycle is a strongly connected component with more than one node, or a
    single node that references itself.
    """
    cycles: list[list[str]] = []
    for component in strongly_connected_components(graph):
        if len(component) == 1:
            h = component[0]
            if h not in graph.successors(h):
                continue
        cycles.append([graph.node_at(h).id for h in component])
    return cycles
