"""DependencyGraph: arena of nodes and edges addressed by integer handles."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from sass_dep.graph.nodes import DependencyEdge, EdgeMeta, FileNode, NodeFlag
from sass_dep.parser.directives import DirectiveType, Location


@dataclass(frozen=True)
class Checkpoint:
    """Graph size and entry set at a point in time, for rollback."""
    node_count: int
    edge_count: int
    entry_points: frozenset[str]


class DependencyGraph:
    """Directed graph of stylesheet files.

    Nodes and edges live in two dense lists and are referred to internally by
    their position (handle). ``_index`` maps a node id to its handle; the
    adjacency lists hold edge handles. Insertion order is discovery order and
    every accessor iterates in that order.
    """

    def __init__(self) -> None:
        self._nodes: list[FileNode] = []
        self._edges: list[DependencyEdge] = []
        self._index: dict[str, int] = {}
        # Per node handle: handles of outgoing / incoming edges
        self._out: list[list[int]] = []
        self._in: list[list[int]] = []
        # (src handle, dst handle) -> edge handle, for deduplication
        self._edge_index: dict[tuple[int, int], int] = {}
        self._edge_ends: list[tuple[int, int]] = []
        self._entry_points: set[str] = set()
        self._cycles: list[list[str]] = []

    # ── Nodes ────────────────────────────────────────────────────────────

    def add_node(self, node_id: str, absolute_path: Path) -> FileNode:
        """Return the node for ``node_id``, creating it if needed."""
        handle = self._index.get(node_id)
        if handle is not None:
            return self._nodes[handle]
        node = FileNode(id=node_id, absolute_path=absolute_path)
        self._index[node_id] = len(self._nodes)
        self._nodes.append(node)
        self._out.append([])
        self._in.append([])
        return node

    def get_node(self, node_id: str) -> FileNode | None:
        handle = self._index.get(node_id)
        return None if handle is None else self._nodes[handle]

    def nodes(self) -> list[FileNode]:
        return list(self._nodes)

    def node_ids(self) -> list[str]:
        return [n.id for n in self._nodes]

    def node_count(self) -> int:
        return len(self._nodes)

    def mark_entry_point(self, node_id: str) -> None:
        node = self.get_node(node_id)
        if node is None:
            raise KeyError(node_id)
        node.add_flag(NodeFlag.ENTRY_POINT)
        self._entry_points.add(node_id)

    @property
    def entry_points(self) -> frozenset[str]:
        return frozenset(self._entry_points)

    # ── Edges ────────────────────────────────────────────────────────────

    def add_edge(
        self,
        src: str,
        dst: str,
        directive_type: DirectiveType,
        location: Location | None = None,
        meta: EdgeMeta | None = None,
    ) -> bool:
        """Add an edge unless one already exists for (src, dst).

        Returns True if a new edge was created. Both nodes must exist.
        """
        src_h = self._index[src]
        dst_h = self._index[dst]
        if (src_h, dst_h) in self._edge_index:
            return False
        edge = DependencyEdge(
            src=src,
            dst=dst,
            directive_type=directive_type,
            location=location or Location(),
            meta=meta or EdgeMeta(),
        )
        handle = len(self._edges)
        self._edges.append(edge)
        self._edge_ends.append((src_h, dst_h))
        self._edge_index[(src_h, dst_h)] = handle
        self._out[src_h].append(handle)
        self._in[dst_h].append(handle)
        return True

    def get_edge(self, src: str, dst: str) -> DependencyEdge | None:
        src_h = self._index.get(src)
        dst_h = self._index.get(dst)
        if src_h is None or dst_h is None:
            return None
        handle = self._edge_index.get((src_h, dst_h))
        return None if handle is None else self._edges[handle]

    def has_edge(self, src: str, dst: str) -> bool:
        return self.get_edge(src, dst) is not None

    def edges(self) -> list[DependencyEdge]:
        return list(self._edges)

    def edge_count(self) -> int:
        return len(self._edges)

    def outgoing(self, node_id: str) -> list[DependencyEdge]:
        return [self._edges[e] for e in self._out[self._index[node_id]]]

    def incoming(self, node_id: str) -> list[DependencyEdge]:
        return [self._edges[e] for e in self._in[self._index[node_id]]]

    # ── Handle-level access for graph algorithms ─────────────────────────

    def handle_of(self, node_id: str) -> int:
        return self._index[node_id]

    def node_at(self, handle: int) -> FileNode:
        return self._nodes[handle]

    def successors(self, handle: int) -> list[int]:
        """Target handles of the outgoing edges of ``handle``, in edge order."""
        return [self._edge_ends[e][1] for e in self._out[handle]]

    def out_degree(self, handle: int) -> int:
        return len(self._out[handle])

    def in_degree(self, handle: int) -> int:
        return len(self._in[handle])

    # ── Analysis results ─────────────────────────────────────────────────

    @property
    def cycles(self) -> list[list[str]]:
        return [list(c) for c in self._cycles]

    def set_cycles(self, cycles: list[list[str]]) -> None:
        self._cycles = [list(c) for c in cycles]

    # ── Rollback ─────────────────────────────────────────────────────────

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(
            node_count=len(self._nodes),
            edge_count=len(self._edges),
            entry_points=frozenset(self._entry_points),
        )

    def rollback(self, cp: Checkpoint) -> None:
        """Discard every node, edge and entry point added since ``cp``."""
        for node_id in self._entry_points - cp.entry_points:
            handle = self._index[node_id]
            if handle < cp.node_count:
                self._nodes[handle].remove_flag(NodeFlag.ENTRY_POINT)
        self._entry_points = set(cp.entry_points)

        for node in self._nodes[cp.node_count:]:
            del self._index[node.id]
        del self._nodes[cp.node_count:]
        del self._out[cp.node_count:]
        del self._in[cp.node_count:]

        for ends in self._edge_ends[cp.edge_count:]:
            del self._edge_index[ends]
        del self._edges[cp.edge_count:]
        del self._edge_ends[cp.edge_count:]
        for adjacency in (self._out, self._in):
            for i, handles in enumerate(adjacency):
                adjacency[i] = [e for e in handles if e < cp.edge_count]

    # ── Container protocol ───────────────────────────────────────────────

    def __iter__(self) -> Iterator[FileNode]:
        return iter(list(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(nodes={len(self._nodes)}, edges={len(self._edges)}, "
            f"entry_points={len(self._entry_points)}, cycles={len(self._cycles)})"
        )
