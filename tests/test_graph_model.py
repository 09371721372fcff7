"""Tests for the DependencyGraph container."""

from pathlib import Path

import pytest

from sass_dep.graph import DependencyGraph, DirectiveType, EdgeMeta, NodeFlag
from sass_dep.parser import Location


def _graph(*ids: str) -> DependencyGraph:
    g = DependencyGraph()
    for node_id in ids:
        g.add_node(node_id, Path("/project") / node_id)
    return g


class TestAddNodeEdge:
    def test_add_node_is_idempotent(self):
        g = DependencyGraph()
        first = g.add_node("a.scss", Path("/p/a.scss"))
        second = g.add_node("a.scss", Path("/other/a.scss"))
        assert first is second
        assert first.absolute_path == Path("/p/a.scss")
        assert g.node_count() == 1

    def test_insertion_order(self):
        g = _graph("c", "a", "b")
        assert g.node_ids() == ["c", "a", "b"]
        assert [n.id for n in g] == ["c", "a", "b"]

    def test_add_edge(self):
        g = _graph("a", "b")
        assert g.add_edge("a", "b", DirectiveType.USE, Location(2, 1)) is True
        edge = g.get_edge("a", "b")
        assert edge.directive_type == DirectiveType.USE
        assert edge.location == Location(2, 1)
        assert g.has_edge("a", "b")
        assert not g.has_edge("b", "a")

    def test_duplicate_edge_keeps_first(self):
        g = _graph("a", "b")
        g.add_edge("a", "b", DirectiveType.USE, Location(1, 1), EdgeMeta(namespace="x"))
        assert g.add_edge("a", "b", DirectiveType.IMPORT, Location(5, 1)) is False
        assert g.edge_count() == 1
        edge = g.get_edge("a", "b")
        assert edge.directive_type == DirectiveType.USE
        assert edge.meta.namespace == "x"

    def test_edge_needs_existing_nodes(self):
        g = _graph("a")
        with pytest.raises(KeyError):
            g.add_edge("a", "missing", DirectiveType.USE)

    def test_self_edge(self):
        g = _graph("a")
        assert g.add_edge("a", "a", DirectiveType.IMPORT)
        assert g.successors(g.handle_of("a")) == [g.handle_of("a")]

    def test_adjacency(self):
        g = _graph("a", "b", "c")
        g.add_edge("a", "b", DirectiveType.USE)
        g.add_edge("a", "c", DirectiveType.FORWARD)
        g.add_edge("b", "c", DirectiveType.USE)
        assert [e.dst for e in g.outgoing("a")] == ["b", "c"]
        assert [e.src for e in g.incoming("c")] == ["a", "b"]
        assert g.out_degree(g.handle_of("a")) == 2
        assert g.in_degree(g.handle_of("c")) == 2
        assert g.get_edge("c", "a") is None
        assert g.get_edge("a", "zzz") is None


class TestEntryPoints:
    def test_mark_entry_point_sets_flag(self):
        g = _graph("main")
        g.mark_entry_point("main")
        assert g.get_node("main").has_flag(NodeFlag.ENTRY_POINT)
        assert g.entry_points == frozenset({"main"})

    def test_unknown_entry_point(self):
        with pytest.raises(KeyError):
            DependencyGraph().mark_entry_point("nope")


class TestRollback:
    def test_rollback_discards_later_additions(self):
        g = _graph("a", "b")
        g.add_edge("a", "b", DirectiveType.USE)
        g.mark_entry_point("a")
        cp = g.checkpoint()

        g.add_node("c", Path("/project/c"))
        g.add_edge("b", "c", DirectiveType.USE)
        g.add_edge("c", "a", DirectiveType.USE)
        g.mark_entry_point("b")
        g.mark_entry_point("c")

        g.rollback(cp)

        assert g.node_ids() == ["a", "b"]
        assert g.edge_count() == 1
        assert "c" not in g
        assert g.entry_points == frozenset({"a"})
        assert not g.get_node("b").has_flag(NodeFlag.ENTRY_POINT)
        assert g.outgoing("b") == []
        assert [e.src for e in g.incoming("a")] == []

    def test_rolled_back_edge_can_be_added_again(self):
        g = _graph("a", "b")
        cp = g.checkpoint()
        g.add_edge("a", "b", DirectiveType.USE)
        g.rollback(cp)
        assert g.add_edge("a", "b", DirectiveType.IMPORT) is True
        assert g.get_edge("a", "b").directive_type == DirectiveType.IMPORT


def test_repr():
    g = _graph("a")
    assert repr(g) == "DependencyGraph(nodes=1, edges=0, entry_points=0, cycles=0)"
    assert len(g) == 1
    assert "a" in g
