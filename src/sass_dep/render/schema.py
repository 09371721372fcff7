"""Serialized analysis output (the JSON written by ``sass-dep analyze``)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from sass_dep import __version__
from sass_dep.analyzer.metrics import UNREACHABLE_DEPTH
from sass_dep.graph.model import DependencyGraph
from sass_dep.graph.nodes import DependencyEdge, NodeFlag
from sass_dep.parser.directives import DirectiveType

SCHEMA_VERSION = "1.0.0"


# ── Nodes ───────────────────────────────────────────────────────────────────

class OutputMetrics(BaseModel):
    fan_in: int = 0
    fan_out: int = 0
    depth: int = 0
    transitive_deps: int = 0


class OutputNode(BaseModel):
    path: str
    metrics: OutputMetrics = Field(default_factory=OutputMetrics)
    flags: list[NodeFlag] = Field(default_factory=list)


# ── Edges ───────────────────────────────────────────────────────────────────

class OutputLocation(BaseModel):
    line: int = 0
    column: int = 0


class OutputEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    directive_type: DirectiveType
    location: OutputLocation = Field(default_factory=OutputLocation)
    namespace: str | None = None
    configured: bool | None = None  # only set for @use edges


# ── Analysis ────────────────────────────────────────────────────────────────

class Statistics(BaseModel):
    total_files: int = 0
    total_dependencies: int = 0
    entry_points: int = 0
    orphan_files: int = 0
    leaf_files: int = 0
    max_depth: int = 0
    max_fan_in: int = 0
    max_fan_out: int = 0


class AnalysisSection(BaseModel):
    cycles: list[list[str]] = Field(default_factory=list)
    statistics: Statistics = Field(default_factory=Statistics)


class Metadata(BaseModel):
    generated_at: str
    root: str
    sass_dep_version: str = __version__


# ── Top level ───────────────────────────────────────────────────────────────

class OutputSchema(BaseModel):
    version: str = SCHEMA_VERSION
    metadata: Metadata
    nodes: dict[str, OutputNode] = Field(default_factory=dict)
    edges: list[OutputEdge] = Field(default_factory=list)
    analysis: AnalysisSection = Field(default_factory=AnalysisSection)

    @classmethod
    def from_graph(cls, graph: DependencyGraph, root: Path) -> OutputSchema:
        """Snapshot an analyzed graph. Nodes and edges keep graph order."""
        nodes = {
            node.id: OutputNode(
                path=str(node.absolute_path),
                metrics=OutputMetrics(
                    fan_in=node.metrics.fan_in,
                    fan_out=node.metrics.fan_out,
                    depth=node.metrics.depth,
                    transitive_deps=node.metrics.transitive_deps,
                ),
                flags=node.sorted_flags(),
            )
            for node in graph.nodes()
        }
        return cls(
            metadata=Metadata(
                generated_at=datetime.now(timezone.utc).isoformat(),
                root=str(root),
            ),
            nodes=nodes,
            edges=[_edge(e) for e in graph.edges()],
            analysis=AnalysisSection(
                cycles=graph.cycles,
                statistics=graph_statistics(graph),
            ),
        )

    def nodes_with_flag(self, flag: NodeFlag) -> list[str]:
        return [node_id for node_id, node in self.nodes.items() if flag in node.flags]


def _edge(edge: DependencyEdge) -> OutputEdge:
    is_use = edge.directive_type == DirectiveType.USE
    return OutputEdge(
        from_=edge.src,
        to=edge.dst,
        directive_type=edge.directive_type,
        location=OutputLocation(line=edge.location.line, column=edge.location.column),
        namespace=edge.meta.namespace,
        configured=edge.meta.configured if is_use else None,
    )


def graph_statistics(graph: DependencyGraph) -> Statistics:
    """Whole-graph totals. max_depth only counts nodes an entry point reaches."""
    nodes = graph.nodes()
    reachable_depths = [n.metrics.depth for n in nodes if n.metrics.depth != UNREACHABLE_DEPTH]
    return Statistics(
        total_files=len(nodes),
        total_dependencies=graph.edge_count(),
        entry_points=sum(1 for n in nodes if n.has_flag(NodeFlag.ENTRY_POINT)),
        orphan_files=sum(1 for n in nodes if n.has_flag(NodeFlag.ORPHAN)),
        leaf_files=sum(1 for n in nodes if n.has_flag(NodeFlag.LEAF)),
        max_depth=max(reachable_depths, default=0),
        max_fan_in=max((n.metrics.fan_in for n in nodes), default=0),
        max_fan_out=max((n.metrics.fan_out for n in nodes), default=0),
    )


def to_json(schema: OutputSchema) -> str:
    """Pretty-printed JSON with ``from`` spelled as in the file format."""
    return json.dumps(schema.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2)


def load_schema(text: str) -> OutputSchema:
    """Parse JSON written by ``to_json``.

    Raises:
        pydantic.ValidationError: the document does not match the schema.
    """
    return OutputSchema.model_validate_json(text)
