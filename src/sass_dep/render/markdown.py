"""Render an analysis result as a Markdown report."""

from __future__ import annotations

from sass_dep.analyzer.metrics import UNREACHABLE_DEPTH
from sass_dep.graph.nodes import FileNode, NodeFlag
from sass_dep.pipeline import AnalysisResult
from sass_dep.render.schema import graph_statistics

# Longest lists rendered in full; the rest is summarized
_MAX_LISTED = 30


def render_markdown(result: AnalysisResult) -> str:
    """Produce a full Markdown report from an AnalysisResult."""
    sections: list[str] = []
    graph = result.graph
    stats = graph_statistics(graph)
    nodes = graph.nodes()

    # ── Title ────────────────────────────────────────────────────────────
    sections.append(f"# Sass Dependency Report: {result.root.name}\n")

    # ── Summary box ──────────────────────────────────────────────────────
    sections.append("\n".join([
        f"- **Root**: `{result.root}`",
        f"- **Files**: {stats.total_files}",
        f"- **Dependencies**: {stats.total_dependencies}",
        f"- **Entry points**: {stats.entry_points}",
        f"- **Cycles**: {len(graph.cycles)}",
        f"- **Max depth**: {stats.max_depth}",
        f"- **Max fan-in / fan-out**: {stats.max_fan_in} / {stats.max_fan_out}",
        f"- **Unresolved references**: {len(result.warnings)}",
    ]) + "\n")

    # ── Entry points ─────────────────────────────────────────────────────
    entries = [n for n in nodes if n.has_flag(NodeFlag.ENTRY_POINT)]
    if entries:
        sections.append("## Entry Points\n")
        for n in entries:
            sections.append(f"- `{n.id}` ({n.metrics.transitive_deps} transitive dependencies)")
        sections.append("")

    # ── Cycles ───────────────────────────────────────────────────────────
    if graph.cycles:
        sections.append("## Cycles\n")
        sections.append("> Files in a cycle cannot be loaded with `@use`; break the loop.\n")
        for i, cycle in enumerate(graph.cycles, 1):
            chain = " -> ".join(f"`{c}`" for c in cycle + cycle[:1])
            sections.append(f"{i}. {chain}")
        sections.append("")

    # ── Hubs ─────────────────────────────────────────────────────────────
    hubs = [n for n in nodes if n.has_flag(NodeFlag.HIGH_FAN_IN) or n.has_flag(NodeFlag.HIGH_FAN_OUT)]
    if hubs:
        sections.append("## Hub Files\n")
        sections.append("| File | Fan-in | Fan-out | Flags |")
        sections.append("|---|---|---|---|")
        for n in sorted(hubs, key=lambda x: (-x.metrics.fan_in, -x.metrics.fan_out, x.id)):
            sections.append(f"| `{n.id}` | {n.metrics.fan_in} | {n.metrics.fan_out} | {_flags(n)} |")
        sections.append("")

    # ── Orphans ──────────────────────────────────────────────────────────
    orphans = [n.id for n in nodes if n.has_flag(NodeFlag.ORPHAN)]
    if orphans:
        sections.append("## Orphan Files\n")
        sections.append(_id_list(orphans) + "\n")

    # ── Unresolved references ────────────────────────────────────────────
    if result.warnings:
        sections.append("## Unresolved References\n")
        sections.append("| File | Line | Target |")
        sections.append("|---|---|---|")
        for w in result.warnings:
            sections.append(f"| `{w.source}` | {w.location.line} | `{w.target}` |")
        sections.append("")

    # ── Per-file metrics ─────────────────────────────────────────────────
    if nodes:
        sections.append("## Files\n")
        sections.append("| File | Depth | Fan-in | Fan-out | Transitive | Flags |")
        sections.append("|---|---|---|---|---|---|")
        for n in nodes:
            m = n.metrics
            depth = "-" if m.depth == UNREACHABLE_DEPTH else str(m.depth)
            sections.append(
                f"| `{n.id}` | {depth} | {m.fan_in} | {m.fan_out} | {m.transitive_deps} | {_flags(n)} |"
            )
        sections.append("")

    return "\n".join(sections)


def _flags(node: FileNode) -> str:
    return ", ".join(f.value for f in node.sorted_flags()) or "-"


def _id_list(ids: list[str]) -> str:
    listed = ", ".join(f"`{i}`" for i in ids[:_MAX_LISTED])
    if len(ids) > _MAX_LISTED:
        listed += f" ... and {len(ids) - _MAX_LISTED} more"
    return listed
