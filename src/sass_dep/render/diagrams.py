"""Diagram exporters: Graphviz DOT, Mermaid flowchart and D2.

All three take an ``OutputSchema`` so a saved analysis can be re-rendered
without touching the source tree.
"""

from __future__ import annotations

import re

from sass_dep.graph.nodes import NodeFlag
from sass_dep.render.schema import OutputEdge, OutputNode, OutputSchema

# Flag -> fill colour. Earlier entries win when a node has several.
_FLAG_COLORS = (
    (NodeFlag.IN_CYCLE, "#ffcccc"),
    (NodeFlag.ENTRY_POINT, "#cce5ff"),
    (NodeFlag.ORPHAN, "#eeeeee"),
    (NodeFlag.HIGH_FAN_IN, "#fff3cd"),
)


def _fill_color(node: OutputNode) -> str | None:
    for flag, color in _FLAG_COLORS:
        if flag in node.flags:
            return color
    return None


def _edge_label(edge: OutputEdge) -> str:
    if edge.namespace:
        return f"{edge.directive_type.value} as {edge.namespace}"
    return edge.directive_type.value


def _sanitize_id(node_id: str) -> str:
    """Identifier safe for Mermaid and D2: alphanumerics and underscores only."""
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "_", node_id)
    if sanitized and sanitized[0].isdigit():
        sanitized = "n" + sanitized
    return sanitized or "node"


def _unique_ids(schema: OutputSchema) -> dict[str, str]:
    ids: dict[str, str] = {}
    used: set[str] = set()
    for node_id in schema.nodes:
        candidate = base = _sanitize_id(node_id)
        n = 2
        while candidate in used:
            candidate = f"{base}_{n}"
            n += 1
        used.add(candidate)
        ids[node_id] = candidate
    return ids


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


# ── Graphviz ────────────────────────────────────────────────────────────────

def to_dot(schema: OutputSchema) -> str:
    lines = [
        "digraph sass_dependencies {",
        "    rankdir=LR;",
        "    node [shape=box, style=rounded, fontname=\"Helvetica\"];",
        "",
    ]
    for node_id, node in schema.nodes.items():
        attrs = []
        color = _fill_color(node)
        if color:
            attrs.append(f"style=\"rounded,filled\", fillcolor={_quote(color)}")
        if NodeFlag.ENTRY_POINT in node.flags:
            attrs.append("penwidth=2")
        suffix = f" [{', '.join(attrs)}]" if attrs else ""
        lines.append(f"    {_quote(node_id)}{suffix};")

    if schema.edges:
        lines.append("")
    for edge in schema.edges:
        style = ", style=dashed" if edge.directive_type.value == "import" else ""
        lines.append(
            f"    {_quote(edge.from_)} -> {_quote(edge.to)} "
            f"[label={_quote(_edge_label(edge))}{style}];"
        )
    lines.append("}")
    return "\n".join(lines) + "\n"


# ── Mermaid ─────────────────────────────────────────────────────────────────

def to_mermaid(schema: OutputSchema, orientation: str = "LR") -> str:
    ids = _unique_ids(schema)
    lines = [f"flowchart {orientation}"]

    for node_id in schema.nodes:
        label = node_id.replace('"', "#quot;")
        lines.append(f'    {ids[node_id]}["{label}"]')

    if schema.edges:
        lines.append("")
    for edge in schema.edges:
        arrow = "-.->" if edge.directive_type.value == "import" else "-->"
        lines.append(f"    {ids[edge.from_]} {arrow}|{_edge_label(edge)}| {ids[edge.to]}")

    styled = [(node_id, _fill_color(node)) for node_id, node in schema.nodes.items()]
    styled = [(node_id, color) for node_id, color in styled if color]
    if styled:
        lines.append("")
    for node_id, color in styled:
        lines.append(f"    style {ids[node_id]} fill:{color}")

    return "\n".join(lines) + "\n"


# ── D2 ──────────────────────────────────────────────────────────────────────

def to_d2(schema: OutputSchema) -> str:
    ids = _unique_ids(schema)
    lines = ["direction: right", ""]

    for node_id, node in schema.nodes.items():
        color = _fill_color(node)
        if color:
            lines.append(f"{ids[node_id]}: {_quote(node_id)} {{")
            lines.append(f"  style.fill: {_quote(color)}")
            lines.append("}")
        else:
            lines.append(f"{ids[node_id]}: {_quote(node_id)}")

    if schema.edges:
        lines.append("")
    for edge in schema.edges:
        lines.append(f"{ids[edge.from_]} -> {ids[edge.to]}: {_quote(_edge_label(edge))}")

    return "\n".join(lines) + "\n"
