"""Tests for JSON output, diagram export and the Markdown report."""

import json
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from sass_dep.pipeline import AnalysisResult, run_analysis
from sass_dep.render.diagrams import to_d2, to_dot, to_mermaid
from sass_dep.render.markdown import render_markdown
from sass_dep.render.schema import Metadata, OutputNode, OutputSchema, load_schema, to_json


def _write(tmpdir: Path, name: str, content: str = "") -> Path:
    p = tmpdir / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p


@pytest.fixture
def result(tmp_path: Path) -> AnalysisResult:
    root = tmp_path.resolve()
    _write(root, "main.scss", '@use "b" as bee;\n@import "c";\n@use "missing";\n')
    _write(root, "_b.scss", '@forward "c";\n')
    _write(root, "_c.scss", '@use "b";\n')
    _write(root, "_old.scss")
    return run_analysis(root, [Path("main.scss")], include_orphans=True)


# ── JSON schema ─────────────────────────────────────────────────────────────

def test_json_layout(result):
    data = json.loads(to_json(OutputSchema.from_graph(result.graph, result.root)))

    assert data["version"] == "1.0.0"
    assert data["metadata"]["root"] == str(result.root)
    assert "generated_at" in data["metadata"]
    assert list(data["nodes"]) == ["main.scss", "_b.scss", "_c.scss", "_old.scss"]
    assert data["nodes"]["main.scss"]["flags"] == ["entry_point"]
    assert data["nodes"]["_old.scss"]["flags"] == ["leaf", "orphan"]
    assert data["nodes"]["_b.scss"]["metrics"] == {
        "fan_in": 2, "fan_out": 1, "depth": 1, "transitive_deps": 1,
    }


def test_json_edges(result):
    data = json.loads(to_json(OutputSchema.from_graph(result.graph, result.root)))
    use_edge, forward_edge = data["edges"][0], data["edges"][1]

    assert use_edge == {
        "from": "main.scss",
        "to": "_b.scss",
        "directive_type": "use",
        "location": {"line": 1, "column": 1},
        "namespace": "bee",
        "configured": False,
    }
    assert forward_edge["directive_type"] == "forward"
    assert "namespace" not in forward_edge
    assert "configured" not in forward_edge
    assert [(e["from"], e["to"]) for e in data["edges"]] == [
        ("main.scss", "_b.scss"),
        ("_b.scss", "_c.scss"),
        ("_c.scss", "_b.scss"),
        ("main.scss", "_c.scss"),
    ]


def test_json_statistics(result):
    schema = OutputSchema.from_graph(result.graph, result.root)
    stats = schema.analysis.statistics
    assert stats.total_files == 4
    assert stats.total_dependencies == 4
    assert stats.entry_points == 1
    assert stats.orphan_files == 1
    assert stats.leaf_files == 1
    assert stats.max_depth == 1
    assert stats.max_fan_in == 2
    assert stats.max_fan_out == 2
    assert [sorted(c) for c in schema.analysis.cycles] == [["_b.scss", "_c.scss"]]


def test_load_schema(result):
    saved = OutputSchema.from_graph(result.graph, result.root)
    loaded = load_schema(to_json(saved))
    assert loaded.edges[0].from_ == "main.scss"
    assert loaded.nodes_with_flag("orphan") == ["_old.scss"]
    assert loaded.analysis.statistics == saved.analysis.statistics


def test_load_schema_rejects_garbage():
    with pytest.raises(ValidationError):
        load_schema('{"version": "1.0.0"}')
    with pytest.raises(ValidationError):
        load_schema("not json")


# ── Diagrams ────────────────────────────────────────────────────────────────

def test_dot(result):
    dot = to_dot(OutputSchema.from_graph(result.graph, result.root))
    assert dot.startswith("digraph sass_dependencies {")
    assert dot.rstrip().endswith("}")
    assert '"main.scss" -> "_b.scss" [label="use as bee"];' in dot
    assert '"main.scss" -> "_c.scss" [label="import", style=dashed];' in dot
    assert '"_b.scss" [style="rounded,filled", fillcolor="#ffcccc"];' in dot


def test_mermaid(result):
    mermaid = to_mermaid(OutputSchema.from_graph(result.graph, result.root))
    lines = mermaid.splitlines()
    assert lines[0] == "flowchart LR"
    assert '    main_scss["main.scss"]' in lines
    assert "    main_scss -->|use as bee| _b_scss" in lines
    assert "    _b_scss -->|forward| _c_scss" in lines
    assert "    main_scss -.->|import| _c_scss" in lines
    assert "    style main_scss fill:#cce5ff" in lines
    assert "    style _b_scss fill:#ffcccc" in lines


def test_mermaid_ids_are_unique():
    schema = OutputSchema(
        metadata=Metadata(generated_at="2024-01-01T00:00:00+00:00", root="/r"),
        nodes={
            "a.scss": OutputNode(path="/r/a.scss"),
            "a_scss": OutputNode(path="/r/a_scss"),
            "1col.scss": OutputNode(path="/r/1col.scss"),
        },
    )
    lines = to_mermaid(schema).splitlines()
    assert '    a_scss["a.scss"]' in lines
    assert '    a_scss_2["a_scss"]' in lines
    assert '    n1col_scss["1col.scss"]' in lines


def test_d2(result):
    d2 = to_d2(OutputSchema.from_graph(result.graph, result.root))
    lines = d2.splitlines()
    assert lines[0] == "direction: right"
    assert 'main_scss -> _b_scss: "use as bee"' in lines
    assert '_old_scss: "_old.scss" {' in lines
    assert '  style.fill: "#eeeeee"' in lines


# ── Markdown ────────────────────────────────────────────────────────────────

def test_markdown_report(result):
    md = render_markdown(result)
    assert md.startswith(f"# Sass Dependency Report: {result.root.name}")
    assert "- **Files**: 4" in md
    assert "- **Cycles**: 1" in md
    assert "## Entry Points" in md
    assert "## Cycles" in md
    assert "## Orphan Files" in md
    assert "`_old.scss`" in md
    assert "## Unresolved References" in md
    assert "| `main.scss` | 3 | `missing` |" in md
    assert "| `_old.scss` | - | 0 | 0 | 0 | leaf, orphan |" in md


def test_markdown_report_clean_project():
    with tempfile.TemporaryDirectory() as d:
        root = Path(d).resolve()
        _write(root, "main.scss", '@use "a";')
        _write(root, "_a.scss")
        md = render_markdown(run_analysis(root, [Path("main.scss")]))
        assert "## Cycles" not in md
        assert "## Unresolved References" not in md
        assert "## Hub Files" not in md
        assert "| `_a.scss` | 1 | 1 | 0 | 0 | leaf |" in md
