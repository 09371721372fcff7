"""Dependency graph package.

Provides:
    GraphBuilder(graph).build_from_entry(entry, resolver, root) -> entry id
    DependencyGraph, FileNode, DependencyEdge and friends
"""

from __future__ import annotations

from sass_dep.graph.builder import (
    BUILTIN_MODULES,
    GraphBuilder,
    ResolutionWarning,
    is_builtin_module,
)
from sass_dep.graph.model import Checkpoint, DependencyGraph
from sass_dep.graph.nodes import (
    DependencyEdge,
    EdgeMeta,
    FileNode,
    NodeFlag,
    NodeMetrics,
)
from sass_dep.parser.directives import DirectiveType

__all__ = [
    "BUILTIN_MODULES",
    "Checkpoint",
    "DependencyEdge",
    "DependencyGraph",
    "DirectiveType",
    "EdgeMeta",
    "FileNode",
    "GraphBuilder",
    "NodeFlag",
    "NodeMetrics",
    "ResolutionWarning",
    "is_builtin_module",
]
