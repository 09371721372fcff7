"""FileNode and DependencyEdge dataclasses. No graph logic."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from sass_dep.parser.directives import DirectiveType, Location


class NodeFlag(str, Enum):
    ENTRY_POINT = "entry_point"
    LEAF = "leaf"
    ORPHAN = "orphan"
    HIGH_FAN_IN = "high_fan_in"
    HIGH_FAN_OUT = "high_fan_out"
    IN_CYCLE = "in_cycle"


# Declaration order, used whenever flags are listed
_FLAG_ORDER = {flag: i for i, flag in enumerate(NodeFlag)}


@dataclass
class NodeMetrics:
    fan_in: int = 0           # edges pointing at this file
    fan_out: int = 0          # edges leaving this file
    depth: int = 0            # hops from the nearest entry point
    transitive_deps: int = 0  # files reachable from this one, excluding itself


@dataclass
class FileNode:
    id: str                   # path relative to the project root, "/" separated
    absolute_path: Path
    metrics: NodeMetrics = field(default_factory=NodeMetrics)
    flags: set[NodeFlag] = field(default_factory=set)

    def add_flag(self, flag: NodeFlag) -> None:
        self.flags.add(flag)

    def remove_flag(self, flag: NodeFlag) -> None:
        self.flags.discard(flag)

    def has_flag(self, flag: NodeFlag) -> bool:
        return flag in self.flags

    def sorted_flags(self) -> list[NodeFlag]:
        return sorted(self.flags, key=_FLAG_ORDER.__getitem__)


@dataclass(frozen=True)
class EdgeMeta:
    namespace: str | None = None  # @use only; "*" is the global namespace
    configured: bool = False      # @use ... with (...)


@dataclass
class DependencyEdge:
    src: str   # FileNode.id of the file containing the directive
    dst: str   # FileNode.id of the referenced file
    directive_type: DirectiveType
    location: Location = field(default_factory=Location)
    meta: EdgeMeta = field(default_factory=EdgeMeta)
