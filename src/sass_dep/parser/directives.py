"""Directive records produced by the scanner. Pure data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class DirectiveType(str, Enum):
    USE = "use"
    FORWARD = "forward"
    IMPORT = "import"


class VisibilityKind(str, Enum):
    ALL = "all"
    SHOW = "show"
    HIDE = "hide"


@dataclass(frozen=True)
class Location:
    line: int = 0     # 1-indexed
    column: int = 0   # 1-indexed, in characters


@dataclass(frozen=True)
class Visibility:
    """Which members a @forward re-exports."""
    kind: VisibilityKind = VisibilityKind.ALL
    members: tuple[str, ...] = ()


ALL_MEMBERS = Visibility()


@dataclass(frozen=True)
class UseDirective:
    """``@use "path" [as ns|*] [with (...)];``"""
    path: str
    location: Location = field(default_factory=Location)
    namespace: str | None = None   # "*" for a global namespace, None for default
    configured: bool = False

    @property
    def kind(self) -> DirectiveType:
        return DirectiveType.USE

    @property
    def targets(self) -> tuple[str, ...]:
        return (self.path,)


@dataclass(frozen=True)
class ForwardDirective:
    """``@forward "path" [as prefix-*] [show|hide members];``"""
    path: str
    location: Location = field(default_factory=Location)
    prefix: str | None = None      # "fn-" for ``as fn-*``
    visibility: Visibility = ALL_MEMBERS

    @property
    def kind(self) -> DirectiveType:
        return DirectiveType.FORWARD

    @property
    def targets(self) -> tuple[str, ...]:
        return (self.path,)


@dataclass(frozen=True)
class ImportDirective:
    """Legacy ``@import "a", "b";``: one target per quoted path."""
    paths: tuple[str, ...]
    location: Location = field(default_factory=Location)

    @property
    def kind(self) -> DirectiveType:
        return DirectiveType.IMPORT

    @property
    def targets(self) -> tuple[str, ...]:
        return self.paths


Directive = Union[UseDirective, ForwardDirective, ImportDirective]
