"""Directive scanner for SCSS / Sass sources.

Provides:
    scan(source) -> list[Directive]
    scan_file(path) -> list[Directive]
"""

from __future__ import annotations

from sass_dep.parser.directives import (
    ALL_MEMBERS,
    Directive,
    DirectiveType,
    ForwardDirective,
    ImportDirective,
    Location,
    UseDirective,
    Visibility,
    VisibilityKind,
)
from sass_dep.parser.scanner import scan, scan_file

__all__ = [
    "ALL_MEMBERS",
    "Directive",
    "DirectiveType",
    "ForwardDirective",
    "ImportDirective",
    "Location",
    "UseDirective",
    "Visibility",
    "VisibilityKind",
    "scan",
    "scan_file",
]
