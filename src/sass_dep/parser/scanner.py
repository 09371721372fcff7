"""Extract @use / @forward / @import directives from SCSS and Sass source.

This is not a stylesheet parser. A single forward pass skips string literals
and comments, and every ``@`` found outside of them is tried against the three
dependency directive grammars. Anything that does not match (``@mixin``,
``@media``, a malformed ``@use``...) is ordinary text and scanning carries on
at the next character.
"""

from __future__ import annotations

import bisect
import logging
import re
from pathlib import Path

from sass_dep.parser.directives import (
    ALL_MEMBERS,
    Directive,
    ForwardDirective,
    ImportDirective,
    Location,
    UseDirective,
    Visibility,
    VisibilityKind,
)

log = logging.getLogger(__name__)

# Characters that may change lexical state or start a directive
_INTERESTING_RE = re.compile(r"[\"'/@]")

_WHITESPACE = " \t\r\n"
_IDENT_EXTRA = "-_"


def scan(source: str) -> list[Directive]:
    """Return the dependency directives of ``source`` in source order.

    Never raises on malformed input: unrecognized syntax is skipped.
    """
    directives: list[Directive] = []
    line_starts = _line_starts(source)
    end = len(source)
    pos = 0

    while pos < end:
        m = _INTERESTING_RE.search(source, pos)
        if m is None:
            break
        pos = m.start()
        ch = source[pos]

        if ch == '"' or ch == "'":
            pos = _skip_string(source, pos)
        elif ch == "/":
            pos = _skip_comment(source, pos)
        else:
            location = _location(line_starts, pos)
            parsed = _parse_directive(source, pos, location)
            if parsed is None:
                pos += 1
            else:
                directive, pos = parsed
                directives.append(directive)

    return directives


def scan_file(path: Path) -> list[Directive]:
    """Read ``path`` as UTF-8 and scan it. I/O and decode errors propagate."""
    source = Path(path).read_text(encoding="utf-8")
    directives = scan(source)
    log.debug("Scanned %s: %d directives", path, len(directives))
    return directives


# ── Lexical skipping ─────────────────────────────────────────────────────


def _line_starts(source: str) -> list[int]:
    return [0] + [m.end() for m in re.finditer("\n", source)]


def _location(line_starts: list[int], pos: int) -> Location:
    line = bisect.bisect_right(line_starts, pos)
    return Location(line=line, column=pos - line_starts[line - 1] + 1)


def _skip_string(source: str, pos: int) -> int:
    """Return the offset just past the string literal opened at ``pos``.

    A backslash escapes the next character. An unescaped newline ends the
    string, as it does in CSS, so a stray quote cannot hide the rest of a file.
    """
    quote = source[pos]
    i = pos + 1
    end = len(source)
    while i < end:
        c = source[i]
        if c == "\\":
            i += 2
            continue
        if c == quote:
            return i + 1
        if c == "\n":
            return i
        i += 1
    return end


def _skip_comment(source: str, pos: int) -> int:
    """Skip a ``//`` or ``/* */`` comment at ``pos``; a lone ``/`` is text."""
    if source.startswith("//", pos):
        newline = source.find("\n", pos + 2)
        return len(source) if newline < 0 else newline
    if source.startswith("/*", pos):
        close = source.find("*/", pos + 2)
        return len(source) if close < 0 else close + 2
    return pos + 1


# ── Directive grammars ───────────────────────────────────────────────────
#
# Each helper takes the text and an offset and returns the offset after what
# it matched (or a (value, offset) pair), or None when it does not match.


def _parse_directive(source: str, pos: int, location: Location) -> tuple[Directive, int] | None:
    for parser in (_parse_use, _parse_forward, _parse_import):
        parsed = parser(source, pos, location)
        if parsed is not None:
            return parsed
    return None


def _parse_use(source: str, pos: int, location: Location) -> tuple[UseDirective, int] | None:
    pos = _directive_head(source, pos, "@use")
    if pos is None:
        return None
    quoted = _quoted(source, pos)
    if quoted is None:
        return None
    path, pos = quoted
    pos = _skip_ws(source, pos)

    namespace = None
    as_clause = _use_as_clause(source, pos)
    if as_clause is not None:
        namespace, pos = as_clause
    pos = _skip_ws(source, pos)

    configured = False
    with_end = _with_clause(source, pos)
    if with_end is not None:
        configured = True
        pos = with_end

    pos = _terminator(source, pos)
    return UseDirective(path=path, location=location, namespace=namespace, configured=configured), pos


def _parse_forward(source: str, pos: int, location: Location) -> tuple[ForwardDirective, int] | None:
    pos = _directive_head(source, pos, "@forward")
    if pos is None:
        return None
    quoted = _quoted(source, pos)
    if quoted is None:
        return None
    path, pos = quoted
    pos = _skip_ws(source, pos)

    prefix = None
    as_clause = _forward_as_clause(source, pos)
    if as_clause is not None:
        prefix, pos = as_clause
    pos = _skip_ws(source, pos)

    visibility = ALL_MEMBERS
    for keyword, kind in (("show", VisibilityKind.SHOW), ("hide", VisibilityKind.HIDE)):
        members = _visibility_clause(source, pos, keyword)
        if members is not None:
            names, pos = members
            visibility = Visibility(kind=kind, members=names)
            break

    pos = _terminator(source, pos)
    return ForwardDirective(path=path, location=location, prefix=prefix, visibility=visibility), pos


def _parse_import(source: str, pos: int, location: Location) -> tuple[ImportDirective, int] | None:
    pos = _directive_head(source, pos, "@import")
    if pos is None:
        return None
    first = _quoted(source, pos)
    if first is None:
        return None
    path, pos = first
    paths = [path]

    while True:
        sep = _list_separator(source, pos)
        if sep is None:
            break
        nxt = _quoted(source, sep)
        if nxt is None:
            break
        path, pos = nxt
        paths.append(path)

    pos = _terminator(source, pos)
    return ImportDirective(paths=tuple(paths), location=location), pos


def _directive_head(source: str, pos: int, keyword: str) -> int | None:
    """Match the keyword followed by at least one whitespace character."""
    pos = _keyword(source, pos, keyword)
    if pos is None:
        return None
    return _skip_ws1(source, pos)


def _use_as_clause(source: str, pos: int) -> tuple[str, int] | None:
    pos = _keyword(source, pos, "as")
    if pos is None:
        return None
    pos = _skip_ws1(source, pos)
    if pos is None:
        return None
    if source.startswith("*", pos):
        return "*", pos + 1
    return _identifier(source, pos)


def _forward_as_clause(source: str, pos: int) -> tuple[str, int] | None:
    pos = _keyword(source, pos, "as")
    if pos is None:
        return None
    pos = _skip_ws1(source, pos)
    if pos is None:
        return None
    end = pos
    while end < len(source) and (_is_ident_char(source[end]) or source[end] == "*"):
        end += 1
    pattern = source[pos:end]
    if not pattern.endswith("-*"):
        return None
    return pattern.rstrip("*"), end


def _with_clause(source: str, pos: int) -> int | None:
    pos = _keyword(source, pos, "with")
    if pos is None:
        return None
    pos = _skip_ws(source, pos)
    if not source.startswith("(", pos):
        return None
    close = source.find(")", pos + 1)
    if close < 0:
        return None
    return close + 1


def _visibility_clause(source: str, pos: int, keyword: str) -> tuple[tuple[str, ...], int] | None:
    pos = _keyword(source, pos, keyword)
    if pos is None:
        return None
    pos = _skip_ws1(source, pos)
    if pos is None:
        return None
    first = _member(source, pos)
    if first is None:
        return None
    name, pos = first
    members = [name]

    while True:
        sep = _list_separator(source, pos)
        if sep is None:
            break
        nxt = _member(source, sep)
        if nxt is None:
            break
        name, pos = nxt
        members.append(name)

    return tuple(members), pos


# ── Tokens ───────────────────────────────────────────────────────────────


def _is_ident_char(c: str) -> bool:
    return c.isalnum() or c in _IDENT_EXTRA


def _keyword(source: str, pos: int, word: str) -> int | None:
    end = pos + len(word)
    if source[pos:end].lower() == word:
        return end
    return None


def _skip_ws(source: str, pos: int) -> int:
    while pos < len(source) and source[pos] in _WHITESPACE:
        pos += 1
    return pos


def _skip_ws1(source: str, pos: int) -> int | None:
    end = _skip_ws(source, pos)
    return end if end > pos else None


def _terminator(source: str, pos: int) -> int:
    pos = _skip_ws(source, pos)
    if source.startswith(";", pos):
        return pos + 1
    return pos


def _list_separator(source: str, pos: int) -> int | None:
    """Match optional whitespace, a comma, optional whitespace."""
    pos = _skip_ws(source, pos)
    if not source.startswith(",", pos):
        return None
    return _skip_ws(source, pos + 1)


def _quoted(source: str, pos: int) -> tuple[str, int] | None:
    """A "..." or '...' path. No escape processing inside."""
    if pos >= len(source) or source[pos] not in "\"'":
        return None
    close = source.find(source[pos], pos + 1)
    if close < 0:
        return None
    return source[pos + 1:close], close + 1


def _identifier(source: str, pos: int) -> tuple[str, int] | None:
    end = pos
    while end < len(source) and _is_ident_char(source[end]):
        end += 1
    if end == pos:
        return None
    return source[pos:end], end


def _member(source: str, pos: int) -> tuple[str, int] | None:
    """A forwarded member: ``$variable`` or a mixin/function name."""
    start = pos
    if source.startswith("$", pos):
        pos += 1
    ident = _identifier(source, pos)
    if ident is None:
        return None
    return source[start:ident[1]], ident[1]
