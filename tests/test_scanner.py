"""Tests for the directive scanner."""

import tempfile
from pathlib import Path

import pytest

from sass_dep.parser import (
    DirectiveType,
    ForwardDirective,
    ImportDirective,
    Location,
    UseDirective,
    Visibility,
    VisibilityKind,
    scan,
    scan_file,
)


class TestUse:
    def test_plain(self):
        [d] = scan('@use "variables";')
        assert isinstance(d, UseDirective)
        assert d.path == "variables"
        assert d.namespace is None
        assert d.configured is False
        assert d.kind == DirectiveType.USE
        assert d.targets == ("variables",)

    def test_single_quotes(self):
        [d] = scan("@use 'theme/colors';")
        assert d.path == "theme/colors"

    def test_namespace(self):
        [d] = scan('@use "sass:math" as m;')
        assert d.namespace == "m"

    def test_global_namespace(self):
        [d] = scan('@use "variables" as *;')
        assert d.namespace == "*"

    def test_with_configuration(self):
        [d] = scan('@use "library" with ($black: #222, $border-radius: 0.1rem);')
        assert d.configured is True
        assert d.namespace is None

    def test_namespace_and_configuration(self):
        [d] = scan('@use "library" as lib with ($x: 1);')
        assert d.namespace == "lib"
        assert d.configured is True

    def test_missing_semicolon_still_parses(self):
        [d] = scan('@use "a"\n.x { color: red; }')
        assert d.path == "a"

    def test_keyword_is_case_insensitive(self):
        [d] = scan('@USE "a";')
        assert d.path == "a"

    def test_requires_whitespace_after_keyword(self):
        assert scan('@use"a";') == []

    def test_unquoted_path_is_not_a_directive(self):
        assert scan("@use variables;") == []


class TestForward:
    def test_plain(self):
        [d] = scan('@forward "src/list";')
        assert isinstance(d, ForwardDirective)
        assert d.path == "src/list"
        assert d.prefix is None
        assert d.visibility == Visibility()
        assert d.kind == DirectiveType.FORWARD

    def test_prefix(self):
        [d] = scan('@forward "src/list" as list-*;')
        assert d.prefix == "list-"

    def test_prefix_without_wildcard_is_ignored(self):
        [d] = scan('@forward "src/list" as list;')
        assert d.path == "src/list"
        assert d.prefix is None

    def test_show(self):
        [d] = scan('@forward "src/list" show list-reset, $horizontal-list-gap;')
        assert d.visibility.kind == VisibilityKind.SHOW
        assert d.visibility.members == ("list-reset", "$horizontal-list-gap")

    def test_hide(self):
        [d] = scan('@forward "src/list" hide $private;')
        assert d.visibility.kind == VisibilityKind.HIDE
        assert d.visibility.members == ("$private",)

    def test_prefix_and_show(self):
        [d] = scan('@forward "functions" as fn-* show rem;')
        assert d.prefix == "fn-"
        assert d.visibility == Visibility(kind=VisibilityKind.SHOW, members=("rem",))


class TestImport:
    def test_single(self):
        [d] = scan('@import "reset";')
        assert isinstance(d, ImportDirective)
        assert d.paths == ("reset",)
        assert d.kind == DirectiveType.IMPORT

    def test_multiple_paths(self):
        [d] = scan('@import "reset", \'grid\',"type";')
        assert d.targets == ("reset", "grid", "type")

    def test_url_import_is_not_a_directive(self):
        assert scan('@import url("https://fonts.example.com/css");') == []


class TestLexicalContext:
    def test_line_comment(self):
        assert scan('// @use "hidden";\n') == []

    def test_block_comment(self):
        src = '/* @use "hidden";\n @import "also"; */\n@use "visible";'
        assert [d.path for d in scan(src)] == ["visible"]

    def test_unterminated_block_comment(self):
        assert scan('@use "a";\n/* @use "b";') == [UseDirective(path="a", location=Location(1, 1))]

    def test_directive_text_inside_string(self):
        src = '.a { content: "@use \'x\'"; }\n@use "real";'
        assert [d.path for d in scan(src)] == ["real"]

    def test_escaped_quote_inside_string(self):
        src = '.a { content: "say \\"hi\\" @use \'x\'"; }\n@use "real";'
        assert [d.path for d in scan(src)] == ["real"]

    def test_unterminated_string_ends_at_newline(self):
        src = '.a { content: "oops; }\n@use "real";'
        assert [d.path for d in scan(src)] == ["real"]

    def test_division_slash_is_not_a_comment(self):
        src = '.a { width: 10px / 2; }\n@use "real";'
        assert [d.path for d in scan(src)] == ["real"]

    def test_other_at_rules_are_ignored(self):
        src = '@mixin m { @include x; }\n@media screen { }\n@charset "utf-8";\n@forward "f";'
        assert [d.path for d in scan(src)] == ["f"]


class TestLocations:
    def test_line_and_column(self):
        src = '// header\n\n  @use "a";\n@import "b";'
        use, imp = scan(src)
        assert use.location == Location(line=3, column=3)
        assert imp.location == Location(line=4, column=1)

    def test_source_order(self):
        src = '@import "c";\n@use "a";\n@forward "b";'
        assert [d.kind for d in scan(src)] == [
            DirectiveType.IMPORT, DirectiveType.USE, DirectiveType.FORWARD,
        ]


def test_empty_source():
    assert scan("") == []


def test_scan_file_reads_utf8():
    with tempfile.TemporaryDirectory() as d:
        p = Path(d) / "main.scss"
        p.write_text('// café\n@use "colors";\n', encoding="utf-8")
        [directive] = scan_file(p)
        assert directive.path == "colors"
        assert directive.location.line == 2


def test_scan_file_rejects_invalid_utf8():
    with tempfile.TemporaryDirectory() as d:
        p = Path(d) / "bad.scss"
        p.write_bytes(b'@use "a";\n\xff\xfe')
        with pytest.raises(UnicodeDecodeError):
            scan_file(p)
