"""Tests for building queries from unresolved-symbol events."""

import pytest

from include_fixer.engine.scope import (
    ScopeResolver,
    extend_nested_name,
    normalize_type_name,
    scope_qualifier,
)
from include_fixer.frontend.events import (
    IncompleteTypeEvent,
    ScopeSpec,
    SpanSpec,
    UnresolvedIdentifierEvent,
)
from include_fixer.models import Range, SymbolQuery


class TestExtendNestedName:
    def test_scans_identifiers_and_colons(self):
        source = "x = llvm::sys::path(1);"
        assert source[4:extend_nested_name(source, 8)] == "llvm::sys::path"

    def test_stops_at_buffer_end(self):
        assert extend_nested_name("abc", 1) == 3
        assert extend_nested_name("abc", 10) == 3

    def test_stops_at_template_bracket(self):
        source = "Foo<Bar> foo;"
        assert extend_nested_name(source, 3) == 3


class TestScopeQualifier:
    def test_innermost_first_to_outermost_first(self):
        assert scope_qualifier([ScopeSpec("b"), ScopeSpec("a")]) == "a::b::"

    def test_only_named_namespaces(self):
        scopes = [
            ScopeSpec("f", kind="function"),
            ScopeSpec(""),
            ScopeSpec("S", kind="record"),
            ScopeSpec("a"),
        ]
        assert scope_qualifier(scopes) == "a::"

    def test_empty(self):
        assert scope_qualifier([]) == ""


class TestNormalizeTypeName:
    @pytest.mark.parametrize(
        "spelling,expected",
        [
            ("a::Bar", "a::Bar"),
            ("const class a::Bar", "a::Bar"),
            ("struct Foo const", "Foo"),
            ("enum class E", "E"),
            ("volatile ::ns::T", "::ns::T"),
        ],
    )
    def test_strips_qualifiers(self, spelling, expected):
        assert normalize_type_name(spelling) == expected


class TestFromIdentifier:
    def test_bare_identifier(self):
        source = "class Bar; Foo<Bar> foo;"
        resolver = ScopeResolver(source)
        query = resolver.from_identifier(UnresolvedIdentifierEvent(name="Foo", offset=11))
        assert query == SymbolQuery(name="Foo", scope_qualifier="", range=Range(11, 3))

    def test_enclosing_namespaces(self):
        source = "namespace a { namespace b { X x; } }"
        offset = source.index("X x")
        resolver = ScopeResolver(source)
        event = UnresolvedIdentifierEvent(
            name="X", offset=offset, scopes=[ScopeSpec("b"), ScopeSpec("a")]
        )
        query = resolver.from_identifier(event)
        assert query.name == "X"
        assert query.scope_qualifier == "a::b::"
        assert query.range == Range(offset, 1)

    def test_explicit_qualifier(self):
        source = "void f() { a::b::Foo x; }"
        start = source.index("a::b::Foo")
        resolver = ScopeResolver(source)
        event = UnresolvedIdentifierEvent(
            name="Foo",
            offset=source.index("Foo"),
            qualifier=SpanSpec(offset=start, length=6),
        )
        query = resolver.from_identifier(event)
        assert query.name == "a::b::Foo"
        assert query.range == Range(start, len("a::b::Foo"))

    def test_fragments_coalesce_into_one_query(self):
        source = "int x = llvm::sys::path(1);"
        start = source.index("llvm")
        resolver = ScopeResolver(source)
        events = [
            UnresolvedIdentifierEvent(name="llvm", offset=start),
            UnresolvedIdentifierEvent(name="::sys", offset=start + 4, is_identifier=False),
            UnresolvedIdentifierEvent(name="::path", offset=start + 9, is_identifier=False),
        ]
        queries = [resolver.from_identifier(e) for e in events]
        assert queries[0] == SymbolQuery(
            name="llvm::sys::path", scope_qualifier="", range=Range(start, 15)
        )
        assert queries[1:] == [None, None]

    def test_unknown_tail_of_known_prefix(self):
        source = "llvm::sys::path::parent_path(p);"
        resolver = ScopeResolver(source)
        event = UnresolvedIdentifierEvent(
            name="path", offset=source.index("path"), qualifier=SpanSpec(offset=0, length=11)
        )
        query = resolver.from_identifier(event)
        assert query.name == "llvm::sys::path::parent_path"

    def test_outside_main_file_dropped(self):
        resolver = ScopeResolver("Foo f;")
        event = UnresolvedIdentifierEvent(name="Foo", offset=0, in_main_file=False)
        assert resolver.from_identifier(event) is None

    def test_sfinae_dropped(self):
        resolver = ScopeResolver("Foo f;")
        event = UnresolvedIdentifierEvent(name="Foo", offset=0, sfinae=True)
        assert resolver.from_identifier(event) is None

    def test_macro_uses_name_verbatim(self):
        resolver = ScopeResolver("MAKE(Foo) f;")
        event = UnresolvedIdentifierEvent(name="Foo", offset=5, from_macro=True)
        query = resolver.from_identifier(event)
        assert query == SymbolQuery(name="Foo", range=Range(5, 3))

    def test_operator_name_verbatim(self):
        source = "x = operator\"\"_km(1);"
        resolver = ScopeResolver(source)
        event = UnresolvedIdentifierEvent(
            name='operator""_km', offset=4, length=13, is_identifier=False
        )
        query = resolver.from_identifier(event)
        assert query.name == 'operator""_km'
        assert query.range == Range(4, 13)

    def test_span_outside_buffer_dropped(self):
        resolver = ScopeResolver("Foo")
        event = UnresolvedIdentifierEvent(name="Foobar", offset=0)
        assert resolver.from_identifier(event) is None

    def test_verbatim_range_clamped_to_buffer(self):
        resolver = ScopeResolver("M(")
        event = UnresolvedIdentifierEvent(name="LongName", offset=0, length=1, from_macro=True)
        query = resolver.from_identifier(event)
        assert query.name == "LongName"
        assert query.range == Range(0, 2)


class TestFromIncompleteType:
    def test_fully_qualified_without_range(self):
        resolver = ScopeResolver("")
        query = resolver.from_incomplete_type(IncompleteTypeEvent(type_name="const a::Bar", offset=7))
        assert query == SymbolQuery(name="a::Bar", scope_qualifier="", range=Range())

    def test_sfinae_dropped(self):
        resolver = ScopeResolver("")
        assert resolver.from_incomplete_type(IncompleteTypeEvent(type_name="Bar", sfinae=True)) is None

    def test_empty_type_dropped(self):
        resolver = ScopeResolver("")
        assert resolver.from_incomplete_type(IncompleteTypeEvent(type_name="const ")) is None
