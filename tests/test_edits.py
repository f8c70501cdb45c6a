"""Tests for header insertion and include-aware formatting."""

import pytest

from include_fixer.engine import (
    END_OF_INCLUDES,
    EditBuilder,
    IncludeFormatter,
    apply_replacements,
    get_style,
)
from include_fixer.errors import FormattingError
from include_fixer.models import Replacement


@pytest.fixture
def builder():
    return EditBuilder()


def insert(builder, source, header, style="llvm"):
    return builder.insert_header(source, "main.cc", header, style)


class TestBuildInsertion:
    def test_empty_header_is_noop(self, builder):
        assert builder.build_insertion("int x;\n", "main.cc", "") == []

    def test_top_of_file(self, builder):
        source = "class Bar; Foo<Bar> foo;\n"
        replacements = builder.build_insertion(source, "main.cc", '"foo.h"')
        assert replacements == [Replacement("main.cc", 0, 0, '#include "foo.h"\n')]
        assert apply_replacements(source, replacements) == '#include "foo.h"\nclass Bar; Foo<Bar> foo;\n'

    def test_empty_source(self, builder):
        assert insert(builder, "", "<vector>") == "#include <vector>\n"

    def test_unwrapped_header_is_quoted(self, builder):
        assert insert(builder, "int x;\n", "foo.h") == '#include "foo.h"\nint x;\n'

    def test_already_included_no_change(self, builder):
        source = '#include "foo.h"\nclass Bar; Foo<Bar> foo;\n'
        assert builder.build_insertion(source, "main.cc", '"foo.h"') == []
        assert insert(builder, source, '"foo.h"') == source

    def test_idempotent(self, builder):
        once = insert(builder, "Foo foo;\n", '"foo.h"')
        assert insert(builder, once, '"foo.h"') == once

    def test_different_spelling_is_not_a_duplicate(self, builder):
        source = '#include "foo.h"\n'
        assert insert(builder, source, "<foo.h>") == '#include "foo.h"\n#include <foo.h>\n'

    def test_malformed_source_rejected(self, builder):
        with pytest.raises(FormattingError):
            builder.build_insertion("/* never closed\nint x;\n", "main.cc", '"foo.h"')


class TestInsertionPoint:
    def test_sorted_position_in_block(self, builder):
        source = '#include "a.h"\n#include "c.h"\n\nint x;\n'
        assert insert(builder, source, '"b.h"') == '#include "a.h"\n#include "b.h"\n#include "c.h"\n\nint x;\n'

    def test_appends_after_last_in_block(self, builder):
        source = '#include "a.h"\n#include "b.h"\n\nint x;\n'
        assert insert(builder, source, '"z.h"') == '#include "a.h"\n#include "b.h"\n#include "z.h"\n\nint x;\n'

    def test_matching_bracket_block(self, builder):
        source = '#include <map>\n#include <vector>\n\n#include "a.h"\n\nint x;\n'
        assert insert(builder, source, "<string>") == (
            '#include <map>\n#include <string>\n#include <vector>\n\n#include "a.h"\n\nint x;\n'
        )
        assert insert(builder, source, '"b.h"') == (
            '#include <map>\n#include <vector>\n\n#include "a.h"\n#include "b.h"\n\nint x;\n'
        )

    def test_unsorted_block_appends(self, builder):
        source = '#include "c.h"\n#include "a.h"\n'
        assert insert(builder, source, '"b.h"') == '#include "c.h"\n#include "a.h"\n#include "b.h"\n'

    def test_style_without_sorting(self, builder):
        source = '#include "a.h"\n#include "c.h"\n'
        assert insert(builder, source, '"b.h"', style="none") == '#include "a.h"\n#include "c.h"\n#include "b.h"\n'

    def test_last_line_without_newline(self, builder):
        assert insert(builder, '#include "a.h"', '"b.h"') == '#include "a.h"\n#include "b.h"\n'

    def test_after_header_guard(self, builder):
        source = "// Copyright\n#ifndef FOO_H\n#define FOO_H\n\nclass X;\n#endif\n"
        assert insert(builder, source, "<vector>") == (
            "// Copyright\n#ifndef FOO_H\n#define FOO_H\n#include <vector>\n\nclass X;\n#endif\n"
        )

    def test_after_pragma_once(self, builder):
        assert insert(builder, "#pragma once\nint x;\n", "<vector>") == "#pragma once\n#include <vector>\nint x;\n"

    def test_after_leading_block_comment(self, builder):
        source = "/* License\n * text\n */\nint x;\n"
        assert insert(builder, source, '"a.h"') == '/* License\n * text\n */\n#include "a.h"\nint x;\n'

    def test_commented_out_include_ignored(self, builder):
        source = '/*\n#include "foo.h"\n*/\n#include "bar.h"\n'
        assert insert(builder, source, '"foo.h"') == source + '#include "foo.h"\n'

    def test_disabled_region_ignored(self, builder):
        source = '#if 0\n#ifdef X\n#include "foo.h"\n#endif\n#include "bar.h"\n#endif\nint x;\n'
        assert insert(builder, source, '"foo.h"') == '#include "foo.h"\n' + source

    def test_else_branch_of_disabled_region_counts(self, builder):
        source = '#if 0\n#include "old.h"\n#else\n#include "foo.h"\n#endif\n'
        assert builder.build_insertion(source, "main.cc", '"foo.h"') == []

    def test_spaced_directive_recognized(self, builder):
        source = "#  include <map>\n"
        assert builder.build_insertion(source, "main.cc", "<map>") == []


class TestIncludeFormatter:
    def test_replacement_outside_source_rejected(self):
        formatter = IncludeFormatter()
        with pytest.raises(FormattingError):
            formatter.apply_and_cleanup("int x;", [Replacement("main.cc", 5, 10, "")])

    def test_plain_replacements_kept(self):
        formatter = IncludeFormatter()
        replacement = Replacement("main.cc", 4, 1, "y")
        assert formatter.apply_and_cleanup("int x;", [replacement]) == [replacement]

    def test_sentinel_requires_include_line(self):
        formatter = IncludeFormatter()
        with pytest.raises(FormattingError):
            formatter.apply_and_cleanup("int x;", [Replacement("main.cc", END_OF_INCLUDES, 0, "int y;\n")])

    def test_duplicate_insertions_collapsed(self):
        formatter = IncludeFormatter()
        insertion = Replacement("main.cc", END_OF_INCLUDES, 0, '#include "a.h"\n')
        assert len(formatter.apply_and_cleanup("int x;\n", [insertion, insertion])) == 1

    def test_comment_markers_in_strings_ignored(self):
        formatter = IncludeFormatter()
        source = 'const char* s = "/*";\n'
        insertion = Replacement("main.cc", END_OF_INCLUDES, 0, '#include "a.h"\n')
        assert formatter.apply_and_cleanup(source, [insertion])[0].offset == 0


class TestApplyReplacements:
    def test_same_offset_keeps_order(self):
        replacements = [Replacement("f", 0, 0, "a"), Replacement("f", 0, 0, "b")]
        assert apply_replacements("x", replacements) == "abx"

    def test_overlap_rejected(self):
        replacements = [Replacement("f", 0, 3, "a"), Replacement("f", 1, 1, "b")]
        with pytest.raises(FormattingError):
            apply_replacements("xyz", replacements)

    def test_sentinel_offset_rejected(self):
        with pytest.raises(FormattingError):
            apply_replacements("x", [Replacement("f", END_OF_INCLUDES, 0, "a")])


class TestStyles:
    def test_case_insensitive(self):
        assert get_style("LLVM").name == "llvm"

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_style("fancy")
