"""
Specifier list scanning and sorting tests.
"""

import pytest

from codegraph_sorter.common.exceptions import InvariantViolation
from codegraph_sorter.engine.specifiers import get_specifier_items, print_with_sorted_specifiers, sort_specifier_items
from codegraph_sorter.models import Binding, SpecifierItem, Token, TokenKind


def bindings_of(statement):
    return statement.bindings


def spaces(text=" "):
    return Token(TokenKind.SPACES, text)


def name(text):
    return Token(TokenKind.IDENTIFIER, text)


COMMA = Token(TokenKind.PUNCTUATOR, ",")
NEWLINE = Token(TokenKind.NEWLINE, "\n")


class TestGetSpecifierItems:
    def test_single_line(self):
        result = get_specifier_items([spaces(), name("b"), COMMA, spaces(), name("a"), spaces()])

        assert [token.text for token in result.before] == [" "]
        assert [[t.text for t in item.specifier] for item in result.items] == [["b"], ["a"]]
        assert [item.had_comma for item in result.items] == [True, False]
        assert [token.text for token in result.after] == [" "]

    def test_trailing_comma_multiline(self):
        tokens = [NEWLINE, spaces("  "), name("b"), COMMA, NEWLINE, spaces("  "), name("a"), COMMA, NEWLINE]

        result = get_specifier_items(tokens)

        assert result.before == [NEWLINE]
        assert len(result.items) == 2
        assert result.items[0].after == [NEWLINE]
        assert result.items[1].before == [spaces("  ")]
        assert result.after == []

    def test_same_line_comment_stays_with_binding(self):
        comment = Token(TokenKind.LINE_COMMENT, "// bee")
        tokens = [NEWLINE, name("b"), COMMA, spaces(), comment, NEWLINE, name("a"), NEWLINE]

        result = get_specifier_items(tokens)

        assert result.items[0].after == [spaces(), comment, NEWLINE]
        assert result.items[1].after == [NEWLINE]

    def test_multiline_block_comment_belongs_to_next(self):
        comment = Token(TokenKind.BLOCK_COMMENT, "/*\n * a\n */")
        tokens = [name("b"), COMMA, spaces(), comment, spaces(), name("a")]

        result = get_specifier_items(tokens)

        assert result.items[0].after == [spaces()]
        assert result.items[1].before == [comment, spaces()]

    def test_reprint_in_original_order_is_identity(self):
        tokens = [spaces(), name("b"), COMMA, spaces(), name("a"), spaces()]
        result = get_specifier_items(tokens)

        printed = result.before + [
            token
            for item in result.items
            for token in [*item.before, *item.specifier, *([COMMA] if item.had_comma else []), *item.after]
        ] + result.after

        assert "".join(token.text for token in printed) == " b, a "


class TestSortSpecifierItems:
    def test_order_by_name_then_local_then_kind(self):
        items = [SpecifierItem(specifier=[name(str(index))]) for index in range(4)]
        bindings = [
            Binding(name="b", local="b"),
            Binding(name="a", local="z"),
            Binding(name="a", local="y", kind="value"),
            Binding(name="a", local="y", kind="type"),
        ]

        ordered = sort_specifier_items(items, bindings)

        assert [items.index(item) for item in ordered] == [3, 2, 1, 0]

    def test_count_mismatch(self):
        with pytest.raises(InvariantViolation, match="Specifier count mismatch"):
            sort_specifier_items([SpecifierItem()], [])


class TestPrintWithSortedSpecifiers:
    def print_first(self, parse, text: str) -> str:
        source_code = parse(text)
        return print_with_sorted_specifiers(source_code.statements[0], source_code, bindings_of)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ('import {c, a, b} from "x";', 'import {a, b, c} from "x";'),
            ('import { b, a } from "x";', 'import { a, b } from "x";'),
            ('import {b,a} from "x";', 'import {a,b} from "x";'),
            ('import {b, a,} from "x";', 'import {a, b,} from "x";'),
            ('import def, {b, a} from "x";', 'import def, {a, b} from "x";'),
            ('import {b as a, a as z} from "x";', 'import {a as z, b as a} from "x";'),
            ('import {type B, a} from "x";', 'import {a, type B} from "x";'),
            ('export {b, a} from "x";', 'export {a, b} from "x";'),
        ],
    )
    def test_single_line(self, parse, text, expected):
        assert self.print_first(parse, text) == expected

    def test_multiline_without_trailing_comma(self, parse):
        text = 'import {\n  c,\n  a,\n  b\n} from "x";'

        assert self.print_first(parse, text) == 'import {\n  a,\n  b,\n  c\n} from "x";'

    def test_multiline_with_trailing_comma(self, parse):
        text = 'import {\n  b,\n  a,\n} from "x";'

        assert self.print_first(parse, text) == 'import {\n  a,\n  b,\n} from "x";'

    def test_line_comment_moves_with_binding(self, parse):
        text = 'import {\n  b, // bee\n  a,\n} from "x";'

        assert self.print_first(parse, text) == 'import {\n  a,\n  b, // bee\n} from "x";'

    def test_new_last_binding_keeps_space_before_comment(self, parse):
        text = 'import {\n  c, // cc\n  a,\n  b\n} from "x";'

        assert self.print_first(parse, text) == 'import {\n  a,\n  b,\n  c // cc\n} from "x";'

    @pytest.mark.parametrize(
        "text, expected",
        [
            ('import { b , a } from "x";', 'import { a , b } from "x";'),
            ('import {b ,a} from "x";', 'import {a ,b} from "x";'),
            ('import {b, a /* t */} from "x";', 'import {a, /* t */ b} from "x";'),
            ('import {c, /* cc */ a, b} from "x";', 'import {a, b, c /* cc */} from "x";'),
        ],
    )
    def test_comma_spacing_stays_in_place(self, parse, text, expected):
        assert self.print_first(parse, text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            'import {a} from "x";',
            'import a from "x";',
            'import * as ns from "x";',
            'import "x";',
            'import {a, b} from "x";',
        ],
    )
    def test_unchanged(self, parse, text):
        assert self.print_first(parse, text) == text
