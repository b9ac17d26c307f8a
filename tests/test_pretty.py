"""PrettySqlWriter tests."""

import pytest

from pyrowlimit._constants import UNCONSTRAINED_PRECEDENCE
from pyrowlimit._errors import InvalidArgumentsError
from pyrowlimit.dialect.mssql import MSSQLDialect
from pyrowlimit.dialect.mysql import MySQLDialect
from pyrowlimit.dialect.postgres import PostgresDialect
from pyrowlimit.fetch_offset import FetchOffsetType
from pyrowlimit.nodes import CelNode, RawNode
from pyrowlimit.pretty import KeywordCase, PrettySqlWriter
from pyrowlimit.writer import FrameType, frame


@pytest.fixture
def w():
    return PrettySqlWriter(PostgresDialect())


class TestTokens:
    def test_keywords_are_space_separated(self, w):
        w.keyword("fetch")
        w.keyword("next")
        assert w.result == "FETCH NEXT"

    def test_lower_case_keywords(self):
        w = PrettySqlWriter(keyword_case=KeywordCase.LOWER)
        w.keyword("LIMIT")
        w.literal("10")
        assert w.result == "limit 10"

    def test_as_is_keywords(self):
        w = PrettySqlWriter(keyword_case="as_is")
        w.keyword("Limit")
        assert w.result == "Limit"

    def test_sep_with_space(self, w):
        w.literal("20")
        w.sep(",", True)
        w.literal("10")
        assert w.result == "20, 10"

    def test_sep_without_space(self, w):
        w.literal("a")
        w.sep(".", False)
        w.literal("b")
        assert w.result == "a.b"

    def test_print_has_no_spacing(self, w):
        w.keyword("LIMIT")
        w.print_("(")
        w.literal("1")
        assert w.result == "LIMIT(1"

    def test_newline_uses_indent(self):
        w = PrettySqlWriter(indentation=4)
        w.keyword("ORDER")
        w.indent()
        w.newline_and_indent()
        w.keyword("LIMIT")
        w.dedent()
        w.newline_and_indent()
        w.keyword("OFFSET")
        assert w.result == "ORDER\n    LIMIT\nOFFSET"

    def test_dedent_never_negative(self, w):
        w.dedent()
        w.newline_and_indent()
        w.keyword("X")
        assert w.result == "\nX"

    def test_reset(self, w):
        w.keyword("LIMIT")
        w.start_list(FrameType.FETCH)
        w.reset()
        assert w.result == ""
        assert w.open_frames == []
        assert w.parameters == []


class TestFrames:
    def test_balanced(self, w):
        outer = w.start_list(FrameType.SELECT)
        inner = w.start_list(FrameType.FETCH)
        assert inner.depth == 1
        w.end_list(inner)
        w.end_list(outer)
        assert w.open_frames == []

    def test_out_of_order_close(self, w):
        outer = w.start_list(FrameType.SELECT)
        w.start_list(FrameType.FETCH)
        with pytest.raises(ValueError, match="out of order"):
            w.end_list(outer)

    def test_close_without_open(self, w):
        other = PrettySqlWriter().start_list(FrameType.FETCH)
        with pytest.raises(ValueError):
            w.end_list(other)


class TestExpressions:
    def test_cel_expression(self, w):
        w.unparse_expression(CelNode("page_size * 2"), -1, -1)
        assert w.result == "page_size * 2"

    def test_raw_node(self, w):
        w.unparse_expression(RawNode("ALL"), -1, -1)
        assert w.result == "ALL"

    def test_parenthesized_when_outer_binds_tighter(self, w):
        w.unparse_expression(CelNode("a + b"), 7, 7)
        assert w.result == "(a + b)"

    def test_not_parenthesized_at_same_precedence(self, w):
        w.unparse_expression(CelNode("a * b"), 7, 7)
        assert w.result == "a * b"

    def test_atom_never_parenthesized(self, w):
        w.unparse_expression(CelNode("min(a, 5)"), 9, 9)
        assert w.result == "LEAST(a, 5)"

    def test_unconstrained_never_parenthesized(self, w):
        w.unparse_expression(
            CelNode("a > 1 ? a : 1"),
            UNCONSTRAINED_PRECEDENCE,
            UNCONSTRAINED_PRECEDENCE,
        )
        assert w.result == "CASE WHEN a > 1 THEN a ELSE 1 END"

    def test_missing_expression(self, w):
        with pytest.raises(InvalidArgumentsError) as excinfo:
            with frame(w, FrameType.FETCH):
                w.unparse_expression(None, -1, -1)
        assert "fetch frame" in excinfo.value.internal()
        assert w.open_frames == []

    def test_parameters_continue_across_expressions(self):
        w = PrettySqlWriter(PostgresDialect(), parameterize=True)
        w.unparse_expression(CelNode("10"), -1, -1)
        w.sep(",", True)
        w.unparse_expression(CelNode("n + 20"), -1, -1)
        assert w.result == "$1, n + $2"
        assert w.parameters == [10, 20]



class TestSelectPrefix:
    def test_top_expression_parenthesized(self):
        w = PrettySqlWriter(MSSQLDialect())
        FetchOffsetType.TOP.unparse(FrameType.SELECT, w, CelNode("n * 2"))
        assert w.result == "TOP (n * 2)"

    def test_top_integer_left_bare(self):
        w = PrettySqlWriter(MSSQLDialect())
        FetchOffsetType.TOP.unparse(FrameType.SELECT, w, CelNode("25"))
        assert w.result == "TOP 25"

    def test_trailing_clause_unaffected(self):
        w = PrettySqlWriter(MSSQLDialect(), parameterize=True)
        FetchOffsetType.FETCH_OFFSET.unparse(FrameType.ORDER_BY, w, CelNode("10"), CelNode("20"))
        assert w.result == "\nOFFSET @p1 ROWS\nFETCH NEXT @p2 ROWS ONLY"

    def test_dialect_without_requirement(self, w):
        FetchOffsetType.TOP.unparse(FrameType.SELECT, w, CelNode("n * 2"))
        assert w.result == "TOP n * 2"


class TestOffsetLimitPrecondition:
    def test_offset_without_fetch_raises_and_closes_frame(self):
        w = PrettySqlWriter(MySQLDialect())
        with pytest.raises(InvalidArgumentsError):
            FetchOffsetType.OFFSET_LIMIT.unparse(
                FrameType.ORDER_BY, w, None, CelNode("20")
            )
        assert w.open_frames == []
        assert w.result == "\nLIMIT 20,"
