"""End-to-end rendering through the public API."""

import pytest

from conftest import ALL_DIALECTS
from pyrowlimit import (
    InvalidArgumentsError,
    KeywordCase,
    RawNode,
    Result,
    UnsupportedExpressionError,
    render,
    render_parameterized,
)
from pyrowlimit.dialect.bigquery import BigQueryDialect
from pyrowlimit.dialect.db2 import Db2Dialect
from pyrowlimit.dialect.firebird import FirebirdDialect
from pyrowlimit.dialect.mssql import MSSQLDialect
from pyrowlimit.dialect.mysql import MySQLDialect
from pyrowlimit.dialect.oracle import OracleDialect
from pyrowlimit.dialect.sqlite import SQLiteDialect
from pyrowlimit.fetch_offset import FetchOffsetType
from pyrowlimit.writer import FrameType


class TestDefaults:
    def test_postgres_is_default(self):
        assert render(10, 20) == "LIMIT 10\nOFFSET 20"

    def test_fetch_only(self):
        assert render(10) == "LIMIT 10"

    def test_offset_only(self):
        assert render(offset=20) == "OFFSET 20"

    def test_nothing(self):
        assert render() == ""

    def test_cel_expressions(self):
        result = render("page_size", "(page - 1) * page_size")
        assert result == "LIMIT page_size\nOFFSET (page - 1) * page_size"


class TestDialectStyles:
    def test_mysql(self):
        assert render(10, 20, dialect=MySQLDialect()) == "LIMIT 20, 10"

    def test_mysql_fetch_only(self):
        assert render(10, dialect=MySQLDialect()) == "LIMIT 10"

    def test_sqlite(self):
        assert render(10, 20, dialect=SQLiteDialect()) == "LIMIT 10\nOFFSET 20"

    def test_oracle(self):
        result = render(10, 20, dialect=OracleDialect())
        assert result == "OFFSET 20 ROWS\nFETCH NEXT 10 ROWS ONLY"

    def test_db2(self):
        assert render(10, 20, dialect=Db2Dialect()) == "FETCH FIRST 10 ROWS ONLY"

    def test_mssql_select_prefix(self):
        assert render(10, dialect=MSSQLDialect(), region=FrameType.SELECT) == "TOP 10"

    def test_mssql_trailing_region_is_empty(self):
        assert render(10, 20, dialect=MSSQLDialect()) == ""

    def test_firebird_select_prefix(self):
        result = render(10, 20, dialect=FirebirdDialect(), region=FrameType.SELECT)
        assert result == "FIRST 10"

    def test_mssql_parameter_is_parenthesized(self):
        result = render_parameterized(10, dialect=MSSQLDialect(), region=FrameType.SELECT)
        assert result == Result(sql="TOP (@p1)", parameters=[10])

    def test_mssql_expression_is_parenthesized(self):
        result = render("a + b", dialect=MSSQLDialect(), region=FrameType.SELECT)
        assert result == "TOP (a + b)"

    def test_firebird_expression_is_parenthesized(self):
        result = render("a + b", dialect=FirebirdDialect(), region=FrameType.SELECT)
        assert result == "FIRST (a + b)"

    def test_firebird_parameter_is_parenthesized(self):
        result = render_parameterized(5, dialect=FirebirdDialect(), region=FrameType.SELECT)
        assert result == Result(sql="FIRST (?)", parameters=[5])

    @pytest.mark.parametrize("dialect", ALL_DIALECTS)
    def test_inert_region(self, dialect):
        assert render(10, 20, dialect=dialect, region=FrameType.WHERE) == ""


class TestStyleOverride:
    def test_style_overrides_dialect(self):
        result = render(10, 20, dialect=MySQLDialect(), style=FetchOffsetType.FETCH_OFFSET)
        assert result == "OFFSET 20 ROWS\nFETCH NEXT 10 ROWS ONLY"

    def test_none_style(self):
        assert render(10, 20, style=FetchOffsetType.NONE) == ""

    def test_top_uses_dialect_literals(self):
        result = render("min(n, 50)", dialect=SQLiteDialect(), style=FetchOffsetType.TOP,
                        region=FrameType.SELECT)
        assert result == "TOP MIN(n, 50)"


class TestFormatting:
    def test_lower_case(self):
        result = render(10, 20, dialect=OracleDialect(), keyword_case=KeywordCase.LOWER)
        assert result == "offset 20 rows\nfetch next 10 rows only"

    def test_raw_node(self):
        assert render(RawNode("ALL")) == "LIMIT ALL"


class TestParameterized:
    def test_postgres(self):
        result = render_parameterized(10, 20)
        assert result == Result(sql="LIMIT $1\nOFFSET $2", parameters=[10, 20])

    def test_mysql_offset_first(self):
        result = render_parameterized(10, 20, dialect=MySQLDialect())
        assert result.sql == "LIMIT ?, ?"
        assert result.parameters == [20, 10]

    def test_oracle_offset_first(self):
        result = render_parameterized(10, 20, dialect=OracleDialect())
        assert result.sql == "OFFSET :1 ROWS\nFETCH NEXT :2 ROWS ONLY"
        assert result.parameters == [20, 10]

    def test_bigquery(self):
        result = render_parameterized("n * 2", 5, dialect=BigQueryDialect())
        assert result.sql == "LIMIT n * @p1\nOFFSET @p2"
        assert result.parameters == [2, 5]

    def test_nothing_rendered(self):
        result = render_parameterized(10, dialect=MSSQLDialect())
        assert result == Result(sql="", parameters=[])


class TestInvalidInput:
    def test_bool_rejected(self):
        with pytest.raises(InvalidArgumentsError):
            render(True)

    def test_float_rejected(self):
        with pytest.raises(InvalidArgumentsError):
            render(1.5)

    def test_bad_cel(self):
        with pytest.raises(UnsupportedExpressionError):
            render("10 10")

    def test_offset_limit_offset_without_fetch(self):
        with pytest.raises(InvalidArgumentsError):
            render(offset=20, dialect=MySQLDialect())

    def test_max_depth_forwarded(self):
        from pyrowlimit import MaxDepthExceededError

        with pytest.raises(MaxDepthExceededError):
            render("n + 1", max_depth=3)

    def test_long_literal_exceeds_output_length(self):
        from pyrowlimit import MaxOutputLengthExceededError

        with pytest.raises(MaxOutputLengthExceededError):
            render('"' + "x" * 200 + '"', max_output_length=50)

    def test_leading_zero_integer(self):
        with pytest.raises(UnsupportedExpressionError) as excinfo:
            render("010")
        assert isinstance(excinfo.value.wrapped, ValueError)
