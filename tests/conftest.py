"""Shared test fixtures."""

import pytest

from pyrowlimit.dialect.bigquery import BigQueryDialect
from pyrowlimit.dialect.db2 import Db2Dialect
from pyrowlimit.dialect.duckdb import DuckDBDialect
from pyrowlimit.dialect.firebird import FirebirdDialect
from pyrowlimit.dialect.mssql import MSSQLDialect
from pyrowlimit.dialect.mysql import MySQLDialect
from pyrowlimit.dialect.oracle import OracleDialect
from pyrowlimit.dialect.postgres import PostgresDialect
from pyrowlimit.dialect.sqlite import SQLiteDialect
from pyrowlimit.writer import Frame, FrameType


class Num:
    """Leaf expression that records itself by its text."""

    def __init__(self, text):
        self.text = str(text)

    def unparse(self, writer, left_prec, right_prec):
        writer.literal(self.text)

    def __str__(self):
        return self.text


class RecordingWriter:
    """SqlWriter that records the logical token stream.

    ``⏎`` is a newline, ``[KIND`` opens a frame and ``]`` closes it.
    """

    def __init__(self):
        self.events = []
        self.open = []
        self.precedences = []

    def start_list(self, frame_type):
        handle = Frame(frame_type, depth=len(self.open))
        self.open.append(handle)
        self.events.append(f"[{frame_type.name}")
        return handle

    def end_list(self, frame):
        assert self.open and self.open[-1] is frame
        self.open.pop()
        self.events.append("]")

    def keyword(self, text):
        self.events.append(text)

    def sep(self, text, space_after=True):
        self.events.append(text)

    def newline_and_indent(self):
        self.events.append("⏎")

    def unparse_expression(self, node, left_prec, right_prec):
        self.precedences.append((left_prec, right_prec))
        self.events.append("∅" if node is None else str(node))

    @property
    def stream(self):
        return " ".join(self.events)


class FailingWriter(RecordingWriter):
    """RecordingWriter that raises when it is asked for one keyword."""

    def __init__(self, fail_on):
        super().__init__()
        self.fail_on = fail_on

    def keyword(self, text):
        if text == self.fail_on:
            raise RuntimeError(f"sink failure on {text}")
        super().keyword(text)


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
def fetch():
    return Num(10)


@pytest.fixture
def offset():
    return Num(20)


@pytest.fixture
def pg_dialect():
    return PostgresDialect()


@pytest.fixture
def mysql_dialect():
    return MySQLDialect()


@pytest.fixture
def sqlite_dialect():
    return SQLiteDialect()


ALL_DIALECTS = [
    pytest.param(PostgresDialect(), id="postgres"),
    pytest.param(DuckDBDialect(), id="duckdb"),
    pytest.param(BigQueryDialect(), id="bigquery"),
    pytest.param(MySQLDialect(), id="mysql"),
    pytest.param(SQLiteDialect(), id="sqlite"),
    pytest.param(MSSQLDialect(), id="mssql"),
    pytest.param(OracleDialect(), id="oracle"),
    pytest.param(FirebirdDialect(), id="firebird"),
    pytest.param(Db2Dialect(), id="db2"),
]

HOST_REGIONS = [FrameType.ORDER_BY, FrameType.SELECT]
INERT_REGIONS = [r for r in FrameType if r not in HOST_REGIONS]
