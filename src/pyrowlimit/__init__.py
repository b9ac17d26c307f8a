"""pyrowlimit - Render SQL row-limiting clauses (LIMIT/OFFSET/FETCH/TOP/FIRST) per dialect."""

from __future__ import annotations

try:
    from pyrowlimit._version import __version__
except ModuleNotFoundError:  # editable install without VCS metadata
    __version__ = "0.0.0.dev0"

import logging
from dataclasses import dataclass, field
from typing import Any

from pyrowlimit._constants import DEFAULT_INDENTATION
from pyrowlimit._errors import (
    ConversionError,
    InvalidArgumentsError,
    InvalidFieldNameError,
    MaxDepthExceededError,
    MaxOutputLengthExceededError,
    UnsupportedExpressionError,
)
from pyrowlimit.dialect import Dialect, DialectName, get_dialect
from pyrowlimit.dialect.bigquery import BigQueryDialect
from pyrowlimit.dialect.db2 import Db2Dialect
from pyrowlimit.dialect.duckdb import DuckDBDialect
from pyrowlimit.dialect.firebird import FirebirdDialect
from pyrowlimit.dialect.mssql import MSSQLDialect
from pyrowlimit.dialect.mysql import MySQLDialect
from pyrowlimit.dialect.oracle import OracleDialect
from pyrowlimit.dialect.postgres import PostgresDialect
from pyrowlimit.dialect.sqlite import SQLiteDialect
from pyrowlimit.fetch_offset import FetchOffsetType, emit, supports_fetch, supports_offset
from pyrowlimit.nodes import CelNode, RawNode
from pyrowlimit.pretty import KeywordCase, PrettySqlWriter
from pyrowlimit.writer import Frame, FrameType, SqlNode, SqlWriter, frame

__all__ = [
    "render",
    "render_parameterized",
    "emit",
    "supports_fetch",
    "supports_offset",
    "frame",
    "get_dialect",
    "Result",
    "FetchOffsetType",
    "Frame",
    "FrameType",
    "KeywordCase",
    "SqlNode",
    "SqlWriter",
    "CelNode",
    "RawNode",
    "PrettySqlWriter",
    "ConversionError",
    "InvalidArgumentsError",
    "InvalidFieldNameError",
    "MaxDepthExceededError",
    "MaxOutputLengthExceededError",
    "UnsupportedExpressionError",
    "Dialect",
    "DialectName",
    "BigQueryDialect",
    "Db2Dialect",
    "DuckDBDialect",
    "FirebirdDialect",
    "MSSQLDialect",
    "MySQLDialect",
    "OracleDialect",
    "PostgresDialect",
    "SQLiteDialect",
]

logger = logging.getLogger(__name__)

RowCount = str | int | SqlNode | None


@dataclass(frozen=True)
class Result:
    """Result of a parameterized rendering."""

    sql: str
    parameters: list[Any] = field(default_factory=list)


def _as_node(value: RowCount) -> SqlNode | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidArgumentsError(
            "row count must be an expression or integer",
            f"got boolean {value!r}",
        )
    if isinstance(value, int):
        return CelNode(str(value))
    if isinstance(value, str):
        return CelNode(value)
    if isinstance(value, SqlNode):
        return value
    raise InvalidArgumentsError(
        "row count must be an expression or integer",
        f"unsupported row count type: {type(value).__name__}",
    )


def _render(
    fetch: RowCount,
    offset: RowCount,
    *,
    dialect: Dialect | None,
    style: FetchOffsetType | None,
    region: FrameType,
    keyword_case: KeywordCase,
    indentation: int,
    max_depth: int | None,
    max_output_length: int | None,
    parameterize: bool,
) -> PrettySqlWriter:
    if dialect is None:
        dialect = PostgresDialect()
    if style is None:
        style = dialect.fetch_offset_type()

    kwargs: dict[str, Any] = {
        "keyword_case": keyword_case,
        "indentation": indentation,
        "parameterize": parameterize,
    }
    if max_depth is not None:
        kwargs["max_depth"] = max_depth
    if max_output_length is not None:
        kwargs["max_output_length"] = max_output_length

    writer = PrettySqlWriter(dialect, **kwargs)
    logger.debug(
        "rendering %s clause for %s in region %s", style.name, dialect.name, region
    )
    style.unparse(region, writer, _as_node(fetch), _as_node(offset))
    return writer


def render(
    fetch: RowCount = None,
    offset: RowCount = None,
    *,
    dialect: Dialect | None = None,
    style: FetchOffsetType | None = None,
    region: FrameType = FrameType.ORDER_BY,
    keyword_case: KeywordCase = KeywordCase.UPPER,
    indentation: int = DEFAULT_INDENTATION,
    max_depth: int | None = None,
    max_output_length: int | None = None,
) -> str:
    """Render the row-limiting clause with values inlined.

    Args:
        fetch: Maximum number of rows, as a CEL expression, an int or a node.
        offset: Rows to skip, as a CEL expression, an int or a node.
        dialect: SQL dialect to use. Defaults to PostgreSQL.
        style: Row-limiting style. Defaults to the dialect's own style.
        region: Region of the statement being written; ``ORDER_BY`` for
            trailing clauses, ``SELECT`` for ``TOP``/``FIRST`` prefixes.
        keyword_case: Casing applied to keywords.
        indentation: Spaces per indent level.
        max_depth: Maximum expression recursion depth. Defaults to 100.
        max_output_length: Maximum SQL length per expression. Defaults to 50000.

    Returns:
        The clause text, or an empty string when the style writes nothing
        for ``region``.

    Raises:
        ConversionError: If an expression cannot be rendered.
    """
    writer = _render(
        fetch, offset,
        dialect=dialect, style=style, region=region,
        keyword_case=keyword_case, indentation=indentation,
        max_depth=max_depth, max_output_length=max_output_length,
        parameterize=False,
    )
    return writer.result.lstrip()


def render_parameterized(
    fetch: RowCount = None,
    offset: RowCount = None,
    *,
    dialect: Dialect | None = None,
    style: FetchOffsetType | None = None,
    region: FrameType = FrameType.ORDER_BY,
    keyword_case: KeywordCase = KeywordCase.UPPER,
    indentation: int = DEFAULT_INDENTATION,
    max_depth: int | None = None,
    max_output_length: int | None = None,
) -> Result:
    """Render the row-limiting clause with literals replaced by placeholders.

    Takes the same arguments as :func:`render`.

    Returns:
        Result with SQL containing dialect placeholders and the parameter
        values in placeholder order.

    Raises:
        ConversionError: If an expression cannot be rendered.
    """
    writer = _render(
        fetch, offset,
        dialect=dialect, style=style, region=region,
        keyword_case=keyword_case, indentation=indentation,
        max_depth=max_depth, max_output_length=max_output_length,
        parameterize=True,
    )
    return Result(sql=writer.result.lstrip(), parameters=list(writer.parameters))
