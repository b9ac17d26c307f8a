"""Abstract base class for SQL dialects."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from io import StringIO
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyrowlimit.fetch_offset import FetchOffsetType
    from pyrowlimit.writer import FrameType, SqlNode, SqlWriter


class DialectName(enum.StrEnum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQLITE = "sqlite"
    DUCKDB = "duckdb"
    BIGQUERY = "bigquery"
    MSSQL = "mssql"
    ORACLE = "oracle"
    FIREBIRD = "firebird"
    DB2 = "db2"


WriteFunc = Callable[[], None]
"""Callback that writes a sub-expression to the shared StringIO buffer."""


class Dialect(ABC):
    """Abstract base class defining the SQL dialect interface.

    A dialect names the row-limiting style its database expects and owns
    the literal syntax used when fetch/offset expressions are rendered.
    Methods receive a StringIO writer and callback functions for sub-expressions.
    """

    name: DialectName

    # --- Row limiting ---

    @abstractmethod
    def fetch_offset_type(self) -> FetchOffsetType: ...

    def supports_fetch(self) -> bool:
        return self.fetch_offset_type().supports_fetch

    def supports_offset(self) -> bool:
        return self.fetch_offset_type().supports_offset

    def unparse_offset_fetch(
        self,
        writer: SqlWriter,
        frame_type: FrameType,
        fetch: SqlNode | None,
        offset: SqlNode | None,
    ) -> None:
        """Write this dialect's fetch/offset clause for ``frame_type``."""
        self.fetch_offset_type().unparse(frame_type, writer, fetch, offset)

    def requires_parenthesized_row_count(self) -> bool:
        """Whether a ``TOP``/``FIRST`` row count other than an integer needs parentheses."""
        return False

    # --- Literals ---

    @abstractmethod
    def write_string_literal(self, w: StringIO, value: str) -> None: ...

    @abstractmethod
    def write_param_placeholder(self, w: StringIO, param_index: int) -> None: ...

    # --- Operators ---

    def write_modulo(
        self, w: StringIO, write_lhs: WriteFunc, write_rhs: WriteFunc
    ) -> None:
        w.write("MOD(")
        write_lhs()
        w.write(", ")
        write_rhs()
        w.write(")")

    def write_least(self, w: StringIO, write_args: Sequence[WriteFunc]) -> None:
        write_function_call(w, "LEAST", write_args)

    def write_greatest(self, w: StringIO, write_args: Sequence[WriteFunc]) -> None:
        write_function_call(w, "GREATEST", write_args)

    # --- Type Casting ---

    @abstractmethod
    def write_type_name(self, w: StringIO, cel_type_name: str) -> None: ...

    # --- Validation ---

    @abstractmethod
    def max_identifier_length(self) -> int: ...

    @abstractmethod
    def validate_field_name(self, name: str) -> None: ...


def write_function_call(w: StringIO, func_name: str, write_args: Sequence[WriteFunc]) -> None:
    w.write(f"{func_name}(")
    for i, write_arg in enumerate(write_args):
        if i > 0:
            w.write(", ")
        write_arg()
    w.write(")")
