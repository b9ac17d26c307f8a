"""SQLite dialect implementation."""

from __future__ import annotations

from collections.abc import Sequence
from io import StringIO

from pyrowlimit._utils import RESERVED_SQL_KEYWORDS, escape_string_literal, validate_field_name
from pyrowlimit.dialect._base import Dialect, DialectName, WriteFunc, write_function_call
from pyrowlimit.fetch_offset import FetchOffsetType

_SQLITE_RESERVED: frozenset[str] = frozenset(
    RESERVED_SQL_KEYWORDS | {"abort", "autoincrement", "glob", "pragma", "vacuum"}
)

# CEL type name -> SQLite type name
_TYPE_MAP: dict[str, str] = {
    "double": "REAL",
    "int": "INTEGER",
    "uint": "INTEGER",
    "string": "TEXT",
}


class SQLiteDialect(Dialect):
    """SQLite dialect: ``LIMIT n OFFSET m``."""

    name = DialectName.SQLITE

    def fetch_offset_type(self) -> FetchOffsetType:
        return FetchOffsetType.LIMIT_OFFSET

    # --- Literals ---

    def write_string_literal(self, w: StringIO, value: str) -> None:
        escaped = escape_string_literal(value)
        w.write(f"'{escaped}'")

    def write_param_placeholder(self, w: StringIO, param_index: int) -> None:
        w.write("?")

    # --- Operators ---

    def write_modulo(
        self, w: StringIO, write_lhs: WriteFunc, write_rhs: WriteFunc
    ) -> None:
        write_lhs()
        w.write(" % ")
        write_rhs()

    def write_least(self, w: StringIO, write_args: Sequence[WriteFunc]) -> None:
        # Multi-argument MIN/MAX are scalar in SQLite.
        write_function_call(w, "MIN", write_args)

    def write_greatest(self, w: StringIO, write_args: Sequence[WriteFunc]) -> None:
        write_function_call(w, "MAX", write_args)

    # --- Type Casting ---

    def write_type_name(self, w: StringIO, cel_type_name: str) -> None:
        sql_type = _TYPE_MAP.get(cel_type_name, cel_type_name.upper())
        w.write(sql_type)

    # --- Validation ---

    def max_identifier_length(self) -> int:
        return 0  # No limit

    def validate_field_name(self, name: str) -> None:
        validate_field_name(
            name, max_length=0, reserved=_SQLITE_RESERVED, dialect_label="SQLite"
        )
