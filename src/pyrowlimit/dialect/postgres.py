"""PostgreSQL dialect implementation."""

from __future__ import annotations

from io import StringIO

from pyrowlimit._utils import escape_string_literal, validate_field_name
from pyrowlimit.dialect._base import Dialect, DialectName
from pyrowlimit.fetch_offset import FetchOffsetType

# CEL type name -> PostgreSQL type name
_TYPE_MAP: dict[str, str] = {
    "double": "DOUBLE PRECISION",
    "int": "BIGINT",
    "uint": "BIGINT",
    "string": "TEXT",
}


class PostgresDialect(Dialect):
    """PostgreSQL dialect: ``LIMIT n OFFSET m``."""

    name = DialectName.POSTGRESQL

    def fetch_offset_type(self) -> FetchOffsetType:
        return FetchOffsetType.LIMIT_OFFSET

    # --- Literals ---

    def write_string_literal(self, w: StringIO, value: str) -> None:
        escaped = escape_string_literal(value)
        w.write(f"'{escaped}'")

    def write_param_placeholder(self, w: StringIO, param_index: int) -> None:
        w.write(f"${param_index}")

    # --- Type Casting ---

    def write_type_name(self, w: StringIO, cel_type_name: str) -> None:
        sql_type = _TYPE_MAP.get(cel_type_name, cel_type_name.upper())
        w.write(sql_type)

    # --- Validation ---

    def max_identifier_length(self) -> int:
        return 63

    def validate_field_name(self, name: str) -> None:
        validate_field_name(name)
