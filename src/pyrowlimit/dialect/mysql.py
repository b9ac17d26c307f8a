"""MySQL dialect implementation."""

from __future__ import annotations

from io import StringIO

from pyrowlimit._utils import RESERVED_SQL_KEYWORDS, escape_string_literal, validate_field_name
from pyrowlimit.dialect._base import Dialect, DialectName
from pyrowlimit.fetch_offset import FetchOffsetType

_MYSQL_RESERVED: frozenset[str] = frozenset(
    RESERVED_SQL_KEYWORDS
    | {"div", "dual", "interval", "key", "keys", "regexp", "rlike", "xor"}
)

# CEL type name -> MySQL type name
_TYPE_MAP: dict[str, str] = {
    "double": "DECIMAL",
    "int": "SIGNED",
    "uint": "UNSIGNED",
    "string": "CHAR",
}


class MySQLDialect(Dialect):
    """MySQL dialect: ``LIMIT m, n`` (offset first)."""

    name = DialectName.MYSQL

    def fetch_offset_type(self) -> FetchOffsetType:
        return FetchOffsetType.OFFSET_LIMIT

    # --- Literals ---

    def write_string_literal(self, w: StringIO, value: str) -> None:
        escaped = escape_string_literal(value)
        w.write(f"'{escaped}'")

    def write_param_placeholder(self, w: StringIO, param_index: int) -> None:
        w.write("?")

    # --- Type Casting ---

    def write_type_name(self, w: StringIO, cel_type_name: str) -> None:
        sql_type = _TYPE_MAP.get(cel_type_name, cel_type_name.upper())
        w.write(sql_type)

    # --- Validation ---

    def max_identifier_length(self) -> int:
        return 64

    def validate_field_name(self, name: str) -> None:
        validate_field_name(
            name, max_length=64, reserved=_MYSQL_RESERVED, dialect_label="MySQL"
        )
