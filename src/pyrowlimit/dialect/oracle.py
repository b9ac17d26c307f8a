"""Oracle dialect implementation."""

from __future__ import annotations

from io import StringIO

from pyrowlimit._utils import RESERVED_SQL_KEYWORDS, escape_string_literal, validate_field_name
from pyrowlimit.dialect._base import Dialect, DialectName
from pyrowlimit.fetch_offset import FetchOffsetType

_ORACLE_RESERVED: frozenset[str] = frozenset(
    RESERVED_SQL_KEYWORDS | {"connect", "level", "minus", "rownum", "start", "sysdate"}
)

# CEL type name -> Oracle type name
_TYPE_MAP: dict[str, str] = {
    "double": "BINARY_DOUBLE",
    "int": "NUMBER(19)",
    "uint": "NUMBER(20)",
    "string": "VARCHAR2(4000)",
}


class OracleDialect(Dialect):
    """Oracle 12c+ dialect: ``OFFSET m ROWS FETCH NEXT n ROWS ONLY``."""

    name = DialectName.ORACLE

    def fetch_offset_type(self) -> FetchOffsetType:
        return FetchOffsetType.FETCH_OFFSET

    # --- Literals ---

    def write_string_literal(self, w: StringIO, value: str) -> None:
        escaped = escape_string_literal(value)
        w.write(f"'{escaped}'")

    def write_param_placeholder(self, w: StringIO, param_index: int) -> None:
        w.write(f":{param_index}")

    # --- Type Casting ---

    def write_type_name(self, w: StringIO, cel_type_name: str) -> None:
        sql_type = _TYPE_MAP.get(cel_type_name, cel_type_name.upper())
        w.write(sql_type)

    # --- Validation ---

    def max_identifier_length(self) -> int:
        return 128

    def validate_field_name(self, name: str) -> None:
        validate_field_name(
            name, max_length=128, reserved=_ORACLE_RESERVED, dialect_label="Oracle"
        )
