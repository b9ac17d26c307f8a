"""Firebird dialect implementation."""

from __future__ import annotations

from io import StringIO

from pyrowlimit._utils import RESERVED_SQL_KEYWORDS, escape_string_literal, validate_field_name
from pyrowlimit.dialect._base import Dialect, DialectName
from pyrowlimit.fetch_offset import FetchOffsetType

_FIREBIRD_RESERVED: frozenset[str] = frozenset(
    RESERVED_SQL_KEYWORDS | {"returning", "skip", "trigger", "variable"}
)

# CEL type name -> Firebird type name
_TYPE_MAP: dict[str, str] = {
    "double": "DOUBLE PRECISION",
    "int": "BIGINT",
    "uint": "BIGINT",
    "string": "VARCHAR(32765)",
}


class FirebirdDialect(Dialect):
    """Firebird dialect: ``SELECT FIRST n ...``."""

    name = DialectName.FIREBIRD

    def fetch_offset_type(self) -> FetchOffsetType:
        return FetchOffsetType.FIRST

    def requires_parenthesized_row_count(self) -> bool:
        return True

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
        return 63

    def validate_field_name(self, name: str) -> None:
        validate_field_name(
            name, max_length=63, reserved=_FIREBIRD_RESERVED, dialect_label="Firebird"
        )
