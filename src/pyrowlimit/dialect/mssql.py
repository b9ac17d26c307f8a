"""SQL Server dialect implementation."""

from __future__ import annotations

from io import StringIO

from pyrowlimit._utils import RESERVED_SQL_KEYWORDS, escape_string_literal, validate_field_name
from pyrowlimit.dialect._base import Dialect, DialectName, WriteFunc
from pyrowlimit.fetch_offset import FetchOffsetType

_MSSQL_RESERVED: frozenset[str] = frozenset(
    RESERVED_SQL_KEYWORDS | {"clustered", "identity", "nocheck", "percent", "tran"}
)

# CEL type name -> SQL Server type name
_TYPE_MAP: dict[str, str] = {
    "double": "FLOAT",
    "int": "BIGINT",
    "uint": "BIGINT",
    "string": "NVARCHAR(MAX)",
}


class MSSQLDialect(Dialect):
    """SQL Server dialect: ``SELECT TOP n ...``.

    Only the row limit is rendered; ``TOP`` has no offset form.
    """

    name = DialectName.MSSQL

    def fetch_offset_type(self) -> FetchOffsetType:
        return FetchOffsetType.TOP

    def requires_parenthesized_row_count(self) -> bool:
        return True

    # --- Literals ---

    def write_string_literal(self, w: StringIO, value: str) -> None:
        escaped = escape_string_literal(value)
        w.write(f"N'{escaped}'")

    def write_param_placeholder(self, w: StringIO, param_index: int) -> None:
        w.write(f"@p{param_index}")

    # --- Operators ---

    def write_modulo(
        self, w: StringIO, write_lhs: WriteFunc, write_rhs: WriteFunc
    ) -> None:
        write_lhs()
        w.write(" % ")
        write_rhs()

    # --- Type Casting ---

    def write_type_name(self, w: StringIO, cel_type_name: str) -> None:
        sql_type = _TYPE_MAP.get(cel_type_name, cel_type_name.upper())
        w.write(sql_type)

    # --- Validation ---

    def max_identifier_length(self) -> int:
        return 128

    def validate_field_name(self, name: str) -> None:
        validate_field_name(
            name, max_length=128, reserved=_MSSQL_RESERVED, dialect_label="SQL Server"
        )
