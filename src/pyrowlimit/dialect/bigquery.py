"""BigQuery dialect implementation."""

from __future__ import annotations

from io import StringIO

from pyrowlimit._utils import RESERVED_SQL_KEYWORDS, validate_field_name
from pyrowlimit.dialect._base import Dialect, DialectName
from pyrowlimit.fetch_offset import FetchOffsetType

_BIGQUERY_RESERVED: frozenset[str] = frozenset(
    RESERVED_SQL_KEYWORDS
    | {"assert_rows_modified", "enum", "qualify", "struct", "tablesample", "unnest"}
)

# CEL type name -> BigQuery type name
_TYPE_MAP: dict[str, str] = {
    "double": "FLOAT64",
    "int": "INT64",
    "uint": "INT64",
    "string": "STRING",
}


class BigQueryDialect(Dialect):
    """BigQuery dialect: ``LIMIT n OFFSET m``."""

    name = DialectName.BIGQUERY

    def fetch_offset_type(self) -> FetchOffsetType:
        return FetchOffsetType.LIMIT_OFFSET

    # --- Literals ---

    def write_string_literal(self, w: StringIO, value: str) -> None:
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        w.write(f"'{escaped}'")

    def write_param_placeholder(self, w: StringIO, param_index: int) -> None:
        w.write(f"@p{param_index}")

    # --- Type Casting ---

    def write_type_name(self, w: StringIO, cel_type_name: str) -> None:
        sql_type = _TYPE_MAP.get(cel_type_name, cel_type_name.upper())
        w.write(sql_type)

    # --- Validation ---

    def max_identifier_length(self) -> int:
        return 300

    def validate_field_name(self, name: str) -> None:
        validate_field_name(
            name, max_length=300, reserved=_BIGQUERY_RESERVED, dialect_label="BigQuery"
        )
