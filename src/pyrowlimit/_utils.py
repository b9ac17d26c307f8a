"""Validation helpers and escaping utilities."""

from __future__ import annotations

import re

from pyrowlimit._errors import InvalidFieldNameError

MAX_POSTGRESQL_IDENTIFIER_LENGTH = 63

FIELD_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

RESERVED_SQL_KEYWORDS: set[str] = {
    "all", "alter", "and", "any", "array", "as", "asc", "between",
    "by", "case", "cast", "check", "column", "constraint", "create",
    "cross", "current", "current_date", "current_time", "current_timestamp",
    "current_user", "default", "delete", "desc", "distinct", "drop",
    "else", "end", "except", "exists", "false", "fetch", "first", "for",
    "foreign", "from", "full", "grant", "group", "having", "in", "index",
    "inner", "insert", "intersect", "into", "is", "join", "left", "like",
    "limit", "next", "not", "null", "offset", "on", "only", "or", "order",
    "outer", "primary", "references", "right", "rows", "select",
    "session_user", "set", "some", "table", "then", "to", "top", "true",
    "union", "unique", "update", "user", "using", "values", "when", "where",
    "with",
}


def validate_field_name(
    name: str,
    *,
    max_length: int = MAX_POSTGRESQL_IDENTIFIER_LENGTH,
    reserved: set[str] | frozenset[str] = RESERVED_SQL_KEYWORDS,
    dialect_label: str = "SQL",
) -> None:
    """Validate a SQL field/identifier name.

    ``max_length`` of 0 disables the length check.
    """
    if not name:
        raise InvalidFieldNameError(
            "field name cannot be empty",
            "empty field name provided",
        )
    if max_length and len(name) > max_length:
        raise InvalidFieldNameError(
            "field name too long",
            f"field name '{name}' exceeds {max_length} characters",
        )
    if not FIELD_NAME_RE.match(name):
        raise InvalidFieldNameError(
            "invalid field name format",
            f"field name '{name}' contains invalid characters",
        )
    if name.lower() in reserved:
        raise InvalidFieldNameError(
            "field name is a reserved SQL keyword",
            f"field name '{name}' is a reserved {dialect_label} keyword",
        )


def escape_string_literal(value: str) -> str:
    """Escape a string for use as a SQL string literal."""
    return value.replace("'", "''")


def validate_no_null_bytes(value: str, context: str = "string literals") -> None:
    """Reject strings containing null bytes."""
    if "\x00" in value:
        raise InvalidFieldNameError(
            f"{context} cannot contain null bytes",
            f"null byte found in {context}: {value!r}",
        )


def process_escapes(s: str) -> str:
    """Process CEL string escape sequences."""
    result = []
    i = 0
    while i < len(s):
        if s[i] == "\\" and i + 1 < len(s):
            nxt = s[i + 1]
            simple = _SIMPLE_ESCAPES.get(nxt)
            if simple is not None:
                result.append(simple)
                i += 2
            elif nxt == "x" and i + 3 < len(s):
                try:
                    result.append(chr(int(s[i + 2 : i + 4], 16)))
                    i += 4
                except ValueError:
                    result.append(s[i])
                    i += 1
            elif nxt == "u" and i + 5 < len(s):
                try:
                    result.append(chr(int(s[i + 2 : i + 6], 16)))
                    i += 6
                except ValueError:
                    result.append(s[i])
                    i += 1
            else:
                result.append(s[i])
                result.append(nxt)
                i += 2
        else:
            result.append(s[i])
            i += 1
    return "".join(result)


_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "0": "\0",
}
