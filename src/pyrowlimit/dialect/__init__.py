"""SQL dialect system for row-limit clause rendering."""

from pyrowlimit.dialect._base import Dialect, DialectName
from pyrowlimit.dialect.bigquery import BigQueryDialect
from pyrowlimit.dialect.db2 import Db2Dialect
from pyrowlimit.dialect.duckdb import DuckDBDialect
from pyrowlimit.dialect.firebird import FirebirdDialect
from pyrowlimit.dialect.mssql import MSSQLDialect
from pyrowlimit.dialect.mysql import MySQLDialect
from pyrowlimit.dialect.oracle import OracleDialect
from pyrowlimit.dialect.postgres import PostgresDialect
from pyrowlimit.dialect.sqlite import SQLiteDialect

__all__ = [
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
    "get_dialect",
]

_REGISTRY: dict[str, type[Dialect]] = {
    DialectName.POSTGRESQL: PostgresDialect,
    DialectName.DUCKDB: DuckDBDialect,
    DialectName.BIGQUERY: BigQueryDialect,
    DialectName.MYSQL: MySQLDialect,
    DialectName.SQLITE: SQLiteDialect,
    DialectName.MSSQL: MSSQLDialect,
    DialectName.ORACLE: OracleDialect,
    DialectName.FIREBIRD: FirebirdDialect,
    DialectName.DB2: Db2Dialect,
}


def get_dialect(name: str) -> Dialect:
    """Get a dialect instance by name.

    Args:
        name: Dialect name (e.g., "postgresql", "mysql", "mssql", "oracle").

    Returns:
        A Dialect instance.

    Raises:
        ValueError: If the dialect name is unknown.
    """
    cls = _REGISTRY.get(name)
    if cls is None:
        raise ValueError(
            f"unknown dialect: {name!r}. "
            f"Available: {', '.join(sorted(_REGISTRY))}"
        )
    return cls()
