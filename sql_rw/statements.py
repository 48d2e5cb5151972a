"""Composed SQL for the fixed two-column example table."""

from __future__ import annotations

from dataclasses import dataclass

from psycopg import sql

# (name, type) pairs; ``pk`` is the primary key
COLUMNS = [("pk", "INTEGER NOT NULL PRIMARY KEY"), ("data", "VARCHAR")]

# --------------------------------------------------------------------------- #
# SQL templates                                                               #
# --------------------------------------------------------------------------- #
_DROP_SQL = sql.SQL("DROP TABLE IF EXISTS {tbl}")

_CREATE_SQL = sql.SQL("CREATE TABLE {exists}{tbl} ({defs})")

_UPSERT_SQL = sql.SQL(
    """
    INSERT INTO {tbl} (pk, data)
    VALUES (%s, %s)
    ON CONFLICT (pk) DO UPDATE SET data = EXCLUDED.data
    """
)

_COUNT_SQL = sql.SQL("SELECT COUNT(1) FROM {tbl}")


@dataclass(frozen=True)
class TableStatements:
    """Every statement the client runs against one table."""
    table: str
    drop: sql.Composed
    create: sql.Composed
    create_if_not_exists: sql.Composed
    upsert: sql.Composed
    count: sql.Composed


def _column_defs() -> sql.Composed:
    return sql.SQL(", ").join(
        sql.SQL("{} {}").format(sql.Identifier(name), sql.SQL(ctype))
        for name, ctype in COLUMNS
    )


def table_statements(table: str) -> TableStatements:
    """
    Build the statements for `table`. The name is always passed through
    ``sql.Identifier`` so it is quoted, never interpolated.
    """
    if not table:
        raise ValueError("table name must not be empty")

    tbl = sql.Identifier(table)
    defs = _column_defs()
    return TableStatements(
        table=table,
        drop=_DROP_SQL.format(tbl=tbl),
        create=_CREATE_SQL.format(exists=sql.SQL(""), tbl=tbl, defs=defs),
        create_if_not_exists=_CREATE_SQL.format(
            exists=sql.SQL("IF NOT EXISTS "), tbl=tbl, defs=defs
        ),
        upsert=_UPSERT_SQL.format(tbl=tbl),
        count=_COUNT_SQL.format(tbl=tbl),
    )
