"""Table helpers: drop, create, reset and count."""

from __future__ import annotations

import logging
from typing import Optional

import psycopg

from sql_rw.errors import QueryError
from sql_rw.statements import table_statements

logger = logging.getLogger(__name__)


def drop_if_exists(
    table: str,
    conn: psycopg.Connection,
    *,
    log: Optional[logging.Logger] = None,
) -> None:
    (log or logger).info("Dropping %s", table)
    with conn.cursor() as cur:
        cur.execute(table_statements(table).drop)


def create_table(
    table: str,
    conn: psycopg.Connection,
    if_not_exists: bool = False,
    *,
    log: Optional[logging.Logger] = None,
) -> None:
    """Create `table` with the fixed ``(pk, data)`` schema."""
    stmts = table_statements(table)
    (log or logger).info("Creating %s", table)
    with conn.cursor() as cur:
        cur.execute(stmts.create_if_not_exists if if_not_exists else stmts.create)


def reset_table(
    table: str,
    conn: psycopg.Connection,
    *,
    log: Optional[logging.Logger] = None,
) -> None:
    """
    Drop then recreate `table`, leaving it empty. Safe whether or not the
    table exists; the two statements do not share a transaction.
    """
    drop_if_exists(table, conn, log=log)
    create_table(table, conn, if_not_exists=True, log=log)


def count_rows(table: str, conn: psycopg.Connection) -> int:
    """Return ``SELECT COUNT(1)`` for `table`."""
    with conn.cursor() as cur:
        cur.execute(table_statements(table).count)
        row = cur.fetchone()
    if row is None:
        raise QueryError(f"count query on {table} returned no row")
    return int(row[0])
