"""Batched upsert read/write client for PostgreSQL."""

from __future__ import annotations

from sql_rw.batching import FlushPolicy, plan_batches
from sql_rw.errors import QueryError, SqlClientError, StatementError, StoreConnectionError
from sql_rw.table import count_rows, create_table, drop_if_exists, reset_table
from sql_rw.writer import WriteReport, run_smoke, write_records

__version__ = "0.1.0"

__all__ = [
    "FlushPolicy",
    "QueryError",
    "SqlClientError",
    "StatementError",
    "StoreConnectionError",
    "WriteReport",
    "count_rows",
    "create_table",
    "drop_if_exists",
    "plan_batches",
    "reset_table",
    "run_smoke",
    "write_records",
]
