"""
Batched upsert writer.

Stages ``(i, str(i))`` rows for ``i in range(num_records)``, flushes them to
PostgreSQL with one ``executemany`` per batch and commits after every flush.
Atomicity is per batch only: if a flush fails, earlier batches stay
committed and the failing one is rolled back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import List, Optional, Tuple

import psycopg

from sql_rw.batching import DEFAULT_BATCH_SIZE, FlushPolicy, flush_due, validate
from sql_rw.db import autocommit_disabled
from sql_rw.statements import table_statements
from sql_rw.table import count_rows, create_table, drop_if_exists

logger = logging.getLogger(__name__)

Row = Tuple[int, str]


@dataclass
class WriteReport:
    """What a successful :func:`write_records` call did."""
    table: str
    records: int
    batches: List[int] = field(default_factory=list)
    elapsed_ms: int = 0
    row_count: int = 0

    @property
    def commits(self) -> int:
        return len(self.batches)


def write_records(
    table: str,
    conn: psycopg.Connection,
    num_records: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
    *,
    flush_policy: FlushPolicy | str = FlushPolicy.FIXED,
    log: Optional[logging.Logger] = None,
) -> WriteReport:
    """Upsert `num_records` rows into `table` in batches of `batch_size`.

    Parameters
    ----------
    table:
        Target table; created with ``IF NOT EXISTS`` before writing.
    conn:
        Open connection owned by the caller. Its ``autocommit`` flag is
        switched off for the write loop and restored afterwards, whether
        the call succeeds or fails.
    num_records:
        Number of keys to write, ``0..num_records-1``. Zero is allowed.
    batch_size:
        Rows per flush + commit.
    flush_policy:
        :class:`FlushPolicy` (or its string value) deciding the flush points.
    log:
        Logger receiving progress lines; defaults to this module's logger.
    """
    validate(num_records, batch_size)
    policy = FlushPolicy.parse(flush_policy)
    log = log or logger
    upsert = table_statements(table).upsert
    report = WriteReport(table=table, records=num_records)

    create_table(table, conn, if_not_exists=True, log=log)

    with autocommit_disabled(conn), conn.cursor() as cur:
        log.info("Writing %d records to %s (batch_size=%d, policy=%s)",
                 num_records, table, batch_size, policy.value)
        staged: List[Row] = []

        def _flush() -> None:
            if staged:
                log.info("Flushing %d batched records", len(staged))
                cur.executemany(upsert, staged)
                report.batches.append(len(staged))
                staged.clear()
            # an empty trailing commit is a no-op for psycopg
            conn.commit()

        start = perf_counter()
        for i in range(num_records):
            staged.append((i, str(i)))
            if flush_due(i, batch_size, policy):
                _flush()
        _flush()
        report.elapsed_ms = int((perf_counter() - start) * 1000)

    log.info("Wrote %d records in %dms", num_records, report.elapsed_ms)

    report.row_count = count_rows(table, conn)
    log.info("Read %d records from %s", report.row_count, table)
    return report


def run_smoke(
    table: str,
    conn: psycopg.Connection,
    num_records: int = 100,
    *,
    log: Optional[logging.Logger] = None,
) -> int:
    """
    Recreate `table` from scratch, upsert `num_records` rows one statement
    at a time in a single transaction, and return the row count.
    """
    validate(num_records, 1)
    log = log or logger
    upsert = table_statements(table).upsert

    drop_if_exists(table, conn, log=log)
    create_table(table, conn, if_not_exists=False, log=log)

    with autocommit_disabled(conn), conn.cursor() as cur:
        log.info("Writing to %s", table)
        for i in range(num_records):
            cur.execute(upsert, (i, str(i)))
        conn.commit()

    found = count_rows(table, conn)
    log.info("Found %d records from %s", found, table)
    return found
