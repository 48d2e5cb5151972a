"""Connection acquisition and the scoped auto-commit guard."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import psycopg
from psycopg.pq import TransactionStatus

from sql_rw.errors import StoreConnectionError, mask_dsn

logger = logging.getLogger(__name__)

_OPEN_TRANSACTION = (TransactionStatus.INTRANS, TransactionStatus.INERROR)


def connect(dsn: str, *, connect_timeout: float = 10.0) -> psycopg.Connection:
    """
    Open a connection in auto-commit mode, matching what a JDBC caller
    would hand to the writer. Failures surface as
    :class:`StoreConnectionError` with the driver error chained.
    """
    logger.debug("Connecting to %s (timeout=%.1fs)", mask_dsn(dsn), connect_timeout)
    try:
        conn = psycopg.connect(
            dsn,
            autocommit=True,
            connect_timeout=max(1, int(connect_timeout)),
        )
    except psycopg.OperationalError as exc:
        raise StoreConnectionError(dsn, str(exc).strip()) from exc
    logger.info("Connected to %s", mask_dsn(dsn))
    return conn


def end_transaction(conn: psycopg.Connection) -> None:
    """Roll back whatever transaction is open on `conn`, if any."""
    if conn.closed:
        return
    if conn.info.transaction_status in _OPEN_TRANSACTION:
        logger.debug("Rolling back open transaction (%s)", conn.info.transaction_status.name)
        conn.rollback()


@contextmanager
def autocommit_disabled(conn: psycopg.Connection) -> Iterator[psycopg.Connection]:
    """
    Turn auto-commit off for the body and put the caller's mode back on
    every exit path.

    On an exception the open transaction is rolled back first: psycopg
    refuses to change ``autocommit`` while a transaction is in progress.
    Work committed inside the body stays committed. If that cleanup fails
    too, it is logged and the body's exception is the one that propagates.
    """
    previous = conn.autocommit
    if previous:
        conn.autocommit = False
    try:
        yield conn
    except BaseException:
        try:
            end_transaction(conn)
            _restore_autocommit(conn, previous)
        except psycopg.Error as cleanup_exc:
            logger.warning(
                "Cleanup after failed block also failed (autocommit=%s not restored): %s",
                previous, cleanup_exc,
            )
        raise
    _restore_autocommit(conn, previous)


def _restore_autocommit(conn: psycopg.Connection, previous: bool) -> None:
    if conn.closed or conn.autocommit == previous:
        return
    # body left a transaction open; uncommitted work is discarded
    if conn.info.transaction_status != TransactionStatus.IDLE:
        end_transaction(conn)
    conn.autocommit = previous
