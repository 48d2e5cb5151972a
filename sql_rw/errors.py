"""Error taxonomy for the read/write client."""

from __future__ import annotations

import psycopg
from psycopg.conninfo import conninfo_to_dict, make_conninfo

# DDL/DML and batch failures surface as the driver's own exceptions,
# unmodified. The alias lets callers catch them by role.
StatementError = psycopg.Error


class SqlClientError(Exception):
    """Base class for errors raised by this package itself."""


class StoreConnectionError(SqlClientError):
    """The store could not be reached or the connection is unusable."""

    def __init__(self, dsn: str, reason: str) -> None:
        self.dsn = dsn
        self.reason = reason
        super().__init__(f"could not connect to {mask_dsn(dsn)}: {reason}")


class QueryError(SqlClientError):
    """A query that must return a row returned none."""


def mask_dsn(dsn: str) -> str:
    """
    Return `dsn` with any password replaced by ``***``.

    libpq parses both URL and keyword forms, so a password given as
    ``user:pw@host``, ``?password=pw`` or ``password=pw`` is hidden. The
    result is always in keyword form. A DSN libpq cannot parse is never
    echoed back.
    """
    try:
        params = conninfo_to_dict(dsn)
    except psycopg.Error:
        return "<unparseable dsn>"
    if "password" in params:
        params["password"] = "***"
    return make_conninfo(**params)
