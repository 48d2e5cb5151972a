"""Root logging for the sql-rw command line."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Send client log lines to stderr at `level` (``--log-level``), falling
    back to ``$LOG_LEVEL`` and then INFO. psycopg's own logger stays at
    WARNING unless DEBUG is asked for.
    """
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO), format=LOG_FORMAT)
    logging.getLogger("psycopg").setLevel(
        logging.DEBUG if name == "DEBUG" else logging.WARNING)
