"""Command line interface for the read/write client."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import psycopg

from sql_rw.batching import FlushPolicy
from sql_rw.config import Config, load_config
from sql_rw.db import connect
from sql_rw.errors import SqlClientError
from sql_rw.logging_setup import configure_logging
from sql_rw.table import count_rows, reset_table
from sql_rw.writer import run_smoke, write_records

logger = logging.getLogger("sql-rw")


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Return the argument parser; defaults come from `config`."""
    parser = argparse.ArgumentParser(
        description="Batched upsert read/write client for PostgreSQL"
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: $LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--dsn", default=config.dsn,
        help="PostgreSQL DSN (env SQLRW_DSN)",
    )
    parser.add_argument(
        "--connect-timeout",
        type=float,
        default=config.connect_timeout,
        help="Seconds to wait for a connection (env SQLRW_CONNECT_TIMEOUT)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    smoke = sub.add_parser(
        "smoke", help="Recreate the table and write rows in one transaction"
    )
    smoke.add_argument("--table", default=config.table)
    smoke.add_argument("--num-records", type=int, default=100)

    write = sub.add_parser(
        "write", help="Upsert rows in batches, committing after each batch"
    )
    write.add_argument("--table", default=config.table)
    write.add_argument("--num-records", type=int, default=config.num_records)
    write.add_argument("--batch-size", type=int, default=config.batch_size)
    write.add_argument(
        "--flush-policy",
        choices=[p.value for p in FlushPolicy],
        default=config.flush_policy.value,
        help="fixed: full batches; legacy: flush the first record alone",
    )
    write.add_argument(
        "--reset", action="store_true",
        help="Drop and recreate the table before writing",
    )

    count = sub.add_parser("count", help="Print the table's row count")
    count.add_argument("--table", default=config.table)

    reset = sub.add_parser("reset", help="Drop and recreate the table")
    reset.add_argument("--table", default=config.table)
    return parser


def _run(args: argparse.Namespace) -> None:
    with connect(args.dsn, connect_timeout=args.connect_timeout) as conn:
        if args.cmd == "smoke":
            run_smoke(args.table, conn, args.num_records, log=logger)
        elif args.cmd == "write":
            if args.reset:
                reset_table(args.table, conn, log=logger)
            report = write_records(
                args.table,
                conn,
                args.num_records,
                args.batch_size,
                flush_policy=args.flush_policy,
                log=logger,
            )
            logger.debug("Batches flushed: %s", report.batches)
        elif args.cmd == "count":
            print(count_rows(args.table, conn))
        elif args.cmd == "reset":
            reset_table(args.table, conn, log=logger)
        else:  # pragma: no cover - argparse enforces choices
            raise SystemExit(f"Unknown command: {args.cmd}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return a process exit status."""
    try:
        config = load_config()
    except ValueError as exc:
        configure_logging()
        logger.error("Invalid configuration: %s", exc)
        return 2
    args = build_parser(config).parse_args(argv)
    configure_logging(args.log_level)

    try:
        _run(args)
    except (SqlClientError, psycopg.Error, ValueError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 130
    return 0
