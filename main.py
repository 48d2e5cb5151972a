"""Entry point for invoking the read/write client via the CLI."""

from __future__ import annotations

import sys

from sql_rw.cli import main as cli_main

if __name__ == "__main__":
    sys.exit(cli_main())
