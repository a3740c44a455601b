#!/usr/bin/env python3
"""Apply Threadline schema migrations, reporting failures to Logfire."""

import argparse
import sys
import logfire
from alembic import command
from alembic.config import Config

from threadline.config import Settings
from threadline.util.logging import setup_logging
from threadline.util.observability import configure_logfire


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument(
        "--sql",
        action="store_true",
        help="Print the SQL instead of running it (offline mode)",
    )
    parser.add_argument("--config", default="alembic.ini")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Upgrade the database to ``revision`` (default: head)."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span(
        "migrations.upgrade", revision=args.revision, offline=args.sql
    ):
        try:
            command.upgrade(Config(args.config), args.revision, sql=args.sql)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=args.revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the container fails and doesn't start with broken schema
            raise

    logfire.info("Database migrations completed", revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
