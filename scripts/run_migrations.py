#!/usr/bin/env python3
"""Upgrade the comment store schema.

Usage:
    python scripts/run_migrations.py [revision]

The revision defaults to ``head``. Failures are logged to Logfire and
re-raised so a deploy stops before the API starts on a stale schema.
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from reel.config import Settings
from reel.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)
    revision = argv[1] if len(argv) > 1 else "head"

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config(str(ALEMBIC_INI)), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise
    logfire.info("Database schema upgraded", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
