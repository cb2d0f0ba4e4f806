#!/usr/bin/env python3
"""Apply the ledger schema migrations, reporting failures to Logfire."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from totem.config import Settings
from totem.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the database to ``revision``."""
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)

    try:
        logfire.info("Upgrading ledger schema", revision=revision)
        command.upgrade(alembic_cfg, revision)
        logfire.info("Ledger schema is up to date", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Ledger schema migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Never start the API against a half-migrated schema
        raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
