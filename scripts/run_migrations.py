#!/usr/bin/env python3
"""Apply the ranking schema migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # roll back to an earlier revision
"""

import sys
import logfire
from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory

from encore.config import Settings
from encore.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Move the schema to the requested revision and log the outcome."""
    settings = Settings()
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"
    alembic_cfg = Config("alembic.ini")
    head = ScriptDirectory.from_config(alembic_cfg).get_current_head()

    # Never log credentials
    database = settings.database_url.rsplit("@", 1)[-1]

    try:
        with logfire.span("run_migrations", target=target, head=head, database=database):
            if target == "head" or target == head:
                command.upgrade(alembic_cfg, "head")
            else:
                # Explicit revisions may point backwards (rollback of a bad deploy)
                command.downgrade(alembic_cfg, target)

        logfire.info("Schema migrated", target=target)
        return 0

    except Exception as e:
        logfire.error(
            "Schema migration failed",
            target=target,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv))
