#!/usr/bin/env python3
"""
Initialize the Lending Ledger event journal.

This script:
1. Creates the ledger_events table
2. Verifies the database answers queries
3. Optionally prints the journal's current entries

Usage:
    python scripts/init_journal.py [--drop-existing] [--database-url URL] [--list]
"""

import argparse
import logging
import sys

from lending_ledger.config import get_config
from lending_ledger.database import DatabaseManager, EventJournal

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    """Main entry point for journal initialization."""
    parser = argparse.ArgumentParser(description="Initialize the Lending Ledger event journal")
    parser.add_argument(
        "--drop-existing",
        action="store_true",
        help="Drop the journal table before creating it",
    )
    parser.add_argument(
        "--database-url",
        help="Override the configured database URL",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print journal entries after initialization",
    )

    args = parser.parse_args()

    manager = DatabaseManager(args.database_url or get_config().get_database_url())

    try:
        manager.init_database(drop_existing=args.drop_existing)
    except Exception:
        logger.exception("Failed to create journal schema")
        sys.exit(1)

    if not manager.verify_connection():
        logger.error("Failed to connect to database")
        sys.exit(1)

    logger.info("Journal ready at %s", manager.database_url)

    if args.list:
        for entry in EventJournal(manager).entries():
            print(
                f"{entry.id:>6}  {entry.occurred_at.isoformat()}  {entry.kind:<14}  "
                f"{entry.principal or '-':<16}  {entry.item_name}"
            )

    manager.close()


if __name__ == "__main__":
    main()
