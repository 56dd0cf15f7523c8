#!/usr/bin/env python3
"""
Create the users and cached_feeds tables if they don't exist (no migrations).

Usage: cd backend && poetry run python scripts/init_db.py
"""
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.config import settings
from app.core.logging import configure_logging
from app.db.session import engine, init_db
from app.db.tables import ALL_TABLE_NAMES

logger = logging.getLogger("init_db")


def main() -> int:
    configure_logging(settings)
    init_db(engine)
    logger.info("Tables ready: %s", ", ".join(ALL_TABLE_NAMES))
    return 0


if __name__ == "__main__":
    sys.exit(main())
