"""Create all tables for a fresh local database."""

import logging

from porchlight.core.logging import configure_logging
from porchlight.core.settings import settings
from porchlight.db.session import create_tables

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    configure_logging(settings.log_level)
    init_db()
    logger.info("Database initialized.")
