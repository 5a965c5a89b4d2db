#!/usr/bin/env python3
"""
Database Initialization Script

Creates the restaurant_settings table and seeds the default restaurant's
settings record. With --reset, drops the table first.
WARNING: --reset deletes all stored settings!
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.core.config import settings  # noqa: E402
from src.core.logger import get_logger  # noqa: E402
from src.models import Base  # noqa: E402
from src.services.settings_service import SettingsService  # noqa: E402
from src.stores.database import create_tables, get_engine, test_connection  # noqa: E402
from src.stores.settings_store import DatabaseSettingsStore  # noqa: E402

logger = get_logger(__name__)


def drop_tables() -> None:
    """Drop every table registered on Base."""
    logger.info("Dropping database tables...")
    Base.metadata.drop_all(bind=get_engine())
    logger.info("Database tables dropped")


def seed_restaurant(restaurant_id: str) -> None:
    """Store the default settings record unless the restaurant already has one."""
    store = DatabaseSettingsStore()
    if store.get(restaurant_id) is not None:
        logger.info("Settings for '%s' already present; not seeding", restaurant_id)
        return
    SettingsService(restaurant_id=restaurant_id, store=store).get_settings()
    logger.info("Seeded default settings for '%s'", restaurant_id)


def main() -> None:
    """Main function to initialize the database."""
    parser = argparse.ArgumentParser(description="Initialize the settings database")
    parser.add_argument(
        "--restaurant-id",
        default=settings.restaurant__default_id,
        help="Restaurant to seed (default: %(default)s)",
    )
    parser.add_argument(
        "--reset", action="store_true", help="Drop tables before creating them"
    )
    args = parser.parse_args()

    try:
        logger.info("Starting database initialization...")
        connection_status = test_connection()
        logger.info("Database connection test passed: %s", connection_status["engine_url"])

        if args.reset:
            drop_tables()
        create_tables()
        seed_restaurant(args.restaurant_id)

        logger.info("Database initialization completed successfully")

    except Exception as e:
        logger.error("Database initialization failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
