#!/usr/bin/env python3
"""
Initialize the Listly database
Creates the schema and seeds the default categories
"""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import get_settings
from app.log_config import configure_logging
from domain.models import Database
from repositories import CategoryRepository
from services.category_seed import seed_default_categories


def main() -> int:
    """Create tables and seed categories; returns a process exit code"""
    settings = get_settings()
    logger = configure_logging(settings).getChild("init_db")
    logger.info("=" * 60)
    logger.info("%s Database Initialization", settings.app_name)
    logger.info("=" * 60)

    database = Database.from_settings(settings)
    try:
        database.init_schema()
        created = seed_default_categories(CategoryRepository(database))
        logger.info("Seeded %d default categories", len(created))
    except Exception:
        logger.exception("Database initialization failed")
        return 1
    finally:
        database.close()

    logger.info("Database ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
