"""
Startup database check: create the tables when they are missing.
"""
from sqlalchemy import inspect

from partsdesk.db.init_db import init_db
from partsdesk.db.session import get_engine
from partsdesk.logger import get_logger

logger = get_logger(__name__)

REQUIRED_TABLES = {"spare_parts", "bills", "bill_items"}


def check_tables_exist() -> bool:
    """True when every required table is present"""
    inspector = inspect(get_engine())
    return REQUIRED_TABLES.issubset(inspector.get_table_names())


def auto_init():
    logger.info("Checking database initialization...")

    if check_tables_exist():
        logger.info("Database tables already exist")
        return

    logger.info("Database tables missing, creating...")
    init_db()
    logger.info("Database tables created")


if __name__ == "__main__":
    auto_init()
