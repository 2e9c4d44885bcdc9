# partsdesk/db/session.py
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
import os

from partsdesk.logger import get_logger

logger = get_logger(__name__)

_engine = None
_SessionLocal = None


def init_engine(db_url: Optional[str] = None):
    """
    (Re)create the engine. Falls back to the DATABASE_URL environment variable;
    a missing URL is fatal.
    """
    global _engine
    db_url = db_url or os.environ.get("DATABASE_URL")
    if not db_url:
        raise RuntimeError("DATABASE_URL not set")

    dispose_engine()

    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    _engine = create_engine(db_url, connect_args=connect_args)
    logger.info("Using database: %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_engine():
    if _engine is None:
        init_engine()
    return _engine


def get_session():
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=get_engine()
        )
    return _SessionLocal()


def dispose_engine():
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
