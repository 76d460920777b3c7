from functools import lru_cache
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from sitebuilder.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_engine(database_url: str = None) -> Engine:
    """Create (once per URL) the SQLAlchemy engine for the configured database."""
    url = database_url or settings.DATABASE_URL
    if not url:
        raise ValueError("DATABASE_URL must be set to use database storage")
    logger.info("Creating database engine for %s...", url.split("@")[-1][:40])
    return create_engine(url, pool_pre_ping=True)


def get_session_factory(engine: Engine = None) -> sessionmaker:
    """Session factory bound to ``engine`` (defaults to the configured one)."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine or get_engine())
