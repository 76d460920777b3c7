import logging
from functools import lru_cache

from sitebuilder.config import settings
from sitebuilder.storage.interface import ProjectStorage
from sitebuilder.storage.memory import MemoryStorage
from sitebuilder.storage.database import DatabaseStorage

logger = logging.getLogger(__name__)


def create_storage() -> ProjectStorage:
    """
    Factory function to create the appropriate storage implementation
    based on environment variables.

    Returns:
        A storage implementation (Database or in-memory)
    """
    if settings.use_database:
        from sitebuilder.db.database import get_session_factory

        if not settings.DATABASE_URL:
            raise ValueError("DATABASE_URL must be set when using database storage")

        logger.info("Using database storage")
        return DatabaseStorage(get_session_factory())

    logger.info(
        "Using in-memory storage (DATABASE_URL %s, ENVIRONMENT=%s); data resets on restart",
        "present" if settings.DATABASE_URL else "not set",
        settings.ENVIRONMENT,
    )
    return MemoryStorage()


@lru_cache(maxsize=1)
def get_storage() -> ProjectStorage:
    """Process-wide storage chosen once at startup."""
    return create_storage()
