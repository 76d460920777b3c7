import logging

import uvicorn
from sitebuilder.config import settings

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    if settings.use_database:
        # Create the database and tables before the first request
        from sitebuilder.db import init_db
        init_db()

    # Start the API server
    logger.info("Starting API server on %s:%s...", settings.API_HOST, settings.API_PORT)
    uvicorn.run(
        "sitebuilder.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD
    )
