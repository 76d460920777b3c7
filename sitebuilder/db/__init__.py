from sitebuilder.db.models import Base, User, Project, ApiEndpoint
from sitebuilder.db.database import get_engine, get_session_factory

# Import the comprehensive initialization function
from sitebuilder.db.init_db import init_database


def init_db():
    """Initialize the database - create both the database and tables if needed."""
    init_database()
