import psycopg2
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT
from sitebuilder.config import get_db_components


def reset_database():
    """Drop and recreate the site builder database."""
    db_components = get_db_components()
    db_name = db_components["db_name"]
    # psycopg2 takes the plain libpq URL, without a SQLAlchemy driver suffix
    server_url = db_components["db_url_without_name"]

    print(f"Connecting to PostgreSQL to drop database '{db_name}'...")
    conn = psycopg2.connect(server_url)
    conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
    cursor = conn.cursor()

    print("Closing all connections to the database...")
    cursor.execute("""
        SELECT pg_terminate_backend(pg_stat_activity.pid)
        FROM pg_stat_activity
        WHERE pg_stat_activity.datname = %s
        AND pid <> pg_backend_pid();
    """, (db_name,))

    # Database names cannot be parameterized; get_db_components() restricts them
    print(f"Dropping database '{db_name}'...")
    cursor.execute(f'DROP DATABASE IF EXISTS "{db_name}"')
    print(f"Creating database '{db_name}'...")
    cursor.execute(f'CREATE DATABASE "{db_name}"')

    cursor.close()
    conn.close()

    print(f"Database '{db_name}' has been reset.")
    print("Run 'python run.py' with STORAGE_TYPE=database to create the users, projects and api_endpoints tables.")


if __name__ == "__main__":
    confirm = input("This will DELETE ALL PROJECTS AND USERS in the database. Are you sure? (y/n): ")
    if confirm.lower() == 'y':
        reset_database()
    else:
        print("Operation cancelled.")
