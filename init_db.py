"""
Database initialization utility.

Run this script to create all database tables.
"""

from app.db import engine
from app.logging_config import configure_logging
from app.services.schema_service import init_schema, list_tables


def init_database():
    """Create all database tables."""
    configure_logging()
    print("Creating database tables...")
    if not init_schema(engine):
        print("✗ Database tables could not all be created (see log)")
        return False
    print("✓ Database tables created successfully!")
    print("\nTables present:")
    for name in list_tables(engine):
        print(f"  - {name}")
    return True


if __name__ == "__main__":
    init_database()
