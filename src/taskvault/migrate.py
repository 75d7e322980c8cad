"""
Database migration script for TaskVault
Creates the user and task tables if they are missing.
Run with: taskvault-migrate  (or python -m taskvault.migrate)
"""
import sys
from typing import List

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from .config import get_settings
from .database.database import build_engine, create_db_and_tables
from .utils.errors import ConfigurationError

REQUIRED_TABLES = ["user", "task"]


def existing_tables(engine: Engine) -> List[str]:
    return sorted(inspect(engine).get_table_names())


def migrate(engine: Engine) -> List[str]:
    """
    Create any missing tables.

    Returns:
        Names of the tables that were created
    """
    before = existing_tables(engine)
    print(f"Existing tables: {before}")

    for table in REQUIRED_TABLES:
        if table in before:
            print(f"  - {table} table already exists, skipping")

    create_db_and_tables(engine)

    after = existing_tables(engine)
    created = [table for table in after if table not in before]
    for table in created:
        print(f"  [OK] Created {table} table")
    print(f"Final tables: {after}")
    return created


def main() -> int:
    try:
        database_url = get_settings().database_url
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        return 1

    print("Connecting to database...")
    engine = build_engine(database_url)
    try:
        migrate(engine)
    except Exception as e:
        print(f"ERROR: {e}")
        return 1
    finally:
        engine.dispose()

    print("Migration completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
