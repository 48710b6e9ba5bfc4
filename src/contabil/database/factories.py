"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from contabil.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks CONTABIL_DB_PATH
            environment variable, then defaults to ~/.contabil/contabil.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("CONTABIL_DB_PATH")

    if database_path is None:
        # Default to ~/.contabil/contabil.db
        home = Path.home()
        db_dir = home / ".contabil"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "contabil.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)


def create_database(
    database_url: Optional[str] = None, database_path: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a database from a URL, falling back to SQLite.

    Args:
        database_url: Full SQLAlchemy URL (e.g. 'postgresql+psycopg2://...').
            If None, checks CONTABIL_DATABASE_URL.
        database_path: SQLite file path used when no URL is configured

    Returns:
        SQLAlchemyDatabase instance
    """
    if database_url is None:
        database_url = os.environ.get("CONTABIL_DATABASE_URL")

    if database_url:
        return SQLAlchemyDatabase(database_url)

    return create_sqlite_database(database_path=database_path)
