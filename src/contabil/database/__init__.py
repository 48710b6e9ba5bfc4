"""Database layer for the contabil ledger."""

from contabil.database.base import Database
from contabil.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
