"""Database factory functions for creating database instances."""

import os
from typing import Optional

from spendlog.config import STORE_MEMORY, Settings, default_database_path
from spendlog.database.base import Database
from spendlog.database.memory import InMemoryDatabase
from spendlog.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SPENDLOG_DB_PATH
            environment variable, then defaults to ~/.spendlog/spendlog.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("SPENDLOG_DB_PATH")

    if database_path is None:
        database_path = default_database_path()

    db = SQLAlchemyDatabase(f"sqlite:///{database_path}")
    db.database_path = database_path
    return db


def create_memory_database() -> InMemoryDatabase:
    """Create an empty in-memory database."""
    return InMemoryDatabase()


def create_database(settings: Settings) -> Database:
    """Create the store selected by settings."""
    if settings.store == STORE_MEMORY:
        return create_memory_database()
    return create_sqlite_database(settings.database_path)
