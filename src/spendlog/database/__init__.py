"""Database layer for spendlog application."""

from spendlog.database.base import Database
from spendlog.database.factories import (
    create_database,
    create_memory_database,
    create_sqlite_database,
)

__all__ = ["Database", "create_database", "create_memory_database", "create_sqlite_database"]
