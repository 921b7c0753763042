"""Database layer for checkbook application."""

from checkbook.database.base import Database
from checkbook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
