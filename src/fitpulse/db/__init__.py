"""Database configuration and utilities."""

from .session import Base, Database, get_database, get_db, open_database

__all__ = ["Base", "Database", "get_database", "get_db", "open_database"]
