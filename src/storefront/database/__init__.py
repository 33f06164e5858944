"""Database layer for storefront application."""

from storefront.database.base import Database
from storefront.database.factories import DB_PATH_ENV_VAR, create_sqlite_database, resolve_database_path

__all__ = ["Database", "DB_PATH_ENV_VAR", "create_sqlite_database", "resolve_database_path"]
