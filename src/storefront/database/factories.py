"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from storefront.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "STOREFRONT_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".storefront"
DEFAULT_DB_NAME = "storefront.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file to use.

    Order: explicit path, then STOREFRONT_DB_PATH, then
    ~/.storefront/storefront.db. The parent directory is created when missing.
    """
    raw = database_path or os.environ.get(DB_PATH_ENV_VAR)
    path = Path(raw).expanduser() if raw else DEFAULT_DB_DIR / DEFAULT_DB_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file; see ``resolve_database_path``

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")
