"""Database connection management for the local SQLite store.

Connections are configured with WAL mode and foreign key enforcement, and
the schema is created on first open.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from todofocus.adapters.sqlite import schema

MEMORY_DB = ":memory:"


def default_db_path() -> Path:
    """Return the default database location in the user data dir."""
    return Path(user_data_dir("todofocus")) / "todofocus.db"


def initialize_schema(connection: sqlite3.Connection) -> None:
    """Create tables and indexes if they are missing.

    Args:
        connection: Database connection
    """
    version = connection.execute("PRAGMA user_version").fetchone()[0]
    if version >= schema.SCHEMA_VERSION:
        return

    for statement in schema.ALL_TABLES:
        connection.execute(statement)
    for statement in schema.CREATE_INDEXES:
        connection.execute(statement)
    connection.execute(f"PRAGMA user_version = {schema.SCHEMA_VERSION}")
    connection.commit()


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Open a configured connection to the local store.

    Args:
        db_path: Path to database file, ``":memory:"`` for a throwaway
            database. If None, uses the default location.

    Returns:
        sqlite3.Connection with dict-like rows and the schema in place
    """
    if db_path is None:
        db_path = default_db_path()

    if str(db_path) == MEMORY_DB:
        connection = sqlite3.connect(MEMORY_DB, check_same_thread=False)
    else:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

        connection = sqlite3.connect(
            str(db_path),
            check_same_thread=False,
            timeout=30.0,  # Wait up to 30s for locks
        )
        connection.execute("PRAGMA journal_mode = WAL")

        # Owner read/write only
        if is_new_database:
            os.chmod(db_path, 0o600)

    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    initialize_schema(connection)
    return connection
