"""SQLite adapter module - Local database storage implementation."""

from todofocus.adapters.sqlite.connection import default_db_path, get_connection
from todofocus.adapters.sqlite.gateway import SqliteGateway

__all__ = [
    "SqliteGateway",
    "get_connection",
    "default_db_path",
]
