"""Adapters module - PersistenceGateway implementations for different backends.

This package contains concrete implementations (adapters) of the
persistence port:
- sqlite: Local SQLite database storage
- rest_api: Remote PostgREST store
"""

from .rest_api import RestApiGateway
from .sqlite import SqliteGateway

__all__ = [
    "SqliteGateway",
    "RestApiGateway",
]
