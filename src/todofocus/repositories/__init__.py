"""Persistence interfaces for todofocus.

This package contains the abstract base class that defines the storage
contract. This is the "Port" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- todofocus.adapters.sqlite (local storage)
- todofocus.adapters.rest_api (remote PostgREST store)
"""

from .repository import PersistenceGateway

__all__ = [
    "PersistenceGateway",
]
