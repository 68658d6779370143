"""HTTP client for the remote store."""

from .client import APIClient

__all__ = ["APIClient"]
