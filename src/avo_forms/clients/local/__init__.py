"""Local SQLite backend client."""

from .client import LocalBackendClient

__all__ = ["LocalBackendClient"]
