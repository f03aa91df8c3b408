"""Backend collaborators."""

from .base import BackendClient
from .local import LocalBackendClient

__all__ = ["BackendClient", "LocalBackendClient"]
