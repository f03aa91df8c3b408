"""Interactive input client."""

from .client import ManualInputClient

__all__ = ["ManualInputClient"]
