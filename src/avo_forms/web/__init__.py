"""JSON API for avo-forms."""

from .app import create_app

__all__ = ["create_app"]
