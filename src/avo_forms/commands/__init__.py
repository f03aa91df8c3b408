"""CLI commands for avo-forms."""

from .convert import convert
from .exercise import exercise
from .friends import friends
from .init import init
from .password import password
from .profile import profile
from .register import register
from .serve import serve
from .validate_cmd import validate

__all__ = [
    "convert",
    "exercise",
    "friends",
    "init",
    "password",
    "profile",
    "register",
    "serve",
    "validate",
]
