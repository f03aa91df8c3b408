"""Database layer for avo-forms."""

from .engine import get_db_path, init_db
from .repositories import (
    AccountRepository,
    ExerciseLogRepository,
    FriendRequestRepository,
    ProfileRepository,
    StepsRepository,
)

__all__ = [
    "AccountRepository",
    "ExerciseLogRepository",
    "FriendRequestRepository",
    "get_db_path",
    "init_db",
    "ProfileRepository",
    "StepsRepository",
]
