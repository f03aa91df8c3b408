"""Data models for avo-forms."""

from .exercise_log import ExerciseCategory, ExerciseLog, ExerciseLogDraft, Intensity
from .friends import FriendRequestDisplay, mask_email
from .measurement import DistanceUnit, HeightUnit, MeasurementValue, WeightUnit
from .profile import Profile, ProfileUpdate

__all__ = [
    "DistanceUnit",
    "ExerciseCategory",
    "ExerciseLog",
    "ExerciseLogDraft",
    "FriendRequestDisplay",
    "HeightUnit",
    "Intensity",
    "mask_email",
    "MeasurementValue",
    "Profile",
    "ProfileUpdate",
    "WeightUnit",
]
