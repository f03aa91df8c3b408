"""Submit-gated forms over the backend client."""

from .base import CancellationToken, Form, FormState, KeyedCooldown
from .exercise_form import (
    REPS_PRESETS,
    ExerciseDraft,
    ExerciseForm,
    QuickAdd,
    RepsRangeForm,
    StepsForm,
    validate_reps_range,
)
from .profile_form import BodyDraft, ProfileDraft, ProfileForm
from .registration_form import Registration, RegistrationDraft, RegistrationForm

__all__ = [
    "BodyDraft",
    "CancellationToken",
    "ExerciseDraft",
    "ExerciseForm",
    "Form",
    "FormState",
    "KeyedCooldown",
    "ProfileDraft",
    "ProfileForm",
    "QuickAdd",
    "Registration",
    "RegistrationDraft",
    "RegistrationForm",
    "REPS_PRESETS",
    "RepsRangeForm",
    "StepsForm",
    "validate_reps_range",
]
