"""Inclusive bounds and text limits shared by validators, forms and the schema."""

from dataclasses import dataclass
from enum import Enum


class Field(str, Enum):
    """Measured fields that carry a numeric range."""

    HEIGHT_CM = "height_cm"
    WEIGHT_LB = "weight_lb"
    EXERCISE_MINUTES = "exercise_minutes"
    EXERCISE_SETS = "exercise_sets"
    EXERCISE_REPS = "exercise_reps"
    EXERCISE_DISTANCE_KM = "exercise_distance_km"
    STEPS = "steps"
    AGE = "age"


@dataclass(frozen=True)
class FieldBounds:
    """Inclusive numeric bounds for one field."""

    min: float
    max: float
    label: str
    unit: str = ""
    integral: bool = False

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def describe(self) -> str:
        suffix = f" {self.unit}" if self.unit else ""
        return f"{_fmt(self.min)} and {_fmt(self.max)}{suffix}"


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


FIELD_BOUNDS: dict[Field, FieldBounds] = {
    Field.HEIGHT_CM: FieldBounds(50, 304.8, "Height", "cm"),  # 1'8" to 10'0"
    Field.WEIGHT_LB: FieldBounds(45, 1200, "Weight", "lb"),
    Field.EXERCISE_MINUTES: FieldBounds(0, 999, "Minutes", integral=True),
    Field.EXERCISE_SETS: FieldBounds(0, 999, "Sets", integral=True),
    Field.EXERCISE_REPS: FieldBounds(1, 100, "Reps", integral=True),
    Field.EXERCISE_DISTANCE_KM: FieldBounds(0, 999, "Distance", "km"),
    Field.STEPS: FieldBounds(0, 150000, "Steps", integral=True),
    Field.AGE: FieldBounds(13, 150, "Age", "years", integral=True),
}


def bounds_for(field: Field | str) -> FieldBounds:
    """Look up the bounds for a field (accepts the enum or its value)."""
    return FIELD_BOUNDS[Field(field)]


# Text limits
EXERCISE_NAME_MAX_LEN = 30
NOTES_MAX_LEN = 200
PREFERRED_NAME_MAX_LEN = 40

# Seconds a quick-add chip stays disabled after a tap
QUICK_ADD_COOLDOWN_SECONDS = 3.0
