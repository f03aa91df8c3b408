"""Request bodies for the JSON API.

Numeric fields accept either numbers or the raw text a user typed; both
go through the same form validation as the CLI.
"""

from pydantic import BaseModel, Field

from ..models.exercise_log import ExerciseCategory, Intensity
from ..models.measurement import DistanceUnit, HeightUnit, WeightUnit

Text = str | int | float | None


def as_text(value: Text) -> str:
    return "" if value is None else str(value)


class ValueRequest(BaseModel):
    value: Text = None


class ConvertRequest(BaseModel):
    magnitude: float
    unit: str
    to: str


class PasswordCheckRequest(BaseModel):
    password: str
    email: str | None = None


class BodyFields(BaseModel):
    height_unit: HeightUnit = HeightUnit.CM
    height_cm: Text = None
    height_ft: Text = None
    height_in: Text = None
    weight_unit: WeightUnit = WeightUnit.LB
    weight: Text = None
    distance_unit: DistanceUnit = DistanceUnit.KM
    first_name: str = ""
    date_of_birth: str = ""

    def draft_kwargs(self) -> dict:
        return {
            "height_unit": self.height_unit,
            "height_cm": as_text(self.height_cm),
            "height_ft": as_text(self.height_ft),
            "height_in": as_text(self.height_in),
            "weight_unit": self.weight_unit,
            "weight": as_text(self.weight),
            "distance_unit": self.distance_unit,
            "first_name": self.first_name,
            "date_of_birth": self.date_of_birth,
        }


class ProfileRequest(BodyFields):
    pass


class RegisterRequest(BodyFields):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    confirm_password: str = Field(..., max_length=128)


class ExerciseRequest(BaseModel):
    date: str | None = None
    log_id: int | None = None
    name: str = ""
    category: ExerciseCategory = ExerciseCategory.CARDIO_MIND_BODY
    minutes: Text = None
    distance: Text = None
    distance_unit: DistanceUnit = DistanceUnit.KM
    sets: Text = None
    reps_min: Text = None
    reps_max: Text = None
    intensity: Intensity | None = None
    notes: str | None = None


class StepsRequest(BaseModel):
    date: str | None = None
    steps: Text = None


class FriendRequestRequest(BaseModel):
    target: str = Field(..., max_length=254)
