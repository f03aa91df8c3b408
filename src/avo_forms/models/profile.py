"""User profile data models."""

from dataclasses import dataclass
from datetime import date, datetime

from .measurement import DistanceUnit, HeightUnit, WeightUnit


@dataclass
class ProfileUpdate:
    """Validated profile changes in canonical units (cm, lb)."""

    height_cm: float
    weight_lb: float
    height_unit: HeightUnit = HeightUnit.CM
    weight_unit: WeightUnit = WeightUnit.LB
    distance_unit: DistanceUnit = DistanceUnit.KM
    first_name: str | None = None
    date_of_birth: date | None = None

    def to_payload(self) -> dict:
        """Payload for the profile update call."""
        payload = {
            "height_cm": self.height_cm,
            "weight_lb": self.weight_lb,
            "height_unit": self.height_unit.value,
            "weight_unit": self.weight_unit.value,
            "distance_unit": self.distance_unit.value,
        }
        if self.first_name is not None:
            payload["first_name"] = self.first_name
        if self.date_of_birth is not None:
            payload["date_of_birth"] = self.date_of_birth.isoformat()
        return payload


@dataclass
class Profile:
    """Stored profile row."""

    user_id: str
    height_cm: float | None = None
    weight_lb: float | None = None
    height_unit: HeightUnit = HeightUnit.CM
    weight_unit: WeightUnit = WeightUnit.LB
    distance_unit: DistanceUnit = DistanceUnit.KM
    first_name: str | None = None
    date_of_birth: date | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "height_cm": self.height_cm,
            "weight_lb": self.weight_lb,
            "height_unit": self.height_unit.value,
            "weight_unit": self.weight_unit.value,
            "distance_unit": self.distance_unit.value,
            "first_name": self.first_name,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_row(cls, row) -> "Profile":
        """Build from a backend row. Unknown unit values raise ValueError."""
        try:
            dob = row["date_of_birth"]
            updated_at = row["updated_at"]
            return cls(
                user_id=str(row["user_id"]),
                height_cm=row["height_cm"],
                weight_lb=row["weight_lb"],
                height_unit=HeightUnit(row["height_unit"]),
                weight_unit=WeightUnit(row["weight_unit"]),
                distance_unit=DistanceUnit(row["distance_unit"]),
                first_name=row["first_name"],
                date_of_birth=date.fromisoformat(dob) if dob else None,
                updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
            )
        except (KeyError, IndexError) as e:
            raise ValueError(f"Profile row is missing a column: {e}") from e


def calculate_bmi(height_cm: float | None, weight_lb: float | None) -> float | None:
    """BMI to one decimal from canonical height and weight."""
    if not height_cm or not weight_lb or height_cm <= 0 or weight_lb <= 0:
        return None
    inches = height_cm / 2.54
    bmi = 703 * weight_lb / (inches * inches)
    return round(bmi, 1)


def bmi_classification(bmi: float | None) -> str | None:
    if bmi is None:
        return None
    if bmi < 18.5:
        return "underweight"
    if bmi < 25:
        return "normal"
    if bmi < 30:
        return "overweight"
    return "obese"
