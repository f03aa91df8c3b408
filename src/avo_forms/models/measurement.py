"""Measurement value records and unit enums."""

import math
from dataclasses import dataclass
from enum import Enum


class HeightUnit(str, Enum):
    """Display units for height. Canonical storage is cm."""

    CM = "cm"
    FT_IN = "ft_in"  # magnitude is total inches


class WeightUnit(str, Enum):
    """Display units for weight. Canonical storage is lb."""

    LB = "lb"
    KG = "kg"


class DistanceUnit(str, Enum):
    """Display units for distance. Canonical storage is km."""

    KM = "km"
    MI = "mi"


Unit = HeightUnit | WeightUnit | DistanceUnit

CANONICAL_UNITS: dict[type, Enum] = {
    HeightUnit: HeightUnit.CM,
    WeightUnit: WeightUnit.LB,
    DistanceUnit: DistanceUnit.KM,
}


def parse_unit(value: str) -> Unit:
    """Resolve a unit string from any of the closed unit sets."""
    aliases = {"ft/in": "ft_in", "lbs": "lb"}
    value = aliases.get(value, value)
    for enum_cls in (HeightUnit, WeightUnit, DistanceUnit):
        try:
            return enum_cls(value)
        except ValueError:
            continue
    raise ValueError(f"Unknown unit: {value!r}")


@dataclass(frozen=True)
class MeasurementValue:
    """A magnitude in one display unit."""

    magnitude: float
    unit: Unit

    def __post_init__(self):
        if not math.isfinite(self.magnitude):
            raise ValueError("Measurement magnitude must be finite")

    @classmethod
    def from_feet_inches(cls, feet: float, inches: float) -> "MeasurementValue":
        return cls(magnitude=feet * 12 + inches, unit=HeightUnit.FT_IN)

    @property
    def is_canonical(self) -> bool:
        return CANONICAL_UNITS[type(self.unit)] is self.unit

    def to_dict(self) -> dict:
        return {"magnitude": self.magnitude, "unit": self.unit.value}

    @classmethod
    def from_dict(cls, data: dict) -> "MeasurementValue":
        return cls(magnitude=float(data["magnitude"]), unit=parse_unit(data["unit"]))
