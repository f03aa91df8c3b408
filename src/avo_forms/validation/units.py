"""Unit conversion between display units and canonical storage units.

Height is stored in cm, weight in lb and distance in km, whatever unit the
user views or enters. Values going to storage are rounded to 4 decimals and
values coming back for display to 2 decimals, so repeated unit toggles do not
compound rounding error.
"""

import math

from ..models.measurement import (
    DistanceUnit,
    HeightUnit,
    MeasurementValue,
    Unit,
    WeightUnit,
)

CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12
LB_PER_KG = 2.20462
KM_PER_MILE = 1.60934

STORAGE_PLACES = 4
DISPLAY_PLACES = 2


def round_half_up(value: float, places: int) -> float:
    """Round to ``places`` decimals with halves going up (not banker's rounding)."""
    factor = 10**places
    return math.floor(value * factor + 0.5) / factor


def ft_in_to_cm(feet: float, inches: float) -> float:
    return (feet * INCHES_PER_FOOT + inches) * CM_PER_INCH


def cm_to_ft_in(cm: float) -> tuple[int, int] | None:
    """Split a height into whole feet and rounded remainder inches.

    Returns None for non-positive or non-finite heights.
    """
    if not math.isfinite(cm) or cm <= 0:
        return None
    total_inches = cm / CM_PER_INCH
    feet = math.floor(total_inches / INCHES_PER_FOOT)
    inches = math.floor(total_inches - feet * INCHES_PER_FOOT + 0.5)
    if inches == INCHES_PER_FOOT:
        feet += 1
        inches = 0
    return feet, inches


def cm_to_inches(cm: float) -> float:
    return cm / CM_PER_INCH


def inches_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def kg_to_lb(kg: float) -> float:
    return kg * LB_PER_KG


def lb_to_kg(lb: float) -> float:
    return lb * (1 / LB_PER_KG)


def miles_to_km(miles: float) -> float:
    return miles * KM_PER_MILE


def km_to_miles(km: float) -> float:
    return km / KM_PER_MILE


def _raw_to_canonical(magnitude: float, unit: Unit) -> float:
    if unit is HeightUnit.FT_IN:
        return inches_to_cm(magnitude)
    if unit is WeightUnit.KG:
        return kg_to_lb(magnitude)
    if unit is DistanceUnit.MI:
        return miles_to_km(magnitude)
    return magnitude


def _raw_from_canonical(magnitude: float, unit: Unit) -> float:
    if unit is HeightUnit.FT_IN:
        return cm_to_inches(magnitude)
    if unit is WeightUnit.KG:
        return lb_to_kg(magnitude)
    if unit is DistanceUnit.MI:
        return km_to_miles(magnitude)
    return magnitude


def to_canonical(value: MeasurementValue) -> float:
    """Convert a display value to its canonical storage magnitude (4 dp)."""
    return round_half_up(_raw_to_canonical(value.magnitude, value.unit), STORAGE_PLACES)


def from_canonical(magnitude: float, unit: Unit) -> MeasurementValue:
    """Convert a stored canonical magnitude to ``unit`` for display (2 dp)."""
    display = round_half_up(_raw_from_canonical(magnitude, unit), DISPLAY_PLACES)
    return MeasurementValue(magnitude=display, unit=unit)


def convert(value: MeasurementValue, unit: Unit) -> MeasurementValue:
    """Convert between two display units of the same dimension via storage."""
    if type(value.unit) is not type(unit):
        raise ValueError(f"Cannot convert {value.unit.value} to {unit.value}")
    return from_canonical(to_canonical(value), unit)


def distance_for_storage(magnitude: float, unit: DistanceUnit) -> float:
    """Distance as entered, converted to km at storage precision."""
    return to_canonical(MeasurementValue(magnitude, unit))


def distance_for_display(distance_km: float, unit: DistanceUnit) -> float:
    """Stored km distance in the user's display unit at display precision."""
    return from_canonical(distance_km, unit).magnitude


def format_measurement(value: MeasurementValue) -> str:
    """Human-readable value, with ft/in heights split as ``5' 11"``."""
    if value.unit is HeightUnit.FT_IN:
        split = cm_to_ft_in(inches_to_cm(value.magnitude))
        if split is None:
            return "0' 0\""
        return f"{split[0]}' {split[1]}\""
    return f"{value.magnitude:g} {value.unit.value}"
