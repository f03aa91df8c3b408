"""Range validation for measured fields and the profile's text/date fields."""

import math
import re
from datetime import date

from ..constraints import PREFERRED_NAME_MAX_LEN, Field, bounds_for
from .errors import FormatError, LengthError, RangeError, RequiredFieldError

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LETTER = re.compile(r"[^\W\d_]")
_DECIMAL = re.compile(r"^-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")

DAYS_PER_YEAR = 365.25


def parse_number(field: str, value: str | int | float | None, label: str | None = None) -> float:
    """Parse text or a number into a finite float.

    Text must be a plain decimal such as ``"180"``, ``"80.5"`` or ``".5"``.
    Raises RequiredFieldError for empty text and FormatError for anything
    else, including exponents, underscores and non-ASCII digits.
    """
    label = label or field.replace("_", " ").capitalize()
    if value is None:
        raise RequiredFieldError(field, f"{label} is required")
    if isinstance(value, bool):
        raise FormatError(field, f"{label} must be a number")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = value.strip()
        if not text:
            raise RequiredFieldError(field, f"{label} is required")
        if not _DECIMAL.match(text):
            raise FormatError(field, f"{label} must be a number")
        number = float(text)
    if not math.isfinite(number):
        raise FormatError(field, f"{label} must be a number")
    return number


def validate(field: Field | str, value: str | int | float | None) -> float | int:
    """Validate a value against its field's inclusive bounds.

    Returns the parsed value (an int for integral fields). Raises
    RequiredFieldError, FormatError or RangeError.
    """
    field = Field(field)
    bounds = bounds_for(field)
    number = parse_number(field.value, value, bounds.label)

    if bounds.integral:
        if not number.is_integer():
            raise FormatError(field.value, f"{bounds.label} must be a whole number")
        number = int(number)

    if not bounds.contains(number):
        raise RangeError(
            field.value,
            f"{bounds.label} must be between {bounds.describe()}",
            bounds.min,
            bounds.max,
        )
    return number


def clamp(field: Field | str, value: float) -> float:
    """Cap a value at its field's max while the user is still typing.

    Values below the min are left alone; submission-time validation rejects
    them.
    """
    bounds = bounds_for(field)
    if value > bounds.max:
        return int(bounds.max) if bounds.integral else bounds.max
    return value


def age_from_dob(dob: date, today: date | None = None) -> int:
    """Whole years between ``dob`` and ``today`` using 365.25-day years."""
    if today is None:
        today = date.today()
    return math.floor((today - dob).days / DAYS_PER_YEAR)


def validate_date_of_birth(text: str, today: date | None = None) -> date:
    """Validate a YYYY-MM-DD date of birth and the age it implies."""
    if today is None:
        today = date.today()
    text = (text or "").strip()
    if not text:
        raise RequiredFieldError("date_of_birth", "Date of birth is required")
    if not _DATE_PATTERN.match(text):
        raise FormatError("date_of_birth", "Date of birth must be in YYYY-MM-DD format")
    try:
        dob = date.fromisoformat(text)
    except ValueError:
        raise FormatError("date_of_birth", "Date of birth must be a real calendar date") from None

    bounds = bounds_for(Field.AGE)
    if dob > today:
        raise RangeError(
            "date_of_birth", "Date of birth cannot be in the future", bounds.min, bounds.max
        )
    age = age_from_dob(dob, today)
    if age < bounds.min:
        raise RangeError(
            "date_of_birth",
            f"You must be at least {int(bounds.min)} years old",
            bounds.min,
            bounds.max,
        )
    if age > bounds.max:
        raise RangeError(
            "date_of_birth",
            f"Date of birth cannot be more than {int(bounds.max)} years ago",
            bounds.min,
            bounds.max,
        )
    return dob


def validate_text_length(field: str, text: str | None, max_length: int, required: bool = False) -> str | None:
    """Trim text and enforce its length limit. Empty optional text becomes None."""
    value = (text or "").strip()
    if not value:
        if required:
            raise RequiredFieldError(field, f"{field.replace('_', ' ').capitalize()} is required")
        return None
    if len(value) > max_length:
        raise LengthError(
            field,
            f"{field.replace('_', ' ').capitalize()} must be {max_length} characters or less",
            max_length,
        )
    return value


def validate_preferred_name(text: str | None) -> str:
    """Preferred name: required, at most 40 characters, at least 2 letters."""
    value = validate_text_length("preferred_name", text, PREFERRED_NAME_MAX_LEN, required=True)
    if len(_LETTER.findall(value)) < 2:
        raise FormatError("preferred_name", "Name must contain at least 2 letters")
    return value


def validate_email(text: str | None) -> str:
    """Check email shape and return it trimmed and lowercased."""
    value = (text or "").strip()
    if not value:
        raise RequiredFieldError("email", "Email is required")
    if not _EMAIL_PATTERN.match(value):
        raise FormatError("email", "Please enter a valid email address")
    return value.lower()
