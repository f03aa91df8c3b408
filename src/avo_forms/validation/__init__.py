"""Input filters, unit conversion, range and password validation."""

from .errors import (
    BackendError,
    ConfirmationMismatchError,
    FormatError,
    LengthError,
    PasswordPolicyError,
    RangeError,
    RequiredFieldError,
    ValidationError,
)
from .fields import FIELD_VALIDATORS, validate_field
from .input_filters import (
    filter_bounded_integer,
    filter_integer_input,
    filter_numeric_input,
    normalize_spaces,
)
from .password import PasswordCheck, PasswordRule, require_valid_password, validate_password
from .ranges import age_from_dob, clamp, validate, validate_date_of_birth, validate_email
from .units import (
    cm_to_ft_in,
    convert,
    format_measurement,
    from_canonical,
    ft_in_to_cm,
    kg_to_lb,
    km_to_miles,
    lb_to_kg,
    miles_to_km,
    to_canonical,
)

__all__ = [
    "age_from_dob",
    "BackendError",
    "clamp",
    "cm_to_ft_in",
    "ConfirmationMismatchError",
    "convert",
    "FIELD_VALIDATORS",
    "filter_bounded_integer",
    "filter_integer_input",
    "filter_numeric_input",
    "format_measurement",
    "FormatError",
    "from_canonical",
    "ft_in_to_cm",
    "kg_to_lb",
    "km_to_miles",
    "lb_to_kg",
    "LengthError",
    "miles_to_km",
    "normalize_spaces",
    "PasswordCheck",
    "PasswordPolicyError",
    "PasswordRule",
    "RangeError",
    "require_valid_password",
    "RequiredFieldError",
    "to_canonical",
    "validate",
    "validate_date_of_birth",
    "validate_email",
    "validate_field",
    "validate_password",
    "ValidationError",
]
