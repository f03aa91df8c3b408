"""Named single-field validators for the CLI and the web API."""

from functools import partial
from typing import Any, Callable

from ..constraints import EXERCISE_NAME_MAX_LEN, NOTES_MAX_LEN, Field
from .ranges import (
    validate,
    validate_date_of_birth,
    validate_email,
    validate_preferred_name,
    validate_text_length,
)

FIELD_VALIDATORS: dict[str, Callable[[str], Any]] = {
    **{field.value: partial(validate, field) for field in Field if field is not Field.AGE},
    "date_of_birth": validate_date_of_birth,
    "email": validate_email,
    "preferred_name": validate_preferred_name,
    "exercise_name": partial(validate_text_length, "name", max_length=EXERCISE_NAME_MAX_LEN, required=True),
    "notes": partial(validate_text_length, "notes", max_length=NOTES_MAX_LEN),
}


def validate_field(name: str, value: str) -> Any:
    """Run the validator registered under ``name``.

    Raises KeyError for an unknown field name and ValidationError when the
    value is rejected. Returns the parsed value.
    """
    return FIELD_VALIDATORS[name](value)
