"""Single-field validation command."""

import click

from ..validation.errors import ValidationError
from ..validation.fields import FIELD_VALIDATORS, validate_field
from .base import echo_error, echo_success


@click.command(name="validate")
@click.argument("field", type=click.Choice(sorted(FIELD_VALIDATORS)))
@click.argument("value")
@click.pass_context
def validate(ctx, field: str, value: str):
    """Validate VALUE as FIELD, exiting 1 if it is rejected.

    Examples:

        avo-forms validate height_cm 49.9

        avo-forms validate date_of_birth 2001-02-29
    """
    try:
        parsed = validate_field(field, value)
    except ValidationError as e:
        echo_error(e.message)
        ctx.exit(1)

    echo_success(f"{field}: {parsed}")
