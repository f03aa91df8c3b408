"""Unit conversion command."""

import click

from ..models.measurement import MeasurementValue, parse_unit
from ..validation.units import convert as convert_value
from ..validation.units import format_measurement
from .base import echo_error

UNIT_CHOICES = ["cm", "ft_in", "lb", "kg", "km", "mi"]


@click.command()
@click.argument("value", type=float)
@click.argument("from_unit", type=click.Choice(UNIT_CHOICES))
@click.argument("to_unit", type=click.Choice(UNIT_CHOICES))
@click.pass_context
def convert(ctx, value: float, from_unit: str, to_unit: str):
    """Convert a height, weight or distance between units.

    ft_in values are given in total inches.

    Examples:

        avo-forms convert 182.88 cm ft_in

        avo-forms convert 5 mi km
    """
    try:
        result = convert_value(MeasurementValue(value, parse_unit(from_unit)), parse_unit(to_unit))
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    click.echo(format_measurement(result))
