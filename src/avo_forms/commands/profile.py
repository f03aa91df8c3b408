"""Profile commands."""

import click

from ..clients.manual import ManualInputClient
from ..forms.profile_form import ProfileForm
from ..models.measurement import DistanceUnit, HeightUnit, WeightUnit
from ..models.profile import Profile, bmi_classification, calculate_bmi
from ..validation.errors import BackendError
from ..validation.units import format_measurement, from_canonical
from .base import (
    async_command,
    echo_error,
    ensure_initialized,
    get_backend,
    submit_form,
    user_option,
)


def _display_rows(profile: Profile) -> list[tuple[str, str]]:
    rows = [("Preferred name", profile.first_name or "-")]
    rows.append(("Date of birth", profile.date_of_birth.isoformat() if profile.date_of_birth else "-"))
    if profile.height_cm is not None:
        rows.append(("Height", format_measurement(from_canonical(profile.height_cm, profile.height_unit))))
    if profile.weight_lb is not None:
        rows.append(("Weight", format_measurement(from_canonical(profile.weight_lb, profile.weight_unit))))
    rows.append(("Distance unit", profile.distance_unit.value))
    bmi = calculate_bmi(profile.height_cm, profile.weight_lb)
    if bmi is not None:
        rows.append(("BMI", f"{bmi} ({bmi_classification(bmi)})"))
    return rows


async def _load(ctx, backend, user_id: str) -> Profile:
    try:
        profile = await backend.get_profile(user_id)
    except BackendError as e:
        echo_error(e.message)
        ctx.exit(1)
    if profile is None:
        echo_error(f"No profile for user {user_id}")
        ctx.exit(1)
    return profile


@click.group()
@click.pass_context
def profile(ctx):
    """View and edit your profile."""
    ensure_initialized(ctx)


@profile.command()
@user_option
@click.pass_context
@async_command
async def show(ctx, user_id: str):
    """Show the profile in its preferred units."""
    async with get_backend() as backend:
        current = await _load(ctx, backend, user_id)

    click.echo()
    for label, value in _display_rows(current):
        click.echo(f"  {label + ':':<16}{value}")
    click.echo()


@profile.command()
@user_option
@click.pass_context
@async_command
async def edit(ctx, user_id: str):
    """Edit the profile interactively."""
    async with get_backend() as backend:
        current = await _load(ctx, backend, user_id)
        form = ProfileForm.from_profile(backend, current)
        await ManualInputClient().collect_profile(form.draft)
        await submit_form(ctx, form, "Profile updated")


@profile.command(name="set")
@user_option
@click.option("--name", "first_name", default=None, help="Preferred name")
@click.option("--dob", default=None, help="Date of birth (YYYY-MM-DD)")
@click.option("--height", default=None, help="Height in cm")
@click.option("--feet", default=None, help="Height feet (with --inches)")
@click.option("--inches", default=None, help="Height inches (with --feet)")
@click.option("--weight", default=None, help="Weight in --weight-unit")
@click.option("--weight-unit", type=click.Choice(["lb", "kg"]), default=None)
@click.option("--distance-unit", type=click.Choice(["km", "mi"]), default=None)
@click.pass_context
@async_command
async def set_profile(ctx, user_id, first_name, dob, height, feet, inches, weight, weight_unit, distance_unit):
    """Update individual profile fields.

    Unset options keep their current values. The whole profile is
    validated before anything is saved.

    Examples:

        avo-forms profile set --height 180 --weight 80 --weight-unit kg

        avo-forms profile set --feet 5 --inches 11
    """
    async with get_backend() as backend:
        current = await _load(ctx, backend, user_id)
        form = ProfileForm.from_profile(backend, current)
        draft = form.draft

        if first_name is not None:
            draft.first_name = first_name
        if dob is not None:
            draft.date_of_birth = dob
        if height is not None:
            draft.height_unit, draft.height_cm = HeightUnit.CM, height
        elif feet is not None or inches is not None:
            draft.height_unit = HeightUnit.FT_IN
            draft.height_ft, draft.height_in = feet or "", inches or "0"
        if weight_unit is not None:
            draft.weight_unit = WeightUnit(weight_unit)
            if weight is None:
                draft.show_weight(current.weight_lb)
        if weight is not None:
            draft.weight = weight
        if distance_unit is not None:
            draft.distance_unit = DistanceUnit(distance_unit)

        await submit_form(ctx, form, "Profile updated")
