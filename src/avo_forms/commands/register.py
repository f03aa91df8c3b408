"""Account registration command."""

import click

from ..clients.manual import ManualInputClient
from ..forms.registration_form import RegistrationDraft, RegistrationForm
from ..models.measurement import HeightUnit, WeightUnit
from .base import async_command, echo_info, ensure_initialized, get_backend, submit_form


@click.command()
@click.option("--email", default=None, help="Account email")
@click.option("--password", default=None, help="Password (prompted if omitted)")
@click.option("--name", "first_name", default=None, help="Preferred name")
@click.option("--dob", default=None, help="Date of birth (YYYY-MM-DD)")
@click.option("--height", default="", help="Height in cm")
@click.option("--weight", default="", help="Weight")
@click.option("--weight-unit", type=click.Choice(["lb", "kg"]), default="lb")
@click.pass_context
@async_command
async def register(ctx, email, password, first_name, dob, height, weight, weight_unit):
    """Create an account and its profile.

    With no --email, every field is prompted for interactively.
    """
    ensure_initialized(ctx)

    if email is None:
        draft = await ManualInputClient().collect_registration()
    else:
        if password is None:
            password = click.prompt("Password", hide_input=True, confirmation_prompt=True)
        draft = RegistrationDraft(
            email=email,
            password=password,
            confirm_password=password,
            first_name=first_name or "",
            date_of_birth=dob or "",
            height_unit=HeightUnit.CM,
            height_cm=height,
            weight_unit=WeightUnit(weight_unit),
            weight=weight,
        )

    async with get_backend() as backend:
        form = RegistrationForm(backend, draft)
        await submit_form(ctx, form, lambda f: f"Registered (user ID: {f.result})")

    echo_info(f"export AVO_USER_ID={form.result}")
