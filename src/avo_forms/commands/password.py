"""Password policy commands."""

import click

from ..validation.password import validate_password
from .base import echo_checklist, echo_error, echo_success


@click.group()
def password():
    """Check passwords against the registration policy."""


@password.command()
@click.option("--email", default=None, help="Account email; the password may not contain its name part")
@click.password_option("--password", confirmation_prompt=False, help="Password to check (prompted if omitted)")
@click.pass_context
def check(ctx, email: str | None, password: str):
    """Show which password rules pass."""
    result = validate_password(password, email)
    echo_checklist(result.checklist())
    click.echo()
    if result.is_valid:
        echo_success("Password meets all requirements")
    else:
        echo_error(f"{len(result.failed_rules)} requirement(s) not met")
        ctx.exit(1)
