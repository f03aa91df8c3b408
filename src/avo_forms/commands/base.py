"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..clients.local import LocalBackendClient
from ..db import get_db_path
from ..forms.base import Form, FormState
from ..validation.errors import PasswordPolicyError

user_option = click.option(
    "--user",
    "user_id",
    envvar="AVO_USER_ID",
    required=True,
    help="User ID (or set AVO_USER_ID)",
)


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Database not initialized. Run 'avo-forms init' first."
        )
        ctx.exit(1)


def get_backend() -> LocalBackendClient:
    return LocalBackendClient(get_db_path())


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_checklist(items: list[tuple[str, bool]]) -> None:
    for label, passed in items:
        mark = click.style("[x]", fg="green") if passed else click.style("[ ]", fg="red")
        click.echo(f"  {mark} {label}")


async def submit_form(ctx: click.Context, form: Form, success) -> None:
    """Submit a form, report the outcome and exit 1 unless it succeeded.

    ``success`` is the message to print, or a callable building it from the
    form once its result is in.
    """
    state = await form.submit()
    if state is FormState.SUCCESS:
        echo_success(success(form) if callable(success) else success)
        return
    if isinstance(form.error, PasswordPolicyError):
        echo_error(form.error.message)
        for rule in form.error.failed_rules:
            click.echo(f"  - {rule.value}")
    elif form.error is not None:
        echo_error(form.error.message)
    ctx.exit(1)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)
