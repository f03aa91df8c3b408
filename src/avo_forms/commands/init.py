"""Initialize database command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Create the data directory and the local database schema."""
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing avo-forms in {data_dir}")
    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("Next steps:")
    click.echo("  avo-forms register                # Create an account")
    click.echo("  export AVO_USER_ID=<user id>")
    click.echo("  avo-forms exercise add --interactive")
