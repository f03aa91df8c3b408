"""CLI entry point for avo-forms."""

import click

from . import __version__
from .commands import convert, exercise, friends, init, password, profile, register, serve, validate
from .config import configure_logging, get_settings


@click.group()
@click.version_option(version=__version__, prog_name="avo-forms")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def main(ctx, verbose: bool):
    """avo-forms: validated profile, exercise and account forms.

    Example usage:

        # Create the local database
        avo-forms init

        # Check a password against the policy
        avo-forms password check --email you@example.com

        # Convert units
        avo-forms convert 182.88 cm ft_in

        # Log exercise
        avo-forms exercise add --user <id> --name Walk --minutes 30
    """
    log_level = "DEBUG" if verbose else get_settings().log_level
    configure_logging(log_level)
    ctx.obj = {"log_level": log_level}


main.add_command(init)
main.add_command(convert)
main.add_command(password)
main.add_command(validate)
main.add_command(profile)
main.add_command(exercise)
main.add_command(register)
main.add_command(friends)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
