"""CLI entry point for FitSpark."""

import click

from . import __version__
from .commands import achievements, init, log, register, serve, stats, users
from .config import get_settings
from .logger import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="fitspark")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """FitSpark: guided 30-day fitness programs.

    Personalised workout plans, daily progress tracking, streaks and
    achievement badges.

    Example usage:

        # Initialize the database
        fitspark init

        # Create an account
        fitspark register

        # Log today's workout and check progress
        fitspark log 1 --minutes 30 --mood 4
        fitspark stats 1 --window 7-days

        # Run the API
        fitspark serve
    """
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level, settings.log_file)


main.add_command(init)
main.add_command(register)
main.add_command(users)
main.add_command(log)
main.add_command(stats)
main.add_command(achievements)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
