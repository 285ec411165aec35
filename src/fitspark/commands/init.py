"""Initialize project command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db, seed_videos
from .base import async_command, echo_info, echo_success


@click.command()
@click.option("--no-videos", is_flag=True, help="Skip seeding the starter video catalog")
@async_command
async def init(no_videos: bool):
    """Initialize the FitSpark database.

    Creates the data directory, the SQLite schema and, unless disabled,
    a small catalog of approved starter videos.
    """
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing FitSpark in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    if not no_videos:
        count = await seed_videos(db_path)
        if count:
            echo_success(f"Video catalog populated ({count} starter videos)")
        else:
            echo_info("Video catalog already populated")

    click.echo()
    click.echo("FitSpark is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create an account:")
    click.echo("     fitspark register")
    click.echo()
    click.echo("  2. Start the API server:")
    click.echo("     fitspark serve")
