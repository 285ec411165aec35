"""User management commands."""

import click

from ..config import get_settings
from ..db import UserRepository, get_db_path
from .base import async_command, echo_info, ensure_initialized, format_table


@click.group()
@click.pass_context
def users(ctx):
    """Manage user accounts."""
    ensure_initialized(ctx)


@users.command(name="list")
@async_command
async def list_users():
    """List all registered users."""
    repo = UserRepository(get_db_path(get_settings().data_dir))
    all_users = await repo.list_all()

    if not all_users:
        echo_info("No users found. Create one with 'fitspark register'")
        return

    headers = ["ID", "Username", "Name", "Theme", "Day", "Admin", "Joined"]
    rows = []
    for user in all_users:
        joined = user.start_date.strftime("%Y-%m-%d") if user.start_date else "N/A"
        rows.append([
            str(user.id),
            user.username,
            user.name[:25] + "..." if len(user.name) > 25 else user.name,
            user.theme.value,
            str(user.current_day),
            "yes" if user.is_admin else "",
            joined,
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_users)} user(s)")
