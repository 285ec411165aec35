"""Progress, statistics and achievement commands."""

from datetime import date, datetime

import click

from ..config import get_settings
from ..db import get_db_path
from ..errors import NotFoundError
from ..models.progress import ProgressRecord
from ..stats.windows import TimeWindow
from ..web.deps import AppServices
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized, format_table


def _services() -> AppServices:
    settings = get_settings()
    return AppServices.build(settings, get_db_path(settings.data_dir))


@click.command()
@click.argument("user_id", type=int)
@click.option(
    "--window",
    "-w",
    type=click.Choice([w.value for w in TimeWindow if w is not TimeWindow.CUSTOM]),
    default=TimeWindow.LAST_30_DAYS.value,
    help="Window for totals and averages",
)
@click.pass_context
@async_command
async def stats(ctx: click.Context, user_id: int, window: str):
    """Show streaks, totals and weekly goal progress for a user."""
    ensure_initialized(ctx)
    services = _services()

    try:
        user = await services.accounts.get(user_id)
    except NotFoundError:
        echo_error(f"User {user_id} not found.")
        ctx.exit(1)

    report = await services.progress.report(user, window=TimeWindow(window))
    s = report.stats

    click.echo()
    click.echo(click.style(f"Progress for {user.name} (day {user.current_day})", bold=True))
    click.echo("=" * 50)
    click.echo(f"Current streak:    {report.streaks.current_streak} day(s)")
    click.echo(f"Longest streak:    {report.streaks.longest_streak} day(s)")
    click.echo()
    click.echo(f"Window:            {report.window.value}")
    click.echo(f"Days active:       {s.days_active}")
    click.echo(f"Workouts done:     {s.completed_count}/{s.record_count}")
    click.echo(f"Total minutes:     {s.total_minutes}")
    click.echo(f"Avg minutes/entry: {s.average_minutes_per_record:.1f}")
    click.echo(f"Completion rate:   {s.completion_rate:.1f}%")
    if s.average_mood:
        click.echo(f"Average mood:      {s.average_mood:.1f}/5")
    click.echo()
    click.echo(
        f"This week:         {s.weekly_total_minutes}/{s.weekly_goal_minutes} min "
        f"({s.weekly_goal_progress:.0f}%)"
    )
    if report.weight.latest_weight is not None:
        click.echo(f"Weight:            {report.weight.latest_weight} lbs ({report.weight.weight_change:.1f} lbs lost since start)")

    rows = [
        [f"{d.label} {d.date:%m-%d}", "yes" if d.completed else "", str(d.minutes_completed)]
        for d in report.week
    ]
    click.echo()
    click.echo(format_table(["Day", "Done", "Minutes"], rows))


@click.command()
@click.argument("user_id", type=int)
@click.pass_context
@async_command
async def achievements(ctx: click.Context, user_id: int):
    """List the badges a user has earned."""
    ensure_initialized(ctx)
    services = _services()

    badges = await services.achievements_repo.list_for_user(user_id)
    if not badges:
        echo_info("No achievements yet. Complete a workout to earn your first badge!")
        return

    rows = []
    for badge in badges:
        earned = badge.earned_at.strftime("%Y-%m-%d") if badge.earned_at else "N/A"
        rows.append([badge.badge_type.value, badge.title, earned])

    click.echo()
    click.echo(format_table(["Badge", "Title", "Earned"], rows))


@click.command()
@click.argument("user_id", type=int)
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Day to log (default: today)")
@click.option("--minutes", "-m", type=click.IntRange(min=0), default=0, help="Minutes exercised")
@click.option("--completed/--not-completed", default=True, help="Whether the workout was finished")
@click.option("--weight", type=click.FloatRange(min=0, min_open=True), help="Body weight in lbs")
@click.option("--mood", type=click.IntRange(1, 5), help="Mood from 1 to 5")
@click.option("--notes", help="Free-form notes")
@click.pass_context
@async_command
async def log(
    ctx: click.Context,
    user_id: int,
    day: datetime | None,
    minutes: int,
    completed: bool,
    weight: float | None,
    mood: int | None,
    notes: str | None,
):
    """Log a day's workout for a user.

    Logging the same day again updates that day's record.
    """
    ensure_initialized(ctx)
    services = _services()

    try:
        user = await services.accounts.get(user_id)
    except NotFoundError:
        echo_error(f"User {user_id} not found.")
        ctx.exit(1)

    record = ProgressRecord(
        user_id=user.id,
        date=day.date() if day else date.today(),
        day=user.current_day,
        completed=completed,
        minutes_completed=minutes,
        weight=weight,
        mood=mood,
        notes=notes,
    )
    result = await services.progress.submit(user, record)

    verb = "Logged" if result.created else "Updated"
    echo_success(f"{verb} {result.record.date} (day {result.record.day})")
    for badge in result.new_achievements:
        click.echo(click.style(f"  New badge: {badge.title}", fg="yellow") + f" - {badge.description}")
