"""Account registration command."""

import click

from ..clients.coach import CoachClient
from ..config import get_settings
from ..db import UserRepository, VideoRepository, WorkoutPlanRepository, get_db_path
from ..errors import ConflictError, ProgramGenerationError
from ..onboarding import OnboardingWizard
from ..services import AccountService, ProgramService
from .base import async_command, echo_error, echo_info, echo_success, echo_warning, ensure_initialized


@click.command()
@click.option("--admin", is_flag=True, help="Create the account with admin rights")
@click.option("--skip-program", is_flag=True, help="Do not generate a workout program")
@click.pass_context
@async_command
async def register(ctx: click.Context, admin: bool, skip_program: bool):
    """Create an account with the interactive onboarding questionnaire.

    The answers shape a personalised 30-day program, generated right
    after the account is created.
    """
    ensure_initialized(ctx)
    settings = get_settings()
    db_path = get_db_path(settings.data_dir)

    user, password = await OnboardingWizard().collect()
    user.is_admin = admin

    accounts = AccountService(UserRepository(db_path))
    try:
        user = await accounts.register(user, password)
    except ConflictError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Created account '{user.username}' (ID: {user.id})")

    if skip_program:
        echo_info("Skipped program generation.")
        return

    programs = ProgramService(
        WorkoutPlanRepository(db_path),
        VideoRepository(db_path),
        CoachClient(settings),
        settings,
    )
    echo_info(f"Generating your {settings.program_days}-day program...")
    try:
        plans = await programs.generate_for_user(user)
    except ProgramGenerationError as e:
        echo_warning(f"Program generation failed: {e}")
        click.echo("Try again later from the web app.")
        return

    echo_success(f"Program ready: {len(plans)} days")
