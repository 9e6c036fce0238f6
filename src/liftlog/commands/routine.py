"""Weekly routine commands."""

from datetime import date

import click

from ..db import ExerciseRepository, PreferencesRepository, RoutineRepository, SetLogRepository
from ..models.routine import DAYS_OF_WEEK, normalize_day, today
from ..services.metrics import routine_volume_for_date
from ..services.previous_session import resolve_previous
from ..utils.units import display_value, display_weight
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    resolve_exercise,
)


def _day_argument(value: str | None) -> str:
    try:
        return normalize_day(value) if value else today()
    except ValueError as e:
        raise click.BadParameter(str(e))


@click.group()
def routine():
    """Manage the exercises planned for each weekday."""
    pass


@routine.command("show")
@click.argument("day", required=False)
@click.pass_context
@async_command
async def show(ctx: click.Context, day: str | None):
    """Show a day's routine with last session hints (default: today)."""
    ensure_initialized(ctx)
    day_name = _day_argument(day)

    routine_obj = await RoutineRepository().get_by_day(day_name)
    prefs = await PreferencesRepository().get_or_create()
    unit = prefs.preferred_weight_unit

    click.echo()
    click.echo(click.style(f"{day_name} routine", bold=True))

    if not routine_obj or not routine_obj.exercise_ids:
        echo_info("No exercises planned. Add some with 'liftlog routine add'.")
        return

    exercise_repo = ExerciseRepository()
    logs = await SetLogRepository().list_all()

    for exercise_id in routine_obj.exercise_ids:
        ex = await exercise_repo.get(exercise_id)
        if ex is None:
            continue
        previous = resolve_previous(logs, exercise_id, before=date.today())
        if previous:
            hint = ", ".join(
                f"{display_value(p.weight, unit, decimals=0)}x{p.reps}"
                for _, p in sorted(previous.items())
            )
        else:
            hint = "no history"
        click.echo(f"  - {ex.name} [{ex.target_muscle_group}]  last: {hint}")

    if day_name == today():
        volume = routine_volume_for_date(logs, routine_obj, date.today())
        click.echo()
        click.echo(f"Today's volume: {display_weight(volume, unit, decimals=0)}")


@routine.command("add")
@click.argument("day")
@click.argument("exercise")
@click.pass_context
@async_command
async def add(ctx: click.Context, day: str, exercise: str):
    """Add an exercise to a day's routine."""
    ensure_initialized(ctx)
    day_name = _day_argument(day)
    ex = await resolve_exercise(ctx, exercise)

    repo = RoutineRepository()
    routine_obj = await repo.ensure(day_name)
    if routine_obj.contains(ex.id):
        echo_info(f"{ex.name} is already on {day_name}.")
        return
    await repo.toggle_exercise(day_name, ex.id)
    echo_success(f"Added {ex.name} to {day_name}")


@routine.command("remove")
@click.argument("day")
@click.argument("exercise")
@click.pass_context
@async_command
async def remove(ctx: click.Context, day: str, exercise: str):
    """Remove an exercise from a day's routine."""
    ensure_initialized(ctx)
    day_name = _day_argument(day)
    ex = await resolve_exercise(ctx, exercise)

    repo = RoutineRepository()
    routine_obj = await repo.get_by_day(day_name)
    if not routine_obj or not routine_obj.contains(ex.id):
        echo_error(f"{ex.name} is not on {day_name}.")
        ctx.exit(1)
    await repo.toggle_exercise(day_name, ex.id)
    echo_success(f"Removed {ex.name} from {day_name}")


@routine.command("week")
@click.pass_context
@async_command
async def week(ctx: click.Context):
    """Show how many exercises are planned for each day."""
    ensure_initialized(ctx)
    routines = {r.day_of_week: r for r in await RoutineRepository().list_all()}
    for day_name in DAYS_OF_WEEK:
        count = len(routines[day_name].exercise_ids) if day_name in routines else 0
        marker = ">" if day_name == today() else " "
        click.echo(f"{marker} {day_name:<10} {count} exercises")
