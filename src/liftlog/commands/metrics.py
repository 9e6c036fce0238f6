"""Training metrics commands."""

from datetime import date, datetime

import click

from ..db import ExerciseRepository, PreferencesRepository, SetLogRepository
from ..services import metrics as m
from ..utils.units import display_weight
from .base import (
    async_command,
    echo_error,
    echo_info,
    ensure_initialized,
    format_table,
    resolve_exercise,
)


@click.group()
def metrics():
    """View volume, records and workout history."""
    pass


@metrics.command("exercise")
@click.argument("exercise")
@click.pass_context
@async_command
async def exercise_metrics(ctx: click.Context, exercise: str):
    """Per-session volume and top weight for one exercise."""
    ensure_initialized(ctx)

    ex = await resolve_exercise(ctx, exercise)
    unit = (await PreferencesRepository().get_or_create()).preferred_weight_unit
    logs = await SetLogRepository().list_for_exercise(ex.id)

    sessions = m.group_sessions(logs)
    if not sessions:
        echo_info(f"No data yet for {ex.name}.")
        return

    rows = [
        [
            s.date.isoformat(),
            str(s.set_count),
            str(s.total_reps),
            display_weight(s.volume, unit, decimals=0),
            display_weight(s.max_weight, unit),
        ]
        for s in sessions
    ]
    click.echo(click.style(ex.name, bold=True))
    click.echo(format_table(headers=["Date", "Sets", "Reps", "Volume", "Top Set"], rows=rows))


@metrics.command("weekly")
@click.option("-g", "--group", "muscle_group", help="Only count one muscle group")
@click.pass_context
@async_command
async def weekly(ctx: click.Context, muscle_group: str | None):
    """Total volume per week."""
    ensure_initialized(ctx)

    unit = (await PreferencesRepository().get_or_create()).preferred_weight_unit
    logs = await SetLogRepository().list_all()
    if muscle_group:
        members = {ex.id for ex in await ExerciseRepository().list_by_muscle_group(muscle_group)}
        logs = [log for log in logs if log.exercise_id in members]

    weeks = m.weekly_volume(logs)
    if not weeks:
        echo_info("No sets logged yet.")
        return

    rows = [[start.isoformat(), display_weight(volume, unit, decimals=0)] for start, volume in weeks]
    click.echo(format_table(headers=["Week of", "Volume"], rows=rows))


@metrics.command("muscles")
@click.option(
    "-r",
    "--range",
    "time_range",
    type=click.Choice([r.value for r in m.TimeRange]),
    default=m.TimeRange.ALL_TIME.value,
    show_default=True,
)
@click.option("-g", "--group", "muscle_group", help="Break one group down by exercise")
@click.pass_context
@async_command
async def muscles(ctx: click.Context, time_range: str, muscle_group: str | None):
    """Volume breakdown by muscle group."""
    ensure_initialized(ctx)

    unit = (await PreferencesRepository().get_or_create()).preferred_weight_unit
    logs = m.filter_by_range(await SetLogRepository().list_all(), m.TimeRange(time_range))
    exercises = await ExerciseRepository().list_all()

    if muscle_group:
        rows = [
            [ex.name, display_weight(volume, unit, decimals=0), str(count)]
            for ex, volume, count in m.exercises_in_group(logs, exercises, muscle_group)
        ]
        if not rows:
            echo_info(f"No sets logged for {muscle_group}.")
            return
        click.echo(format_table(headers=["Exercise", "Volume", "Sets"], rows=rows))
        return

    breakdown = m.muscle_group_volume(logs, exercises)
    if not breakdown:
        echo_info("No sets logged in this range.")
        return

    percentages = dict(m.muscle_group_percentages(breakdown))
    rows = [
        [group, display_weight(volume, unit, decimals=0), f"{percentages[group]:.1f}%"]
        for group, volume in breakdown
    ]
    click.echo(format_table(headers=["Muscle Group", "Volume", "Share"], rows=rows))


@metrics.command("calendar")
@click.option("-d", "--date", "day", help="Show the sets of one day (YYYY-MM-DD)")
@click.option("-m", "--month", help="Month to list workout days for (YYYY-MM)")
@click.pass_context
@async_command
async def calendar(ctx: click.Context, day: str | None, month: str | None):
    """Workout days and per-day details."""
    ensure_initialized(ctx)

    unit = (await PreferencesRepository().get_or_create()).preferred_weight_unit
    logs = await SetLogRepository().list_all()

    if day:
        try:
            selected = date.fromisoformat(day)
        except ValueError:
            echo_error(f"Invalid date '{day}', expected YYYY-MM-DD.")
            ctx.exit(1)

        grouped = m.logs_by_exercise_for_date(logs, selected)
        if not grouped:
            echo_info(f"No workout on {selected.isoformat()}.")
            return

        names = {ex.id: ex.name for ex in await ExerciseRepository().list_all()}
        click.echo(click.style(selected.strftime("%A, %B %d %Y"), bold=True))
        for exercise_id, sets in grouped.items():
            click.echo(f"  {names.get(exercise_id, 'Unknown')}")
            for s in sorted(sets, key=lambda s: s.set_number):
                click.echo(f"    {s.set_number}. {display_weight(s.weight, unit)} x {s.reps}")
        click.echo(f"Volume: {display_weight(m.volume_for_date(logs, selected), unit, decimals=0)}")
        return

    try:
        first = datetime.strptime(month, "%Y-%m").date() if month else date.today().replace(day=1)
    except ValueError:
        echo_error(f"Invalid month '{month}', expected YYYY-MM.")
        ctx.exit(1)

    days = sorted(
        d for d in m.workout_dates(logs) if d.year == first.year and d.month == first.month
    )
    if not days:
        echo_info(f"No workouts in {first.strftime('%B %Y')}.")
        return

    rows = [
        [d.isoformat(), d.strftime("%a"), display_weight(m.volume_for_date(logs, d), unit, decimals=0)]
        for d in days
    ]
    click.echo(click.style(first.strftime("%B %Y"), bold=True))
    click.echo(format_table(headers=["Date", "Day", "Volume"], rows=rows))
