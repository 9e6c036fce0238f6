"""Set logging commands."""

import math
from datetime import date, datetime

import click
import questionary

from ..clients.jsonl_store import JsonlHealthStore
from ..db import ExerciseRepository, PreferencesRepository, RoutineRepository, SetLogRepository
from ..models.routine import normalize_day, today
from ..models.session import SetEntry
from ..models.units import WeightUnit
from ..services.health_sync import HealthSyncService
from ..services.previous_session import (
    PreviousSet,
    SessionWindow,
    build_set_entries,
    resolve_previous,
)
from ..services.workout_session import WorkoutSession, log_exercise_sets
from ..utils.units import display_value, display_weight
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    parse_set,
    resolve_exercise,
)


def _previous_hint(previous: dict[int, PreviousSet], set_number: int, unit: WeightUnit) -> str:
    prev = previous.get(set_number)
    if prev is None:
        return "-"
    return f"{display_value(prev.weight, unit, decimals=0)}{unit.abbreviation} x {prev.reps}"


async def _prompt_entries(
    entries: list[SetEntry],
    previous: dict[int, PreviousSet],
    unit: WeightUnit,
) -> list[SetEntry]:
    """Walk through set rows, letting the user accept or change each one."""
    index = 0
    while True:
        if index >= len(entries):
            more = await questionary.confirm("Add another set?", default=False).ask_async()
            if not more:
                break
            last = entries[-1] if entries else SetEntry()
            entries.append(SetEntry(weight=last.weight, reps=last.reps))

        entry = entries[index]
        set_number = index + 1
        click.echo(f"Set {set_number} (previous: {_previous_hint(previous, set_number, unit)})")

        weight = await questionary.text(
            f"  Weight ({unit.abbreviation}):",
            default=f"{entry.weight:g}",
            validate=lambda v: _is_number(v) or "Enter a number",
        ).ask_async()
        if weight is None:
            break
        reps = await questionary.text(
            "  Reps:",
            default=str(entry.reps),
            validate=lambda v: v.strip().isdigit() or "Enter a whole number",
        ).ask_async()
        if reps is None:
            break

        entry.weight = float(weight)
        entry.reps = int(reps)
        entry.is_completed = await questionary.confirm("  Done?", default=True).ask_async()
        index += 1

    return entries


def _is_number(value: str) -> bool:
    try:
        number = float(value)
    except ValueError:
        return False
    return math.isfinite(number) and number >= 0


@click.command("log")
@click.argument("exercise")
@click.option(
    "-s",
    "--set",
    "sets",
    multiple=True,
    help="A completed set as WEIGHTxREPS, in the preferred unit (repeatable)",
)
@click.option("-n", "--notes", help="Notes for this session")
@click.option(
    "-u",
    "--unit",
    type=click.Choice([u.value for u in WeightUnit]),
    help="Unit the weights are entered in (default: preferred unit)",
)
@click.pass_context
@async_command
async def log(
    ctx: click.Context,
    exercise: str,
    sets: tuple[str, ...],
    notes: str | None,
    unit: str | None,
):
    """Log sets for one exercise.

    Without --set, walks through the sets interactively, pre-filled from
    the last session.

    Examples:

        liftlog log "Bench Press" --set 135x10 --set 135x8

        liftlog log Squat --unit kg --set 100x5
    """
    ensure_initialized(ctx)

    ex = await resolve_exercise(ctx, exercise)
    prefs = await PreferencesRepository().get_or_create()
    weight_unit = WeightUnit(unit) if unit else prefs.preferred_weight_unit
    set_log_repo = SetLogRepository()

    if sets:
        entries = []
        for value in sets:
            weight, reps = parse_set(value)
            entries.append(SetEntry(weight=weight, reps=reps, is_completed=True))
    else:
        previous = resolve_previous(await set_log_repo.list_all(), ex.id)
        entries = build_set_entries(previous, weight_unit)
        click.echo(click.style(ex.name, bold=True))
        entries = await _prompt_entries(entries, previous, weight_unit)

    saved = await log_exercise_sets(set_log_repo, ex.id, entries, weight_unit, notes=notes)
    if not saved:
        echo_warning("No sets saved.")
        return

    volume = sum(s.volume for s in saved)
    echo_success(
        f"Logged {len(saved)} sets of {ex.name} "
        f"(volume {display_weight(volume, prefs.preferred_weight_unit, decimals=0)})"
    )


@click.command("previous")
@click.argument("exercise")
@click.option(
    "-w",
    "--window",
    type=click.Choice([w.value for w in SessionWindow]),
    default=SessionWindow.SAME_DAY.value,
    show_default=True,
    help="What counts as the same session",
)
@click.option("--before-today", is_flag=True, help="Ignore sets logged today")
@click.pass_context
@async_command
async def previous(ctx: click.Context, exercise: str, window: str, before_today: bool):
    """Show what you did last time for an exercise."""
    ensure_initialized(ctx)

    ex = await resolve_exercise(ctx, exercise)
    prefs = await PreferencesRepository().get_or_create()
    unit = prefs.preferred_weight_unit

    result = resolve_previous(
        await SetLogRepository().list_all(),
        ex.id,
        window=SessionWindow(window),
        before=date.today() if before_today else None,
    )
    if not result:
        echo_info(f"No previous sets for {ex.name}.")
        return

    rows = [
        [str(number), display_weight(p.weight, unit), str(p.reps)]
        for number, p in sorted(result.items())
    ]
    click.echo(click.style(f"Previous {ex.name}", bold=True))
    click.echo(format_table(headers=["Set", "Weight", "Reps"], rows=rows))


@click.command("workout")
@click.option("-d", "--day", help="Routine day to run (default: today)")
@click.pass_context
@async_command
async def workout(ctx: click.Context, day: str | None):
    """Run a routine session interactively and save the completed sets."""
    ensure_initialized(ctx)

    try:
        day_name = normalize_day(day) if day else today()
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    routine_obj = await RoutineRepository().get_by_day(day_name)
    if not routine_obj or not routine_obj.exercise_ids:
        echo_error(f"No routine planned for {day_name}.")
        ctx.exit(1)

    prefs = await PreferencesRepository().get_or_create()
    unit = prefs.preferred_weight_unit
    set_log_repo = SetLogRepository()
    exercise_repo = ExerciseRepository()

    session = WorkoutSession.start(
        routine_obj.exercise_ids,
        await set_log_repo.list_all(),
        unit,
        started_at=datetime.now(),
    )

    for exercise_id in session.exercise_ids:
        ex = await exercise_repo.get(exercise_id)
        if ex is None:
            continue
        click.echo()
        click.echo(click.style(ex.name, bold=True))
        await _prompt_entries(session.entries[exercise_id], session.previous[exercise_id], unit)
        if session.should_start_rest_timer(prefs):
            echo_info(f"Rest {prefs.default_rest_duration}s before the next exercise.")

    if not session.has_completed_sets:
        echo_warning("No completed sets, nothing saved.")
        return

    health_sync = HealthSyncService(JsonlHealthStore()) if prefs.health_sync_enabled else None
    result = await session.finish(set_log_repo, prefs, health_sync=health_sync)

    if result.saved:
        echo_success(
            f"Saved {result.set_count} sets "
            f"(session volume {session.session_volume:.0f} {unit.abbreviation})"
        )
    else:
        echo_warning("Sets could not be saved; see the log for details.")
    if prefs.health_sync_enabled and not result.health_synced:
        echo_warning("Workout was not exported to the health store.")
