"""Exercise library commands."""

import click

from ..db import ExerciseRepository, PreferencesRepository, SetLogRepository
from ..models.exercise import Exercise
from ..services.metrics import exercise_summary
from ..utils.units import display_weight
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    resolve_exercise,
)


@click.group()
def exercises():
    """Manage the exercise library."""
    pass


@exercises.command("list")
@click.option("-g", "--group", "muscle_group", help="Only show one muscle group")
@click.pass_context
@async_command
async def list_exercises(ctx: click.Context, muscle_group: str | None):
    """List exercises in the library."""
    ensure_initialized(ctx)

    repo = ExerciseRepository()
    if muscle_group:
        items = await repo.list_by_muscle_group(muscle_group)
    else:
        items = await repo.list_all()

    if not items:
        echo_info("No exercises found.")
        return

    rows = [[ex.name, ex.target_muscle_group, ex.id[:8]] for ex in items]
    click.echo(format_table(headers=["Name", "Muscle Group", "ID"], rows=rows))


@exercises.command("add")
@click.argument("name")
@click.option("-g", "--group", "muscle_group", required=True, help="Target muscle group")
@click.option("--instructions", help="How to perform the exercise")
@click.option("--cue", "cues", multiple=True, help="Form cue (repeatable)")
@click.option("--video", "video_url", help="Video reference URL")
@click.pass_context
@async_command
async def add_exercise(
    ctx: click.Context,
    name: str,
    muscle_group: str,
    instructions: str | None,
    cues: tuple[str, ...],
    video_url: str | None,
):
    """Add an exercise to the library."""
    ensure_initialized(ctx)

    repo = ExerciseRepository()
    if await repo.get_by_name(name):
        echo_error(f"An exercise named '{name}' already exists.")
        ctx.exit(1)

    exercise = Exercise(
        name=name.strip(),
        target_muscle_group=muscle_group.strip(),
        instructions=instructions,
        form_cues="\n".join(cues) if cues else None,
        video_url=video_url,
    )
    await repo.create(exercise)
    echo_success(f"Added {exercise.name} ({exercise.target_muscle_group})")


@exercises.command("show")
@click.argument("exercise")
@click.pass_context
@async_command
async def show_exercise(ctx: click.Context, exercise: str):
    """Show details and lifetime stats for an exercise."""
    ensure_initialized(ctx)

    ex = await resolve_exercise(ctx, exercise)
    prefs = await PreferencesRepository().get_or_create()
    logs = await SetLogRepository().list_for_exercise(ex.id)
    unit = prefs.preferred_weight_unit

    click.echo()
    click.echo(click.style(ex.name, bold=True))
    click.echo(f"Muscle group: {ex.target_muscle_group}")
    if ex.instructions:
        click.echo()
        click.echo(ex.instructions)
    if ex.form_cue_list:
        click.echo()
        click.echo("Form cues:")
        for cue in ex.form_cue_list:
            click.echo(f"  - {cue}")
    if ex.video_url:
        click.echo(f"Video: {ex.video_url}")

    summary = exercise_summary(logs)
    click.echo()
    if not logs:
        echo_info("No sets logged yet.")
        return
    click.echo(f"Workouts: {summary.total_workouts}")
    click.echo(f"Sets: {summary.total_sets}")
    click.echo(f"Total volume: {display_weight(summary.total_volume, unit, decimals=0)}")
    click.echo(f"Heaviest set: {display_weight(summary.personal_record_weight, unit)}")
    click.echo(
        f"Best session volume: {display_weight(summary.personal_record_volume, unit, decimals=0)}"
    )


@exercises.command("delete")
@click.argument("exercise")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete_exercise(ctx: click.Context, exercise: str, yes: bool):
    """Delete an exercise and every set logged for it."""
    ensure_initialized(ctx)

    ex = await resolve_exercise(ctx, exercise)
    if not yes and not click.confirm(f"Delete {ex.name} and all of its logged sets?"):
        return

    removed = await ExerciseRepository().delete(ex.id)
    echo_success(f"Deleted {ex.name} ({removed} logged sets removed)")
