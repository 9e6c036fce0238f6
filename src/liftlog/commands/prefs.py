"""Preferences commands."""

import click

from ..db import PreferencesRepository
from ..models.units import WeightUnit
from .base import async_command, echo_info, echo_success, ensure_initialized


@click.group()
def prefs():
    """View and change preferences."""
    pass


@prefs.command("show")
@click.pass_context
@async_command
async def show(ctx: click.Context):
    """Show current preferences."""
    ensure_initialized(ctx)

    p = await PreferencesRepository().get_or_create()
    click.echo(f"Weight unit:     {p.preferred_weight_unit.display_name}")
    click.echo(f"Rest timer:      {'on' if p.enable_rest_timer else 'off'}")
    click.echo(f"Rest duration:   {p.default_rest_duration}s")
    click.echo(f"Health export:   {'on' if p.health_sync_enabled else 'off'}")


@prefs.command("set")
@click.option("-u", "--unit", type=click.Choice([u.value for u in WeightUnit]))
@click.option("--rest-timer/--no-rest-timer", default=None)
@click.option("--rest-duration", type=int, help="Seconds, 30-300 in steps of 15")
@click.option("--health-sync/--no-health-sync", default=None)
@click.pass_context
@async_command
async def set_prefs(
    ctx: click.Context,
    unit: str | None,
    rest_timer: bool | None,
    rest_duration: int | None,
    health_sync: bool | None,
):
    """Change one or more preferences."""
    ensure_initialized(ctx)

    repo = PreferencesRepository()
    p = await repo.get_or_create()

    if unit is None and rest_timer is None and rest_duration is None and health_sync is None:
        echo_info("Nothing to change.")
        return

    if unit is not None:
        p.preferred_weight_unit = WeightUnit(unit)
    if rest_timer is not None:
        p.enable_rest_timer = rest_timer
    if rest_duration is not None:
        applied = p.set_rest_duration(rest_duration)
        if applied != rest_duration:
            echo_info(f"Rest duration adjusted to {applied}s")
    if health_sync is not None:
        p.health_sync_enabled = health_sync

    await repo.save(p)
    echo_success("Preferences saved")
