"""Initialize project command."""

import click

from ..data.exercise_loader import seed_exercises_if_needed
from ..db import PreferencesRepository, get_data_dir, get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@click.option("--reseed", is_flag=True, help="Add seed exercises even if the library is not empty")
@async_command
async def init(reseed: bool):
    """Initialize the liftlog database.

    Creates the data directory, the SQLite schema, the preferences record
    and the pre-loaded exercise library.
    """
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing liftlog in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    await PreferencesRepository(db_path).get_or_create()

    count = await seed_exercises_if_needed(db_path, force=reseed)
    if count:
        echo_success(f"Exercise library populated ({count} exercises)")
    else:
        echo_info("No exercises seeded (library already populated or seed file unavailable)")

    click.echo()
    click.echo("liftlog is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo('  liftlog routine add Monday "Bench Press"')
    click.echo('  liftlog log "Bench Press" --set 135x10 --set 135x8')
    click.echo('  liftlog previous "Bench Press"')
