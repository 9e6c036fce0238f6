"""CLI entry point for liftlog."""

import click

from . import __version__
from .commands import exercises, init, log, metrics, prefs, previous, routine, serve, workout
from .logging_config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="liftlog")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """liftlog: a personal weight-training log.

    Keep an exercise library, plan a routine for each weekday, log sets
    and see what you did last time.

    Example usage:

        # Initialize the database and exercise library
        liftlog init

        # Plan Monday
        liftlog routine add Monday "Bench Press"

        # Log sets and look up the last session
        liftlog log "Bench Press" --set 135x10 --set 135x8
        liftlog previous "Bench Press"
    """
    configure_logging("DEBUG" if verbose else None)


# Register commands
main.add_command(init)
main.add_command(exercises)
main.add_command(routine)
main.add_command(log)
main.add_command(previous)
main.add_command(workout)
main.add_command(metrics)
main.add_command(prefs)
main.add_command(serve)


if __name__ == "__main__":
    main()
