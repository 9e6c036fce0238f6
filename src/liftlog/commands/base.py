"""Shared CLI utilities."""

import asyncio
import re
from functools import wraps

import click

from ..db import ExerciseRepository, get_db_path
from ..models.exercise import Exercise


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'liftlog init' first."
        )
        ctx.exit(1)


async def resolve_exercise(ctx: click.Context, name_or_id: str) -> Exercise:
    """Look up an exercise by id or name, exiting if it does not exist."""
    repo = ExerciseRepository()
    exercise = await repo.get(name_or_id) or await repo.get_by_name(name_or_id)
    if exercise is None:
        echo_error(f"Exercise '{name_or_id}' not found.")
        ctx.exit(1)
    return exercise


SET_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*[xX*]\s*(\d+)\s*$")


def parse_set(value: str) -> tuple[float, int]:
    """Parse "WEIGHTxREPS" (e.g. "135x10") into weight and reps."""
    match = SET_PATTERN.match(value)
    if not match:
        raise click.BadParameter(f"'{value}' is not in WEIGHTxREPS form, e.g. 135x10")
    return float(match.group(1)), int(match.group(2))


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = []
    lines.append("".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)))
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)
