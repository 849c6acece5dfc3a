"""Exercise catalog commands."""

import click

from ..core.selection import ExerciseSelector, is_floor_exercise
from ..data.exercise_loader import filter_catalog, load_catalog
from ..db import HistoryRepository, SettingsRepository
from ..errors import CatalogLoadError
from ..models.exercises import Category, Difficulty, Environment
from .base import (
    async_command,
    db_path_from,
    echo_error,
    echo_info,
    ensure_initialized,
    format_table,
)


@click.group()
def exercises():
    """Browse the exercise catalog.

    List exercises by environment, category and difficulty, or preview
    the suggestions your current filters would produce.
    """
    pass


@exercises.command("list")
@click.option(
    "--environment", "-e",
    type=click.Choice([e.value for e in Environment]),
    help="Only show exercises for this environment",
)
@click.option(
    "--category", "-c",
    type=click.Choice([c.value for c in Category]),
    help="Only show snack or extension exercises",
)
@click.option(
    "--difficulty", "-d",
    type=click.Choice([d.value for d in Difficulty]),
    help="Only show exercises of this difficulty",
)
@click.pass_context
def list_exercises(ctx: click.Context, environment: str | None, category: str | None, difficulty: str | None):
    """List exercises in the catalog."""
    try:
        catalog = load_catalog()
    except CatalogLoadError as e:
        echo_error(f"No exercises available: {e}")
        ctx.exit(1)

    shown = filter_catalog(
        catalog,
        environment=Environment(environment) if environment else None,
        category=Category(category) if category else None,
        difficulty=difficulty,
    )
    if not shown:
        echo_info("No exercises match those filters.")
        return

    rows = []
    for exercise in shown:
        rows.append([
            exercise.id,
            exercise.name,
            exercise.environment.value,
            exercise.category.value,
            exercise.difficulty.value,
            ", ".join(sorted(exercise.equipment)) or "-",
            "yes" if is_floor_exercise(exercise) else "no",
        ])

    click.echo(format_table(
        ["ID", "Name", "Env", "Category", "Difficulty", "Equipment", "Floor"],
        rows,
    ))
    click.echo()
    click.echo(f"{len(shown)} exercise(s)")


@exercises.command("suggest")
@click.option("--count", "-n", default=3, type=click.IntRange(1, 10), help="Extension candidates to show")
@click.pass_context
@async_command
async def suggest(ctx: click.Context, count: int):
    """Preview suggestions using your saved filters and recent history.

    Nothing is recorded; this only shows what a session would offer.
    """
    ensure_initialized(ctx)
    db_path = db_path_from(ctx)

    try:
        catalog = load_catalog()
    except CatalogLoadError as e:
        echo_error(f"No exercises available: {e}")
        ctx.exit(1)

    settings = await SettingsRepository(db_path).get()
    history = await HistoryRepository(db_path).load()
    selector = ExerciseSelector(catalog, history, settings.exercise_preferences)

    click.echo()
    click.echo(click.style("Snack pair (unlocks your break)", bold=True))
    for exercise in selector.select_snack_pair():
        click.echo(f"  [{exercise.environment.value}] {exercise.get_summary()}")
        click.echo(f"      {exercise.instructions}")

    click.echo()
    click.echo(click.style("Break extensions", bold=True))
    candidates = selector.select_extension_candidates(count)
    if not candidates:
        echo_info("No extension exercises match your filters.")
    for exercise in candidates:
        click.echo(f"  {exercise.get_summary()}")
