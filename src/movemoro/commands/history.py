"""Exercise history command."""

import click

from ..data.exercise_loader import load_catalog_or_empty
from ..db import HistoryRepository
from .base import (
    async_command,
    db_path_from,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
)


@click.command()
@click.option("--limit", "-n", default=10, type=click.IntRange(1, 50), help="Entries to show")
@click.option("--clear", is_flag=True, help="Forget all completed exercises")
@click.pass_context
@async_command
async def history(ctx: click.Context, limit: int, clear: bool):
    """Show recently completed exercises, newest first."""
    ensure_initialized(ctx)
    repo = HistoryRepository(db_path_from(ctx))

    if clear:
        if not click.confirm("Forget all completed exercises?"):
            echo_info("Cancelled.")
            return
        await repo.clear()
        echo_success("Exercise history cleared.")
        return

    recent = await repo.load()
    if not len(recent):
        echo_info("No exercises completed yet.")
        return

    names = {exercise.id: exercise.name for exercise in load_catalog_or_empty()}
    rows = []
    for record in list(recent)[::-1][:limit]:
        rows.append([
            record.timestamp.strftime("%Y-%m-%d %H:%M"),
            names.get(record.exercise_id, record.exercise_id),
        ])

    click.echo(format_table(["Completed", "Exercise"], rows))
