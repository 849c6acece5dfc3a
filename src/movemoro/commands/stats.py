"""Statistics and achievements command."""

import click

from ..models.achievements import ACHIEVEMENTS
from ..services.stats import StatsService
from .base import async_command, db_path_from, ensure_initialized


@click.command()
@click.option("--all", "show_all", is_flag=True, help="Also list locked achievements")
@click.pass_context
@async_command
async def stats(ctx: click.Context, show_all: bool):
    """Show lifetime statistics and unlocked achievements."""
    ensure_initialized(ctx)

    current = await StatsService(db_path_from(ctx)).get_stats()

    click.echo()
    click.echo(click.style("Activity", bold=True))
    click.echo("=" * 40)
    click.echo(f"Sessions completed: {current.total_sessions}")
    click.echo(f"Focus time: {current.focus_hours:.1f} h")
    click.echo(f"Exercises completed: {current.total_exercises} "
               f"({current.unique_exercises} different)")
    click.echo(f"Breaks extended: {current.total_extensions}")
    click.echo(f"Current streak: {current.current_streak} day(s) "
               f"(longest {current.longest_streak})")

    click.echo()
    click.echo(click.style("Achievements", bold=True))
    unlocked = 0
    for achievement in ACHIEVEMENTS:
        is_unlocked = achievement.is_unlocked(current)
        unlocked += is_unlocked
        if is_unlocked:
            click.echo(f"  {achievement.icon} {achievement.name} - {achievement.description}")
        elif show_all:
            click.echo(click.style(f"  [locked] {achievement.name} - {achievement.description}",
                                   dim=True))
    click.echo()
    click.echo(f"{unlocked}/{len(ACHIEVEMENTS)} unlocked")
