"""Settings commands."""

import click

from ..db import SettingsRepository
from ..errors import ConfigError
from ..models.exercises import ANY_DIFFICULTY, Difficulty, SelectionPreferences
from .base import (
    async_command,
    db_path_from,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
)


@click.group()
def settings():
    """View and change durations, audio and exercise filters."""
    pass


@settings.command("show")
@click.pass_context
@async_command
async def show(ctx: click.Context):
    """Display the current settings."""
    ensure_initialized(ctx)

    current = await SettingsRepository(db_path_from(ctx)).get()

    click.echo()
    click.echo(click.style("Settings", bold=True))
    click.echo("=" * 40)
    click.echo(current.get_summary())


@settings.command("set")
@click.option("--work", "work_duration", type=int, help="Work duration in minutes")
@click.option("--break", "break_duration", type=int, help="Short break duration in minutes")
@click.option("--long-break", "long_break_duration", type=int, help="Long break duration in minutes")
@click.option("--sessions", "sessions_before_long_break", type=int,
              help="Work sessions before a long break")
@click.option("--audio/--no-audio", "audio_enabled", default=None, help="Enable notifications")
@click.option("--theme", help="Theme id used by visual front ends")
@click.option(
    "--difficulty",
    type=click.Choice([ANY_DIFFICULTY] + [d.value for d in Difficulty]),
    help="Preferred exercise difficulty",
)
@click.option("--exclude-floor/--include-floor", "exclude_floor", default=None,
              help="Skip exercises done lying on the floor")
@click.option("--exclude-equipment/--include-equipment", "exclude_equipment", default=None,
              help="Skip exercises that need equipment")
@click.pass_context
@async_command
async def set_settings(
    ctx: click.Context,
    work_duration: int | None,
    break_duration: int | None,
    long_break_duration: int | None,
    sessions_before_long_break: int | None,
    audio_enabled: bool | None,
    theme: str | None,
    difficulty: str | None,
    exclude_floor: bool | None,
    exclude_equipment: bool | None,
):
    """Change one or more settings.

    Examples:

        movemoro settings set --work 50 --break 10

        movemoro settings set --difficulty easy --exclude-floor
    """
    ensure_initialized(ctx)

    repo = SettingsRepository(db_path_from(ctx))
    current = await repo.get()

    changes = {
        name: value
        for name, value in {
            "work_duration": work_duration,
            "break_duration": break_duration,
            "long_break_duration": long_break_duration,
            "sessions_before_long_break": sessions_before_long_break,
            "audio_enabled": audio_enabled,
            "theme": theme,
        }.items()
        if value is not None
    }

    prefs = current.exercise_preferences
    if difficulty is not None or exclude_floor is not None or exclude_equipment is not None:
        changes["exercise_preferences"] = SelectionPreferences(
            difficulty=difficulty if difficulty is not None else prefs.difficulty,
            exclude_floor_exercises=(
                exclude_floor if exclude_floor is not None else prefs.exclude_floor_exercises
            ),
            exclude_equipment=(
                exclude_equipment if exclude_equipment is not None else prefs.exclude_equipment
            ),
        )

    if not changes:
        echo_info("Nothing to change. See 'movemoro settings set --help'.")
        return

    try:
        updated = current.with_changes(**changes)
    except ConfigError as e:
        echo_error(str(e))
        ctx.exit(1)

    await repo.save(updated)
    echo_success("Settings saved!")
    click.echo()
    click.echo(updated.get_summary())


@settings.command("reset")
@click.confirmation_option(prompt="Restore the default settings?")
@click.pass_context
@async_command
async def reset(ctx: click.Context):
    """Restore the default settings."""
    ensure_initialized(ctx)

    defaults = await SettingsRepository(db_path_from(ctx)).reset()
    echo_success("Settings restored to defaults.")
    click.echo()
    click.echo(defaults.get_summary())
