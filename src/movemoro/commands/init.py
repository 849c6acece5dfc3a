"""Initialize project command."""

import click

from ..data.exercise_loader import get_exercises_json_path, load_catalog
from ..db import SettingsRepository, get_db_path, init_db
from ..errors import CatalogLoadError
from .base import async_command, data_dir_from, echo_info, echo_success, echo_warning


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize the movemoro data directory and database.

    Creates the SQLite database with the required schema, stores the
    default settings and checks the bundled exercise catalog.
    """
    data_dir = data_dir_from(ctx)
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing movemoro in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    settings_repo = SettingsRepository(db_path)
    settings = await settings_repo.get()
    await settings_repo.save(settings)
    echo_success("Settings saved")

    try:
        catalog = load_catalog()
        echo_success(f"Exercise catalog loaded ({len(catalog)} exercises)")
    except CatalogLoadError as e:
        echo_warning(f"No exercises available: {e}")
        echo_warning(f"Expected catalog at {get_exercises_json_path()}")

    click.echo()
    click.echo("movemoro is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Adjust your durations and exercise filters:")
    click.echo("     movemoro settings set --work 25 --break 5 --difficulty easy")
    click.echo()
    click.echo("  2. Start a session in the terminal:")
    click.echo("     movemoro run")
    click.echo()
    click.echo("  3. Or serve the JSON API:")
    click.echo("     movemoro serve")
