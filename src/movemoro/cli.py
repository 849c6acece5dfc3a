"""CLI entry point for movemoro."""

import logging
from pathlib import Path

import click

from . import __version__
from .commands import exercises, history, init, run as run_session, serve, settings, stats
from .commands.base import setup_logging
from .db.engine import DATA_DIR_ENV


@click.group()
@click.version_option(version=__version__, prog_name="movemoro")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV,
    help="Directory holding the movemoro database",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None, verbose: bool):
    """movemoro: work/break intervals with exercise snacks.

    Work until the timer runs out, do a short exercise to unlock your
    break, and earn longer breaks with optional extension exercises.

    Example usage:

        # Initialize the project
        movemoro init

        # Tune your intervals and filters
        movemoro settings set --work 50 --break 10 --exclude-floor

        # Start a session
        movemoro run

        # See how you are doing
        movemoro stats
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir


# Register commands
main.add_command(init)
main.add_command(run_session)
main.add_command(exercises)
main.add_command(settings)
main.add_command(history)
main.add_command(stats)
main.add_command(serve)


def run():
    """Run the CLI (handles async event loop)."""
    main()


if __name__ == "__main__":
    run()
