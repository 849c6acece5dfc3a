"""Shared CLI utilities."""

import asyncio
import logging
from functools import wraps
from pathlib import Path

import click

from ..db import get_data_dir, get_db_path


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def data_dir_from(ctx: click.Context) -> Path:
    """Get the data directory chosen on the command line."""
    obj = ctx.find_root().obj or {}
    return obj.get("data_dir") or get_data_dir()


def db_path_from(ctx: click.Context) -> Path:
    """Get the database path for the chosen data directory."""
    return get_db_path(data_dir_from(ctx))


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = db_path_from(ctx)
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'movemoro init' first."
        )
        ctx.exit(1)


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

    header_line = ""
    for i, h in enumerate(headers):
        header_line += h.ljust(widths[i] + padding)
    lines.append(header_line.rstrip())

    sep_line = ""
    for w in widths:
        sep_line += "-" * w + " " * padding
    lines.append(sep_line.rstrip())

    for row in rows:
        row_line = ""
        for i, cell in enumerate(row):
            row_line += str(cell).ljust(widths[i] + padding)
        lines.append(row_line.rstrip())

    return "\n".join(lines)
