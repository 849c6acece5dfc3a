"""Web server command."""

import os

import click

from ..db.engine import DATA_DIR_ENV
from .base import data_dir_from, ensure_initialized


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the JSON API server.

    The server owns one live session; drive it through the /session
    endpoints. Interactive docs are served at /docs.

    Examples:

        # Start on default port (8000)
        movemoro serve

        # Expose to network (all interfaces)
        movemoro serve --host 0.0.0.0

        # Development mode with auto-reload
        movemoro serve --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    # The reloader re-imports the app in a subprocess; pass the directory along.
    data_dir = data_dir_from(ctx)
    os.environ[DATA_DIR_ENV] = str(data_dir)

    click.echo()
    click.echo(click.style("Starting movemoro API server...", fg="green"))
    click.echo()
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo(f"  Docs:    http://{host}:{port}/docs")
    if host == "0.0.0.0":
        import socket
        hostname = socket.gethostname()
        try:
            local_ip = socket.gethostbyname(hostname)
            click.echo(f"  Network: http://{local_ip}:{port}")
        except socket.gaierror:
            pass
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    uvicorn.run(
        create_app(data_dir) if not reload else "movemoro.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
