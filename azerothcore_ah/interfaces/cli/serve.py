"""Run the web dashboard."""

from __future__ import annotations

import click
import uvicorn
from rich.console import Console

from azerothcore_ah.app.api import create_app
from azerothcore_ah.infrastructure.db import DatabaseError, check_connection
from azerothcore_ah.infrastructure.observability import (configure_logging,
                                                         get_logger)
from azerothcore_ah.interfaces.cli.context import CLIContext

console = Console(stderr=True)
logger = get_logger(__name__)

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@click.command()
@click.option("--host", default=None, help="Address to bind (default: $HOST or 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Port to listen on (default: $PORT or 8080).")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: $LOG_LEVEL or info).",
)
@click.pass_context
def serve(
    ctx: click.Context, host: str | None, port: int | None, log_level: str | None
) -> None:
    """Serve the dashboard and JSON API.

    Exits with status 1 when the database cannot be reached at startup.
    """

    cli_context: CLIContext = ctx.obj
    settings = cli_context.settings
    level = (log_level or settings.log_level).lower()
    configure_logging(level)

    try:
        check_connection(cli_context.engine)
    except DatabaseError as exc:
        logger.critical("Error connecting to database: %s", exc)
        console.print(f"[red]Error connecting to database {settings.database.describe()}[/red]")
        cli_context.engine.dispose()
        ctx.exit(1)
    logger.info("Connected to database successfully")

    app = create_app(settings, engine=cli_context.engine, clock=cli_context.clock)
    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("Server starting on %s:%d", bind_host, bind_port)
    try:
        uvicorn.run(app, host=bind_host, port=bind_port, log_level=level)
    finally:
        cli_context.engine.dispose()
