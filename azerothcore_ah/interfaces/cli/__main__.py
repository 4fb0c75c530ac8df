"""Entry point for the auction house viewer CLI.

``python -m azerothcore_ah.interfaces.cli`` or the ``azerothcore-ah``
console script.
"""

from __future__ import annotations

import click

from azerothcore_ah.infrastructure.db import ConfigurationError

from .context import CLIContext, build_cli_context
from .serve import serve
from .view import auctions, search, sellers, stats


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Load environment variables from this file (default: ./.env if present).",
)
@click.pass_context
def cli(ctx: click.Context, env_file: str | None) -> None:
    """AzerothCore auction house viewer."""
    if isinstance(ctx.obj, CLIContext):
        return
    try:
        ctx.obj = build_cli_context(env_file)
    except ConfigurationError as exc:
        raise click.UsageError(str(exc), ctx=ctx) from exc


cli.add_command(serve)
cli.add_command(auctions)
cli.add_command(search)
cli.add_command(stats)
cli.add_command(sellers)


if __name__ == "__main__":
    cli()
