"""CLI interface for the auction house viewer."""

from .__main__ import cli
from .context import CLIContext, build_cli_context
from .serve import serve
from .view import auctions, search, sellers, stats

__all__ = [
    "CLIContext",
    "auctions",
    "build_cli_context",
    "cli",
    "search",
    "sellers",
    "serve",
    "stats",
]
