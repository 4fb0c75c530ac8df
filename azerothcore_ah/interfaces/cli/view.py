"""Terminal views of the live auction house."""

from __future__ import annotations

import json

import click
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from azerothcore_ah.domain.models import format_money, quality_name
from azerothcore_ah.interfaces.cli.context import CLIContext
from azerothcore_ah.services.auctions import EmptySearchTermError
from azerothcore_ah.services.dto import AuctionListingView

console = Console()

json_output_option = click.option(
    "--json-output", is_flag=True, help="Output the results as JSON."
)


def _echo_json(payload: BaseModel) -> None:
    click.echo(json.dumps(payload.model_dump(mode="json"), indent=2))


def _listing_table(title: str, listings: list[AuctionListingView]) -> Table:
    table = Table(title=title)
    table.add_column("Item", style="bold")
    table.add_column("Quality")
    table.add_column("Level", justify="right")
    table.add_column("Qty", justify="right")
    table.add_column("Seller")
    table.add_column("Bid", justify="right")
    table.add_column("Buyout", justify="right")
    table.add_column("Time Left", justify="right")
    for listing in listings:
        buyout = (
            format_money(listing.buyout_price) if listing.buyout_price > 0 else "No Buyout"
        )
        table.add_row(
            listing.item_name,
            quality_name(listing.quality),
            str(listing.item_level),
            str(listing.count),
            listing.owner_name,
            format_money(listing.last_bid or listing.start_bid),
            buyout,
            listing.time_left,
        )
    return table


@click.command()
@click.option("--page", default="1", show_default=True, help="Page number (50 listings per page).")
@json_output_option
@click.pass_obj
def auctions(cli_context: CLIContext, page: str, json_output: bool) -> None:
    """Show one page of live auctions, soonest-expiring first."""

    with cli_context.auction_view_service() as service:
        result = service.list_page(page)

    if json_output:
        _echo_json(result)
        return

    if not result.auctions:
        console.print(f"[yellow]No live auctions on page {result.page}.[/yellow]")
        return
    console.print(_listing_table(f"Auctions (page {result.page})", result.auctions))


@click.command()
@click.argument("term")
@json_output_option
@click.pass_obj
def search(cli_context: CLIContext, term: str, json_output: bool) -> None:
    """Search live auctions by item or seller name."""

    try:
        with cli_context.auction_view_service() as service:
            result = service.search(term)
    except EmptySearchTermError as exc:
        raise click.BadParameter(str(exc), param_hint="TERM") from exc

    if json_output:
        _echo_json(result)
        return

    if not result.auctions:
        console.print(f"[yellow]No live auctions match '{term}'.[/yellow]")
        return
    console.print(_listing_table(f"Search: {term}", result.auctions))


@click.command()
@json_output_option
@click.pass_obj
def stats(cli_context: CLIContext, json_output: bool) -> None:
    """Show auction house summary statistics."""

    with cli_context.auction_view_service() as service:
        result = service.stats()

    if json_output:
        _echo_json(result)
        return

    click.echo("Auction house summary:")
    click.echo(f"  Live listings: {result.total_items}")
    click.echo(f"  Total buyout value: {format_money(result.total_value)}")
    click.echo(f"  Listings with bids: {result.active_bids}")
    click.echo(f"  Unique sellers: {result.unique_owners}")
    click.echo(f"  Unique items: {result.unique_items}")


@click.command()
@click.option(
    "--limit",
    type=int,
    default=0,
    show_default=True,
    help="Maximum number of sellers to display (0 for no limit).",
)
@json_output_option
@click.pass_obj
def sellers(cli_context: CLIContext, limit: int, json_output: bool) -> None:
    """Show sellers ranked by number of live listings."""

    with cli_context.auction_view_service() as service:
        result = service.sellers()

    if limit > 0:
        result.sellers = result.sellers[:limit]

    if json_output:
        _echo_json(result)
        return

    if not result.sellers:
        console.print("[yellow]No sellers found.[/yellow]")
        return

    table = Table(title="Sellers")
    table.add_column("Seller", style="bold")
    table.add_column("Auctions", justify="right")
    table.add_column("Total Value", justify="right")
    table.add_column("Unique Items", justify="right")
    for seller in result.sellers:
        table.add_row(
            seller.name,
            str(seller.total_auctions),
            format_money(seller.total_value),
            str(seller.unique_items),
        )
    console.print(table)
