from __future__ import annotations

import json

import pytest
from click.testing import CliRunner
from rich.console import Console

from azerothcore_ah.interfaces.cli import CLIContext, cli
from azerothcore_ah.interfaces.cli import view as view_module
from conftest import LIVE_IDS_BY_EXPIRY, fixed_clock


@pytest.fixture(autouse=True)
def wide_console(monkeypatch) -> None:
    # Keep table cells on one line regardless of the terminal running the tests.
    monkeypatch.setattr(view_module, "console", Console(width=200))


@pytest.fixture
def cli_context(engine, settings) -> CLIContext:
    return CLIContext(settings=settings, engine=engine, clock=fixed_clock)


def _invoke(cli_context: CLIContext, *args: str):
    return CliRunner().invoke(cli, list(args), obj=cli_context)


def test_auctions_json_output(cli_context) -> None:
    result = _invoke(cli_context, "auctions", "--json-output")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["page"] == 1
    assert [a["id"] for a in payload["auctions"]] == LIVE_IDS_BY_EXPIRY


def test_auctions_table(cli_context) -> None:
    result = _invoke(cli_context, "auctions")

    assert result.exit_code == 0, result.output
    assert "Thunderfury" in result.output
    assert "Legendary" in result.output
    assert "Auctions (page 1)" in result.output


def test_auctions_empty_page(cli_context) -> None:
    result = _invoke(cli_context, "auctions", "--page", "9")

    assert result.exit_code == 0
    assert "No live auctions on page 9" in result.output


def test_search(cli_context) -> None:
    result = _invoke(cli_context, "search", "thrall", "--json-output")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["search"] == "thrall"
    assert [a["id"] for a in payload["auctions"]] == [7, 4]


def test_search_rejects_blank_term(cli_context) -> None:
    result = _invoke(cli_context, "search", "  ")

    assert result.exit_code == 2
    assert "Search term required" in result.output


def test_stats_text(cli_context) -> None:
    result = _invoke(cli_context, "stats")

    assert result.exit_code == 0, result.output
    assert "Live listings: 6" in result.output
    assert "Total buyout value: 1017g 67s 42c" in result.output
    assert "Listings with bids: 2" in result.output
    assert "Unique sellers: 4" in result.output


def test_sellers_limit(cli_context) -> None:
    result = _invoke(cli_context, "sellers", "--limit", "1", "--json-output")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert [s["name"] for s in payload["sellers"]] == ["Arthas"]


def test_sellers_table(cli_context) -> None:
    result = _invoke(cli_context, "sellers")

    assert result.exit_code == 0, result.output
    assert "Arthas" in result.output
    assert "1000g" in result.output


def test_bad_configuration_is_a_usage_error(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")

    result = CliRunner().invoke(cli, ["stats"])

    assert result.exit_code == 2
    assert "PORT must be an integer" in result.output
