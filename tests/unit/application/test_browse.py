"""Tests for the interactive browse session"""

import io

import pytest
from rich.console import Console

from kanga_markets.application.commands.base import BrowseCommand
from kanga_markets.application.commands.browse import BrowseSession, handle_browse
from kanga_markets.markets import (
    MarketDataService,
    MarketView,
    assemble_market_records,
)
from kanga_markets.shared.exceptions import TransportError


async def feed(*lines):
    for line in lines:
        yield line


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def service(fake_source) -> MarketDataService:
    return MarketDataService(fake_source)


def output(console: Console) -> str:
    return console.file.getvalue()


@pytest.mark.unit
class TestHandleBrowse:
    @pytest.mark.asyncio
    async def test_query_is_applied_at_end_of_input(self, service, console):
        code = await handle_browse(
            service,
            BrowseCommand(name="browse"),
            console,
            debounce_ms=0,
            lines=feed("eth\n"),
        )

        assert code == 0
        text = output(console)
        assert "Markets (3)" in text
        assert "Markets (1)" in text
        assert text.count("Markets (") == 2

    @pytest.mark.asyncio
    async def test_burst_renders_only_last_query(self, service, console):
        await handle_browse(
            service,
            BrowseCommand(name="browse"),
            console,
            debounce_ms=0,
            lines=feed("b\n", "bt\n", "btc\n"),
        )

        text = output(console)
        assert text.count("Markets (") == 2
        assert "Markets (1)" in text

    @pytest.mark.asyncio
    async def test_initial_query(self, service, console):
        await handle_browse(
            service,
            BrowseCommand(name="browse", query="pln"),
            console,
            lines=feed(),
        )
        assert "Markets (1)" in output(console)

    @pytest.mark.asyncio
    async def test_refresh_failure(self, service, fake_source, console):
        fake_source.summaries_error = TransportError("Network error")
        code = await handle_browse(
            service, BrowseCommand(name="browse"), console, lines=feed()
        )
        assert code == 1


@pytest.mark.unit
class TestBrowseSession:
    @pytest.fixture
    def session(self, service, fake_source, console) -> BrowseSession:
        service.markets = assemble_market_records(
            fake_source.pairs, fake_source.summaries
        )
        return BrowseSession(service, console, MarketView(), debounce_ms=0)

    @pytest.mark.asyncio
    async def test_sort_command(self, session, console):
        assert await session.handle_line(":sort spread\n") is True
        assert "Spread ↓2" in output(console)

    @pytest.mark.asyncio
    async def test_unknown_sort_field(self, session, console):
        assert await session.handle_line(":sort colour") is True
        assert output(console) == ""

    @pytest.mark.asyncio
    async def test_clear_command(self, session):
        await session.handle_line(":sort spread")
        await session.handle_line(":clear")
        assert [str(s.field) for s in session.view.sort_chain] == ["volume"]

    @pytest.mark.asyncio
    async def test_refresh_command(self, session, service, mocker):
        spy = mocker.spy(service, "refresh")
        await session.handle_line(":refresh")
        assert spy.call_count == 1

    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_session(self, session, fake_source):
        fake_source.pairs_error = TransportError("Network error")
        assert await session.handle_line(":refresh") is True

    @pytest.mark.asyncio
    async def test_quit_stops_reading(self, session, console):
        await session.run(feed(":q\n", "eth\n"))
        assert output(console).count("Markets (") == 1
        assert session.query == ""
