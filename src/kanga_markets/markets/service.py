"""Market data service

Owns the refresh cycle: fetches pairs and summaries concurrently, assembles
the record set and keeps the latest result. Also serves on-demand depth.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from kanga_markets.analytics.depth import analyze_order_book
from kanga_markets.domain.models import DepthAnalysis, DepthSnapshot, MarketRecord
from kanga_markets.infrastructure.exchange.protocols import MarketDataSource
from kanga_markets.shared.exceptions import UserInputError

from .assembler import assemble_market_records


@dataclass(frozen=True)
class DepthResult:
    """Depth snapshot together with its analysis"""

    snapshot: DepthSnapshot
    analysis: DepthAnalysis


class MarketDataService:
    """Refreshes and holds the current market record set"""

    def __init__(self, source: MarketDataSource) -> None:
        """Initialize service

        Args:
            source: Market data source (e.g. KangaAPIClient)
        """
        self._source = source
        self._generation = 0
        self.markets: tuple[MarketRecord, ...] = ()
        self.last_updated: datetime | None = None
        self.error: Exception | None = None

    async def refresh(self) -> tuple[MarketRecord, ...]:
        """Fetch pairs and summaries concurrently and rebuild the record set

        Either fetch failing fails the whole refresh; the previous record set
        is kept and the error is re-raised. When refreshes overlap, only the
        most recently started one updates the stored state.

        Returns:
            The freshly assembled records

        Raises:
            Whatever the source raised (TransportError,
            MarketDataValidationError, ...)
        """
        self._generation += 1
        generation = self._generation
        logger.info("Fetching market data...")

        pairs_task = asyncio.ensure_future(self._source.fetch_pairs())
        summaries_task = asyncio.ensure_future(self._source.fetch_summaries())
        try:
            pairs, summaries = await asyncio.gather(pairs_task, summaries_task)
        except Exception as e:
            for task in (pairs_task, summaries_task):
                task.cancel()
            # retrieve the outcome of the other leg
            await asyncio.gather(pairs_task, summaries_task, return_exceptions=True)
            if generation == self._generation:
                self.error = e
            logger.error(f"Market data refresh failed: {e}")
            raise

        logger.info(
            f"Fetched {len(pairs)} pairs and {len(summaries)} summaries"
        )
        records = assemble_market_records(pairs, summaries)

        if generation == self._generation:
            self.markets = records
            self.last_updated = datetime.now()
            self.error = None
        else:
            logger.debug("Discarding result of superseded refresh")

        return records

    async def fetch_depth(self, ticker_id: str) -> DepthResult:
        """Fetch and analyze the order book of one market

        Raises:
            UserInputError: If ticker_id is empty
        """
        if not ticker_id or not ticker_id.strip():
            raise UserInputError("Market ID is required")

        ticker_id = ticker_id.strip()
        logger.info(f"Fetching depth for {ticker_id}")

        try:
            snapshot = await self._source.fetch_depth(ticker_id)
        except Exception as e:
            logger.error(f"Depth fetch for {ticker_id} failed: {e}")
            raise

        analysis = analyze_order_book(snapshot)
        logger.info(
            f"Depth fetched for {ticker_id}: "
            f"{analysis.bid_depth} bids, {analysis.ask_depth} asks"
        )
        return DepthResult(snapshot=snapshot, analysis=analysis)
