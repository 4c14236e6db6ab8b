"""Market record assembly

Joins the pair listing with summary quotes by ticker id and derives the
spread and RAG status for every market.
"""

from loguru import logger

from kanga_markets.analytics.rag import classify_rag
from kanga_markets.analytics.spread import calculate_spread
from kanga_markets.domain.models import MarketRecord, MarketSummary, TradingPair


def build_market_record(
    pair: TradingPair, summary: MarketSummary | None
) -> MarketRecord:
    """Build the record for one pair; a missing summary yields a red market."""
    bid = summary.bid if summary is not None else None
    ask = summary.ask if summary is not None else None
    spread = calculate_spread(bid, ask)

    return MarketRecord(
        ticker_id=pair.ticker_id,
        market=pair.display_name,
        base_symbol=pair.base,
        target_symbol=pair.target,
        highest_bid=bid,
        lowest_ask=ask,
        spread=spread,
        rag_status=classify_rag(spread),
        last_price=summary.last_price if summary is not None else 0.0,
        volume_24h=summary.base_volume if summary is not None else 0.0,
        high_24h=summary.high if summary is not None else None,
        low_24h=summary.low if summary is not None else None,
    )


def assemble_market_records(
    pairs: list[TradingPair], summaries: list[MarketSummary]
) -> tuple[MarketRecord, ...]:
    """Produce one record per pair, highest 24h volume first

    Args:
        pairs: Full pair listing
        summaries: Full summary listing (joined by ticker id, not position)

    Returns:
        Immutable tuple of records in baseline (volume descending) order
    """
    summary_map = {summary.ticker_id: summary for summary in summaries}

    records = [
        build_market_record(pair, summary_map.get(pair.ticker_id))
        for pair in pairs
    ]
    records.sort(key=lambda record: record.volume_24h, reverse=True)

    missing = sum(1 for pair in pairs if pair.ticker_id not in summary_map)
    if missing:
        logger.debug(f"{missing} pairs have no matching summary")

    logger.info(
        f"Assembled {len(records)} markets "
        f"({sum(1 for r in records if r.has_liquidity)} with liquidity)"
    )
    return tuple(records)
