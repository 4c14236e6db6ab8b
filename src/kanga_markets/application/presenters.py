"""Rich renderables for market lists and depth analysis"""

from rich.table import Table

from kanga_markets.analytics.formatters import (
    format_number,
    format_price,
    format_spread,
    format_timestamp,
    format_volume,
)
from kanga_markets.analytics.rag import (
    get_rag_description,
    get_rag_emoji,
    get_rag_recommendation,
)
from kanga_markets.analytics.spread import classify_spread_quality
from kanga_markets.domain.models import MarketRecord, SortDirection, SortSpec

_ARROWS = {SortDirection.ASC: "↑", SortDirection.DESC: "↓"}

_COLUMNS = (
    ("market", "Market", "left"),
    ("price", "Last Price", "right"),
    ("spread", "Spread", "right"),
    ("volume", "24h Volume", "right"),
    ("rag_status", "Liquidity", "left"),
)


def _header(field: str, title: str, chain: tuple[SortSpec, ...]) -> str:
    """Column title with direction arrow and priority badge when sorted"""
    for index, spec in enumerate(chain):
        if spec.field == field:
            badge = f"{index + 1}" if len(chain) > 1 else ""
            return f"{title} {_ARROWS[spec.direction]}{badge}"
    return title


def render_markets_table(
    records, sort_chain: tuple[SortSpec, ...] = ()
) -> Table:
    table = Table(title=f"Markets ({len(records)})")
    for field, title, justify in _COLUMNS:
        table.add_column(_header(field, title, sort_chain), justify=justify)

    for record in records:
        table.add_row(
            record.market,
            format_price(record.last_price),
            format_spread(record.spread),
            format_volume(record.volume_24h),
            f"{get_rag_emoji(record.rag_status)} "
            f"{get_rag_description(record.rag_status)}",
        )
    return table


def render_market_summary(record: MarketRecord) -> Table:
    table = Table(title=record.market, show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Highest Bid", format_price(record.highest_bid))
    table.add_row("Lowest Ask", format_price(record.lowest_ask))
    table.add_row(
        "Spread",
        f"{format_spread(record.spread, 2)} "
        f"({classify_spread_quality(record.spread)})",
    )
    table.add_row("Recommendation", get_rag_recommendation(record.rag_status))
    return table


def render_depth_table(result) -> Table:
    """Summarize a DepthResult"""
    analysis = result.analysis
    table = Table(title=f"Order Book {analysis.ticker_id}", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    def price_range(value) -> str:
        if value is None:
            return "N/A"
        return f"{format_price(value.min)} - {format_price(value.max)}"

    table.add_row("Captured", format_timestamp(analysis.timestamp))
    table.add_row("Bid Levels", str(analysis.bid_depth))
    table.add_row("Ask Levels", str(analysis.ask_depth))
    table.add_row("Total Bid Quantity", format_number(analysis.total_bid_quantity, 4))
    table.add_row("Total Ask Quantity", format_number(analysis.total_ask_quantity, 4))
    table.add_row("Bid Price Range", price_range(analysis.bid_price_range))
    table.add_row("Ask Price Range", price_range(analysis.ask_price_range))
    table.add_row("Spread at Depth", format_spread(analysis.spread_at_depth, 3))
    return table
