"""Trading pair domain model"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TradingPair:
    """Market listed on the exchange pair endpoint"""

    ticker_id: str
    base: str
    target: str

    def __post_init__(self):
        if not self.ticker_id:
            raise ValueError("ticker_id cannot be empty")

    @property
    def display_name(self) -> str:
        return f"{self.base}/{self.target}"
