"""종목 관련 모델."""

import datetime
from typing import Self

from pydantic import model_validator

from .types import Price, Ticker, Volume, WireModel


class Quote(WireModel):
    """현재가 스냅샷 — GET /api/stock/{ticker} 응답."""

    symbol: Ticker
    name: str
    current_price: Price
    change: float = 0.0
    change_percent: float = 0.0
    volume: Volume = 0
    market_cap: str = ""  # "512B" 형식 (표시용 문자열)
    high_52_week: Price = 0.0
    low_52_week: Price = 0.0
    pe_ratio: float = 0.0
    dividend_yield: float = 0.0


class HistoricalBar(WireModel):
    """일별 OHLCV."""

    date: datetime.date
    open: Price
    high: Price
    low: Price
    close: Price
    volume: Volume
    adjusted_close: Price

    @model_validator(mode="after")
    def check_range_brackets_body(self) -> Self:
        if self.high < max(self.open, self.close):
            raise ValueError(f"high({self.high:.2f}) < max(open, close) on {self.date}")
        if self.low > min(self.open, self.close):
            raise ValueError(f"low({self.low:.2f}) > min(open, close) on {self.date}")
        return self
