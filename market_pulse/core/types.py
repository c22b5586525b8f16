from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SentimentLevel = Literal["high-positive", "positive", "neutral", "negative", "high-negative"]
Direction = Literal["up", "down", "neutral"]
DealTier = Literal["hot", "great", "good", "regular"]
Severity = Literal["critical", "high", "medium", "low"]
SignalAction = Literal["STRONG BUY", "BUY", "HOLD", "SELL", "STRONG SELL"]
SignalConfidence = Literal["High", "Medium", "Low"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RawFeedItem(CamelModel):
    id: str
    title: str
    description: str = ""
    link: str = ""
    published_at: datetime
    source: str


class MarketNewsItem(RawFeedItem):
    score: int
    label: str
    level: SentimentLevel
    direction: Direction


class DealItem(RawFeedItem):
    category: str
    category_icon: str
    discount: str = ""
    deal: DealTier
    deal_label: str


class WorldNewsItem(RawFeedItem):
    category: str
    severity: Severity
    severity_label: str


class Candle(CamelModel):
    ts: int
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: float
    volume: float = 0.0


class ChartSnapshot(CamelModel):
    symbol: str
    name: str = ""
    currency: str = ""
    price: float
    previous_close: Optional[float] = None
    day_high: Optional[float] = None
    day_low: Optional[float] = None
    week52_high: Optional[float] = None
    week52_low: Optional[float] = None
    regular_volume: Optional[float] = None
    candles: List[Candle] = Field(default_factory=list)

    def closes(self) -> List[float]:
        return [candle.close for candle in self.candles]


class Indicators(CamelModel):
    rsi: int
    vwap: float
    sma9: float
    sma20: float


class OrderBookLevel(CamelModel):
    price: float
    size: int
    orders: int


class OrderBook(CamelModel):
    bids: List[OrderBookLevel]
    asks: List[OrderBookLevel]
    total_bid_volume: int
    total_ask_volume: int


class Signal(CamelModel):
    action: SignalAction
    confidence: SignalConfidence
    color: str
    score: int
    reasons: List[str] = Field(default_factory=list)


class RecentCandle(CamelModel):
    t: int
    c: float
    v: float


class Level2Snapshot(CamelModel):
    symbol: str
    name: str
    price: float
    bid: float
    ask: float
    spread: float
    spread_pct: float
    change: float
    change_pct: float
    volume: float
    avg_volume: float
    open: Optional[float] = None
    prev_close: Optional[float] = None
    day_low: Optional[float] = None
    day_high: Optional[float] = None
    week52_low: Optional[float] = None
    week52_high: Optional[float] = None
    bids: List[OrderBookLevel]
    asks: List[OrderBookLevel]
    total_bid_vol: int
    total_ask_vol: int
    indicators: Indicators
    signal: Signal
    candles: List[RecentCandle] = Field(default_factory=list)
    updated_at: datetime


class QuoteCheck(CamelModel):
    symbol: str
    name: str
    price: float
    change_percent: float
