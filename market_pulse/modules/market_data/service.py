from __future__ import annotations

import asyncio
import random
from datetime import datetime, timezone
from statistics import mean
from typing import Optional

from market_pulse.config import AppConfig
from market_pulse.core.contracts import ChartProvider, RandomSource
from market_pulse.core.registry import ProviderRegistry
from market_pulse.core.types import (
    ChartSnapshot,
    Indicators,
    Level2Snapshot,
    QuoteCheck,
    RecentCandle,
)
from market_pulse.infra.http.client import HttpClient
from market_pulse.modules.market_data.indicators import percent_change, rsi, sma, vwap
from market_pulse.modules.market_data.order_book import best_bid_ask, generate_order_book
from market_pulse.modules.market_data.providers.yahoo_chart_provider import YahooChartProvider
from market_pulse.modules.market_data.signal import compute_signal
from market_pulse.modules.market_data.symbol_mapper import normalize_symbol

MIN_REFERENCE_SIZE = 100
REFERENCE_SIZE_SHARE = 0.05


class MarketDataService:
    MODULE_NAME = "market_data"

    def __init__(
        self,
        config: AppConfig,
        registry: ProviderRegistry,
        client: Optional[HttpClient] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.config = config
        self.registry = registry
        self.client = client
        self.rng = rng or random.Random()
        self.registry.register_default(self.MODULE_NAME, "yahoo", self._build_yahoo)

    def _build_yahoo(self) -> YahooChartProvider:
        if self.client is None:
            raise RuntimeError("Yahoo chart provider requires an HttpClient.")
        return YahooChartProvider(
            client=self.client, base_url=self.config.market_data.chart_base_url
        )

    def _provider(self, provider_id: Optional[str] = None) -> ChartProvider:
        target = (
            provider_id or self.config.market_data.default_provider or ""
        ).strip() or "yahoo"
        return self.registry.resolve(self.MODULE_NAME, target)

    async def get_level2(self, symbol: str, provider_id: Optional[str] = None) -> Level2Snapshot:
        normalized = normalize_symbol(symbol)
        provider = self._provider(provider_id)
        settings = self.config.market_data
        # Both series are required: price/VWAP need intraday, RSI/SMA need daily.
        tasks = [
            asyncio.ensure_future(
                provider.get_chart(normalized, settings.intraday_interval, settings.intraday_range)
            ),
            asyncio.ensure_future(
                provider.get_chart(normalized, settings.history_interval, settings.history_range)
            ),
        ]
        try:
            intraday, daily = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return self.build_level2(intraday=intraday, daily=daily)

    async def check_quote(self, symbol: str, provider_id: Optional[str] = None) -> QuoteCheck:
        normalized = normalize_symbol(symbol)
        provider = self._provider(provider_id)
        chart = await provider.get_chart(normalized, "1d", "5d")
        # chartPreviousClose on a multi-day range predates the window; the
        # prior daily close is the day-change reference.
        previous = _previous_close_from_candles(chart) or chart.previous_close
        return QuoteCheck(
            symbol=chart.symbol,
            name=chart.name,
            price=round(chart.price, 2),
            change_percent=round(percent_change(chart.price, previous), 2),
        )

    def build_level2(self, intraday: ChartSnapshot, daily: ChartSnapshot) -> Level2Snapshot:
        price = intraday.price
        previous = intraday.previous_close or _previous_close_from_candles(daily)
        change = price - previous if previous else 0.0
        change_pct = percent_change(price, previous)

        daily_closes = daily.closes()
        indicators = Indicators(
            rsi=rsi(daily_closes),
            vwap=round(vwap(intraday.candles), 2),
            sma9=round(sma(daily_closes, 9), 2),
            sma20=round(sma(daily_closes, 20), 2),
        )

        bid, ask = best_bid_ask(price)
        ref_size = self._reference_size(intraday)
        book = generate_order_book(
            best_bid=bid,
            best_ask=ask,
            ref_bid_size=ref_size * self.rng.uniform(0.8, 1.2),
            ref_ask_size=ref_size * self.rng.uniform(0.8, 1.2),
            rng=self.rng,
        )
        signal = compute_signal(
            rsi=indicators.rsi,
            vwap=indicators.vwap,
            price=price,
            bid_volume=book.total_bid_volume,
            ask_volume=book.total_ask_volume,
            day_change_percent=change_pct,
            sma20=indicators.sma20,
        )

        daily_volumes = [candle.volume for candle in daily.candles if candle.volume]
        intraday_volume = sum(candle.volume for candle in intraday.candles)
        first_open = next(
            (candle.open for candle in intraday.candles if candle.open is not None), None
        )
        spread = round(ask - bid, 2)
        recent = intraday.candles[-self.config.market_data.recent_candles :]
        return Level2Snapshot(
            symbol=intraday.symbol,
            name=intraday.name,
            price=round(price, 2),
            bid=bid,
            ask=ask,
            spread=spread,
            spread_pct=round(spread / price * 100, 3) if price else 0.0,
            change=round(change, 2),
            change_pct=round(change_pct, 2),
            volume=intraday.regular_volume or intraday_volume,
            avg_volume=round(mean(daily_volumes)) if daily_volumes else 0.0,
            open=first_open,
            prev_close=previous,
            day_low=intraday.day_low,
            day_high=intraday.day_high,
            week52_low=intraday.week52_low,
            week52_high=intraday.week52_high,
            bids=book.bids,
            asks=book.asks,
            total_bid_vol=book.total_bid_volume,
            total_ask_vol=book.total_ask_volume,
            indicators=indicators,
            signal=signal,
            candles=[RecentCandle(t=c.ts, c=c.close, v=c.volume) for c in recent],
            updated_at=datetime.now(timezone.utc),
        )

    @staticmethod
    def _reference_size(intraday: ChartSnapshot) -> float:
        volumes = [candle.volume for candle in intraday.candles if candle.volume]
        if not volumes:
            return float(MIN_REFERENCE_SIZE)
        return max(float(MIN_REFERENCE_SIZE), mean(volumes) * REFERENCE_SIZE_SHARE)


def _previous_close_from_candles(chart: ChartSnapshot) -> Optional[float]:
    closes = chart.closes()
    if len(closes) >= 2:
        return closes[-2]
    return None
