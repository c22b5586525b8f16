from __future__ import annotations

import asyncio
import random
import unittest

from market_pulse.config import AppConfig, MarketDataConfig
from market_pulse.core.errors import UpstreamError, UpstreamNotFoundError, ValidationError
from market_pulse.core.registry import ProviderRegistry
from market_pulse.core.types import Candle, ChartSnapshot
from market_pulse.modules.market_data.service import MarketDataService


def _intraday(symbol: str) -> ChartSnapshot:
    candles = [
        Candle(ts=1700000000 + idx * 300, open=99.5, high=100.5, low=99.0, close=100.0, volume=1000)
        for idx in range(30)
    ]
    return ChartSnapshot(
        symbol=symbol,
        name="Example Corp",
        price=100.0,
        previous_close=98.0,
        day_high=100.5,
        day_low=99.0,
        week52_high=120.0,
        week52_low=70.0,
        regular_volume=30000,
        candles=candles,
    )


def _daily(symbol: str) -> ChartSnapshot:
    candles = [
        Candle(ts=1690000000 + idx * 86400, close=float(80 + idx), volume=50000)
        for idx in range(30)
    ]
    return ChartSnapshot(symbol=symbol, name="Example Corp", price=109.0, candles=candles)


class _FakeChartProvider:
    provider_id = "fake"

    def __init__(self, fail_on_interval=None, error=None) -> None:
        self.fail_on_interval = fail_on_interval
        self.error = error or UpstreamError("provider down")
        self.calls = []

    async def get_chart(self, symbol, interval, range_):
        self.calls.append((symbol, interval, range_))
        if interval == self.fail_on_interval:
            raise self.error
        if interval == "5m":
            return _intraday(symbol)
        if range_ == "5d":
            return ChartSnapshot(symbol=symbol, name="Example Corp", price=100.0, previous_close=95.0)
        return _daily(symbol)


def _service(provider: _FakeChartProvider) -> MarketDataService:
    config = AppConfig(market_data=MarketDataConfig(default_provider="fake"))
    registry = ProviderRegistry()
    registry.register(MarketDataService.MODULE_NAME, "fake", lambda: provider)
    return MarketDataService(config=config, registry=registry, rng=random.Random(11))


class MarketDataServiceLevel2Test(unittest.IsolatedAsyncioTestCase):
    async def test_level2_combines_quote_indicators_book_and_signal(self):
        provider = _FakeChartProvider()
        snapshot = await _service(provider).get_level2("exmp")

        self.assertEqual(snapshot.symbol, "EXMP")
        self.assertEqual(snapshot.price, 100.0)
        self.assertEqual(snapshot.prev_close, 98.0)
        self.assertEqual(snapshot.change, 2.0)
        self.assertEqual(snapshot.change_pct, 2.04)
        self.assertLess(snapshot.bid, snapshot.price)
        self.assertGreater(snapshot.ask, snapshot.price)
        self.assertEqual(snapshot.spread, round(snapshot.ask - snapshot.bid, 2))
        self.assertEqual(len(snapshot.bids), 12)
        self.assertEqual(len(snapshot.asks), 12)
        self.assertEqual(snapshot.total_bid_vol, sum(level.size for level in snapshot.bids))
        self.assertEqual(snapshot.indicators.rsi, 100)
        self.assertEqual(snapshot.indicators.sma20, 99.5)
        self.assertEqual(snapshot.indicators.sma9, 105.0)
        self.assertAlmostEqual(snapshot.indicators.vwap, 99.83, places=2)
        self.assertIn(snapshot.signal.action, {"STRONG BUY", "BUY", "HOLD", "SELL", "STRONG SELL"})
        self.assertTrue(snapshot.signal.reasons[0].startswith("RSI 100"))
        self.assertEqual(len(snapshot.candles), 30)
        self.assertEqual(snapshot.avg_volume, 50000)
        self.assertEqual(snapshot.open, 99.5)
        self.assertIsNotNone(snapshot.updated_at.tzinfo)
        self.assertEqual(
            sorted(call[1:] for call in provider.calls),
            [("1d", "3mo"), ("5m", "1d")],
        )

    async def test_level2_serializes_with_camel_case_keys(self):
        snapshot = await _service(_FakeChartProvider()).get_level2("EXMP")
        payload = snapshot.model_dump(mode="json", by_alias=True)
        for key in ("spreadPct", "changePct", "totalBidVol", "totalAskVol", "prevClose", "week52High", "updatedAt"):
            self.assertIn(key, payload)
        self.assertEqual(set(payload["candles"][0]), {"t", "c", "v"})

    async def test_either_chart_failing_fails_the_snapshot(self):
        for interval in ("5m", "1d"):
            with self.subTest(interval=interval):
                with self.assertRaises(UpstreamError):
                    await _service(_FakeChartProvider(fail_on_interval=interval)).get_level2("EXMP")

    async def test_unknown_symbol_propagates_not_found(self):
        provider = _FakeChartProvider(fail_on_interval="5m", error=UpstreamNotFoundError("Symbol not found: ZZZZ"))
        with self.assertRaises(UpstreamNotFoundError):
            await _service(provider).get_level2("ZZZZ")

    async def test_malformed_symbol_is_rejected_before_fetching(self):
        provider = _FakeChartProvider()
        with self.assertRaises(ValidationError):
            await _service(provider).get_level2("NOT A SYMBOL!")
        self.assertEqual(provider.calls, [])

    async def test_registered_yahoo_provider_is_not_replaced(self):
        provider = _FakeChartProvider()
        registry = ProviderRegistry()
        registry.register(MarketDataService.MODULE_NAME, "yahoo", lambda: provider)
        service = MarketDataService(config=AppConfig(), registry=registry, rng=random.Random(3))

        await service.get_level2("EXMP")
        self.assertEqual(len(provider.calls), 2)


class _SlowDailyProvider:
    provider_id = "fake"

    def __init__(self) -> None:
        self.daily_cancelled = False

    async def get_chart(self, symbol, interval, range_):
        if interval == "5m":
            raise UpstreamError("intraday request failed")
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            self.daily_cancelled = True
            raise
        return _daily(symbol)


class MarketDataServiceFailFastTest(unittest.IsolatedAsyncioTestCase):
    async def test_failed_chart_cancels_the_other_request(self):
        provider = _SlowDailyProvider()
        with self.assertRaises(UpstreamError):
            await asyncio.wait_for(_service(provider).get_level2("EXMP"), timeout=5)
        self.assertTrue(provider.daily_cancelled)


class MarketDataServiceQuoteTest(unittest.IsolatedAsyncioTestCase):
    async def test_check_quote(self):
        provider = _FakeChartProvider()
        result = await _service(provider).check_quote(" aapl ")

        self.assertEqual(result.symbol, "AAPL")
        self.assertEqual(result.price, 100.0)
        self.assertEqual(result.change_percent, 5.26)
        self.assertEqual(provider.calls, [("AAPL", "1d", "5d")])

    async def test_check_quote_uses_prior_daily_close_over_window_reference(self):
        class _WindowProvider:
            provider_id = "fake"

            async def get_chart(self, symbol, interval, range_):
                closes = [90.0, 92.0, 94.0, 96.0, 100.0]
                return ChartSnapshot(
                    symbol=symbol,
                    name="Example Corp",
                    price=100.0,
                    previous_close=88.0,
                    candles=[
                        Candle(ts=1700000000 + idx * 86400, close=close, volume=1000)
                        for idx, close in enumerate(closes)
                    ],
                )

        result = await _service(_WindowProvider()).check_quote("EXMP")
        self.assertEqual(result.change_percent, 4.17)


if __name__ == "__main__":
    unittest.main()
