import unittest

from market_pulse.modules.market_data.signal import action_for_score, compute_signal


class SignalEngineTest(unittest.TestCase):
    def test_oversold_below_vwap_with_bid_pressure(self):
        signal = compute_signal(
            rsi=25,
            vwap=100,
            price=98,
            bid_volume=700,
            ask_volume=300,
            day_change_percent=0.5,
            sma20=99,
        )
        self.assertEqual(signal.action, "STRONG BUY")
        self.assertEqual(signal.confidence, "High")
        self.assertEqual(signal.color, "strong-buy")
        self.assertEqual(signal.score, 5)
        self.assertEqual(len(signal.reasons), 3)
        self.assertTrue(signal.reasons[0].startswith("RSI 25"))
        self.assertEqual(signal.reasons[1], "Price below VWAP")
        self.assertEqual(signal.reasons[2], "Strong bid pressure (70% bids)")

    def test_every_bearish_rule(self):
        signal = compute_signal(
            rsi=75,
            vwap=100,
            price=101,
            bid_volume=300,
            ask_volume=700,
            day_change_percent=2.0,
            sma20=95,
        )
        self.assertEqual(signal.score, -7)
        self.assertEqual(signal.action, "STRONG SELL")
        self.assertEqual(len(signal.reasons), 5)

    def test_quiet_market_holds(self):
        signal = compute_signal(
            rsi=50,
            vwap=100,
            price=100,
            bid_volume=500,
            ask_volume=500,
            day_change_percent=0.0,
            sma20=100,
        )
        self.assertEqual(signal.action, "HOLD")
        self.assertEqual(signal.confidence, "Low")
        self.assertEqual(signal.score, 0)
        self.assertEqual(signal.reasons, [])

    def test_missing_references_contribute_nothing(self):
        signal = compute_signal(
            rsi=50,
            vwap=0,
            price=100,
            bid_volume=0,
            ask_volume=0,
            day_change_percent=0.0,
            sma20=0,
        )
        self.assertEqual(signal.score, 0)
        self.assertEqual(signal.reasons, [])

    def test_rsi_boundaries(self):
        cases = {29: 2, 30: 1, 44: 1, 45: 0, 54: 0, 55: -1, 70: -1, 71: -2}
        for value, expected in cases.items():
            with self.subTest(rsi=value):
                signal = compute_signal(value, 0, 100, 0, 0, 0.0, 0)
                self.assertEqual(signal.score, expected)

    def test_pressure_boundaries(self):
        cases = [((61, 39), 2), ((52, 48), 1), ((50, 50), 0), ((48, 52), -1), ((39, 61), -2)]
        for (bids, asks), expected in cases:
            with self.subTest(bids=bids, asks=asks):
                signal = compute_signal(50, 0, 100, bids, asks, 0.0, 0)
                self.assertEqual(signal.score, expected)

    def test_day_change_rule(self):
        self.assertEqual(compute_signal(50, 0, 100, 0, 0, 1.6, 0).score, -1)
        self.assertEqual(compute_signal(50, 0, 100, 0, 0, -1.6, 0).score, 1)
        self.assertEqual(compute_signal(50, 0, 100, 0, 0, 1.5, 0).score, 0)

    def test_action_mapping(self):
        self.assertEqual(action_for_score(3), ("STRONG BUY", "High", "strong-buy"))
        self.assertEqual(action_for_score(1), ("BUY", "Medium", "buy"))
        self.assertEqual(action_for_score(0), ("HOLD", "Low", "hold"))
        self.assertEqual(action_for_score(-1), ("SELL", "Medium", "sell"))
        self.assertEqual(action_for_score(-3), ("STRONG SELL", "High", "strong-sell"))


if __name__ == "__main__":
    unittest.main()
