import random
import unittest

from market_pulse.modules.market_data.order_book import (
    BOOK_DEPTH,
    best_bid_ask,
    generate_order_book,
    tick_size,
)


class _FixedRandom:
    def uniform(self, a, b):
        return 1.0

    def randint(self, a, b):
        return a


class TickSizeTest(unittest.TestCase):
    def test_price_bands(self):
        self.assertEqual(tick_size(5), 0.01)
        self.assertEqual(tick_size(9.99), 0.01)
        self.assertEqual(tick_size(10), 0.05)
        self.assertEqual(tick_size(99.99), 0.05)
        self.assertEqual(tick_size(100), 0.10)
        self.assertEqual(tick_size(499.99), 0.10)
        self.assertEqual(tick_size(500), 0.25)

    def test_best_bid_ask_straddle_price(self):
        for price in (5.37, 42.0, 187.3, 912.0):
            with self.subTest(price=price):
                bid, ask = best_bid_ask(price)
                self.assertLess(bid, ask)
                self.assertLessEqual(bid, price)
                self.assertGreaterEqual(ask, price)


class OrderBookTest(unittest.TestCase):
    def test_levels_follow_band_tick(self):
        for price, tick in ((5.37, 0.01), (42.0, 0.05), (187.3, 0.10), (912.0, 0.25)):
            with self.subTest(price=price):
                bid, ask = best_bid_ask(price)
                book = generate_order_book(bid, ask, 5000, 5000, rng=random.Random(7))

                self.assertEqual(len(book.bids), BOOK_DEPTH)
                self.assertEqual(len(book.asks), BOOK_DEPTH)
                for idx, level in enumerate(book.bids):
                    self.assertAlmostEqual(level.price, round(bid - idx * tick, 2), places=6)
                for idx, level in enumerate(book.asks):
                    self.assertAlmostEqual(level.price, round(ask + idx * tick, 2), places=6)
                self.assertLess(book.bids[0].price, book.asks[0].price)

    def test_sizes_orders_and_totals(self):
        book = generate_order_book(99.95, 100.0, 2000, 1000, rng=random.Random(3))
        for level in book.bids + book.asks:
            self.assertGreaterEqual(level.size, 1)
            self.assertGreaterEqual(level.orders, 1)
            self.assertLessEqual(level.orders, 15)
        self.assertEqual(book.total_bid_volume, sum(level.size for level in book.bids))
        self.assertEqual(book.total_ask_volume, sum(level.size for level in book.asks))

    def test_size_decays_with_depth(self):
        book = generate_order_book(49.95, 50.0, 1000, 1000, rng=_FixedRandom())
        self.assertEqual(book.bids[0].size, 1000)
        self.assertEqual(book.bids[1].size, 920)
        self.assertEqual(book.bids[11].size, 120)
        self.assertEqual(book.asks[0].orders, 1)

    def test_tiny_reference_size_still_positive(self):
        book = generate_order_book(1.00, 1.01, 0.1, 0.1, rng=random.Random(1))
        self.assertTrue(all(level.size >= 1 for level in book.bids + book.asks))

    def test_sub_dime_quote_never_prices_bids_below_a_cent(self):
        bid, ask = best_bid_ask(0.05)
        book = generate_order_book(bid, ask, 5000, 5000, rng=random.Random(5))

        prices = [level.price for level in book.bids]
        self.assertEqual(len(prices), BOOK_DEPTH)
        self.assertTrue(all(price >= 0.01 for price in prices), prices)
        self.assertEqual(prices, sorted(prices, reverse=True))
        self.assertEqual(prices[-1], 0.01)
        self.assertGreater(book.asks[0].price, prices[0])

    def test_near_zero_price_keeps_positive_spread(self):
        bid, ask = best_bid_ask(0.001)
        self.assertEqual(bid, 0.01)
        self.assertGreater(ask, bid)

    def test_same_seed_same_book(self):
        first = generate_order_book(20.0, 20.05, 800, 800, rng=random.Random(42))
        second = generate_order_book(20.0, 20.05, 800, 800, rng=random.Random(42))
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
