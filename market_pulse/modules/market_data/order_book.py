from __future__ import annotations

import random
from typing import List, Optional, Tuple

from market_pulse.core.contracts import RandomSource
from market_pulse.core.types import OrderBook, OrderBookLevel

BOOK_DEPTH = 12
SIZE_DECAY_PER_LEVEL = 0.08
MIN_SIZE_FACTOR = 0.1
SIZE_JITTER = (0.7, 1.3)
ORDERS_PER_LEVEL = (1, 15)
MIN_PRICE = 0.01


def tick_size(price: float) -> float:
    if price < 10:
        return 0.01
    if price < 100:
        return 0.05
    if price < 500:
        return 0.10
    return 0.25


def best_bid_ask(price: float) -> Tuple[float, float]:
    tick = tick_size(price)
    bid = max(MIN_PRICE, round(price - tick / 2, 2))
    ask = round(price + tick / 2, 2)
    if ask <= bid:
        ask = round(bid + tick, 2)
    return bid, ask


def _ladder(
    best: float,
    ref_size: float,
    step: float,
    rng: RandomSource,
    floor: float = MIN_PRICE,
) -> List[OrderBookLevel]:
    levels: List[OrderBookLevel] = []
    for idx in range(BOOK_DEPTH):
        factor = max(MIN_SIZE_FACTOR, 1 - idx * SIZE_DECAY_PER_LEVEL)
        size = ref_size * factor * rng.uniform(*SIZE_JITTER)
        levels.append(
            OrderBookLevel(
                price=max(floor, round(best + idx * step, 2)),
                size=max(1, int(round(size))),
                orders=rng.randint(*ORDERS_PER_LEVEL),
            )
        )
    return levels


def generate_order_book(
    best_bid: float,
    best_ask: float,
    ref_bid_size: float,
    ref_ask_size: float,
    rng: Optional[RandomSource] = None,
) -> OrderBook:
    """Build a simulated 12-level ladder on each side of the spread.

    Prices are one band tick apart and never drop below one cent, so the
    deepest bids of a sub-dime quote stack at the floor. Sizes and order
    counts are drawn from ``rng``. The book is display-only and is rebuilt on
    every call.
    """
    source = rng or random.Random()
    tick = tick_size(best_bid)
    bids = _ladder(best_bid, ref_bid_size, -tick, source)
    asks = _ladder(best_ask, ref_ask_size, tick, source)
    return OrderBook(
        bids=bids,
        asks=asks,
        total_bid_volume=sum(level.size for level in bids),
        total_ask_volume=sum(level.size for level in asks),
    )
