"""Technical indicators over plain numeric series.

None of these raise on short or empty input; each degrades to a documented
neutral value instead.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from market_pulse.core.types import Candle

RSI_PERIOD = 14
RSI_NEUTRAL = 50


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rsi(closes: Sequence[float], period: int = RSI_PERIOD) -> int:
    if period <= 0 or len(closes) < period + 1:
        return RSI_NEUTRAL
    window = list(closes[-(period + 1) :])
    gains = 0.0
    losses = 0.0
    for previous, current in zip(window, window[1:]):
        delta = current - previous
        if delta > 0:
            gains += delta
        elif delta < 0:
            losses -= delta
    avg_gain = gains / period
    avg_loss = losses / period
    if avg_loss == 0:
        return 100
    rs = avg_gain / avg_loss
    return round_half_up(100 - 100 / (1 + rs))


def vwap(candles: Sequence[Candle]) -> float:
    cumulative_pv = 0.0
    cumulative_volume = 0.0
    for candle in candles:
        volume = candle.volume or 0.0
        if volume <= 0:
            continue
        high = candle.high if candle.high is not None else candle.close
        low = candle.low if candle.low is not None else candle.close
        typical = (high + low + candle.close) / 3
        cumulative_pv += typical * volume
        cumulative_volume += volume
    if cumulative_volume == 0:
        return 0.0
    return cumulative_pv / cumulative_volume


def sma(values: Sequence[float], period: int) -> float:
    if not values:
        return 0.0
    if period <= 0 or len(values) < period:
        return float(values[-1])
    window = values[-period:]
    return sum(window) / period


def percent_change(current: float, reference: Optional[float]) -> float:
    if not reference:
        return 0.0
    return (current - reference) / reference * 100
