"""Rule-based trading signal.

Each rule adds to a running integer score and, when it fires, appends one
human-readable reason. Rules run in a fixed order and the reasons list keeps
that order. The final score maps onto five actions.
"""

from __future__ import annotations

from typing import List, Tuple

from market_pulse.core.types import Signal

VWAP_BAND = 0.002
SMA_BAND = 0.03
DAY_MOVE_PERCENT = 1.5


def _rsi_rule(rsi: float) -> Tuple[int, str]:
    if rsi < 30:
        return 2, f"RSI {rsi:g} oversold"
    if rsi < 45:
        return 1, f"RSI {rsi:g} mild oversold"
    if rsi > 70:
        return -2, f"RSI {rsi:g} overbought"
    if rsi >= 55:
        return -1, f"RSI {rsi:g} mild overbought"
    return 0, ""


def _vwap_rule(price: float, vwap: float) -> Tuple[int, str]:
    if vwap <= 0:
        return 0, ""
    if price > vwap * (1 + VWAP_BAND):
        return -1, "Price above VWAP"
    if price < vwap * (1 - VWAP_BAND):
        return 1, "Price below VWAP"
    return 0, ""


def _pressure_rule(bid_volume: float, ask_volume: float) -> Tuple[int, str]:
    total = bid_volume + ask_volume
    if total <= 0:
        return 0, ""
    ratio = bid_volume / total
    pct = round(ratio * 100)
    if ratio > 0.60:
        return 2, f"Strong bid pressure ({pct}% bids)"
    if ratio >= 0.52:
        return 1, f"Bid pressure ({pct}% bids)"
    if ratio < 0.40:
        return -2, f"Strong ask pressure ({100 - pct}% asks)"
    if ratio <= 0.48:
        return -1, f"Ask pressure ({100 - pct}% asks)"
    return 0, ""


def _day_change_rule(day_change_percent: float) -> Tuple[int, str]:
    if day_change_percent > DAY_MOVE_PERCENT:
        return -1, f"Extended +{day_change_percent:.2f}% on the day"
    if day_change_percent < -DAY_MOVE_PERCENT:
        return 1, f"Pullback {day_change_percent:.2f}% on the day"
    return 0, ""


def _sma_rule(price: float, sma20: float) -> Tuple[int, str]:
    if sma20 <= 0:
        return 0, ""
    if price > sma20 * (1 + SMA_BAND):
        return -1, "Stretched above SMA20"
    if price < sma20 * (1 - SMA_BAND):
        return 1, "Discount to SMA20"
    return 0, ""


def action_for_score(score: int) -> Tuple[str, str, str]:
    if score >= 3:
        return "STRONG BUY", "High", "strong-buy"
    if score >= 1:
        return "BUY", "Medium", "buy"
    if score <= -3:
        return "STRONG SELL", "High", "strong-sell"
    if score <= -1:
        return "SELL", "Medium", "sell"
    return "HOLD", "Low", "hold"


def compute_signal(
    rsi: float,
    vwap: float,
    price: float,
    bid_volume: float,
    ask_volume: float,
    day_change_percent: float,
    sma20: float,
) -> Signal:
    rules = (
        _rsi_rule(rsi),
        _vwap_rule(price, vwap),
        _pressure_rule(bid_volume, ask_volume),
        _day_change_rule(day_change_percent),
        _sma_rule(price, sma20),
    )
    score = 0
    reasons: List[str] = []
    for delta, reason in rules:
        if delta == 0:
            continue
        score += delta
        reasons.append(reason)
    action, confidence, color = action_for_score(score)
    return Signal(
        action=action,
        confidence=confidence,
        color=color,
        score=score,
        reasons=reasons,
    )
