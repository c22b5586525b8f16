from __future__ import annotations

from typing import Optional, Pattern, Sequence, Tuple

from pydantic import BaseModel

from market_pulse.core.types import Direction, SentimentLevel
from market_pulse.modules.classify.patterns import NEGATIVE_PATTERNS, POSITIVE_PATTERNS

STRONG_THRESHOLD = 5
MILD_THRESHOLD = 2


class SentimentResult(BaseModel):
    score: int
    label: str
    level: SentimentLevel
    direction: Direction


def sentiment_score(
    text: Optional[str],
    patterns: Sequence[Tuple[Pattern[str], int]] = POSITIVE_PATTERNS + NEGATIVE_PATTERNS,
) -> int:
    if not text:
        return 0
    total = 0
    for pattern, weight in patterns:
        hits = sum(1 for _ in pattern.finditer(text))
        total += hits * weight
    return total


def label_for_score(score: int) -> SentimentResult:
    if score >= STRONG_THRESHOLD:
        return SentimentResult(score=score, label="Strong Bullish", level="high-positive", direction="up")
    if score >= MILD_THRESHOLD:
        return SentimentResult(score=score, label="Bullish", level="positive", direction="up")
    if score <= -STRONG_THRESHOLD:
        return SentimentResult(score=score, label="Strong Bearish", level="high-negative", direction="down")
    if score <= -MILD_THRESHOLD:
        return SentimentResult(score=score, label="Bearish", level="negative", direction="down")
    return SentimentResult(score=score, label="Neutral", level="neutral", direction="neutral")


def score_sentiment(text: Optional[str]) -> SentimentResult:
    return label_for_score(sentiment_score(text))
