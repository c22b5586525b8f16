"""First-match-wins tier classifiers for deals and world news."""

from __future__ import annotations

import re
from typing import Optional, Pattern, Sequence, Tuple

from pydantic import BaseModel

from market_pulse.modules.classify.patterns import (
    DEAL_TIERS,
    DEFAULT_DEAL_TIER,
    DEFAULT_SEVERITY,
    SEVERITY_TIERS,
)

TierTable = Sequence[Tuple[str, str, Sequence[Pattern[str]]]]

DEAL_RANK = {"hot": 0, "great": 1, "good": 2, "regular": 3}
SEVERITY_RANK = {"critical": 0, "high": 1, "medium": 2, "low": 3}

_PERCENT_OFF = re.compile(r"\b(\d{1,3})\s*%\s*off\b", re.IGNORECASE)
_AMOUNT_OFF = re.compile(r"\$\s?(\d+(?:\.\d{1,2})?)\s*off\b", re.IGNORECASE)


class TierResult(BaseModel):
    tier: str
    label: str


def first_matching_tier(
    text: Optional[str],
    table: TierTable,
    default: Tuple[str, str],
) -> TierResult:
    if text:
        for tier, label, patterns in table:
            if any(pattern.search(text) for pattern in patterns):
                return TierResult(tier=tier, label=label)
    return TierResult(tier=default[0], label=default[1])


def classify_deal(text: Optional[str]) -> TierResult:
    return first_matching_tier(text, DEAL_TIERS, DEFAULT_DEAL_TIER)


def classify_severity(text: Optional[str]) -> TierResult:
    return first_matching_tier(text, SEVERITY_TIERS, DEFAULT_SEVERITY)


def extract_discount(text: Optional[str]) -> str:
    if not text:
        return ""
    percents = [int(value) for value in _PERCENT_OFF.findall(text) if 0 < int(value) <= 100]
    if percents:
        return f"{max(percents)}% OFF"
    amounts = [float(value) for value in _AMOUNT_OFF.findall(text)]
    if amounts:
        best = max(amounts)
        if best.is_integer():
            return f"${int(best)} OFF"
        return f"${best:.2f} OFF"
    return ""
