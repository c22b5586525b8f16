"""Read-only pattern tables for the headline and deal classifiers.

Order is significant for every tier and category table: scanning stops at the
first group that matches, so more specific (or more severe) groups come first.
"""

from __future__ import annotations

import re
from typing import Pattern, Tuple


def _compile(*raw: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(item, re.IGNORECASE) for item in raw)


def _weighted(raw: str, weight: int) -> Tuple[Pattern[str], int]:
    return re.compile(raw, re.IGNORECASE), weight


# Weighted sentiment patterns: every occurrence adds its weight.
POSITIVE_PATTERNS: Tuple[Tuple[Pattern[str], int], ...] = (
    _weighted(r"\brecord highs?\b", 4),
    _weighted(r"\bsoar(?:s|ed|ing)?\b", 4),
    _weighted(r"\bskyrocket(?:s|ed|ing)?\b", 4),
    _weighted(r"\bbreakthrough\b", 3),
    _weighted(r"\bsurg(?:e|es|ed|ing)\b", 3),
    _weighted(r"\brall(?:y|ies|ied|ying)\b", 3),
    _weighted(r"\bbeats? (?:expectations|estimates|forecasts)\b", 3),
    _weighted(r"\bupgrade[sd]?\b", 3),
    _weighted(r"\bbullish\b", 3),
    _weighted(r"\bjump(?:s|ed|ing)?\b", 2),
    _weighted(r"\bgain(?:s|ed|ing)?\b", 2),
    _weighted(r"\brebound(?:s|ed|ing)?\b", 2),
    _weighted(r"\boutperform(?:s|ed|ing)?\b", 2),
    _weighted(r"\bprofits?\b", 2),
    _weighted(r"\bstrong(?:er)?\b", 1),
    _weighted(r"\b(?:rise|rises|rising|rose)\b", 1),
    _weighted(r"\bgrowth\b", 1),
    _weighted(r"\boptimis(?:m|tic)\b", 1),
    _weighted(r"\brecover(?:y|s|ed|ing)?\b", 1),
)

NEGATIVE_PATTERNS: Tuple[Tuple[Pattern[str], int], ...] = (
    _weighted(r"\bcrash(?:es|ed|ing)?\b", -5),
    _weighted(r"\bbankrupt(?:cy|cies)?\b", -5),
    _weighted(r"\bplung(?:e|es|ed|ing)\b", -4),
    _weighted(r"\brecession\b", -4),
    _weighted(r"\bsell-?offs?\b", -3),
    _weighted(r"\bdowngrade[sd]?\b", -3),
    _weighted(r"\bslump(?:s|ed|ing)?\b", -3),
    _weighted(r"\btumbl(?:e|es|ed|ing)\b", -3),
    _weighted(r"\bbearish\b", -3),
    _weighted(r"\blayoffs?\b", -3),
    _weighted(r"\b(?:fall|falls|falling|fell)\b", -2),
    _weighted(r"\bdrop(?:s|ped|ping)?\b", -2),
    _weighted(r"\bdeclin(?:e|es|ed|ing)\b", -2),
    _weighted(r"\bloss(?:es)?\b", -2),
    _weighted(r"\bmiss(?:es|ed)? (?:expectations|estimates|forecasts)\b", -2),
    _weighted(r"\bweak(?:er|ness)?\b", -1),
    _weighted(r"\bconcerns?\b", -1),
    _weighted(r"\bvolatil(?:e|ity)\b", -1),
    _weighted(r"\buncertain(?:ty)?\b", -1),
    _weighted(r"\bfears?\b", -1),
)


# (tier, label, patterns) from best deal to ordinary.
DEAL_TIERS: Tuple[Tuple[str, str, Tuple[Pattern[str], ...]], ...] = (
    (
        "hot",
        "Hot Deal",
        _compile(
            r"\b(?:[5-9]\d|100)\s*%\s*off\b",
            r"\bfree\b(?!\s+shipping)",
            r"\bbogo\b|\bbuy one,? get one\b",
            r"\b(?:lowest price ever|all[- ]time low|price (?:error|mistake))\b",
            r"\blightning deal\b",
        ),
    ),
    (
        "great",
        "Great Deal",
        _compile(
            r"\b[34]\d\s*%\s*off\b",
            r"\bclearance\b",
            r"\bdoorbusters?\b",
            r"\bhalf[- ]price\b",
            r"\bflash sale\b",
            r"\blowest price\b",
        ),
    ),
    (
        "good",
        "Good Deal",
        _compile(
            r"\b[12]?\d\s*%\s*off\b",
            r"\$\s?\d+(?:\.\d{2})?\s*off\b",
            r"\bsale\b",
            r"\bdiscount(?:s|ed)?\b",
            r"\bcoupons?\b",
            r"\bpromo(?: code)?\b",
            r"\bsav(?:e|es|ings)\b",
        ),
    ),
)
DEFAULT_DEAL_TIER = ("regular", "Regular Deal")


# (severity, label, patterns) from most to least severe.
SEVERITY_TIERS: Tuple[Tuple[str, str, Tuple[Pattern[str], ...]], ...] = (
    (
        "critical",
        "Critical",
        _compile(
            r"\b(?:declares? war|invasion|invades?|invaded)\b",
            r"\bnuclear (?:strike|attack|threat|test)\b",
            r"\b(?:missile|air) strikes?\b",
            r"\bterror(?:ist)? attacks?\b",
            r"\b(?:massacre|genocide|coup)\b",
            r"\b(?:dozens|hundreds|thousands) (?:killed|dead)\b",
            r"\b(?:tsunami|pandemic)\b",
            r"\bstate of emergency\b",
        ),
    ),
    (
        "high",
        "High",
        _compile(
            r"\b(?:killed|deaths?|dead)\b",
            r"\b(?:attacks?|bomb(?:s|ing)?|explosions?|shooting)\b",
            r"\b(?:earthquake|hurricane|typhoon|cyclone|wildfires?|floods?|flooding)\b",
            r"\boutbreak\b",
            r"\bsanctions?\b",
            r"\bcrisis\b",
            r"\bhostages?\b",
        ),
    ),
    (
        "medium",
        "Medium",
        _compile(
            r"\bprotests?\b",
            r"\belections?\b",
            r"\btariffs?\b",
            r"\bstrikes?\b",
            r"\bsummit\b",
            r"\binvestigations?\b",
            r"\bstorms?\b",
            r"\b(?:inflation|recession)\b",
            r"\bresign(?:s|ed|ation)?\b",
        ),
    ),
)
DEFAULT_SEVERITY = ("low", "Low")


# (category, icon, patterns); first match wins.
DEAL_CATEGORIES: Tuple[Tuple[str, str, Tuple[Pattern[str], ...]], ...] = (
    (
        "Computers",
        "💻",
        _compile(r"\b(?:laptop|macbook|chromebook|desktop pc|monitor|ssd|ram|cpu|gpu|graphics card|keyboard|mouse)s?\b"),
    ),
    (
        "Gaming",
        "🎮",
        _compile(r"\b(?:playstation|ps5|xbox|nintendo|switch 2|steam deck|video games?|gaming)\b"),
    ),
    (
        "Electronics",
        "📱",
        _compile(
            r"\b(?:tv|oled|qled|iphone|ipad|tablet|smartphone|phone|headphones?|earbuds|airpods|speaker|camera|smartwatch|charger|soundbar)s?\b"
        ),
    ),
    (
        "Home & Kitchen",
        "🏠",
        _compile(r"\b(?:kitchen|cookware|air fryer|vacuum|mattress|furniture|blender|coffee maker|instant pot|bedding|sofa)s?\b"),
    ),
    (
        "Fashion",
        "👕",
        _compile(r"\b(?:shirts?|jeans|dress(?:es)?|shoes|sneakers|jackets?|apparel|clothing|boots|hoodies?)\b"),
    ),
    (
        "Health & Beauty",
        "💄",
        _compile(r"\b(?:skincare|makeup|beauty|shampoo|vitamins?|supplements?|razor|fragrance|perfume)\b"),
    ),
    (
        "Toys & Kids",
        "🧸",
        _compile(r"\b(?:toys?|lego|kids|baby|stroller|diapers?)\b"),
    ),
    (
        "Sports & Outdoors",
        "⚽",
        _compile(r"\b(?:bikes?|bicycle|camping|fitness|treadmill|golf|hiking|outdoor|tent|dumbbells?)\b"),
    ),
    (
        "Grocery",
        "🛒",
        _compile(r"\b(?:grocery|groceries|snacks?|coffee|food|drinks?)\b"),
    ),
    (
        "Travel",
        "✈️",
        _compile(r"\b(?:flights?|hotels?|airfare|cruise|luggage|vacation|travel)\b"),
    ),
    (
        "Books & Media",
        "📚",
        _compile(r"\b(?:books?|kindle|ebooks?|audible|movies?|blu-ray|streaming|subscription)\b"),
    ),
)

WORLD_CATEGORIES: Tuple[Tuple[str, str, Tuple[Pattern[str], ...]], ...] = (
    (
        "Conflict & War",
        "⚔️",
        _compile(r"\b(?:war|military|troops|missiles?|invasion|ceasefire|airstrikes?|army|militants?|conflict|drone strikes?)\b"),
    ),
    (
        "Politics",
        "🏛️",
        _compile(r"\b(?:election|president|parliament|minister|senate|congress|government|vote|diplomat(?:s|ic)?|prime minister)\b"),
    ),
    (
        "Disaster",
        "🌪️",
        _compile(r"\b(?:earthquake|hurricane|typhoon|cyclone|flood(?:s|ing)?|wildfires?|tsunami|landslide|volcano|tornado)\b"),
    ),
    (
        "Health",
        "🏥",
        _compile(r"\b(?:virus|outbreak|pandemic|vaccines?|hospital|disease|health|cholera|measles|world health organization)\b"),
    ),
    (
        "Economy",
        "💹",
        _compile(r"\b(?:economy|economic|inflation|tariffs?|trade|markets?|gdp|central bank|interest rates?|recession)\b"),
    ),
    (
        "Science & Tech",
        "🔬",
        _compile(r"\b(?:science|scientists?|space|nasa|ai|artificial intelligence|technology|research|satellite|cyber(?:attack)?)\b"),
    ),
    (
        "Environment",
        "🌍",
        _compile(r"\b(?:climate|emissions|environment(?:al)?|pollution|wildlife|biodiversity|carbon|drought|heatwave)\b"),
    ),
    (
        "Sports",
        "🏆",
        _compile(r"\b(?:world cup|olympics?|football|soccer|tennis|cricket|championship|tournament|athletes?)\b"),
    ),
)
DEFAULT_CATEGORY = ("General", "🌐")
