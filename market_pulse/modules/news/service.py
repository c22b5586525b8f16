from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple, TypeVar

from market_pulse.config import AppConfig, FeedGroupConfig
from market_pulse.core.contracts import FeedFetcher
from market_pulse.core.types import DealItem, MarketNewsItem, RawFeedItem, WorldNewsItem
from market_pulse.modules.classify.patterns import DEAL_CATEGORIES, WORLD_CATEGORIES
from market_pulse.modules.classify.sentiment import score_sentiment
from market_pulse.modules.classify.tagger import tag_category
from market_pulse.modules.classify.tiers import (
    DEAL_RANK,
    SEVERITY_RANK,
    classify_deal,
    classify_severity,
    extract_discount,
)
from market_pulse.modules.feeds.aggregator import FeedAggregator, newest_first

T = TypeVar("T", bound=RawFeedItem)


def _item_text(item: RawFeedItem) -> str:
    return f"{item.title} {item.description}".strip()


def to_market_news(item: RawFeedItem) -> MarketNewsItem:
    result = score_sentiment(_item_text(item))
    return MarketNewsItem(
        **item.model_dump(),
        score=result.score,
        label=result.label,
        level=result.level,
        direction=result.direction,
    )


def to_deal(item: RawFeedItem) -> DealItem:
    text = _item_text(item)
    tier = classify_deal(text)
    category = tag_category(text, DEAL_CATEGORIES)
    return DealItem(
        **item.model_dump(),
        category=category.name,
        category_icon=category.icon,
        discount=extract_discount(text),
        deal=tier.tier,
        deal_label=tier.label,
    )


def to_world_news(item: RawFeedItem) -> WorldNewsItem:
    text = _item_text(item)
    severity = classify_severity(text)
    category = tag_category(text, WORLD_CATEGORIES)
    return WorldNewsItem(
        **item.model_dump(),
        category=category.name,
        severity=severity.tier,
        severity_label=severity.label,
    )


def deal_sort_key(item: DealItem) -> Tuple[int, float]:
    return DEAL_RANK.get(item.deal, len(DEAL_RANK)), newest_first(item)


def world_sort_key(item: WorldNewsItem) -> Tuple[int, float]:
    return SEVERITY_RANK.get(item.severity, len(SEVERITY_RANK)), newest_first(item)


class NewsService:
    def __init__(self, config: AppConfig, fetcher: FeedFetcher) -> None:
        self.config = config
        self.fetcher = fetcher

    async def market_news(
        self, direction: Optional[str] = None
    ) -> Tuple[List[MarketNewsItem], List[str]]:
        items, warnings = await self._collect(
            group=self.config.feeds.market,
            classify=to_market_news,
            sort_key=newest_first,
        )
        if direction:
            items = [item for item in items if item.direction == direction]
        return items, warnings

    async def world_news(
        self, severity: Optional[str] = None
    ) -> Tuple[List[WorldNewsItem], List[str]]:
        items, warnings = await self._collect(
            group=self.config.feeds.world,
            classify=to_world_news,
            sort_key=world_sort_key,
        )
        if severity:
            items = [item for item in items if item.severity == severity]
        return items, warnings

    async def deals(
        self,
        deal: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Tuple[List[DealItem], List[str]]:
        items, warnings = await self._collect(
            group=self.config.feeds.deals,
            classify=to_deal,
            sort_key=deal_sort_key,
        )
        if deal:
            items = [item for item in items if item.deal == deal]
        if category:
            wanted = category.strip().lower()
            items = [item for item in items if item.category.lower() == wanted]
        return items, warnings

    async def _collect(
        self,
        group: FeedGroupConfig,
        classify: Callable[[RawFeedItem], T],
        sort_key: Callable[[T], Any],
    ) -> Tuple[List[T], List[str]]:
        aggregator = FeedAggregator(
            fetcher=self.fetcher,
            timeout_seconds=self.config.feed_timeout_seconds,
            per_source_limit=group.per_source_limit,
        )
        return await aggregator.collect(
            sources=group.sources,
            classify=classify,
            sort_key=sort_key,
            limit=group.limit,
        )
