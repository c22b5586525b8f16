"""Ranked feed routes: market news, world news and deals."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from market_pulse.api.deps import build_http_client, get_config
from market_pulse.api.errors import service_error_handler
from market_pulse.config import AppConfig
from market_pulse.core.types import (
    DealItem,
    DealTier,
    Direction,
    MarketNewsItem,
    Severity,
    WorldNewsItem,
)
from market_pulse.modules.news.schemas import FeedGroupView, FeedSourceView
from market_pulse.modules.news.service import NewsService

router = APIRouter(prefix="/api/news", tags=["news"])


@router.get("/sources", response_model=List[FeedGroupView])
async def news_sources(
    config: AppConfig = Depends(get_config),
) -> List[FeedGroupView]:
    return [
        FeedGroupView(
            group=name,
            limit=group.limit,
            per_source_limit=group.per_source_limit,
            sources=[
                FeedSourceView(
                    source_id=source.source_id or "",
                    name=source.name,
                    url=source.url,
                    enabled=source.enabled,
                )
                for source in group.sources
            ],
        )
        for name, group in config.feeds.groups().items()
    ]


@router.get("/market", response_model=List[MarketNewsItem])
@service_error_handler()
async def market_news(
    direction: Optional[Direction] = Query(None),
    config: AppConfig = Depends(get_config),
) -> List[MarketNewsItem]:
    async with build_http_client(config) as client:
        service = NewsService(config=config, fetcher=client)
        items, _warnings = await service.market_news(direction=direction)
    return items


@router.get("/world", response_model=List[WorldNewsItem])
@service_error_handler()
async def world_news(
    severity: Optional[Severity] = Query(None),
    config: AppConfig = Depends(get_config),
) -> List[WorldNewsItem]:
    async with build_http_client(config) as client:
        service = NewsService(config=config, fetcher=client)
        items, _warnings = await service.world_news(severity=severity)
    return items


@router.get("/deals", response_model=List[DealItem])
@service_error_handler()
async def deals(
    deal: Optional[DealTier] = Query(None),
    category: Optional[str] = Query(None, max_length=60),
    config: AppConfig = Depends(get_config),
) -> List[DealItem]:
    async with build_http_client(config) as client:
        service = NewsService(config=config, fetcher=client)
        items, _warnings = await service.deals(deal=deal, category=category)
    return items
