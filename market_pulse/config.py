from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class FeedSource(BaseModel):
    source_id: Optional[str] = None
    name: str
    url: str
    enabled: bool = True


class FeedGroupConfig(BaseModel):
    sources: List[FeedSource] = Field(default_factory=list)
    limit: int = Field(default=100, ge=1, le=500)
    per_source_limit: int = Field(default=25, ge=1, le=100)


class FeedsConfig(BaseModel):
    market: FeedGroupConfig = Field(
        default_factory=lambda: FeedGroupConfig(
            sources=default_market_sources(), limit=100, per_source_limit=25
        )
    )
    world: FeedGroupConfig = Field(
        default_factory=lambda: FeedGroupConfig(
            sources=default_world_sources(), limit=120, per_source_limit=25
        )
    )
    deals: FeedGroupConfig = Field(
        default_factory=lambda: FeedGroupConfig(
            sources=default_deal_sources(), limit=80, per_source_limit=20
        )
    )

    def groups(self) -> Dict[str, FeedGroupConfig]:
        return {"market": self.market, "world": self.world, "deals": self.deals}


class MarketDataConfig(BaseModel):
    default_provider: str = "yahoo"
    chart_base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"
    intraday_interval: str = "5m"
    intraday_range: str = "1d"
    history_interval: str = "1d"
    history_range: str = "3mo"
    recent_candles: int = Field(default=60, ge=10, le=500)


def default_market_sources() -> List[FeedSource]:
    return [
        FeedSource(
            source_id="yahoo-finance",
            name="Yahoo Finance",
            url="https://finance.yahoo.com/news/rssindex",
        ),
        FeedSource(
            source_id="cnbc-top-news",
            name="CNBC",
            url=(
                "https://search.cnbc.com/rs/search/combinedcms/view.xml"
                "?partnerId=wrss01&id=100003114"
            ),
        ),
        FeedSource(
            source_id="marketwatch-top-stories",
            name="MarketWatch",
            url="https://feeds.content.dowjones.io/public/rss/mw_topstories",
        ),
        FeedSource(
            source_id="investing-com",
            name="Investing.com",
            url="https://www.investing.com/rss/news.rss",
        ),
        FeedSource(
            source_id="seeking-alpha-market-currents",
            name="Seeking Alpha",
            url="https://seekingalpha.com/market_currents.xml",
        ),
    ]


def default_world_sources() -> List[FeedSource]:
    return [
        FeedSource(
            source_id="bbc-world",
            name="BBC World",
            url="https://feeds.bbci.co.uk/news/world/rss.xml",
        ),
        FeedSource(
            source_id="al-jazeera",
            name="Al Jazeera",
            url="https://www.aljazeera.com/xml/rss/all.xml",
        ),
        FeedSource(
            source_id="npr-world",
            name="NPR World",
            url="https://feeds.npr.org/1004/rss.xml",
        ),
        FeedSource(
            source_id="guardian-world",
            name="The Guardian",
            url="https://www.theguardian.com/world/rss",
        ),
        FeedSource(
            source_id="nyt-world",
            name="New York Times",
            url="https://rss.nytimes.com/services/xml/rss/nyt/World.xml",
        ),
    ]


def default_deal_sources() -> List[FeedSource]:
    return [
        FeedSource(
            source_id="slickdeals-frontpage",
            name="Slickdeals",
            url=(
                "https://slickdeals.net/newsearch.php"
                "?mode=frontpage&searchin=first&rss=1"
            ),
        ),
        FeedSource(
            source_id="dealnews",
            name="DealNews",
            url="https://www.dealnews.com/?rss=1",
        ),
        FeedSource(
            source_id="reddit-deals",
            name="r/deals",
            url="https://www.reddit.com/r/deals/.rss",
        ),
        FeedSource(
            source_id="bensbargains",
            name="Ben's Bargains",
            url="https://bensbargains.com/rss/",
        ),
    ]


class AppConfig(BaseModel):
    config_file: Path = Path("config/settings.yaml")
    request_timeout_seconds: int = Field(default=10, ge=3, le=120)
    feed_timeout_seconds: float = Field(default=6.0, ge=1.0, le=30.0)
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    feeds: FeedsConfig = Field(default_factory=FeedsConfig)
    market_data: MarketDataConfig = Field(default_factory=MarketDataConfig)

    def normalized(self) -> "AppConfig":
        payload = self.model_dump(mode="python")
        payload["config_file"] = Path(payload["config_file"])
        for name, group in self.feeds.groups().items():
            payload["feeds"][name]["sources"] = [
                source.model_dump(mode="python")
                for source in normalize_feed_sources(group.sources)
            ]
        return AppConfig.model_validate(payload)


def default_app_config() -> AppConfig:
    return AppConfig()


def normalize_source_id(raw: str) -> str:
    value = re.sub(r"[^a-z0-9]+", "-", str(raw or "").lower()).strip("-")
    return value or "source"


def normalize_feed_sources(sources: List[FeedSource]) -> List[FeedSource]:
    normalized: List[FeedSource] = []
    used_ids: set[str] = set()
    for idx, source in enumerate(sources):
        candidate = source.source_id or source.name or f"source-{idx + 1}"
        base_id = normalize_source_id(candidate)
        source_id = base_id
        cursor = 2
        while source_id in used_ids:
            source_id = f"{base_id}-{cursor}"
            cursor += 1
        used_ids.add(source_id)
        normalized.append(
            source.model_copy(
                update={
                    "source_id": source_id,
                    "enabled": bool(source.enabled),
                }
            )
        )
    return normalized
