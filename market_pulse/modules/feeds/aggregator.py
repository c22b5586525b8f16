from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, List, Sequence, Tuple, TypeVar

from market_pulse.config import FeedSource
from market_pulse.core.contracts import FeedFetcher
from market_pulse.core.types import RawFeedItem
from market_pulse.modules.feeds.normalizer import fetch_source

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=RawFeedItem)


def dedupe_items(items: Iterable[T]) -> List[T]:
    seen: set[str] = set()
    output: List[T] = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        output.append(item)
    return output


def rank_items(items: Iterable[T], sort_key: Callable[[T], Any], limit: int) -> List[T]:
    # Sort before truncating so one busy source cannot crowd out better items.
    ranked = sorted(items, key=sort_key)
    return ranked[: max(0, limit)]


def newest_first(item: RawFeedItem) -> float:
    return -item.published_at.timestamp()


class FeedAggregator:
    def __init__(
        self,
        fetcher: FeedFetcher,
        timeout_seconds: float,
        per_source_limit: int,
    ) -> None:
        self.fetcher = fetcher
        self.timeout_seconds = timeout_seconds
        self.per_source_limit = per_source_limit

    async def collect(
        self,
        sources: Sequence[FeedSource],
        classify: Callable[[RawFeedItem], T],
        sort_key: Callable[[T], Any],
        limit: int,
    ) -> Tuple[List[T], List[str]]:
        selected = [source for source in sources if source.enabled]
        # All-settled join: a failing source only loses its own items.
        settled = await asyncio.gather(
            *[
                fetch_source(
                    self.fetcher,
                    source=source,
                    timeout_seconds=self.timeout_seconds,
                    limit=self.per_source_limit,
                )
                for source in selected
            ],
            return_exceptions=True,
        )
        warnings: List[str] = []
        classified: List[T] = []
        for source, result in zip(selected, settled):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                message = f"Feed source failed [id={source.source_id};name={source.name}]: {result}"
                logger.warning("%s", message)
                warnings.append(message)
                continue
            classified.extend(classify(item) for item in result)
        unique = dedupe_items(classified)
        return rank_items(unique, sort_key=sort_key, limit=limit), warnings
