from __future__ import annotations

import asyncio
import hashlib
import html
import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, List, Optional, Union

import feedparser
import httpx

from market_pulse.config import FeedSource
from market_pulse.core.contracts import FeedFetcher
from market_pulse.core.errors import SourceUnavailableError
from market_pulse.core.types import RawFeedItem

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_CHARS = 200
FEED_ACCEPT_HEADER = (
    "application/rss+xml,application/atom+xml,application/xml;q=0.9,text/xml;q=0.9,*/*;q=0.8"
)

_PARSED_DATE_KEYS = ("published_parsed", "updated_parsed", "created_parsed")
_RAW_DATE_KEYS = ("published", "updated", "created", "pubdate", "dc_date", "date")


def make_item_id(link: str, title: str, source: str) -> str:
    raw = f"{link or title}|{source}"
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()


def strip_markup(value: str) -> str:
    text = html.unescape(value or "")
    text = re.sub(r"<[^>]+>", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def truncate(text: str, max_chars: int = DESCRIPTION_MAX_CHARS) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "…"


def parse_feed(
    body: Union[bytes, str],
    source: FeedSource,
    limit: int,
    now: Optional[datetime] = None,
) -> List[RawFeedItem]:
    """Parse one RSS or Atom document into normalized items.

    Never raises: a document that cannot be parsed, or that has no entries,
    yields an empty list.
    """
    fetched_at = now or datetime.now(timezone.utc)
    try:
        parsed = feedparser.parse(body)
    except Exception as exc:
        logger.debug("feed parse failed for %s: %s", source.name, exc)
        return []
    entries = list(getattr(parsed, "entries", None) or [])
    if not entries:
        if getattr(parsed, "bozo", False):
            logger.debug(
                "feed %s is not well-formed: %s",
                source.name,
                getattr(parsed, "bozo_exception", ""),
            )
        return []

    output: List[RawFeedItem] = []
    for entry in entries:
        if len(output) >= max(1, limit):
            break
        try:
            item = _normalize_entry(entry, source=source, fetched_at=fetched_at)
        except Exception as exc:
            logger.debug("skipping malformed entry from %s: %s", source.name, exc)
            continue
        if item is not None:
            output.append(item)
    return output


async def fetch_source(
    fetcher: FeedFetcher,
    source: FeedSource,
    timeout_seconds: float,
    limit: int,
) -> List[RawFeedItem]:
    try:
        body = await asyncio.wait_for(
            fetcher.get_bytes(
                source.url,
                timeout_seconds=timeout_seconds,
                headers={"Accept": FEED_ACCEPT_HEADER},
            ),
            timeout=timeout_seconds,
        )
    except asyncio.TimeoutError as exc:
        raise SourceUnavailableError(
            f"{source.name} timed out after {timeout_seconds:g}s"
        ) from exc
    except httpx.HTTPStatusError as exc:
        raise SourceUnavailableError(
            f"{source.name} returned status {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise SourceUnavailableError(f"{source.name} request failed: {exc}") from exc
    return parse_feed(body, source=source, limit=limit)


def _normalize_entry(
    entry: Any, source: FeedSource, fetched_at: datetime
) -> Optional[RawFeedItem]:
    title = strip_markup(str(entry.get("title", "") or ""))
    if not title:
        return None
    link = _entry_link(entry)
    return RawFeedItem(
        id=make_item_id(link, title, source.name),
        title=title,
        description=truncate(_entry_description(entry)),
        link=link,
        published_at=_entry_published(entry) or fetched_at,
        source=source.name,
    )


def _entry_link(entry: Any) -> str:
    link = entry.get("link")
    if isinstance(link, str) and link.strip():
        return link.strip()
    for item in entry.get("links") or []:
        href = item.get("href") if isinstance(item, dict) else None
        if isinstance(href, str) and href.strip():
            return href.strip()
    guid = entry.get("id")
    if isinstance(guid, str) and guid.startswith(("http://", "https://")):
        return guid.strip()
    return ""


def _entry_description(entry: Any) -> str:
    for key in ("summary", "description"):
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            return strip_markup(value)
    rich_content = entry.get("content")
    if isinstance(rich_content, list):
        for item in rich_content:
            value = item.get("value") if isinstance(item, dict) else None
            if isinstance(value, str) and value.strip():
                return strip_markup(value)
    return ""


def _entry_published(entry: Any) -> Optional[datetime]:
    for key in _PARSED_DATE_KEYS:
        value = entry.get(key)
        if value:
            try:
                return datetime(*value[:6], tzinfo=timezone.utc)
            except (TypeError, ValueError):
                continue
    for key in _RAW_DATE_KEYS:
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            parsed = parse_timestamp(value)
            if parsed is not None:
                return parsed
    return None


def parse_timestamp(raw: str) -> Optional[datetime]:
    value = (raw or "").strip()
    if not value:
        return None
    dt: Optional[datetime] = None
    try:
        dt = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        dt = None
    if dt is None:
        iso = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            dt = datetime.fromisoformat(iso)
        except ValueError:
            logger.debug("unparseable feed timestamp: %s", value)
            return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
