from __future__ import annotations

from typing import List

from pydantic import BaseModel


class FeedSourceView(BaseModel):
    source_id: str
    name: str
    url: str
    enabled: bool


class FeedGroupView(BaseModel):
    group: str
    limit: int
    per_source_limit: int
    sources: List[FeedSourceView]
