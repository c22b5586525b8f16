from __future__ import annotations

from typing import Mapping, Optional, Protocol

from market_pulse.core.types import ChartSnapshot


class FeedFetcher(Protocol):
    async def get_bytes(
        self,
        url: str,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> bytes:
        ...


class ChartProvider(Protocol):
    provider_id: str

    async def get_chart(self, symbol: str, interval: str, range_: str) -> ChartSnapshot:
        ...


class RandomSource(Protocol):
    """Subset of ``random.Random`` used by the order book generator."""

    def uniform(self, a: float, b: float) -> float:
        ...

    def randint(self, a: int, b: int) -> int:
        ...
