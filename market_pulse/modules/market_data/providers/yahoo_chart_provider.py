from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from market_pulse.core.errors import UpstreamError, UpstreamNotFoundError
from market_pulse.core.types import Candle, ChartSnapshot
from market_pulse.infra.http.client import HttpClient

logger = logging.getLogger(__name__)


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _series(values: Any, idx: int) -> Optional[float]:
    if not isinstance(values, list) or idx >= len(values):
        return None
    return _as_float(values[idx])


def parse_chart_document(payload: Dict[str, Any], symbol: str) -> ChartSnapshot:
    """Turn a ``/v8/finance/chart`` document into a :class:`ChartSnapshot`.

    Rows without a close are dropped; the ``meta`` block supplies the quote.
    """
    chart = payload.get("chart") if isinstance(payload, dict) else None
    if not isinstance(chart, dict):
        raise UpstreamError(f"Malformed chart payload for {symbol}")
    error = chart.get("error")
    if isinstance(error, dict) and error:
        code = str(error.get("code") or "")
        description = str(error.get("description") or code or "unknown error")
        if code.lower() == "not found":
            raise UpstreamNotFoundError(f"Symbol not found: {symbol}")
        raise UpstreamError(f"Chart error for {symbol}: {description}")
    results = chart.get("result")
    if not isinstance(results, list) or not results:
        raise UpstreamNotFoundError(f"Symbol not found: {symbol}")

    result = results[0] or {}
    meta = result.get("meta") or {}
    price = _as_float(meta.get("regularMarketPrice"))
    if price is None:
        raise UpstreamNotFoundError(f"No price for symbol: {symbol}")

    timestamps = result.get("timestamp") or []
    quotes = ((result.get("indicators") or {}).get("quote") or [{}])[0] or {}
    candles: List[Candle] = []
    for idx, ts in enumerate(timestamps):
        close = _series(quotes.get("close"), idx)
        if close is None:
            continue
        candles.append(
            Candle(
                ts=int(ts),
                open=_series(quotes.get("open"), idx),
                high=_series(quotes.get("high"), idx),
                low=_series(quotes.get("low"), idx),
                close=close,
                volume=_series(quotes.get("volume"), idx) or 0.0,
            )
        )

    return ChartSnapshot(
        symbol=str(meta.get("symbol") or symbol).upper(),
        name=str(meta.get("shortName") or meta.get("longName") or meta.get("symbol") or symbol),
        currency=str(meta.get("currency") or ""),
        price=price,
        previous_close=_as_float(meta.get("previousClose"))
        or _as_float(meta.get("chartPreviousClose")),
        day_high=_as_float(meta.get("regularMarketDayHigh")),
        day_low=_as_float(meta.get("regularMarketDayLow")),
        week52_high=_as_float(meta.get("fiftyTwoWeekHigh")),
        week52_low=_as_float(meta.get("fiftyTwoWeekLow")),
        regular_volume=_as_float(meta.get("regularMarketVolume")),
        candles=candles,
    )


class YahooChartProvider:
    provider_id = "yahoo"

    def __init__(self, client: HttpClient, base_url: str) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def get_chart(self, symbol: str, interval: str, range_: str) -> ChartSnapshot:
        url = f"{self.base_url}/{quote(symbol, safe='^=.-')}"
        try:
            payload = await self.client.get_json(
                url, params={"interval": interval, "range": range_}
            )
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code == 404:
                raise UpstreamNotFoundError(f"Symbol not found: {symbol}") from exc
            logger.warning("chart request failed for %s: status=%s", symbol, status_code)
            raise UpstreamError(
                f"Quote provider returned status {status_code} for {symbol}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("chart request failed for %s: %s", symbol, exc)
            raise UpstreamError(f"Quote provider request failed for {symbol}: {exc}") from exc
        return parse_chart_document(payload, symbol=symbol)
