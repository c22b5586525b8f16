"""Instrument routes: Level 2 snapshot and watchlist quote check."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from market_pulse.api.deps import build_http_client, get_config, get_registry
from market_pulse.api.errors import service_error_handler
from market_pulse.config import AppConfig
from market_pulse.core.registry import ProviderRegistry
from market_pulse.core.types import Level2Snapshot, QuoteCheck
from market_pulse.modules.market_data.service import MarketDataService

router = APIRouter(prefix="/api/market", tags=["market"])


@router.get("/level2/{symbol}", response_model=Level2Snapshot)
@service_error_handler()
async def level2(
    symbol: str = Path(..., min_length=1, max_length=20),
    config: AppConfig = Depends(get_config),
    registry: ProviderRegistry = Depends(get_registry),
) -> Level2Snapshot:
    async with build_http_client(config) as client:
        service = MarketDataService(config=config, registry=registry, client=client)
        return await service.get_level2(symbol)


@router.get("/quote/{symbol}", response_model=QuoteCheck)
@service_error_handler()
async def quote(
    symbol: str = Path(..., min_length=1, max_length=20),
    config: AppConfig = Depends(get_config),
    registry: ProviderRegistry = Depends(get_registry),
) -> QuoteCheck:
    async with build_http_client(config) as client:
        service = MarketDataService(config=config, registry=registry, client=client)
        return await service.check_quote(symbol)
