"""Market Pulse API package: FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from market_pulse.api import health, market, news
from market_pulse.services.config_store import ConfigStore
from market_pulse.settings import AppSettings


def create_app() -> FastAPI:
    settings = AppSettings()
    config_store = ConfigStore(config_path=settings.config_file)

    app = FastAPI(
        title="Market Pulse API",
        version="0.1.0",
        default_response_class=ORJSONResponse,
    )

    app.state.settings = settings
    app.state.config_store = config_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(news.router)
    app.include_router(market.router)
    return app


app = create_app()
