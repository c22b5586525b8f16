"""FastAPI dependency factories for service injection."""

from __future__ import annotations

from fastapi import Request

from market_pulse.config import AppConfig
from market_pulse.core.registry import ProviderRegistry
from market_pulse.infra.http.client import HttpClient
from market_pulse.services.config_store import ConfigStore
from market_pulse.settings import AppSettings


def get_config_store(request: Request) -> ConfigStore:
    return request.app.state.config_store


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_config(request: Request) -> AppConfig:
    config_store: ConfigStore = request.app.state.config_store
    return config_store.load()


def get_registry() -> ProviderRegistry:
    return ProviderRegistry()


def build_http_client(config: AppConfig) -> HttpClient:
    return HttpClient(
        timeout_seconds=config.request_timeout_seconds,
        user_agent=config.user_agent,
    )
