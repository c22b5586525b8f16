from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from market_pulse.config import AppConfig
from market_pulse.core.errors import MarketPulseError
from market_pulse.core.registry import ProviderRegistry
from market_pulse.core.types import DealItem, MarketNewsItem, WorldNewsItem
from market_pulse.infra.http.client import HttpClient
from market_pulse.modules.market_data.service import MarketDataService
from market_pulse.modules.news.service import NewsService
from market_pulse.services.config_store import ConfigStore
from market_pulse.settings import AppSettings

app = typer.Typer(help="Market Pulse CLI")
console = Console()

news_app = typer.Typer(help="Fetch ranked feeds")
app.add_typer(news_app, name="news")

SIGNAL_STYLES = {
    "strong-buy": "bold green",
    "buy": "green",
    "hold": "yellow",
    "sell": "red",
    "strong-sell": "bold red",
}


def _store() -> ConfigStore:
    settings = AppSettings()
    return ConfigStore(config_path=settings.config_file)


def _load_config() -> AppConfig:
    settings = AppSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return ConfigStore(config_path=settings.config_file).load()


def _client(config: AppConfig) -> HttpClient:
    return HttpClient(
        timeout_seconds=config.request_timeout_seconds,
        user_agent=config.user_agent,
    )


def _print_warnings(warnings: List[str]) -> None:
    if warnings:
        console.print("[yellow]Warnings:[/yellow]")
        for warning in warnings:
            console.print(f"- {warning}")


@app.command("init-config")
def init_config() -> None:
    store = _store()
    config = store.load()
    store.save(config)
    console.print(f"[green]Config initialized:[/green] {store.config_path.resolve()}")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host, default from settings."),
    port: Optional[int] = typer.Option(None, help="Bind port, default from settings."),
    reload: bool = typer.Option(False, help="Enable autoreload mode."),
) -> None:
    settings = AppSettings()
    uvicorn.run(
        "market_pulse.api:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@news_app.command("market")
def news_market(
    direction: Optional[str] = typer.Option(None, help="Filter: up|down|neutral."),
    limit: int = typer.Option(20, help="Rows to print."),
) -> None:
    config = _load_config()

    async def _run():
        async with _client(config) as client:
            return await NewsService(config=config, fetcher=client).market_news(
                direction=direction
            )

    items, warnings = asyncio.run(_run())
    table = Table(title="Market News")
    table.add_column("Published")
    table.add_column("Sentiment")
    table.add_column("Score", justify="right")
    table.add_column("Source")
    table.add_column("Title")
    for item in items[:limit]:
        table.add_row(*_row(item), str(item.score), item.source, item.title)
    console.print(table)
    _print_warnings(warnings)


@news_app.command("world")
def news_world(
    severity: Optional[str] = typer.Option(
        None, help="Filter: critical|high|medium|low."
    ),
    limit: int = typer.Option(20, help="Rows to print."),
) -> None:
    config = _load_config()

    async def _run():
        async with _client(config) as client:
            return await NewsService(config=config, fetcher=client).world_news(
                severity=severity
            )

    items, warnings = asyncio.run(_run())
    table = Table(title="World News")
    table.add_column("Published")
    table.add_column("Severity")
    table.add_column("Category")
    table.add_column("Source")
    table.add_column("Title")
    for item in items[:limit]:
        table.add_row(*_row(item), item.category, item.source, item.title)
    console.print(table)
    _print_warnings(warnings)


@news_app.command("deals")
def news_deals(
    deal: Optional[str] = typer.Option(None, help="Filter: hot|great|good|regular."),
    category: Optional[str] = typer.Option(None, help="Filter by category name."),
    limit: int = typer.Option(20, help="Rows to print."),
) -> None:
    config = _load_config()

    async def _run():
        async with _client(config) as client:
            return await NewsService(config=config, fetcher=client).deals(
                deal=deal, category=category
            )

    items, warnings = asyncio.run(_run())
    table = Table(title="Deals")
    table.add_column("Published")
    table.add_column("Deal")
    table.add_column("Discount")
    table.add_column("Category")
    table.add_column("Title")
    for item in items[:limit]:
        table.add_row(
            *_row(item), item.discount, f"{item.category_icon} {item.category}", item.title
        )
    console.print(table)
    _print_warnings(warnings)


def _row(item) -> List[str]:
    published = item.published_at.strftime("%Y-%m-%d %H:%M")
    if isinstance(item, MarketNewsItem):
        return [published, item.label]
    if isinstance(item, WorldNewsItem):
        return [published, item.severity_label]
    if isinstance(item, DealItem):
        return [published, item.deal_label]
    return [published, ""]


@app.command("level2")
def level2(symbol: str = typer.Argument(..., help="Ticker, e.g. AAPL or ^GSPC.")) -> None:
    config = _load_config()

    async def _run():
        async with _client(config) as client:
            service = MarketDataService(
                config=config, registry=ProviderRegistry(), client=client
            )
            return await service.get_level2(symbol)

    try:
        snapshot = asyncio.run(_run())
    except MarketPulseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(
        f"[bold]{snapshot.symbol}[/bold] {snapshot.name}  {snapshot.price:.2f} "
        f"({snapshot.change:+.2f} / {snapshot.change_pct:+.2f}%)"
    )
    ind = snapshot.indicators
    console.print(
        f"RSI {ind.rsi}  VWAP {ind.vwap:.2f}  SMA9 {ind.sma9:.2f}  SMA20 {ind.sma20:.2f}"
    )
    book = Table(title=f"Level 2 (spread {snapshot.spread:.2f})")
    book.add_column("Orders", justify="right")
    book.add_column("Bid Size", justify="right")
    book.add_column("Bid", justify="right", style="green")
    book.add_column("Ask", justify="right", style="red")
    book.add_column("Ask Size", justify="right")
    book.add_column("Orders", justify="right")
    for bid, ask in zip(snapshot.bids, snapshot.asks):
        book.add_row(
            str(bid.orders),
            str(bid.size),
            f"{bid.price:.2f}",
            f"{ask.price:.2f}",
            str(ask.size),
            str(ask.orders),
        )
    book.add_row("", str(snapshot.total_bid_vol), "", "", str(snapshot.total_ask_vol), "")
    console.print(book)
    signal = snapshot.signal
    style = SIGNAL_STYLES.get(signal.color, "white")
    console.print(
        f"[{style}]{signal.action}[/{style}] confidence={signal.confidence} score={signal.score}"
    )
    for reason in signal.reasons:
        console.print(f"- {reason}")


@app.command("quote")
def quote(symbol: str = typer.Argument(..., help="Ticker to validate.")) -> None:
    config = _load_config()

    async def _run():
        async with _client(config) as client:
            service = MarketDataService(
                config=config, registry=ProviderRegistry(), client=client
            )
            return await service.check_quote(symbol)

    try:
        result = asyncio.run(_run())
    except MarketPulseError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(
        f"[green]{result.symbol}[/green] {result.name}  {result.price:.2f} "
        f"({result.change_percent:+.2f}%)"
    )


if __name__ == "__main__":
    app()
