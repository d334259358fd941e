"""Intraday command for the dayprism CLI."""

from __future__ import annotations

import asyncio
from dataclasses import replace

import typer

from dayprism.core.config import AlphaVantageConfig, ConfigManager
from dayprism.core.exceptions import (
    ConfigurationError,
    DataValidationError,
    DayPrismError,
    UpstreamError,
)
from dayprism.core.models import DayAggregate, FetchResult
from dayprism.core.services.orchestrator import TieredFetchOrchestrator

from .constants import SYSTEM_EXIT_CODE, UPSTREAM_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import emit_domain_error, prepare_output

COLUMNS = ["day", "lowAverage", "highAverage", "volume"]


def get_provider_config() -> AlphaVantageConfig:
    """Factory hook for the provider configuration; patched in tests."""

    return ConfigManager().get_config().alpha_vantage


def build_orchestrator(config: AlphaVantageConfig) -> TieredFetchOrchestrator:
    """Factory hook for the orchestrator; patched in tests."""

    return TieredFetchOrchestrator.from_config(config)


async def _fetch(orchestrator: TieredFetchOrchestrator, symbol: str) -> tuple[FetchResult, list[DayAggregate]]:
    async with orchestrator:
        result = await orchestrator.fetch_series(symbol)
        return result, orchestrator.aggregate_result(result)


def register(app: typer.Typer) -> None:
    """Register the intraday command on the provided application."""

    app.command("intraday")(intraday_command)


def intraday_command(
    ctx: typer.Context,
    symbol: str = typer.Argument(..., help="Ticker symbol, e.g. IBM."),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="DAYPRISM_ALPHA_VANTAGE_API_KEY",
        help="Alpha Vantage API key; overrides the config file.",
        show_envvar=True,
    ),
) -> None:
    """Fetch intraday data for SYMBOL and print one row per day."""

    try:
        config = get_provider_config()
        if api_key:
            config = replace(config, api_key=api_key)
        result, days = asyncio.run(_fetch(build_orchestrator(config), symbol))
    except (DataValidationError, ConfigurationError) as error:
        emit_domain_error(error)
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from error
    except UpstreamError as error:
        emit_domain_error(error)
        raise typer.Exit(code=UPSTREAM_EXIT_CODE) from error
    except DayPrismError as error:
        emit_domain_error(error)
        raise typer.Exit(code=SYSTEM_EXIT_CODE) from error

    rows = [day.model_dump(by_alias=True) for day in days]
    caption = f"{result.symbol} · {len(rows)} days · {result.tier.value} tier"

    formatter, stream, stack = prepare_output(ctx)
    with stack:
        formatter.render(rows, stream=stream, columns=COLUMNS, caption=caption)


__all__ = ["register", "intraday_command", "get_provider_config", "build_orchestrator"]
