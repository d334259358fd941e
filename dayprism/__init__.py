"""dayprism - intraday market data aggregated per calendar day.

Fetches intraday data from Alpha Vantage on the best tier the configured API
key unlocks (premium first, free as fallback) and reduces it to one record per
day. Both synchronous and asynchronous entry points are provided.
"""

import asyncio
from dataclasses import replace
from typing import Any

from dayprism.core.config import ConfigManager, DayPrismConfig
from dayprism.core.models import DayAggregate
from dayprism.core.services.orchestrator import TieredFetchOrchestrator

__version__ = "0.1.0"

_config_manager: ConfigManager | None = None


def get_config_manager() -> ConfigManager:
    """Return the global configuration manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def configure(**config: Any) -> None:
    """Update the global configuration.

    Examples:
        >>> import dayprism
        >>> dayprism.configure(alpha_vantage={"api_key": "demo"})
    """
    get_config_manager().update_config(**config)


async def get_daily_aggregates_async(symbol: str, *, api_key: str | None = None) -> list[DayAggregate]:
    """Fetch intraday data for ``symbol`` and aggregate it per day.

    Args:
        symbol: ticker symbol, case-insensitive
        api_key: overrides the configured Alpha Vantage API key

    Returns:
        one :class:`DayAggregate` per calendar day, oldest first

    Examples:
        >>> import asyncio
        >>> import dayprism
        >>> days = asyncio.run(dayprism.get_daily_aggregates_async("IBM"))
    """
    provider_config = get_config_manager().get_config().alpha_vantage
    if api_key is not None:
        provider_config = replace(provider_config, api_key=api_key)
    async with TieredFetchOrchestrator.from_config(provider_config) as orchestrator:
        return await orchestrator.fetch_and_aggregate(symbol)


def get_daily_aggregates(symbol: str, *, api_key: str | None = None) -> list[DayAggregate]:
    """Synchronous variant of :func:`get_daily_aggregates_async`.

    Examples:
        >>> import dayprism
        >>> for day in dayprism.get_daily_aggregates("IBM"):
        ...     print(day.day, day.low_average, day.high_average, day.volume)
    """
    return asyncio.run(get_daily_aggregates_async(symbol, api_key=api_key))


__all__ = [
    "DayAggregate",
    "DayPrismConfig",
    "TieredFetchOrchestrator",
    "configure",
    "get_config_manager",
    "get_daily_aggregates",
    "get_daily_aggregates_async",
]
