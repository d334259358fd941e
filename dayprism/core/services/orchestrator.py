"""
Tiered fetch orchestration.

One call walks a small state machine::

    ATTEMPT_RICH --tier denied--> ATTEMPT_DEGRADED
         |                              |
         +--series (valid/empty)--> DONE <--series--+
         |                                          |
         +--hard error / note--> FAILED <--anything else

``ATTEMPT_DEGRADED`` is entered at most once and has no outgoing edge back to
an attempt state, so at most two upstream calls are made.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import replace
from datetime import date
from enum import Enum

import httpx
from loguru import logger

from dayprism.core.config import AlphaVantageConfig
from dayprism.core.exceptions import DataValidationError, ErrorCode, UpstreamError
from dayprism.core.models import (
    ClassifiedResponse,
    DayAggregate,
    FetchAttempt,
    FetchResult,
    ResponseKind,
    Tier,
)
from dayprism.core.monitoring import MetricsCollector, get_metrics_collector
from dayprism.core.providers import AlphaVantageProvider
from dayprism.core.services.aggregator import aggregate


class FetchState(str, Enum):
    ATTEMPT_RICH = "attempt_rich"
    ATTEMPT_DEGRADED = "attempt_degraded"
    DONE = "done"
    FAILED = "failed"


_STATE_TIER = {
    FetchState.ATTEMPT_RICH: Tier.PREMIUM,
    FetchState.ATTEMPT_DEGRADED: Tier.FREE,
}

_FAILURE_CODES = {
    ResponseKind.HARD_ERROR: ErrorCode.UPSTREAM_ERROR,
    ResponseKind.SOFT_NOTE: ErrorCode.UPSTREAM_SOFT_NOTE,
    ResponseKind.TIER_DENIED: ErrorCode.TIER_DENIED,
}


def normalize_symbol(symbol: str | None) -> str:
    """Strip and upper-case a ticker symbol.

    Raises:
        DataValidationError: the symbol is missing or blank.
    """
    normalized = (symbol or "").strip().upper()
    if not normalized:
        raise DataValidationError("Symbol parameter is required", validation_errors={"symbol": "must not be empty"})
    return normalized


def next_state(state: FetchState, classified: ClassifiedResponse) -> FetchState:
    """Transition taken after ``classified`` was received in ``state``."""
    if classified.has_series:
        return FetchState.DONE
    if classified.kind is ResponseKind.TIER_DENIED and state is FetchState.ATTEMPT_RICH:
        return FetchState.ATTEMPT_DEGRADED
    return FetchState.FAILED


class TieredFetchOrchestrator:
    """Fetches intraday data on the best tier the credential unlocks and aggregates it by day."""

    def __init__(
        self,
        provider: AlphaVantageProvider,
        api_key: str | None = None,
        *,
        metrics: MetricsCollector | None = None,
    ):
        self.provider = provider
        self.api_key = api_key if api_key is not None else provider.config.api_key
        self._metrics = metrics

    @classmethod
    def from_config(
        cls,
        config: AlphaVantageConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], date] = date.today,
        metrics: MetricsCollector | None = None,
    ) -> "TieredFetchOrchestrator":
        provider = AlphaVantageProvider(config, transport=transport, clock=clock)
        return cls(provider, config.api_key, metrics=metrics)

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    def _require_api_key(self) -> str:
        return replace(self.provider.config, api_key=self.api_key).require_api_key()

    async def _attempt(self, symbol: str, tier: Tier, api_key: str, attempts: list[FetchAttempt]) -> ClassifiedResponse:
        log = logger.bind(provider=self.provider.name, symbol=symbol, tier=tier.value)
        log.info("Requesting intraday data for {symbol} on the {tier} tier", symbol=symbol, tier=tier.value)
        started = time.perf_counter()
        try:
            attempt, classified = await self.provider.fetch(symbol, tier, api_key)
        except UpstreamError as e:
            self.metrics.observe_attempt(tier.value, None, time.perf_counter() - started)
            attempts.append(FetchAttempt(tier=tier, url=self.provider.request_url(symbol, tier)))
            log.bind(error_code=e.error_code).error("Upstream request failed: {message}", message=e.message)
            raise

        self.metrics.observe_attempt(tier.value, classified.kind.value, time.perf_counter() - started)
        attempts.append(attempt)
        log.bind(outcome=classified.kind.value).info("Upstream response classified as {outcome}", outcome=classified.kind.value)
        return classified

    async def fetch_series(self, symbol: str) -> FetchResult:
        """Resolve the series for ``symbol``, falling back to the free tier once on tier denial.

        Raises:
            DataValidationError: blank symbol.
            ConfigurationError: no API key; raised before any network call.
            UpstreamError: terminal classification, transport or decode failure.
        """
        symbol = normalize_symbol(symbol)
        api_key = self._require_api_key()

        attempts: list[FetchAttempt] = []
        state = FetchState.ATTEMPT_RICH
        tier = Tier.PREMIUM
        classified: ClassifiedResponse | None = None

        while state in _STATE_TIER:
            tier = _STATE_TIER[state]
            classified = await self._attempt(symbol, tier, api_key, attempts)
            state = next_state(state, classified)
            if state is FetchState.ATTEMPT_DEGRADED:
                self.metrics.record_fallback()
                logger.bind(provider=self.provider.name, symbol=symbol).warning(
                    "Premium tier not available for {symbol}, falling back to the free tier (compact output)",
                    symbol=symbol,
                )

        if state is FetchState.FAILED:
            message = getattr(classified, "message", "unknown upstream failure")
            error_code = _FAILURE_CODES.get(classified.kind, ErrorCode.UPSTREAM_ERROR)
            raise UpstreamError(
                f"Alpha Vantage API: {message}",
                provider_name=self.provider.name,
                error_code=error_code.value,
                details={"symbol": symbol, "tiers": [a.tier.value for a in attempts]},
            )

        if classified.kind is ResponseKind.EMPTY:
            logger.bind(provider=self.provider.name, symbol=symbol).warning(
                "No time series data returned for {symbol}", symbol=symbol
            )

        return FetchResult(
            symbol=symbol,
            tier=tier,
            series=classified.series,
            attempts=tuple(attempts),
            metadata=classified.metadata,
        )

    async def fetch_and_aggregate(self, symbol: str) -> list[DayAggregate]:
        """Fetch ``symbol`` and return one aggregate per calendar day, oldest first."""
        return self.aggregate_result(await self.fetch_series(symbol))

    def aggregate_result(self, result: FetchResult) -> list[DayAggregate]:
        """Bucket an already fetched series by day and record the day count."""
        days = aggregate(result.series)
        self.metrics.record_days(len(days))
        logger.bind(provider=self.provider.name, symbol=result.symbol, tier=result.tier.value).info(
            "Processed {count} days of data for {symbol}", count=len(days), symbol=result.symbol
        )
        return days

    async def close(self) -> None:
        await self.provider.close()

    async def __aenter__(self) -> "TieredFetchOrchestrator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = [
    "FetchState",
    "TieredFetchOrchestrator",
    "next_state",
    "normalize_symbol",
]
