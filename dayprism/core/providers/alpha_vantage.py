"""
Alpha Vantage intraday provider.

Builds the tier specific ``TIME_SERIES_INTRADAY`` requests and turns each
HTTP response into a :class:`ClassifiedResponse`. The decision of which tier
to try next lives in the orchestrator.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import httpx

from dayprism.core.config import AlphaVantageConfig
from dayprism.core.exceptions import ConfigurationError
from dayprism.core.http_adapter import HttpClient, HttpConfig
from dayprism.core.models import ClassifiedResponse, FetchAttempt, Interval, Tier
from dayprism.core.services.classifier import classify_body

PROVIDER_NAME = "alpha_vantage"
REDACTED = "***"


def last_completed_month(today: date) -> str:
    """Return the calendar month before ``today`` as ``YYYY-MM``."""
    if today.month == 1:
        return f"{today.year - 1}-12"
    return f"{today.year}-{today.month - 1:02d}"


class AlphaVantageProvider:
    """Issues one intraday request per call against a given tier."""

    def __init__(
        self,
        config: AlphaVantageConfig,
        *,
        http_client: HttpClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], date] = date.today,
    ):
        self.config = config
        try:
            self.interval = Interval(config.interval)
        except ValueError as e:
            raise ConfigurationError(
                f"Unsupported intraday interval: {config.interval!r}",
                setting="alpha_vantage.interval",
            ) from e
        self.http_client = http_client or HttpClient(
            HttpConfig(
                base_url=config.base_url,
                timeout=config.timeout,
                user_agent="dayprism-alpha-vantage/0.1.0",
            ),
            provider_name=PROVIDER_NAME,
            transport=transport,
        )
        self._clock = clock

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    def build_request_params(self, symbol: str, tier: Tier, api_key: str) -> dict[str, Any]:
        """Query parameters for ``symbol`` on ``tier``.

        The premium tier asks for the full output of the last completed month,
        the free tier for the compact most recent window.
        """
        params: dict[str, Any] = {
            "function": "TIME_SERIES_INTRADAY",
            "symbol": symbol,
            "interval": self.interval.value,
        }
        if tier is Tier.PREMIUM:
            params["month"] = last_completed_month(self._clock())
            params["outputsize"] = self.config.rich_output_size
        else:
            params["outputsize"] = self.config.degraded_output_size
        params["apikey"] = api_key
        return params

    def request_url(self, symbol: str, tier: Tier) -> str:
        """Request URL for ``symbol`` on ``tier`` with the credential masked, safe to log."""
        params = self.build_request_params(symbol, tier, REDACTED)
        return str(httpx.URL(self.config.base_url, params=params))

    async def fetch(self, symbol: str, tier: Tier, api_key: str) -> tuple[FetchAttempt, ClassifiedResponse]:
        """Issue one request and classify the response.

        Raises:
            TransportError: the request did not complete with a 2xx status.
            DecodeError: the body is not a JSON object.
        """
        params = self.build_request_params(symbol, tier, api_key)
        response = await self.http_client.get(params=params)
        classified = classify_body(response.content, series_key=self.interval.series_key)
        attempt = FetchAttempt(tier=tier, url=self.request_url(symbol, tier), outcome=classified.kind)
        return attempt, classified

    async def close(self) -> None:
        await self.http_client.close()

    async def __aenter__(self) -> "AlphaVantageProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
