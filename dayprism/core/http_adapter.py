"""
HTTP adapter for upstream data providers.

Wraps ``httpx.AsyncClient`` with a single timeout configured up front and
translates transport level failures into :class:`TransportError`. Requests
are issued exactly once; retrying is a caller decision.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx
from loguru import logger

from dayprism.core.exceptions import TransportError


@dataclass
class HttpConfig:
    """Configuration for HTTP client behavior."""

    base_url: str
    timeout: float = 30.0
    max_redirects: int = 5
    verify_ssl: bool = True
    user_agent: str = "dayprism/0.1.0"
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate HTTP configuration."""
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_redirects < 0:
            raise ValueError("max_redirects must be non-negative")


class HttpClient:
    """
    Async HTTP client bound to one provider.

    The underlying ``httpx.AsyncClient`` is created lazily and released by
    :meth:`close` or by leaving the ``async with`` block.
    """

    def __init__(
        self,
        http_config: HttpConfig,
        *,
        provider_name: str = "http_client",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.http_config = http_config
        self.provider_name = provider_name
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {
                "User-Agent": self.http_config.user_agent,
                "Accept": "application/json",
                **self.http_config.headers,
            }
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.http_config.timeout),
                follow_redirects=True,
                max_redirects=self.http_config.max_redirects,
                verify=self.http_config.verify_ssl,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, params: dict[str, Any] | None = None, url: str | None = None) -> httpx.Response:
        """Execute a GET request and return the successful response.

        Raises:
            TransportError: on timeout, connection failure or a non-2xx status.
        """
        client = await self._ensure_client()
        target = url or self.http_config.base_url
        try:
            response = await client.get(target, params=params)
        except httpx.TimeoutException as e:
            logger.warning("Request to {provider} timed out", provider=self.provider_name)
            raise TransportError(
                f"Request to {self.provider_name} timed out after {self.http_config.timeout} seconds",
                provider_name=self.provider_name,
                timeout=True,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "Request to {provider} failed with {error_type}",
                provider=self.provider_name,
                error_type=type(e).__name__,
            )
            raise TransportError(
                f"Request to {self.provider_name} failed: {type(e).__name__}",
                provider_name=self.provider_name,
            ) from e

        if not response.is_success:
            raise TransportError(
                f"HTTP request failed: {response.status_code}",
                provider_name=self.provider_name,
                status_code=response.status_code,
            )
        return response
