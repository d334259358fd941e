"""Pytest configuration for the dayprism test suite."""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Callable

import httpx
import pytest
from prometheus_client import CollectorRegistry

from dayprism.core.config import AlphaVantageConfig
from dayprism.core.monitoring import MetricsCollector
from dayprism.core.services.orchestrator import TieredFetchOrchestrator

TEST_API_KEY = "test-key"
FIXED_TODAY = date(2024, 11, 5)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--dayprism-run-integration",
        action="store_true",
        default=False,
        help="Run dayprism integration tests that require external services.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker."""

    config.addinivalue_line(
        "markers",
        "integration: marks dayprism tests requiring network or external services",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--dayprism-run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --dayprism-run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


class RecordingTransport(httpx.AsyncBaseTransport):
    """Async transport replaying queued responses and recording every request."""

    def __init__(self, responses: list[httpx.Response | Exception]) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request: {request.url}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def params(self) -> list[dict[str, str]]:
        return [dict(request.url.params) for request in self.requests]


def _observation(low: str, high: str, volume: str, open_: str = "1.0", close: str = "1.0") -> dict[str, str]:
    return {"1. open": open_, "2. high": high, "3. low": low, "4. close": close, "5. volume": volume}


@pytest.fixture
def observation() -> Callable[..., dict[str, str]]:
    """Build one upstream observation in wire format."""

    return _observation


@pytest.fixture
def scenario_series() -> dict[str, dict[str, str]]:
    """Three observations spread over two days."""

    return {
        "2024-10-15 09:30": _observation(low="100", high="105", volume="1000"),
        "2024-10-15 09:45": _observation(low="102", high="107", volume="2000"),
        "2024-10-16 09:30": _observation(low="90", high="95", volume="500"),
    }


@pytest.fixture
def series_payload() -> Callable[..., dict[str, Any]]:
    """Build a successful intraday payload around ``series``."""

    def build(series: dict[str, Any], output_size: str = "Full size") -> dict[str, Any]:
        return {
            "Meta Data": {
                "1. Information": "Intraday (15min) open, high, low, close prices and volume",
                "2. Symbol": "IBM",
                "3. Last Refreshed": "2024-10-16 19:45:00",
                "4. Interval": "15min",
                "5. Output Size": output_size,
                "6. Time Zone": "US/Eastern",
            },
            "Time Series (15min)": series,
        }

    return build


@pytest.fixture
def premium_denied_payload() -> dict[str, str]:
    return {
        "Information": "Thank you for using Alpha Vantage! This is a premium endpoint. "
        "You may subscribe to any of the premium plans at https://www.alphavantage.co/premium/ "
        "to instantly unlock all premium endpoints"
    }


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    def build(payload: Any, status_code: int = 200) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return build


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def provider_config() -> AlphaVantageConfig:
    return AlphaVantageConfig(api_key=TEST_API_KEY)


@pytest.fixture
def make_orchestrator(
    provider_config: AlphaVantageConfig, metrics: MetricsCollector
) -> Callable[..., tuple[TieredFetchOrchestrator, RecordingTransport]]:
    """Build an orchestrator whose upstream replays ``responses``."""

    def build(
        responses: list[httpx.Response | Exception],
        config: AlphaVantageConfig | None = None,
    ) -> tuple[TieredFetchOrchestrator, RecordingTransport]:
        transport = RecordingTransport(responses)
        orchestrator = TieredFetchOrchestrator.from_config(
            config or provider_config,
            transport=transport,
            clock=lambda: FIXED_TODAY,
            metrics=metrics,
        )
        return orchestrator, transport

    return build


@pytest.fixture
def recording_transport() -> type[RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def fixed_clock() -> Callable[[], date]:
    return lambda: FIXED_TODAY
