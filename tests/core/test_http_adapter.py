"""Tests for the HTTP adapter."""

import httpx
import pytest

from dayprism.core.exceptions import TransportError
from dayprism.core.http_adapter import HttpClient, HttpConfig


class TestHttpConfig:
    def test_defaults(self):
        config = HttpConfig(base_url="https://example.test/query")

        assert config.timeout == 30.0
        assert config.max_redirects == 5
        assert config.verify_ssl is True
        assert config.headers == {}

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"base_url": ""}, "base_url cannot be empty"),
            ({"base_url": "https://x.test", "timeout": 0}, "timeout must be positive"),
            ({"base_url": "https://x.test", "max_redirects": -1}, "max_redirects must be non-negative"),
        ],
    )
    def test_invalid_values(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            HttpConfig(**kwargs)


class TestHttpClient:
    @pytest.mark.asyncio
    async def test_get_returns_successful_response(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        config = HttpConfig(base_url="https://example.test/query", headers={"X-Extra": "1"})
        async with HttpClient(config, provider_name="example", transport=httpx.MockTransport(handler)) as client:
            response = await client.get(params={"symbol": "IBM"})

        assert response.json() == {"ok": True}
        assert seen[0].url.params["symbol"] == "IBM"
        assert seen[0].headers["User-Agent"] == "dayprism/0.1.0"
        assert seen[0].headers["X-Extra"] == "1"

    @pytest.mark.asyncio
    async def test_explicit_url_overrides_base_url(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200)

        client = HttpClient(HttpConfig(base_url="https://example.test/query"), transport=httpx.MockTransport(handler))
        try:
            await client.get(url="https://other.test/path")
        finally:
            await client.close()

        assert seen == ["https://other.test/path"]

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502))

        async with HttpClient(HttpConfig(base_url="https://example.test"), provider_name="example", transport=transport) as client:
            with pytest.raises(TransportError, match="HTTP request failed: 502") as excinfo:
                await client.get()

        assert excinfo.value.status_code == 502
        assert excinfo.value.details["status_code"] == 502
        assert excinfo.value.provider_name == "example"

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        config = HttpConfig(base_url="https://example.test", timeout=2.5)
        async with HttpClient(config, provider_name="example", transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError, match="timed out after 2.5 seconds") as excinfo:
                await client.get()

        assert excinfo.value.timeout is True
        assert excinfo.value.error_code == "TRANSPORT_TIMEOUT"

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with HttpClient(HttpConfig(base_url="https://example.test"), transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError, match="ConnectError") as excinfo:
                await client.get()

        assert excinfo.value.timeout is False
        assert excinfo.value.status_code is None

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = HttpClient(HttpConfig(base_url="https://example.test"), transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        await client.get()

        await client.close()
        await client.close()

        assert client._client is None
