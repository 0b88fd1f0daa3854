"""
Tests for transport/httpx_transport.py
Logic testing: Decision/Branch, Error Path
"""
import json

import httpx
import pytest

from realm_fetcher import Fetcher, NetworkError, SessionUser, StaticUserContext
from realm_fetcher.location import StaticLocationUrlContext
from realm_fetcher.transport.httpx_transport import HttpxNetworkTransport
from realm_fetcher.types import RequestDescriptor


def make_transport(handler):
    return HttpxNetworkTransport(
        httpx_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )


class TestHttpxNetworkTransport:
    """Tests for HttpxNetworkTransport class."""

    @pytest.mark.asyncio
    async def test_send_success(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"foo": "bar"})

        transport = make_transport(handler)
        descriptor = RequestDescriptor(
            method="POST",
            url="http://localhost:1337/w00t",
            headers={"Content-Type": "application/json", "X-Custom": "1"},
            body='{"x": 1}',
        )

        response = await transport.send(descriptor)

        assert response.json() == {"foo": "bar"}
        assert seen[0].method == "POST"
        assert seen[0].headers["X-Custom"] == "1"
        assert json.loads(seen[0].content) == {"x": 1}
        await transport.aclose()

    @pytest.mark.asyncio
    async def test_non_success_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "invalid session", "error_code": "InvalidSession"})

        transport = make_transport(handler)

        with pytest.raises(NetworkError, match="invalid session") as exc_info:
            await transport.send(RequestDescriptor(method="GET", url="http://localhost:1337/w00t"))

        assert exc_info.value.status == 401
        assert "InvalidSession" in str(exc_info.value)
        assert exc_info.value.response is not None

    @pytest.mark.asyncio
    async def test_non_success_without_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        transport = make_transport(handler)

        with pytest.raises(NetworkError, match="status 502"):
            await transport.send(RequestDescriptor(method="GET", url="http://localhost:1337/w00t"))

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(handler)

        with pytest.raises(NetworkError, match="connection refused") as exc_info:
            await transport.send(RequestDescriptor(method="GET", url="http://localhost:1337/w00t"))

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_send_after_close(self):
        transport = make_transport(lambda request: httpx.Response(200))
        await transport.aclose()

        with pytest.raises(RuntimeError, match="Transport has been closed"):
            await transport.send(RequestDescriptor(method="GET", url="http://localhost:1337/"))

    @pytest.mark.asyncio
    async def test_async_context_manager(self):
        async with make_transport(lambda request: httpx.Response(200)) as transport:
            assert transport._closed is False
        assert transport._closed is True

    def test_default_client(self, monkeypatch):
        monkeypatch.delenv("SSL_CERT_VERIFY", raising=False)
        monkeypatch.delenv("NODE_TLS_REJECT_UNAUTHORIZED", raising=False)
        transport = HttpxNetworkTransport(timeout=3.0)
        assert isinstance(transport._client, httpx.AsyncClient)
        assert transport._client.timeout.read == 3.0


class TestFetcherOverHttpx:
    """End to end through the httpx transport."""

    @pytest.mark.asyncio
    async def test_fetch_json(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"user_id": "u1"})

        fetcher = Fetcher(
            app_id="test-app-id",
            transport=make_transport(handler),
            user_context=StaticUserContext(SessionUser(access_token="tok")),
            location_url_context=StaticLocationUrlContext("http://localhost:1337"),
        )

        result = await fetcher.fetch_json({"method": "GET", "url": "/auth/profile"})

        assert result == {"user_id": "u1"}
        assert str(seen[0].url) == "http://localhost:1337/auth/profile"
        assert seen[0].headers["Authorization"] == "Bearer tok"
        assert seen[0].headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_fetch_json_empty_body(self):
        fetcher = Fetcher(
            app_id="test-app-id",
            transport=make_transport(lambda request: httpx.Response(204)),
            user_context=StaticUserContext(),
            location_url_context=StaticLocationUrlContext("http://localhost:1337"),
        )

        assert await fetcher.fetch_json({"method": "DELETE", "url": "/x"}) is None

    @pytest.mark.asyncio
    async def test_fetch_json_not_json(self):
        fetcher = Fetcher(
            app_id="test-app-id",
            transport=make_transport(lambda request: httpx.Response(200, text="<html>")),
            user_context=StaticUserContext(),
            location_url_context=StaticLocationUrlContext("http://localhost:1337"),
        )

        with pytest.raises(NetworkError, match="Expected a JSON response body") as exc_info:
            await fetcher.fetch_json({"method": "GET", "url": "/x"})
        assert exc_info.value.status == 200

    @pytest.mark.asyncio
    async def test_fetch_returns_raw_response(self):
        fetcher = Fetcher(
            app_id="test-app-id",
            transport=make_transport(lambda request: httpx.Response(200, json=[1, 2])),
            user_context=StaticUserContext(),
            location_url_context=StaticLocationUrlContext("http://localhost:1337"),
        )

        response = await fetcher.fetch({"method": "GET", "url": "/x"})

        assert isinstance(response, httpx.Response)
        assert response.json() == [1, 2]
