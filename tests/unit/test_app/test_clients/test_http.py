"""
test_http.py - HttpxExchange 테스트

httpx.MockTransport로 실제 httpx 요청/응답 경로 검증.
"""

import httpx
import pytest

from src.app.clients.http import HttpxExchange
from src.app.clients.rest import RestClient, TextCodec
from src.app.config import ClientSettings
from src.domain.schemas import TransportRequest


def make_exchange(handler) -> HttpxExchange:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="https://api.example.com",
    )
    return HttpxExchange(client=client)


class TestHttpxExchange:
    """HttpxExchange 테스트."""

    def test_from_settings(self):
        settings = ClientSettings(base_url="http://localhost:9000", timeout_seconds=2.5)

        exchange = HttpxExchange.from_settings(settings)

        assert exchange.base_url == "http://localhost:9000"
        assert exchange.timeout == 2.5

    def test_client_lazy_init(self):
        exchange = HttpxExchange()

        assert exchange._client is None

    @pytest.mark.asyncio
    async def test_send_maps_response(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["content_type"] = request.headers["Content-Type"]
            seen["body"] = request.content
            return httpx.Response(200, content=b'{"token":"xyz"}')

        exchange = make_exchange(handler)
        response = await exchange.send(
            TransportRequest(
                endpoint="/auth/login",
                method="POST",
                headers={"Content-Type": "application/json"},
                body=b'{"username":"a"}',
            )
        )

        assert response.ok is True
        assert response.status_code == 200
        assert response.body == b'{"token":"xyz"}'
        assert seen == {
            "method": "POST",
            "url": "https://api.example.com/auth/login",
            "content_type": "application/json",
            "body": b'{"username":"a"}',
        }

    @pytest.mark.asyncio
    async def test_non_success_status(self):
        exchange = make_exchange(lambda request: httpx.Response(401))

        response = await exchange.send(TransportRequest(endpoint="/x", method="GET"))

        assert response.ok is False
        assert response.status_text == "Unauthorized"

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self):
        exchange = make_exchange(lambda request: httpx.Response(204))
        injected = exchange._client

        await exchange.aclose()

        assert injected.is_closed is False
        await injected.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        async with HttpxExchange(base_url="https://api.example.com") as exchange:
            client = exchange._get_client()

        assert client.is_closed is True
        assert exchange._client is None


class TestRestClientOverHttpx:
    """RestClient + HttpxExchange."""

    @pytest.mark.asyncio
    async def test_rejected_status_text(self):
        exchange = make_exchange(lambda request: httpx.Response(404))
        client = RestClient(exchange)

        state = await client.invoke("/missing", None, TextCodec("GET"))

        assert state.error == "Error: Not Found"

    @pytest.mark.asyncio
    async def test_connect_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = RestClient(make_exchange(handler))

        state = await client.invoke("/x", None, TextCodec("GET"))

        assert state.data is None
        assert state.error == "connection refused"

    @pytest.mark.asyncio
    async def test_timeout_reported(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = RestClient(make_exchange(handler))

        state = await client.invoke("/slow", None, TextCodec("GET"))

        assert state.error == "timed out"
