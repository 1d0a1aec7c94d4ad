"""Tests for the upstream HTTP client."""

import asyncio

import httpx
import pytest

from statscache.errors import BodyReadError, FetchError, TransportError
from statscache.http.client import UpstreamClient, UpstreamResponse


class BrokenStream(httpx.AsyncByteStream):
    """Response stream that fails partway through the body."""

    async def __aiter__(self):
        yield b'{"results": ['
        raise httpx.ReadError("connection reset by peer")


class TestUpstreamClient:
    """Tests for UpstreamClient."""

    @pytest.mark.asyncio
    async def test_fetch_returns_body_and_content_type(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                text='{"results": []}',
                headers={"content-type": "application/json"},
            )

        async with make_client(handler) as client:
            result = await client.fetch()

        assert result == UpstreamResponse(body=b'{"results": []}', content_type="application/json")

    @pytest.mark.asyncio
    async def test_sends_bearer_token_to_fixed_url(self, upstream, make_client) -> None:
        upstream.queue("ok")
        async with make_client(upstream) as client:
            await client.fetch()

        assert upstream.calls == 1
        request = upstream.requests[0]
        assert request.method == "GET"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert str(request.url) == client.url

    @pytest.mark.asyncio
    async def test_error_status_body_passed_through(self, make_client) -> None:
        """Upstream status codes are not inspected."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, text="invalid api key")

        async with make_client(handler) as client:
            result = await client.fetch()

        assert result.body == b"invalid api key"

    @pytest.mark.asyncio
    async def test_connect_error_maps_to_transport_error(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name or service not known", request=request)

        async with make_client(handler) as client:
            with pytest.raises(TransportError, match="name or service not known") as exc_info:
                await client.fetch()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert isinstance(exc_info.value, FetchError)

    @pytest.mark.asyncio
    async def test_timeout_maps_to_transport_error(self, make_client) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, text="too late")

        async with make_client(handler, timeout=0.05) as client:
            with pytest.raises(TransportError, match="timed out"):
                await client.fetch()

    @pytest.mark.asyncio
    async def test_broken_body_maps_to_body_read_error(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, stream=BrokenStream())

        async with make_client(handler) as client:
            with pytest.raises(BodyReadError, match="connection reset"):
                await client.fetch()

    @pytest.mark.asyncio
    async def test_invalid_utf8_body_passed_through_as_bytes(self, make_client) -> None:
        """The body is never decoded, so malformed text is not an error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                content=b"\xff\xfe\xfa",
                headers={"content-type": "text/plain; charset=utf-8"},
            )

        async with make_client(handler) as client:
            result = await client.fetch()

        assert result.body == b"\xff\xfe\xfa"

    @pytest.mark.asyncio
    async def test_client_is_reused_between_fetches(self, upstream, make_client) -> None:
        upstream.queue("one", "two")
        client = make_client(upstream)

        await client.fetch()
        first = client._client
        await client.fetch()

        assert client._client is first
        await client.close()
        assert client.is_closed

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(200))
        await client.close()
        await client.close()
        assert client.is_closed

    def test_default_timeout(self) -> None:
        client = UpstreamClient(url="https://example.test/", bearer_token="t")
        assert client._timeout == 30.0
