"""
Tests for transport.py
Logic testing: Path coverage, Error Path, State Transition
"""
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import respx

from fetch_builder.config import TimeoutConfig, TransportConfig
from fetch_builder.core.finalizer import finalize
from fetch_builder.core.request_builder import RequestBuilder
from fetch_builder.exceptions import ExecutionError
from fetch_builder.transport import HttpxTransport


class MockHandler:
    """Records requests sent through httpx.MockTransport."""

    def __init__(self, response: httpx.Response = None):
        self.response = response if response is not None else httpx.Response(200, content=b"{}")
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class TestHttpxTransportExecute:
    """Tests for HttpxTransport.execute."""

    # Happy Path: request reaches the wire as finalized
    @pytest.mark.asyncio
    async def test_sends_finalized_request(self, sample_request, quiet_config):
        handler = MockHandler(httpx.Response(201, content=b'{"id": 1}'))
        async with HttpxTransport(quiet_config, transport=httpx.MockTransport(handler)) as transport:
            raw = await transport.execute(sample_request)

        sent = handler.last
        assert sent.method == "POST"
        assert str(sent.url) == "https://api.example.com/v1/items?sort=asc"
        assert sent.headers["host"] == "api.example.com"
        assert sent.headers["content-type"] == "application/json"
        assert sent.content == b'{"name": "widget"}'
        assert raw.status_code == 201
        assert raw.body == b'{"id": 1}'

    # Path: credentials and cookies realized on the wire
    @pytest.mark.asyncio
    async def test_wire_auth_and_cookies(self, quiet_config):
        builder = (
            RequestBuilder("http://api.example.com/")
            .bearer_auth("tok123")
            .cookie("session", "abc")
            .cookie("theme", "dark")
            .get("/me")
        )
        handler = MockHandler()
        async with HttpxTransport(quiet_config, transport=httpx.MockTransport(handler)) as transport:
            await transport.execute(finalize(builder))

        assert handler.last.headers["authorization"] == "Bearer tok123"
        assert handler.last.headers["cookie"] == "session=abc; theme=dark"

    # Decision: no token, no cookies
    @pytest.mark.asyncio
    async def test_wire_without_credentials(self, builder, quiet_config):
        handler = MockHandler()
        async with HttpxTransport(quiet_config, transport=httpx.MockTransport(handler)) as transport:
            await transport.execute(finalize(builder.get("/public")))

        assert "authorization" not in handler.last.headers
        assert "cookie" not in handler.last.headers

    # Path: raw response headers are kept as bytes pairs
    @pytest.mark.asyncio
    async def test_raw_headers(self, sample_request, quiet_config):
        handler = MockHandler(
            httpx.Response(200, headers=[("X-Trace", "1"), ("X-Trace", "2")], content=b"ok")
        )
        async with HttpxTransport(quiet_config, transport=httpx.MockTransport(handler)) as transport:
            raw = await transport.execute(sample_request)

        assert (b"X-Trace", b"1") in raw.headers
        assert (b"X-Trace", b"2") in raw.headers
        assert raw.body == b"ok"

    # Path: respx router through a mock transport
    @pytest.mark.asyncio
    async def test_respx_router(self, quiet_config):
        router = respx.MockRouter()
        route = router.post("https://api.example.com/v1/items").mock(
            return_value=httpx.Response(200, json={"status": "ok"})
        )
        transport = HttpxTransport(
            quiet_config, transport=httpx.MockTransport(router.async_handler)
        )
        builder = RequestBuilder("https://api.example.com/v1/").post("/items?sort=asc")

        async with transport:
            raw = await transport.execute(finalize(builder))

        assert route.called
        assert route.calls.last.request.url.query == b"sort=asc"
        assert raw.status_code == 200

    # Error Path: connection failure mapped to ExecutionError
    @pytest.mark.asyncio
    async def test_connect_error(self, sample_request, quiet_config):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        async with HttpxTransport(quiet_config, transport=httpx.MockTransport(handler)) as transport:
            with pytest.raises(ExecutionError) as exc_info:
                await transport.execute(sample_request)

        assert "Connection refused" in exc_info.value.diagnostic
        assert exc_info.value.url == sample_request.url
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    # Error Path: mid-transfer read failure
    @pytest.mark.asyncio
    async def test_read_error(self, sample_request, quiet_config):
        def handler(request):
            raise httpx.ReadError("connection reset", request=request)

        async with HttpxTransport(quiet_config, transport=httpx.MockTransport(handler)) as transport:
            with pytest.raises(ExecutionError, match="connection reset"):
                await transport.execute(sample_request)

    # State: execute after close
    @pytest.mark.asyncio
    async def test_closed_transport(self, sample_request, quiet_config):
        transport = HttpxTransport(quiet_config, transport=httpx.MockTransport(MockHandler()))
        await transport.aclose()

        with pytest.raises(RuntimeError, match="Transport has been closed"):
            await transport.execute(sample_request)


class TestHttpxTransportClient:
    """Tests for client construction."""

    # Path: retry budget handed to httpx.AsyncHTTPTransport
    def test_retries_forwarded(self):
        config = TransportConfig(verify_ssl=False, trace=False)
        transport = HttpxTransport(config)

        with patch("fetch_builder.transport.httpx.AsyncHTTPTransport") as http_transport:
            transport._create_client(retries=3)

        http_transport.assert_called_once_with(verify=False, trust_env=True, retries=3)

    # Path: timeout config applied
    def test_timeout_applied(self):
        config = TransportConfig(timeout=TimeoutConfig(connect=1.0, read=2.0, write=3.0), trace=False)
        transport = HttpxTransport(config, transport=httpx.MockTransport(MockHandler()))

        client = transport._create_client(retries=0)

        assert client.timeout.connect == 1.0
        assert client.timeout.read == 2.0
        assert client.timeout.write == 3.0
        assert client.timeout.pool == 1.0

    # State: aclose without a request closes the inner transport
    @pytest.mark.asyncio
    async def test_aclose_before_use(self, quiet_config):
        inner = httpx.MockTransport(MockHandler())
        with patch.object(inner, "aclose", new_callable=AsyncMock) as aclose:
            transport = HttpxTransport(quiet_config, transport=inner)
            await transport.aclose()
        aclose.assert_called_once()
