"""
Default transport for fetch_builder, backed by httpx.

The retry budget of each request is handed to httpx.AsyncHTTPTransport,
which retries failed connection attempts. Response status codes are never
retried.
"""
import logging
from typing import Optional

import httpx

from .config import TransportConfig, resolve_transport_config
from .console import mask_headers
from .exceptions import ExecutionError
from .types import FinalizedRequest, RawResponse

logger = logging.getLogger("fetch_builder.transport")


class HttpxTransport:
    """
    Executes finalized requests with an httpx.AsyncClient.

    Example:
        async with HttpxTransport() as transport:
            raw = await transport.execute(finalize(builder))

    Args:
        config: Transport configuration (SSL, timeouts, tracing)
        transport: Inner httpx transport to use instead of a network
            transport, e.g. httpx.MockTransport in tests
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = resolve_transport_config(config)
        self._inner = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._closed = False

    def _create_client(self, retries: int) -> httpx.AsyncClient:
        timeout = self._config.timeout
        transport = self._inner
        if transport is None:
            transport = httpx.AsyncHTTPTransport(
                verify=self._config.verify_ssl,
                trust_env=self._config.trust_env,
                retries=retries,
            )
        return httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(
                connect=timeout.connect,
                read=timeout.read,
                write=timeout.write,
                pool=timeout.connect,
            ),
            trust_env=self._config.trust_env,
        )

    async def execute(self, request: FinalizedRequest) -> RawResponse:
        """Send the request and read the full response body."""
        if self._closed:
            raise RuntimeError("Transport has been closed")
        if self._client is None:
            self._client = self._create_client(request.retries)

        headers = request.wire_headers()
        logger.debug(
            f"HttpxTransport.execute: {request.method} {request.url}, "
            f"retries={request.retries}, headers={mask_headers(headers)}"
        )

        try:
            http_request = self._client.build_request(
                method=request.method,
                url=request.url,
                headers=headers,
                content=request.body,
            )
            response = await self._client.send(http_request)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            diagnostic = str(e) or type(e).__name__
            logger.warning(
                f"HttpxTransport.execute: {request.method} {request.url} failed: {diagnostic}"
            )
            raise ExecutionError(diagnostic, url=request.url) from e

        logger.debug(
            f"HttpxTransport.execute: {request.method} {request.url} -> {response.status_code}"
        )
        return RawResponse(
            status_code=response.status_code,
            headers=list(response.headers.raw),
            body=response.content,
        )

    async def aclose(self) -> None:
        """Close the underlying client."""
        self._closed = True
        if self._client is not None:
            await self._client.aclose()
        elif self._inner is not None:
            await self._inner.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
