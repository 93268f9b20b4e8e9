"""
Asynchronous execution of finalized requests.
"""
import logging
from typing import Callable, Optional

import httpx

from ..config import TransportConfig, resolve_transport_config
from ..console import print_request, print_response
from ..exceptions import ExecutionError
from ..response import ResponseView
from ..transport import HttpxTransport
from ..types import FinalizedRequest, Transport
from .finalizer import finalize
from .request_builder import RequestBuilder

logger = logging.getLogger("fetch_builder.executor")

TransportFactory = Callable[[], Transport]


class AsyncExecutor:
    """
    Hands finalized requests to a transport and wraps the result.

    A new transport is created for every request and closed once the
    request is done, whether it succeeded, failed or was cancelled. Nothing
    is shared between two executions, so concurrent sends are independent.

    Args:
        transport_factory: Returns a fresh Transport per request.
            Defaults to an HttpxTransport built from config.
        config: Transport configuration for the default factory and tracing.
    """

    def __init__(
        self,
        transport_factory: Optional[TransportFactory] = None,
        config: Optional[TransportConfig] = None,
    ) -> None:
        self._config = config
        self._trace = resolve_transport_config(config).trace
        if transport_factory is None:
            transport_factory = self._default_transport
        self._transport_factory = transport_factory

    def _default_transport(self) -> Transport:
        return HttpxTransport(self._config)

    async def execute(self, request: FinalizedRequest) -> ResponseView:
        """
        Send a finalized request.

        Retries are not attempted here; request.retries is left for the
        transport to interpret.

        Raises:
            ExecutionError: If the transport could not complete the request.
        """
        logger.debug(
            f"AsyncExecutor.execute: method={request.method}, url={request.url}, "
            f"retries={request.retries}"
        )
        if self._trace:
            print_request(request)

        transport = self._transport_factory()
        try:
            raw = await transport.execute(request)
        except ExecutionError as e:
            logger.error(f"AsyncExecutor.execute: {request.method} {request.url} failed: {e.diagnostic}")
            raise
        except (httpx.HTTPError, OSError) as e:
            # Injected transports may raise untyped network errors
            diagnostic = str(e) or type(e).__name__
            logger.error(f"AsyncExecutor.execute: {request.method} {request.url} failed: {diagnostic}")
            raise ExecutionError(diagnostic, url=request.url) from e
        finally:
            await transport.aclose()

        response = ResponseView(raw.status_code, raw.headers, raw.body)
        logger.debug(
            f"AsyncExecutor.execute: {request.method} {request.url} -> "
            f"{response.status_code()} ({len(raw.body)} bytes)"
        )
        if self._trace:
            print_response(request.url, response)
        return response


async def send(
    builder: RequestBuilder,
    *,
    executor: Optional[AsyncExecutor] = None,
) -> ResponseView:
    """
    Finalize a builder and send it.

    Example:
        response = await send(
            RequestBuilder("https://api.example.com/v1").bearer_auth(token).get("/items")
        )

    Raises:
        BuildError: If the request could not be finalized.
        ExecutionError: If the transport failed.
    """
    request = finalize(builder)
    if executor is None:
        executor = AsyncExecutor()
    return await executor.execute(request)
