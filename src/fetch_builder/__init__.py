"""
Fluent HTTP request builder with an asynchronous executor.

Accumulate method, path, headers, cookies, bearer auth, body and retry budget
on a RequestBuilder, then send it:

    from fetch_builder import RequestBuilder, send

    builder = (
        RequestBuilder("https://api.example.com/v1")
        .bearer_auth("tok123")
        .post("/items?sort=asc")
        .body(b'{"name": "widget"}')
    )
    response = await send(builder)
    response.status_code(), response.header("content-type"), response.body()
"""
from .types import (
    HttpMethod,
    Cookie,
    FinalizedRequest,
    RawResponse,
    Transport,
)
from .exceptions import (
    FetchBuilderError,
    ConfigurationError,
    InvalidUrl,
    InvalidHeaderName,
    InvalidHeaderValue,
    InvalidCookie,
    BuildError,
    ExecutionError,
    EncodingError,
)
from .config import (
    TimeoutConfig,
    TransportConfig,
    DEFAULT_CONTENT_TYPE,
)
from .core.url_composer import compose_url, split_path_and_query
from .core.request_builder import RequestBuilder
from .core.finalizer import finalize
from .core.executor import AsyncExecutor, send
from .response import ResponseView
from .transport import HttpxTransport
from .factory import RequestOptions, create_builder, send_request

__all__ = [
    # Types
    "HttpMethod",
    "Cookie",
    "FinalizedRequest",
    "RawResponse",
    "Transport",
    # Errors
    "FetchBuilderError",
    "ConfigurationError",
    "InvalidUrl",
    "InvalidHeaderName",
    "InvalidHeaderValue",
    "InvalidCookie",
    "BuildError",
    "ExecutionError",
    "EncodingError",
    # Config
    "TimeoutConfig",
    "TransportConfig",
    "DEFAULT_CONTENT_TYPE",
    # Core
    "compose_url",
    "split_path_and_query",
    "RequestBuilder",
    "finalize",
    "AsyncExecutor",
    "send",
    # Response
    "ResponseView",
    # Transport
    "HttpxTransport",
    # Factory
    "RequestOptions",
    "create_builder",
    "send_request",
]

__version__ = "0.1.0"
