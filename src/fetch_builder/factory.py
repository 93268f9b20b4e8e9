"""
Factory functions for creating request builders.

Offers a declarative alternative to the fluent chain: describe the request
once as RequestOptions and apply it in one step.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from .core.executor import AsyncExecutor, send
from .core.request_builder import RequestBuilder
from .exceptions import ConfigurationError
from .response import ResponseView
from .types import HTTP_METHODS, HttpMethod


@dataclass(frozen=True)
class RequestOptions:
    """Declarative request description."""

    method: HttpMethod = "GET"
    path: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    token: Optional[str] = None
    content_type: Optional[str] = None
    retries: int = 0
    body: bytes = b""


def create_builder(
    base_url: str,
    options: Optional[RequestOptions] = None,
) -> RequestBuilder:
    """
    Create a RequestBuilder with all options applied.

    Options go through the regular setters, so validation and errors are the
    same as for a fluent chain. Cookies are only attached when at least one is
    given.

    Example:
        builder = create_builder(
            "https://api.example.com/v1",
            RequestOptions(method="POST", path="/items", token=token),
        )
    """
    if options is None:
        options = RequestOptions()

    method = options.method.upper()
    if method not in HTTP_METHODS:
        raise ConfigurationError(
            f"Invalid method: {options.method}. Must be one of: {list(HTTP_METHODS)}"
        )

    builder = RequestBuilder(base_url)
    for key, value in options.headers.items():
        builder.header(key, value)
    for key, value in options.cookies.items():
        builder.cookie(key, value)
    if options.token is not None:
        builder.bearer_auth(options.token)
    if options.content_type is not None:
        builder.set_content_type(options.content_type)

    selector = getattr(builder, method.lower())
    return selector(options.path).retries(options.retries).body(options.body)


async def send_request(
    base_url: str,
    options: Optional[RequestOptions] = None,
    *,
    executor: Optional[AsyncExecutor] = None,
) -> ResponseView:
    """Build and send a request in one call."""
    return await send(create_builder(base_url, options), executor=executor)
