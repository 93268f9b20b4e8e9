"""
Turns a RequestBuilder into an immutable FinalizedRequest.
"""
import logging
from types import MappingProxyType

from ..console import mask_sensitive
from ..exceptions import BuildError
from ..types import FinalizedRequest
from .request_builder import RequestBuilder
from .url_composer import compose_url, parse_base_url

logger = logging.getLogger("fetch_builder.finalizer")


def finalize(builder: RequestBuilder) -> FinalizedRequest:
    """
    Snapshot the builder's current state.

    The builder is only read, never modified: no Authorization or Cookie
    header is written into its header map.

    Raises:
        BuildError: If the URL cannot be composed from a builder whose base
            URL was already validated at construction.
    """
    try:
        url = compose_url(builder.base_url, builder.path)
        parse_base_url(url)
    except ValueError as e:
        logger.error(
            f"finalize: URL composition failed for base_url={builder.base_url}, "
            f"path={builder.path}: {e}"
        )
        raise BuildError(f"Could not compose request URL: {e}") from e

    headers = builder.headers
    encoding = headers.encoding
    header_items = tuple(
        (key.decode(encoding), value.decode(encoding)) for key, value in headers.raw
    )

    cookies = builder.cookies
    request = FinalizedRequest(
        url=url,
        method=builder.method,
        header_items=header_items,
        cookies=MappingProxyType(cookies) if cookies is not None else None,
        token=builder.token,
        retries=builder.max_retries,
        body=builder.content,
    )

    logger.debug(
        f"finalize: method={request.method}, url={request.url}, "
        f"cookies={cookies is not None}, token={mask_sensitive(request.token)}, "
        f"retries={request.retries}"
    )
    return request
