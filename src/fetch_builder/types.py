"""
Type definitions for fetch_builder.
"""
from dataclasses import dataclass, field
from typing import (
    List,
    Literal,
    Mapping,
    Optional,
    Protocol,
    Tuple,
)

import httpx

from .console import mask_sensitive

# HTTP methods a builder can select
HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]

HTTP_METHODS: Tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH")

# Raw header pairs as received from the wire
RawHeaders = List[Tuple[bytes, bytes]]


@dataclass(frozen=True)
class Cookie:
    """A single request cookie."""

    name: str
    value: str

    def to_wire(self) -> str:
        """Render as a `name=value` pair."""
        return f"{self.name}={self.value}"


@dataclass(frozen=True, repr=False)
class FinalizedRequest:
    """Immutable snapshot of a builder, ready to hand to a transport.

    The builder's header map is copied into `header_items`. The bearer token
    and cookies are kept apart and only become `Authorization` / `Cookie`
    headers in `wire_headers()`.
    """

    url: str
    method: HttpMethod
    header_items: Tuple[Tuple[str, str], ...]
    cookies: Optional[Mapping[str, Cookie]] = None
    token: Optional[str] = None
    retries: int = 0
    body: bytes = b""

    @property
    def headers(self) -> httpx.Headers:
        """Fresh copy of the header snapshot."""
        return httpx.Headers(list(self.header_items))

    @property
    def authorization(self) -> Optional[str]:
        """Authorization value carried by this request, if any."""
        if self.token is None:
            return None
        return f"Bearer {self.token}"

    def cookie_header(self) -> Optional[str]:
        """Cookie header value, or None when no cookies were attached."""
        if self.cookies is None:
            return None
        return "; ".join(cookie.to_wire() for cookie in self.cookies.values())

    def wire_headers(self) -> httpx.Headers:
        """Headers as they are sent, credentials and cookies included.

        Cookies set with cookie() are appended to any Cookie header set
        directly with header(), so both reach the wire in one header.
        """
        headers = self.headers
        authorization = self.authorization
        if authorization is not None:
            headers["Authorization"] = authorization
        cookie_header = self.cookie_header()
        if cookie_header:
            existing = headers.get("Cookie")
            if existing:
                cookie_header = f"{existing}; {cookie_header}"
            headers["Cookie"] = cookie_header
        return headers

    def __repr__(self) -> str:
        return (
            f"FinalizedRequest(method={self.method!r}, url={self.url!r}, "
            f"headers={len(self.header_items)}, "
            f"cookies={None if self.cookies is None else len(self.cookies)}, "
            f"token={mask_sensitive(self.token)!r}, "
            f"retries={self.retries}, body={len(self.body)} bytes)"
        )


@dataclass
class RawResponse:
    """Response as produced by a transport, before it is wrapped for callers."""

    status_code: int
    headers: RawHeaders = field(default_factory=list)
    body: bytes = b""


class Transport(Protocol):
    """Transport interface consumed by the executor."""

    async def execute(self, request: FinalizedRequest) -> RawResponse:
        """Send the request and return the fully read response."""
        ...

    async def aclose(self) -> None:
        """Release any resources held by the transport."""
        ...
