"""
Fluent request builder for fetch_builder.
"""
import logging
import re
from typing import Dict, Optional, Union

import httpx

from ..config import DEFAULT_CONTENT_TYPE
from ..console import mask_sensitive
from ..exceptions import (
    ConfigurationError,
    InvalidCookie,
    InvalidHeaderName,
    InvalidHeaderValue,
    InvalidUrl,
)
from ..types import Cookie, HttpMethod
from .url_composer import parse_base_url

logger = logging.getLogger("fetch_builder.request_builder")

# RFC 7230 token
_HEADER_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
# Visible ASCII plus horizontal tab
_HEADER_VALUE_RE = re.compile(r"^[\t\x20-\x7e]*$")
# RFC 6265 cookie-octet: visible ASCII minus DQUOTE , ; and backslash
_COOKIE_VALUE_RE = re.compile(r"^[\x21\x23-\x2b\x2d-\x3a\x3c-\x5b\x5d-\x7e]*$")

BodyInput = Union[bytes, bytearray, memoryview]


def validate_header_name(name: str) -> str:
    """Return name unchanged if it is a valid HTTP token."""
    if not isinstance(name, str) or not _HEADER_NAME_RE.match(name):
        raise InvalidHeaderName(name)
    return name


def validate_header_value(name: str, value: str) -> str:
    """Return value unchanged if it can be sent as a header value."""
    if not isinstance(value, str) or not _HEADER_VALUE_RE.match(value):
        raise InvalidHeaderValue(name, value)
    return value


def validate_cookie(name: str, value: str) -> None:
    """Reject cookie pairs that would not survive `name=value; ...` encoding."""
    if not isinstance(name, str) or not _HEADER_NAME_RE.match(name):
        raise InvalidCookie(name, "name is not a valid token")
    if not isinstance(value, str) or not _COOKIE_VALUE_RE.match(value):
        raise InvalidCookie(name, "value contains characters not allowed in a cookie")


class RequestBuilder:
    """
    Mutable accumulator of request configuration.

    Every setter mutates the builder in place and returns it, so calls chain:

        builder = (
            RequestBuilder("https://api.example.com/v1")
            .bearer_auth(token)
            .header("X-Request-Id", request_id)
            .post("/items?sort=asc")
            .body(payload)
        )

    A builder is not safe to mutate from several tasks or threads at once;
    use copy() to hand out independent instances.
    """

    def __init__(self, base_url: str) -> None:
        try:
            parts = parse_base_url(base_url)
            host = parts.hostname.encode("idna").decode("ascii")
        except ValueError as e:
            # UnicodeError from the idna codec is a ValueError too
            raise InvalidUrl(base_url, str(e)) from e

        if ":" in host:
            host = f"[{host}]"

        self._base_url = base_url
        self._token: Optional[str] = None
        self._method: HttpMethod = "GET"
        self._path = ""
        self._cookies: Optional[Dict[str, Cookie]] = None
        self._headers = httpx.Headers()
        self._headers["Host"] = host
        self._headers["Content-Type"] = DEFAULT_CONTENT_TYPE
        self._retries = 0
        self._body = b""

        logger.debug(f"RequestBuilder: base_url={base_url}, host={host}")

    # -- read-only state -------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def method(self) -> HttpMethod:
        return self._method

    @property
    def path(self) -> str:
        return self._path

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def headers(self) -> httpx.Headers:
        """Copy of the current header map."""
        return httpx.Headers(self._headers)

    @property
    def cookies(self) -> Optional[Dict[str, Cookie]]:
        """Copy of the cookie map, or None if no cookie was ever set."""
        if self._cookies is None:
            return None
        return dict(self._cookies)

    @property
    def max_retries(self) -> int:
        return self._retries

    @property
    def content(self) -> bytes:
        return self._body

    # -- setters ----------------------------------------------------------

    def cookie(self, key: str, value: str) -> "RequestBuilder":
        """Insert or overwrite the cookie for key."""
        validate_cookie(key, value)
        if self._cookies is None:
            self._cookies = {}
        self._cookies[key] = Cookie(key, value)
        return self

    def header(self, key: str, value: str) -> "RequestBuilder":
        """Insert or overwrite a header; names match case-insensitively."""
        validate_header_name(key)
        validate_header_value(key, value)
        self._headers[key] = value
        return self

    def bearer_auth(self, token: str) -> "RequestBuilder":
        """Store a bearer token; the Authorization header is added at send time."""
        self._token = token
        logger.debug(f"RequestBuilder.bearer_auth: token={mask_sensitive(token)}")
        return self

    def set_content_type(self, content_type: str) -> "RequestBuilder":
        """Overwrite the Content-Type header."""
        validate_header_value("Content-Type", content_type)
        self._headers["Content-Type"] = content_type
        return self

    def retries(self, retries: int) -> "RequestBuilder":
        """Store the retry budget handed to the transport."""
        if isinstance(retries, bool) or not isinstance(retries, int) or retries < 0:
            raise ConfigurationError(
                f"retries must be a non-negative integer, got {retries!r}"
            )
        self._retries = retries
        return self

    def body(self, body: BodyInput) -> "RequestBuilder":
        """Replace the whole request body."""
        if isinstance(body, str):
            raise TypeError("body must be bytes, not str; encode it first")
        if not isinstance(body, (bytes, bytearray, memoryview)):
            raise TypeError(f"body must be bytes-like, not {type(body).__name__}")
        self._body = bytes(body)
        return self

    def _route(self, method: HttpMethod, path: str) -> "RequestBuilder":
        self._method = method
        self._path = path
        return self

    def get(self, path: str) -> "RequestBuilder":
        return self._route("GET", path)

    def post(self, path: str) -> "RequestBuilder":
        return self._route("POST", path)

    def put(self, path: str) -> "RequestBuilder":
        return self._route("PUT", path)

    def delete(self, path: str) -> "RequestBuilder":
        return self._route("DELETE", path)

    def patch(self, path: str) -> "RequestBuilder":
        return self._route("PATCH", path)

    # -- misc ---------------------------------------------------------------

    def copy(self) -> "RequestBuilder":
        """Independent builder carrying the same configuration."""
        clone = RequestBuilder.__new__(RequestBuilder)
        clone._base_url = self._base_url
        clone._token = self._token
        clone._method = self._method
        clone._path = self._path
        clone._cookies = None if self._cookies is None else dict(self._cookies)
        clone._headers = httpx.Headers(self._headers)
        clone._retries = self._retries
        clone._body = self._body
        return clone

    def __repr__(self) -> str:
        return (
            f"RequestBuilder(base_url={self._base_url!r}, method={self._method!r}, "
            f"path={self._path!r}, token={mask_sensitive(self._token)!r}, "
            f"retries={self._retries})"
        )
