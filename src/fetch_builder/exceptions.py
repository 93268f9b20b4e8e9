"""
Exception hierarchy for fetch_builder.

Three families are kept apart so callers can react differently:
- ConfigurationError: bad caller input, fix the call and try again.
- ExecutionError: the transport failed, the whole send may be retried.
- BuildError: internal defect, not recoverable by the caller.
"""
from typing import Optional


class FetchBuilderError(Exception):
    """Base class for all fetch_builder errors."""

    code = "FETCH_BUILDER_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.name = type(self).__name__


class ConfigurationError(FetchBuilderError, ValueError):
    """Raised when the caller supplies invalid request configuration."""

    code = "CONFIGURATION_ERROR"


class InvalidUrl(ConfigurationError):
    """Raised when the base URL is not an absolute URL with a host."""

    code = "INVALID_URL"

    def __init__(self, url: str, reason: str = "not an absolute URL") -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class InvalidHeaderName(ConfigurationError):
    """Raised when a header name is not a valid HTTP token."""

    code = "INVALID_HEADER_NAME"

    def __init__(self, header_name: str) -> None:
        super().__init__(f"Invalid header name: {header_name!r}")
        self.header_name = header_name


class InvalidHeaderValue(ConfigurationError):
    """Raised when a header value contains characters not allowed on the wire."""

    code = "INVALID_HEADER_VALUE"

    def __init__(self, header_name: str, header_value: str) -> None:
        super().__init__(f"Invalid value for header {header_name!r}")
        self.header_name = header_name
        self.header_value = header_value


class InvalidCookie(ConfigurationError):
    """Raised when a cookie name or value cannot be sent as a single pair."""

    code = "INVALID_COOKIE"

    def __init__(self, cookie_name: str, reason: str) -> None:
        super().__init__(f"Invalid cookie {cookie_name!r}: {reason}")
        self.cookie_name = cookie_name
        self.reason = reason


class BuildError(FetchBuilderError):
    """Raised when finalization breaks an internal invariant."""

    code = "BUILD_ERROR"


class ExecutionError(FetchBuilderError):
    """Raised when the transport fails to complete a request."""

    code = "EXECUTION_ERROR"

    def __init__(self, diagnostic: str, url: Optional[str] = None) -> None:
        message = f"Request to {url} failed: {diagnostic}" if url else diagnostic
        super().__init__(message)
        self.diagnostic = diagnostic
        self.url = url


class EncodingError(FetchBuilderError):
    """Raised when a response header value cannot be represented as text."""

    code = "ENCODING_ERROR"

    def __init__(self, header_name: str) -> None:
        super().__init__(f"Header {header_name!r} contains non-visible-ASCII bytes")
        self.header_name = header_name
