"""
Read-only response returned by send().
"""
from typing import Iterable, Optional, Tuple

import httpx

from .exceptions import EncodingError


def _is_visible_ascii(value: bytes) -> bool:
    return all(b == 0x09 or 0x20 <= b <= 0x7E for b in value)


class ResponseView:
    """Status, headers and body captured from a completed request."""

    __slots__ = ("_status_code", "_headers", "_body")

    def __init__(
        self,
        status_code: int,
        headers: Iterable[Tuple[bytes, bytes]] = (),
        body: bytes = b"",
    ) -> None:
        if not 0 <= status_code <= 65535:
            raise ValueError(f"status_code out of range: {status_code}")
        self._status_code = status_code
        self._headers = tuple((bytes(k), bytes(v)) for k, v in headers)
        self._body = bytes(body)

    def status_code(self) -> int:
        return self._status_code

    def header(self, name: str) -> Optional[str]:
        """
        First value stored for name, compared case-insensitively.

        Returns None if the header is absent.

        Raises:
            EncodingError: If the stored value is not visible ASCII.
        """
        try:
            lookup = name.lower().encode("ascii")
        except UnicodeEncodeError:
            return None

        for key, value in self._headers:
            if key.lower() == lookup:
                if not _is_visible_ascii(value):
                    raise EncodingError(name)
                return value.decode("ascii")
        return None

    def body(self) -> bytes:
        """Response body; immutable, so callers cannot alter stored state."""
        return bytes(self._body)

    @property
    def headers(self) -> httpx.Headers:
        """Fresh copy of all response headers."""
        return httpx.Headers(list(self._headers))

    @property
    def ok(self) -> bool:
        return 200 <= self._status_code < 300

    def __repr__(self) -> str:
        return (
            f"ResponseView(status_code={self._status_code}, "
            f"headers={len(self._headers)}, body={len(self._body)} bytes)"
        )
