"""
Shared fixtures for fetch_builder tests.
"""
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from fetch_builder.config import TransportConfig
from fetch_builder.core.request_builder import RequestBuilder
from fetch_builder.transport import HttpxTransport
from fetch_builder.types import FinalizedRequest, RawResponse


class RecordingHandler:
    """httpx.MockTransport handler that records requests and returns a fixed response."""

    def __init__(self, response: Optional[httpx.Response] = None):
        self.response = response if response is not None else httpx.Response(200, json={"success": True})
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def builder():
    """Builder rooted at the API host."""
    return RequestBuilder("http://api.example.com/")


@pytest.fixture
def versioned_builder():
    """Builder with a non-root base path."""
    return RequestBuilder("https://api.example.com/api/v1")


@pytest.fixture
def quiet_config():
    """Transport config with tracing off regardless of environment."""
    return TransportConfig(trace=False)


@pytest.fixture
def recording_handler():
    return RecordingHandler()


@pytest.fixture
def mock_transport_factory(recording_handler, quiet_config):
    """Factory producing HttpxTransport instances over httpx.MockTransport."""

    def factory() -> HttpxTransport:
        return HttpxTransport(
            quiet_config, transport=httpx.MockTransport(recording_handler)
        )

    return factory


@pytest.fixture
def fake_transport():
    """Mock Transport returning a canned RawResponse."""
    transport = MagicMock()
    transport.execute = AsyncMock(
        return_value=RawResponse(
            status_code=200,
            headers=[(b"Content-Type", b"application/json")],
            body=b'{"success": true}',
        )
    )
    transport.aclose = AsyncMock()
    return transport


@pytest.fixture
def sample_request():
    """Finalized request for transport-level tests."""
    return FinalizedRequest(
        url="https://api.example.com/v1/items?sort=asc",
        method="POST",
        header_items=(
            ("Host", "api.example.com"),
            ("Content-Type", "application/json"),
        ),
        body=b'{"name": "widget"}',
    )
