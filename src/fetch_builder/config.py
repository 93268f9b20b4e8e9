"""
Configuration for fetch_builder.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger("fetch_builder.config")

# Default values
DEFAULT_CONTENT_TYPE = "application/json"

_TRUTHY = ("1", "true", "yes")


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


DEFAULT_TIMEOUT = TimeoutConfig()


@dataclass
class TransportConfig:
    """Configuration for the default httpx transport.

    Unset (None) fields are resolved from the environment:
    - verify_ssl: disabled by SSL_CERT_VERIFY=0 or NODE_TLS_REJECT_UNAUTHORIZED=0
    - trace: enabled by FETCH_BUILDER_TRACE=1
    """

    verify_ssl: Optional[bool] = None
    timeout: Union[TimeoutConfig, float, None] = None
    trust_env: bool = True
    trace: Optional[bool] = None


@dataclass
class ResolvedTransportConfig:
    """Transport configuration with defaults and environment applied."""

    verify_ssl: bool
    timeout: TimeoutConfig
    trust_env: bool
    trace: bool


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def is_trace_enabled_by_env() -> bool:
    """Check FETCH_BUILDER_TRACE for console tracing."""
    return os.environ.get("FETCH_BUILDER_TRACE", "").strip().lower() in _TRUTHY


def resolve_transport_config(
    config: Optional[TransportConfig] = None,
) -> ResolvedTransportConfig:
    """Resolve transport configuration with defaults."""
    if config is None:
        config = TransportConfig()

    verify_ssl = config.verify_ssl
    if verify_ssl is None:
        verify_ssl = not is_ssl_verify_disabled_by_env()
        if not verify_ssl:
            logger.warning("SSL verification disabled by environment")

    trace = config.trace
    if trace is None:
        trace = is_trace_enabled_by_env()

    return ResolvedTransportConfig(
        verify_ssl=verify_ssl,
        timeout=normalize_timeout(config.timeout),
        trust_env=config.trust_env,
        trace=trace,
    )
