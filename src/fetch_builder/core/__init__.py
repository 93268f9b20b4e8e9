"""
Core modules for fetch_builder.
"""
from .url_composer import compose_url, split_path_and_query
from .request_builder import (
    RequestBuilder,
    validate_header_name,
    validate_header_value,
    validate_cookie,
)
from .finalizer import finalize
from .executor import AsyncExecutor, send

__all__ = [
    "compose_url",
    "split_path_and_query",
    "RequestBuilder",
    "validate_header_name",
    "validate_header_value",
    "validate_cookie",
    "finalize",
    "AsyncExecutor",
    "send",
]
