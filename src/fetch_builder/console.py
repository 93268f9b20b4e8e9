"""
Console tracing and masking helpers for fetch_builder.

Pretty-prints requests and responses with Rich panels when tracing is
enabled, and provides the masking helpers used everywhere credentials could
reach a log line.
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

if TYPE_CHECKING:
    from .response import ResponseView
    from .types import FinalizedRequest

console = Console(stderr=True)

_SENSITIVE_HEADERS = ("authorization", "cookie", "x-api-key")


def mask_sensitive(value: Optional[str], show_chars: int = 4) -> str:
    """
    Mask sensitive values for logging.

    Args:
        value: Value to mask
        show_chars: Number of characters to show before masking

    Returns:
        str: Masked value
    """
    if value is None:
        return "<none>"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_auth_header(value: str) -> str:
    """Mask an Authorization value, keeping the scheme visible."""
    scheme, sep, credential = value.partition(" ")
    if not sep:
        return mask_sensitive(value)
    return f"{scheme} {mask_sensitive(credential)}"


def mask_headers(headers: Mapping[str, str]) -> dict:
    """Copy of headers with credentials masked."""
    masked = dict(headers)
    for key in masked:
        if key.lower() == "authorization":
            masked[key] = mask_auth_header(masked[key])
        elif key.lower() in _SENSITIVE_HEADERS:
            masked[key] = mask_sensitive(masked[key])
    return masked


def format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    return str(body)


def _print_body(body: bytes, title: str) -> None:
    text = format_body(body)
    if not text:
        return
    try:
        text = json.dumps(json.loads(text), indent=2, ensure_ascii=False)
        lexer = "json"
    except ValueError:
        lexer = "text"
    console.print(Panel(Syntax(text, lexer, theme="monokai"), title=title, expand=True))


def print_request(request: "FinalizedRequest") -> None:
    """Print a finalized request as it will be sent."""
    request_info = f"[bold cyan]{request.method}[/bold cyan] {request.url}"
    console.print(Panel(request_info, title="[bold blue]Request[/bold blue]"))
    console.print("[bold]Headers:[/bold]", mask_headers(request.wire_headers()))
    _print_body(request.body, "[bold]Request Body[/bold]")


def print_response(url: str, response: "ResponseView") -> None:
    """Print a captured response."""
    status = response.status_code()
    status_color = "green" if response.ok else "red"
    response_info = f"[bold {status_color}]{status}[/bold {status_color}]"
    console.print(
        Panel(response_info, title=f"[bold blue]Response[/bold blue] ({url})")
    )
    console.print("[bold]Headers:[/bold]", mask_headers(response.headers))
    _print_body(response.body(), f"[bold]Response Body[/bold] (URL: {url})")
