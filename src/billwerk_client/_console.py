"""
Terminal tracing of requests and responses, enabled with ``debug=True``.
"""
import json
from typing import Dict, Optional

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

console = Console(stderr=True)

SENSITIVE_HEADERS = ("authorization",)


def mask_auth_header(value: Optional[str], show_chars: int = 15) -> str:
    """Keep the scheme and the first characters of an auth header value."""
    if not value:
        return "<none>"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_headers(headers: httpx.Headers) -> Dict[str, str]:
    masked = {}
    for key, value in headers.items():
        masked[key] = mask_auth_header(value) if key.lower() in SENSITIVE_HEADERS else value
    return masked


def _format_body(content: Optional[bytes]) -> str:
    if not content:
        return ""
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return f"<binary data: {len(content)} bytes>"
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        return text


def print_request(request: httpx.Request) -> None:
    """Print method, URL, masked headers and body of a request."""
    console.print(
        Panel(f"[bold cyan]{request.method}[/bold cyan] {request.url}", title="[bold blue]Request[/bold blue]")
    )
    console.print("[bold]Headers:[/bold]", mask_headers(request.headers))
    body = _format_body(request.content)
    if body:
        console.print(Panel(Syntax(body, "json", theme="monokai"), title="[bold]Request Body[/bold]"))


def print_response(response: httpx.Response, content: Optional[bytes]) -> None:
    """Print status, headers and (when read) body of a response."""
    color = "green" if 200 <= response.status_code < 400 else "red"
    url = response.request.url
    console.print(
        Panel(
            f"[bold {color}]{response.status_code}[/bold {color}] {response.reason_phrase or ''}",
            title=f"[bold blue]Response[/bold blue] ({url})",
        )
    )
    console.print("[bold]Headers:[/bold]", dict(response.headers))
    body = _format_body(content)
    if body:
        console.print(
            Panel(Syntax(body, "json", theme="monokai"), title=f"[bold]Response Body[/bold] (URL: {url})")
        )
