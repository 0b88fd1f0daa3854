"""
Console printing for realm_fetcher.

Rich-backed status lines and panels used when a fetcher runs with
debug enabled, plus masking helpers so credentials never reach the output.

    from realm_fetcher.console import print_info, mask_auth_header

    print_info("Resolved location", "Fetcher")   # [INFO:Fetcher] Resolved location
    mask_auth_header("Bearer eyJhbGciOi...")      # "Bearer ***"
    mask_auth_header("ghp_abc123xyz789")          # "ghp_***"
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

# Header names whose values are always masked
SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key", "cookie"})

console = Console()


# =============================================================================
# Sensitive Data Masking
# =============================================================================


def mask_sensitive(
    value: Optional[str],
    show_chars: int = 4,
    placeholder: str = "<none>",
) -> str:
    """
    Mask sensitive values for logging.

    Args:
        value: Value to mask
        show_chars: Number of characters to show before masking
        placeholder: Placeholder for null/empty values

    Returns:
        str: Masked value
    """
    if not value:
        return placeholder
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_auth_header(value: Optional[str], show_chars: int = 4) -> str:
    """Mask an Authorization header value.

    Credentials after an auth scheme (Bearer, Basic, ...) are hidden entirely;
    values without a scheme keep their first show_chars characters.
    """
    if value and " " in value.strip():
        scheme = value.strip().split(" ", 1)[0]
        return f"{scheme} ***"
    return mask_sensitive(value, show_chars)


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Copy of headers with sensitive values masked."""
    masked = dict(headers)
    for key in masked:
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = mask_auth_header(masked[key])
    return masked


# =============================================================================
# Status Messages
# =============================================================================


def print_info(message: str, title: Optional[str] = None) -> None:
    """
    Print an info message.

    Args:
        message: Message to print
        title: Title/label to show after [INFO]
    """
    label = f"[INFO:{title}]" if title else "[INFO]"
    console.print(f"[blue]{escape(label)}[/blue] {escape(message)}")


def print_panel(content: str, title: Optional[str] = None) -> None:
    """Print content in a panel."""
    console.print(Panel(content, title=title))


def print_syntax_panel(code: str, lexer: str = "json", title: Optional[str] = None) -> None:
    """Print highlighted code in a panel."""
    console.print(Panel(Syntax(code, lexer, word_wrap=True), title=title))


def format_body(body: Any) -> str:
    """Format a request/response body for pretty printing."""
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
