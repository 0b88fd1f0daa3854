"""
Factory functions for creating fetchers.
"""
from typing import Any, Dict, Optional, Union

from .config import TimeoutConfig
from .core.fetcher import Fetcher
from .errors import ConfigError
from .location import StaticLocationUrlContext
from .session import StaticUserContext
from .transport.httpx_transport import HttpxNetworkTransport
from .types import NetworkTransport, UserContext


class _DeferredLocationUrlContext:
    def __init__(self, location_url: Any):
        self.location_url = location_url


def create_fetcher(
    app_id: str,
    base_url: Optional[str] = None,
    location_url: Any = None,
    transport: Optional[NetworkTransport] = None,
    user_context: Optional[UserContext] = None,
    request_headers: Optional[Dict[str, str]] = None,
    timeout: Optional[Union[float, TimeoutConfig]] = None,
    debug: Optional[bool] = None,
) -> Fetcher:
    """
    Create a fetcher for an app.

    Args:
        app_id: Identifier of the app.
        base_url: Already known base URL for relative request URLs.
        location_url: Deferred base URL (awaitable or callable); used when
            base_url is not given.
        transport: Send capability; defaults to HttpxNetworkTransport.
        user_context: Session accessor; defaults to a logged-out context.
        request_headers: App-level headers, applied as the constructor-level
            header context of the fetcher.
        timeout: Timeout for the default transport (seconds or TimeoutConfig).
        debug: Pretty-print requests; None keeps the REALM_FETCHER_DEBUG default.

    Returns:
        Fetcher instance.
    """
    if base_url is not None and location_url is not None:
        raise ConfigError("Pass either base_url or location_url, not both")
    if base_url is not None:
        location_context = StaticLocationUrlContext(base_url)
    elif location_url is not None:
        location_context = _DeferredLocationUrlContext(location_url)
    else:
        raise ConfigError("base_url or location_url is required")

    fields: Dict[str, Any] = {
        "app_id": app_id,
        "transport": transport if transport is not None else HttpxNetworkTransport(timeout=timeout),
        "user_context": user_context if user_context is not None else StaticUserContext(),
        "location_url_context": location_context,
        "request_headers": dict(request_headers or {}),
    }
    if debug is not None:
        fields["debug"] = debug
    return Fetcher(**fields)
