"""
Configuration for realm_fetcher.
"""
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .errors import ConfigError
from .types import LocationUrlContext, NetworkTransport, UserContext


ACCEPT_JSON_HEADERS: Dict[str, str] = {"Accept": "application/json"}
SENDING_JSON_HEADERS: Dict[str, str] = {
    **ACCEPT_JSON_HEADERS,
    "Content-Type": "application/json",
}


def _is_debug_enabled_by_env() -> bool:
    """
    Check if request pretty-printing is enabled via environment variables.

    Returns True if REALM_FETCHER_DEBUG is set to 1/true/yes.
    """
    value = os.environ.get("REALM_FETCHER_DEBUG", "")
    return value.strip().lower() in ("1", "true", "yes")


@dataclass
class FetcherConfig:
    """Fetcher configuration.

    Fields:
    - app_id: Identifier of the app the requests are sent on behalf of
    - transport: Send capability (see types.NetworkTransport)
    - user_context: Accessor for the active session, current_user may be None
    - location_url_context: Supplies the deferred base URL
    - request_headers: Constructor-level header context (app-level headers
      arrive here too)
    - debug: Pretty-print each request and response to the console
    """

    app_id: Optional[str] = None
    transport: Optional[NetworkTransport] = None
    user_context: Optional[UserContext] = None
    location_url_context: Optional[LocationUrlContext] = None
    request_headers: Dict[str, str] = field(default_factory=dict)
    debug: bool = field(default_factory=_is_debug_enabled_by_env)


def validate_config(config: FetcherConfig) -> None:
    """Validate fetcher configuration."""
    if not config.app_id:
        raise ConfigError("app_id is required")
    if config.transport is None:
        raise ConfigError("transport is required")
    if not callable(getattr(config.transport, "send", None)):
        raise ConfigError("transport must expose a send() method")
    if config.user_context is None:
        raise ConfigError("user_context is required")
    if config.location_url_context is None:
        raise ConfigError("location_url_context is required")
    if config.request_headers is None:
        raise ConfigError("request_headers must be a mapping, got None")

    for key, value in config.request_headers.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ConfigError(
                f"request_headers must map str to str, got {key!r}: {value!r}"
            )


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


DEFAULT_TIMEOUT = TimeoutConfig()


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


class DefaultSerializer:
    """Default JSON serializer."""

    def serialize(self, data: Any) -> str:
        """Serialize data to JSON string."""
        return json.dumps(data)


default_serializer = DefaultSerializer()
