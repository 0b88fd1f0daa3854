"""
Request composition for a client SDK.

Merges header contexts (app, constructor, session, per-call) in a fixed
precedence order, attaches the session's bearer token and hands the request
to an injected network transport.
"""
from .types import (
    FetchRequest,
    HeaderContext,
    HttpMethod,
    LocationUrlContext,
    NetworkTransport,
    RequestDescriptor,
    TokenType,
    User,
    UserContext,
)
from .errors import (
    ConfigError,
    FetcherError,
    NetworkError,
    ResolutionError,
)
from .config import (
    ACCEPT_JSON_HEADERS,
    SENDING_JSON_HEADERS,
    DefaultSerializer,
    FetcherConfig,
    TimeoutConfig,
)
from .location import LocationUrlResolver, StaticLocationUrlContext
from .session import SessionUser, StaticUserContext
from .core.fetcher import Fetcher
from .core.request_builder import build_headers, merge_header_contexts
from .transport.httpx_transport import HttpxNetworkTransport
from .factory import create_fetcher

__all__ = [
    # Types
    "FetchRequest",
    "HeaderContext",
    "HttpMethod",
    "LocationUrlContext",
    "NetworkTransport",
    "RequestDescriptor",
    "TokenType",
    "User",
    "UserContext",
    # Errors
    "ConfigError",
    "FetcherError",
    "NetworkError",
    "ResolutionError",
    # Config
    "ACCEPT_JSON_HEADERS",
    "SENDING_JSON_HEADERS",
    "DefaultSerializer",
    "FetcherConfig",
    "TimeoutConfig",
    # Location / session
    "LocationUrlResolver",
    "StaticLocationUrlContext",
    "SessionUser",
    "StaticUserContext",
    # Fetcher
    "Fetcher",
    "build_headers",
    "merge_header_contexts",
    # Transport
    "HttpxNetworkTransport",
    # Factory
    "create_fetcher",
]

__version__ = "0.1.0"
