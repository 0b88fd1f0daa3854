"""
Type definitions for realm_fetcher.
"""
from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Dict,
    Literal,
    Mapping,
    Optional,
    Protocol,
    TypedDict,
)


# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Which session token goes into the Authorization header:
# - access: the user's access token (default)
# - refresh: the user's refresh token (session refresh endpoints)
# - none: no Authorization header is computed
TokenType = Literal["access", "refresh", "none"]

# Header context contributed by one precedence tier
HeaderContext = Mapping[str, str]


@dataclass(frozen=True)
class RequestDescriptor:
    """Outgoing request handed to the transport."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form, omitting body when there is none."""
        result: Dict[str, Any] = {
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers),
        }
        if self.body is not None:
            result["body"] = self.body
        return result


class FetchRequest(TypedDict, total=False):
    """Per-call request options accepted by Fetcher.fetch."""

    method: HttpMethod
    url: str
    headers: Dict[str, str]
    body: Any
    token_type: TokenType


class User(Protocol):
    """Session user as seen by the fetcher."""

    access_token: Optional[str]
    refresh_token: Optional[str]
    request_headers: Optional[HeaderContext]


class UserContext(Protocol):
    """Accessor for the currently active session (if any)."""

    @property
    def current_user(self) -> Optional[User]:
        ...


class LocationUrlContext(Protocol):
    """Supplies the deferred base URL requests are resolved against."""

    @property
    def location_url(self) -> Any:
        """A str, an awaitable of str, or a zero-arg callable returning either."""
        ...


class NetworkTransport(Protocol):
    """External send capability."""

    def send(self, descriptor: RequestDescriptor) -> Awaitable[Any]:
        """Send the request; the response exposes json()."""
        ...
