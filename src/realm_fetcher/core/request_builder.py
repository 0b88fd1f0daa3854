"""
Request builder utilities for realm_fetcher.

Header precedence, lowest to highest:
    1. baseline JSON headers (Accept, plus Content-Type when a body is sent)
    2. constructor-level context (Fetcher(request_headers=...), clone overrides,
       app-level headers passed through the factory)
    3. user-session context (current_user.request_headers)
    4. per-call headers (FetchRequest["headers"])
    5. computed bearer Authorization, unless tier 4 already sets Authorization
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from ..config import ACCEPT_JSON_HEADERS, SENDING_JSON_HEADERS, DefaultSerializer
from ..types import HeaderContext, TokenType, User

logger = logging.getLogger("realm_fetcher.request_builder")

AUTHORIZATION_HEADER = "Authorization"


def build_url(base_url: str, url: str) -> str:
    """Join a relative url onto the resolved base URL."""
    if url.startswith(("http://", "https://")):
        return url

    if not url:
        return base_url

    # Combine paths without producing double slashes
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def merge_header_contexts(*contexts: Optional[HeaderContext]) -> Dict[str, str]:
    """Fold header contexts left to right; later contexts win on equal keys."""
    result: Dict[str, str] = {}
    for context in contexts:
        if context:
            result.update(context)
    return result


def has_header(headers: Optional[HeaderContext], name: str) -> bool:
    """Check for a header name, ignoring case."""
    if not headers:
        return False
    lowered = name.lower()
    return any(key.lower() == lowered for key in headers)


def user_request_headers(user: Optional[User]) -> HeaderContext:
    """Header context contributed by the session; empty without one."""
    if user is None:
        return {}
    return getattr(user, "request_headers", None) or {}


def user_authorization_header(
    user: Optional[User],
    token_type: TokenType = "access",
) -> Dict[str, str]:
    """Bearer Authorization header for the session's token of the given type."""
    if user is None or token_type == "none":
        return {}

    if token_type == "access":
        token = getattr(user, "access_token", None)
    elif token_type == "refresh":
        token = getattr(user, "refresh_token", None)
    else:
        raise ValueError(f"Invalid token_type: {token_type}. Must be one of: access, refresh, none")

    if not token:
        logger.debug(f"user_authorization_header: session has no {token_type} token")
        return {}
    return {AUTHORIZATION_HEADER: f"Bearer {token}"}


def header_tiers(
    constructor_headers: Optional[HeaderContext],
    user: Optional[User],
    request_headers: Optional[HeaderContext],
    has_body: bool = False,
) -> List[HeaderContext]:
    """Ordered header contexts, lowest precedence first."""
    baseline = SENDING_JSON_HEADERS if has_body else ACCEPT_JSON_HEADERS
    return [
        baseline,
        constructor_headers or {},
        user_request_headers(user),
        request_headers or {},
    ]


def build_headers(
    constructor_headers: Optional[HeaderContext],
    user: Optional[User],
    request_headers: Optional[HeaderContext] = None,
    has_body: bool = False,
    token_type: TokenType = "access",
) -> Dict[str, str]:
    """Build the final request headers."""
    result = merge_header_contexts(
        *header_tiers(constructor_headers, user, request_headers, has_body)
    )

    # Per-call Authorization wins over the computed bearer token
    if has_header(request_headers, AUTHORIZATION_HEADER):
        logger.debug("build_headers: per-call Authorization supplied, skipping bearer token")
        return result

    auth_header = user_authorization_header(user, token_type)
    if auth_header:
        # Drop lower-tier variants spelled with a different case
        for key in [k for k in result if k.lower() == AUTHORIZATION_HEADER.lower()]:
            del result[key]
        result.update(auth_header)

    logger.debug(f"build_headers: has_body={has_body}, token_type={token_type}, keys={sorted(result)}")
    return result


def build_body(
    body: Optional[Any] = None,
    serializer: Optional[DefaultSerializer] = None,
) -> Optional[str]:
    """Serialize the request body to JSON text."""
    if body is None:
        return None
    return (serializer or DefaultSerializer()).serialize(body)
