"""
Core modules for realm_fetcher.
"""
from .fetcher import Fetcher
from .request_builder import (
    build_url,
    build_headers,
    build_body,
    header_tiers,
    merge_header_contexts,
    user_authorization_header,
)

__all__ = [
    "Fetcher",
    "build_url",
    "build_headers",
    "build_body",
    "header_tiers",
    "merge_header_contexts",
    "user_authorization_header",
]
