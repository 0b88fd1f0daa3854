"""
Error taxonomy for realm_fetcher.
"""
from typing import Any, Optional


class FetcherError(Exception):
    """Base class for every error raised by realm_fetcher."""

    code = "FETCHER_ERROR"


class ConfigError(FetcherError):
    """Raised at construction when a required config field is missing or invalid."""

    code = "CONFIG_ERROR"


class NetworkError(FetcherError):
    """Raised when the transport fails or answers with a non-success status."""

    code = "NETWORK_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        url: Optional[str] = None,
        response: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.url = url
        self.response = response

    def __repr__(self) -> str:
        return f"NetworkError({str(self)!r}, status={self.status!r}, url={self.url!r})"


class ResolutionError(FetcherError):
    """Raised when the deferred base URL could not be resolved."""

    code = "RESOLUTION_ERROR"
