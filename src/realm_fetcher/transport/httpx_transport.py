"""
Network transport using httpx.
"""
import logging
import os
from typing import Optional, Union

import httpx

from ..config import TimeoutConfig, normalize_timeout
from ..errors import NetworkError
from ..types import RequestDescriptor

logger = logging.getLogger("realm_fetcher.transport")


def _is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def _error_message(descriptor: RequestDescriptor, response: httpx.Response) -> str:
    """Describe a non-success response, preferring the server's error text."""
    detail = response.reason_phrase or ""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        detail = str(data["error"])
        if data.get("error_code"):
            detail = f"{detail} ({data['error_code']})"
    return (
        f"Request failed ({descriptor.method} {descriptor.url}): "
        f"{detail} (status {response.status_code})"
    )


class HttpxNetworkTransport:
    """Sends request descriptors with httpx.AsyncClient."""

    def __init__(
        self,
        httpx_client: Optional[httpx.AsyncClient] = None,
        timeout: Union[TimeoutConfig, float, None] = None,
    ):
        if httpx_client is not None:
            self._client = httpx_client
        else:
            # NODE_TLS_REJECT_UNAUTHORIZED=0 or SSL_CERT_VERIFY=0 will disable SSL verification
            verify_ssl = not _is_ssl_verify_disabled_by_env()
            timeout_config = normalize_timeout(timeout)
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    connect=timeout_config.connect,
                    read=timeout_config.read,
                    write=timeout_config.write,
                    pool=timeout_config.connect,
                ),
                verify=verify_ssl,
            )
        self._closed = False

    async def send(self, descriptor: RequestDescriptor) -> httpx.Response:
        """Send the request; non-2xx answers raise NetworkError."""
        if self._closed:
            raise RuntimeError("Transport has been closed")

        logger.debug(f"HttpxNetworkTransport.send: {descriptor.method} {descriptor.url}")
        try:
            response = await self._client.request(
                method=descriptor.method,
                url=descriptor.url,
                headers=descriptor.headers,
                content=descriptor.body,
            )
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Request failed ({descriptor.method} {descriptor.url}): {e}",
                url=descriptor.url,
            ) from e

        logger.debug(f"HttpxNetworkTransport.send: status={response.status_code}")
        if not response.is_success:
            raise NetworkError(
                _error_message(descriptor, response),
                status=response.status_code,
                url=descriptor.url,
                response=response,
            )
        return response

    async def aclose(self) -> None:
        """Close the underlying client."""
        self._closed = True
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxNetworkTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
