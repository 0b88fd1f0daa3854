"""
Network transports for realm_fetcher.
"""
from .httpx_transport import HttpxNetworkTransport

__all__ = ["HttpxNetworkTransport"]
