"""
Shared fixtures for realm_fetcher tests.
"""
import json
from typing import Any, Dict, List, Optional

import pytest

from realm_fetcher.location import StaticLocationUrlContext
from realm_fetcher.session import SessionUser, StaticUserContext
from realm_fetcher.types import RequestDescriptor

BASE_URL = "http://localhost:1337"


class MockResponse:
    """Response stand-in exposing json() like the transport contract requires."""

    def __init__(self, payload: Any, status_code: int = 200):
        self.payload = payload
        self.status_code = status_code

    def json(self) -> Any:
        return self.payload


class MockNetworkTransport:
    """Records every request and answers with queued payloads in order."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.requests: List[Dict[str, Any]] = []
        self.descriptors: List[RequestDescriptor] = []

    async def send(self, descriptor: RequestDescriptor) -> MockResponse:
        self.descriptors.append(descriptor)
        recorded = descriptor.to_dict()
        if "body" in recorded:
            recorded["body"] = json.loads(recorded["body"])
        self.requests.append(recorded)

        if not self.responses:
            raise AssertionError(f"No response queued for {descriptor.method} {descriptor.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return MockResponse(response)


class CountingLocationUrlContext:
    """Location context counting property reads and actual resolutions."""

    def __init__(self, url: str = BASE_URL):
        self.url = url
        self.accessed = 0
        self.resolve_count = 0

    async def _resolve(self) -> str:
        self.resolve_count += 1
        return self.url

    @property
    def location_url(self):
        self.accessed += 1
        return self._resolve


@pytest.fixture
def transport():
    """Transport with one empty JSON object queued."""
    return MockNetworkTransport([{}])


@pytest.fixture
def location_context():
    return StaticLocationUrlContext(BASE_URL)


@pytest.fixture
def logged_in_context():
    """UserContext with a session holding an access token."""
    return StaticUserContext(SessionUser(access_token="my-access-token"))


@pytest.fixture
def logged_out_context():
    return StaticUserContext(None)
