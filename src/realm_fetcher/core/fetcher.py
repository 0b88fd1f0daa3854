"""
Fetcher: composes outgoing requests and hands them to the transport.
"""
import dataclasses
import inspect
import logging
from typing import Any, Optional

from rich.markup import escape

from ..config import FetcherConfig, default_serializer, validate_config
from ..console import (
    format_body,
    mask_headers,
    print_info,
    print_panel,
    print_syntax_panel,
    console,
)
from ..errors import ConfigError, NetworkError
from ..location import LocationUrlResolver
from ..types import FetchRequest, HttpMethod, RequestDescriptor, User
from .request_builder import (
    build_body,
    build_headers,
    build_url,
    merge_header_contexts,
)

logger = logging.getLogger("realm_fetcher.fetcher")

_CONFIG_FIELDS = frozenset(f.name for f in dataclasses.fields(FetcherConfig))


class Fetcher:
    """
    Builds requests for the app and sends them through the injected transport.

    Example:
        fetcher = Fetcher(
            app_id="my-app",
            transport=HttpxNetworkTransport(),
            user_context=app,
            location_url_context=StaticLocationUrlContext("https://realm.example.com"),
            request_headers={"X-App-Version": "1.2.0"},
        )
        profile = await fetcher.fetch_json({"method": "GET", "url": "/auth/profile"})
    """

    def __init__(
        self,
        config: Optional[FetcherConfig] = None,
        *,
        location_resolver: Optional[LocationUrlResolver] = None,
        **fields: Any,
    ):
        if config is None:
            unknown = set(fields) - _CONFIG_FIELDS
            if unknown:
                raise ConfigError(f"Unknown fetcher config fields: {sorted(unknown)}")
            config = FetcherConfig(**fields)
        elif fields:
            raise ConfigError("Pass either a FetcherConfig or keyword fields, not both")

        validate_config(config)
        self._config = config
        # Shared with clones so the location is resolved once
        self._location = location_resolver or LocationUrlResolver.from_context(
            config.location_url_context
        )

    @property
    def app_id(self) -> str:
        return self._config.app_id

    @property
    def config(self) -> FetcherConfig:
        return self._config

    @property
    def current_user(self) -> Optional[User]:
        return self._config.user_context.current_user

    def clone(self, **overrides: Any) -> "Fetcher":
        """
        Create a new fetcher from this one.

        request_headers are merged over the current constructor-level headers
        (overrides win); any other config field given replaces the current
        value. Everything else, including the location resolver, is shared.
        """
        unknown = set(overrides) - _CONFIG_FIELDS
        if unknown:
            raise ConfigError(f"Unknown fetcher config fields: {sorted(unknown)}")

        request_headers = merge_header_contexts(
            self._config.request_headers,
            overrides.pop("request_headers", None),
        )
        config = dataclasses.replace(
            self._config, request_headers=request_headers, **overrides
        )
        resolver = None if "location_url_context" in overrides else self._location
        logger.debug(f"Fetcher.clone: app_id={config.app_id}, overrides={sorted(overrides)}")
        return Fetcher(config, location_resolver=resolver)

    async def build_request(self, request: FetchRequest) -> RequestDescriptor:
        """Compose the descriptor for a request without sending it."""
        method = request.get("method", "GET")
        url = request.get("url")
        if not url:
            raise ValueError("url is required")

        if not url.startswith(("http://", "https://")):
            base_url = await self._location.resolve()
            url = build_url(base_url, url)

        body = request.get("body")
        headers = build_headers(
            self._config.request_headers,
            self.current_user,
            request.get("headers"),
            has_body=body is not None,
            token_type=request.get("token_type", "access"),
        )

        return RequestDescriptor(
            method=method,
            url=url,
            headers=headers,
            body=build_body(body, default_serializer),
        )

    async def fetch(self, request: FetchRequest) -> Any:
        """Send a request and return the transport's response."""
        descriptor = await self.build_request(request)

        logger.debug(f"Fetcher.fetch: method={descriptor.method}, url={descriptor.url}")
        if self._config.debug:
            self._print_request(descriptor, request.get("body"))

        try:
            response = await self._config.transport.send(descriptor)
        except NetworkError:
            raise
        except Exception as e:
            logger.debug(f"Fetcher.fetch: transport raised {e!r}")
            raise NetworkError(
                f"Request failed: {descriptor.method} {descriptor.url}: {e}",
                url=descriptor.url,
            ) from e

        if self._config.debug:
            status = getattr(response, "status_code", None)
            print_info(f"{descriptor.method} {descriptor.url} -> {status}", f"Response:{self.app_id}")

        return response

    async def fetch_json(self, request: FetchRequest) -> Any:
        """Send a request and return the parsed JSON body (None when empty)."""
        response = await self.fetch(request)

        content = getattr(response, "content", None)
        if isinstance(content, (bytes, str)) and not content:
            return None

        try:
            data = response.json()
            if inspect.isawaitable(data):
                data = await data
        except ValueError as e:
            raise NetworkError(
                f"Expected a JSON response body from {request.get('url')}",
                status=getattr(response, "status_code", None),
                url=request.get("url"),
                response=response,
            ) from e
        return data

    async def get(self, url: str, **kwargs: Any) -> Any:
        """GET request."""
        return await self._request_json("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> Any:
        """POST request."""
        return await self._request_json("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> Any:
        """PUT request."""
        return await self._request_json("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> Any:
        """PATCH request."""
        return await self._request_json("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        """DELETE request."""
        return await self._request_json("DELETE", url, **kwargs)

    async def _request_json(self, method: HttpMethod, url: str, **kwargs: Any) -> Any:
        request = FetchRequest(method=method, url=url, **kwargs)
        return await self.fetch_json(request)

    def _print_request(self, descriptor: RequestDescriptor, body: Any) -> None:
        print_panel(
            f"[bold cyan]{escape(descriptor.method)}[/bold cyan] {escape(descriptor.url)}",
            title=f"[bold blue]Request[/bold blue] ({escape(self.app_id)})",
        )
        console.print("[bold]Headers:[/bold]", mask_headers(descriptor.headers))
        if body is not None:
            print_syntax_panel(format_body(body), lexer="json", title="[bold]Request Body[/bold]")

    def __repr__(self) -> str:
        return f"Fetcher(app_id={self.app_id!r}, request_headers={sorted(self._config.request_headers)!r})"
