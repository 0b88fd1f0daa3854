"""
Memoized resolution of the base URL requests are sent against.
"""
import asyncio
import inspect
import logging
from typing import Any, Optional

from .errors import ResolutionError

logger = logging.getLogger("realm_fetcher.location")


class StaticLocationUrlContext:
    """Location context whose URL is known up front."""

    def __init__(self, url: str):
        self._url = url

    @property
    def location_url(self) -> str:
        return self._url

    def __repr__(self) -> str:
        return f"StaticLocationUrlContext({self._url!r})"


class LocationUrlResolver:
    """
    Resolves a deferred base URL exactly once.

    The source may be a plain string, an awaitable (coroutine, task, future)
    or a zero-arg callable returning either. When built from a context, the
    context's location_url is only read on the first resolve(). That call
    schedules a single future; concurrent callers await the same future and
    later callers get the cached value. A failed resolution is cached too.

    Example:
        resolver = LocationUrlResolver(discover_location())
        url = await resolver.resolve()
    """

    def __init__(self, source: Any = None, *, context: Any = None):
        if source is None and context is None:
            raise ValueError("source or context is required")
        self._source = source
        self._context = context
        self._pending: Optional[asyncio.Future] = None
        self._resolved: Optional[str] = None

    @classmethod
    def from_context(cls, context: Any) -> "LocationUrlResolver":
        """Build a resolver from a LocationUrlContext."""
        return cls(context=context)

    @property
    def is_resolved(self) -> bool:
        return self._resolved is not None

    async def resolve(self) -> str:
        """Return the base URL, resolving it on first use."""
        if self._resolved is not None:
            return self._resolved

        if self._pending is None:
            logger.debug("LocationUrlResolver.resolve: scheduling resolution")
            self._pending = asyncio.ensure_future(self._load())

        # shield: a cancelled caller must not cancel the shared resolution
        self._resolved = await asyncio.shield(self._pending)
        return self._resolved

    async def _load(self) -> str:
        try:
            source = self._source if self._context is None else self._context.location_url
            if callable(source) and not inspect.isawaitable(source):
                source = source()
            if inspect.isawaitable(source):
                source = await source
        except ResolutionError:
            raise
        except Exception as e:
            logger.debug(f"LocationUrlResolver._load: failed with {e!r}")
            raise ResolutionError(f"Failed to resolve location URL: {e}") from e

        if not isinstance(source, str) or not source:
            raise ResolutionError(
                f"Location URL must resolve to a non-empty string, got {source!r}"
            )

        logger.debug(f"LocationUrlResolver._load: resolved {source}")
        return source
