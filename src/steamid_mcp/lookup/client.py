"""Async HTTP client for SteamID lookup services.

This client is the transport side of the lookup adapter:
- Rate limiting to avoid hitting service limits
- TTL-based response caching
- Automatic retry with exponential backoff
- Vanity names resolved through the Steam Web API when a key is configured,
  otherwise through the steamid.co lookup service
"""

import asyncio
import logging
import os
import time
from typing import Any

import httpx

from steamid_mcp.id.errors import (
    LookupTransportError,
    MalformedResponseError,
    UnsupportedFormatError,
)
from steamid_mcp.id.parsers import parse
from steamid_mcp.id.steam_id import SteamID
from steamid_mcp.lookup.adapter import (
    LookupProfile,
    build_lookup_request,
    build_vanity_lookup_request,
    build_vanity_request,
    parse_lookup_profile,
    parse_lookup_response,
)
from steamid_mcp.lookup.cache import CacheCategory, TTLCache


logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_URL = "https://steamid.co/php/api.php"
RESOLVE_VANITY_URL = "https://api.steampowered.com/ISteamUser/ResolveVanityURL/v1/"
DEFAULT_RATE_LIMIT = 5.0


class RateLimiter:
    """Minimum-interval rate limiter for outgoing requests."""

    def __init__(self, requests_per_second: float = DEFAULT_RATE_LIMIT):
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        self.requests_per_second = requests_per_second
        self.min_interval = 1.0 / requests_per_second
        self.last_request_time = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until a request can be made within rate limits."""
        async with self._lock:
            now = time.monotonic()
            time_since_last = now - self.last_request_time
            if time_since_last < self.min_interval:
                await asyncio.sleep(self.min_interval - time_since_last)
            self.last_request_time = time.monotonic()


class LookupClient:
    """Async client for SteamID lookup services."""

    def __init__(
        self,
        lookup_url: str | None = None,
        api_key: str | None = None,
        requests_per_second: float | None = None,
        max_retries: int = 3,
        timeout: float = 30.0,
        enable_cache: bool = True,
        cache_max_size: int = 1000,
    ):
        """
        Initialize the lookup client.

        Args:
            lookup_url: steamid.co style endpoint. Reads STEAMID_LOOKUP_URL if unset.
            api_key: Steam Web API key for ResolveVanityURL. Reads STEAM_API_KEY
                     if unset; without a key vanity names go to the lookup service.
            requests_per_second: Rate limit. Reads STEAMID_RATE_LIMIT if unset.
            max_retries: Maximum number of attempts per request.
            timeout: Request timeout in seconds.
            enable_cache: Whether to cache responses (default: True).
            cache_max_size: Maximum number of cached entries.
        """
        self.lookup_url = lookup_url or os.getenv("STEAMID_LOOKUP_URL", DEFAULT_LOOKUP_URL)
        self.api_key = api_key or os.getenv("STEAM_API_KEY")

        if requests_per_second is None:
            requests_per_second = float(
                os.getenv("STEAMID_RATE_LIMIT", str(DEFAULT_RATE_LIMIT))
            )

        self.max_retries = max_retries
        self.timeout = timeout
        self.rate_limiter = RateLimiter(requests_per_second)

        self._cache: TTLCache | None = None
        if enable_cache:
            self._cache = TTLCache(
                default_ttl=CacheCategory.DEFAULT.value, max_size=cache_max_size
            )

        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "LookupClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def cache_stats(self) -> dict[str, int | float] | None:
        """Get cache statistics, or None if caching is disabled."""
        if self._cache:
            return self._cache.stats
        return None

    async def clear_cache(self) -> int:
        """Clear all cached entries; returns the number removed."""
        if self._cache:
            return await self._cache.clear()
        return 0

    async def _request(self, url: str, params: dict[str, Any]) -> Any:
        """
        GET a JSON document with rate limiting and retry logic.

        Raises:
            LookupTransportError: On HTTP errors or after exhausting retries
        """
        last_exception: Exception | None = None

        for attempt in range(self.max_retries):
            await self.rate_limiter.acquire()

            try:
                response = await self._client.get(url, params=params)

                content_type = response.headers.get("content-type", "")
                if "text/html" in content_type:
                    raise LookupTransportError(
                        "Lookup service returned an HTML page", response.status_code
                    )

                if response.status_code == 429:
                    wait_time = 2 ** (attempt + 1)
                    logger.warning(f"Rate limited, waiting {wait_time}s before retry")
                    await asyncio.sleep(wait_time)
                    continue

                if response.status_code in (401, 403):
                    raise LookupTransportError(
                        "Access denied - check STEAM_API_KEY", response.status_code
                    )

                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    f"Request timeout (attempt {attempt + 1}/{self.max_retries})"
                )
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(2 ** attempt)
                continue

            except httpx.HTTPStatusError as e:
                last_exception = e
                if e.response.status_code >= 500:
                    logger.warning(
                        f"Server error {e.response.status_code} "
                        f"(attempt {attempt + 1}/{self.max_retries})"
                    )
                    if attempt < self.max_retries - 1:
                        await asyncio.sleep(2 ** attempt)
                    continue
                raise LookupTransportError(str(e), e.response.status_code) from e

            except httpx.HTTPError as e:
                raise LookupTransportError(f"HTTP error: {e}") from e

            except ValueError as e:
                raise MalformedResponseError(f"Response is not JSON: {e}") from e

        raise LookupTransportError(
            f"Request failed after {self.max_retries} attempts: {last_exception}"
        )

    async def _get_json(
        self,
        url: str,
        params: dict[str, str],
        category: CacheCategory,
        bypass_cache: bool = False,
        with_api_key: bool = False,
    ) -> Any:
        # Cache on the caller's params; the API key is added afterwards
        cache_params = dict(params)
        if self._cache and not bypass_cache:
            hit, cached_data = await self._cache.get(url, cache_params)
            if hit:
                logger.debug(f"Cache hit for {url} {cache_params}")
                return cached_data

        request_params: dict[str, Any] = dict(params)
        if with_api_key:
            request_params["key"] = self.api_key
            request_params["format"] = "json"

        result = await self._request(url, request_params)

        if self._cache:
            await self._cache.set(url, cache_params, result, category.value)
        return result

    async def lookup_profile(
        self, identifier: str, bypass_cache: bool = False
    ) -> LookupProfile:
        """
        Fetch the lookup-service profile for any Steam ID or vanity name.

        Raises:
            SteamIDError: If the identifier is invalid or the lookup fails
        """
        params = build_lookup_request(identifier)
        payload = await self._get_json(
            self.lookup_url, params, CacheCategory.PROFILE, bypass_cache
        )
        return parse_lookup_profile(payload)

    async def resolve_vanity_url(self, vanity_name: str) -> SteamID:
        """
        Resolve a vanity name to a SteamID.

        Raises:
            ServiceError: If the name does not resolve
            SteamIDError: On invalid input or transport failure
        """
        if self.api_key:
            params = build_vanity_request(vanity_name)
            payload = await self._get_json(
                RESOLVE_VANITY_URL, params, CacheCategory.VANITY, with_api_key=True
            )
        else:
            params = build_vanity_lookup_request(vanity_name)
            payload = await self._get_json(
                self.lookup_url, params, CacheCategory.VANITY
            )
        return parse_lookup_response(payload)

    async def resolve(self, identifier: str) -> SteamID:
        """
        Resolve any Steam ID format or vanity name to a SteamID.

        Known formats are parsed locally without a request.
        """
        try:
            return parse(identifier)
        except UnsupportedFormatError:
            logger.debug(f"'{identifier}' is not a Steam ID, resolving as vanity name")
        return await self.resolve_vanity_url(identifier)
