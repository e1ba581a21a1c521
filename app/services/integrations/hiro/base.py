"""Base API client for Hiro services with rate limiting and error handling."""

import asyncio
import time
from typing import Any, ClassVar, Dict, List, Mapping, Optional

import aiohttp

from app.lib.logger import configure_logger

from .utils import HiroApiError, HiroApiRateLimitError, HiroApiTimeoutError

logger = configure_logger(__name__)


class BaseHiroApi:
    """Base class for Hiro API clients with shared functionality.

    Requests are never retried here. A failed or timed out call surfaces as a
    HiroApiError subclass and the caller decides what to do with it.
    """

    # Default rate limiting settings (updated from API headers)
    DEFAULT_SECOND_LIMIT: ClassVar[int] = 20
    DEFAULT_MINUTE_LIMIT: ClassVar[int] = 50
    DEFAULT_TIMEOUT_SECONDS: ClassVar[float] = 10.0

    # Rate limit tracking (shared across all instances)
    _second_limit: ClassVar[int] = DEFAULT_SECOND_LIMIT
    _minute_limit: ClassVar[int] = DEFAULT_MINUTE_LIMIT
    _second_requests: ClassVar[List[float]] = []
    _minute_requests: ClassVar[List[float]] = []

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout_seconds: Optional[float] = None,
    ):
        """Initialize the base API client.

        Args:
            base_url: The base URL for the API
            api_key: Optional key sent as X-API-Key
            timeout_seconds: Total timeout for a single request
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds or self.DEFAULT_TIMEOUT_SECONDS
        )
        self._session: Optional[aiohttp.ClientSession] = None
        logger.info("Hiro API client initialized", extra={"base_url": self.base_url})

    def _update_rate_limits(self, headers: Mapping[str, str]) -> None:
        """Update rate limit settings from response headers."""
        cls = BaseHiroApi
        if "x-ratelimit-limit-stacks-second" in headers:
            cls._second_limit = int(headers["x-ratelimit-limit-stacks-second"])
        if "x-ratelimit-limit-stacks-minute" in headers:
            cls._minute_limit = int(headers["x-ratelimit-limit-stacks-minute"])

        remaining = {}
        if "x-ratelimit-remaining-stacks-second" in headers:
            remaining["second"] = int(headers["x-ratelimit-remaining-stacks-second"])
        if "x-ratelimit-remaining-stacks-minute" in headers:
            remaining["minute"] = int(headers["x-ratelimit-remaining-stacks-minute"])

        if remaining:
            # Only log if we're getting close to limits (< 20% remaining)
            second_pct = (
                remaining.get("second", cls._second_limit) / cls._second_limit
                if cls._second_limit > 0
                else 1
            )
            minute_pct = (
                remaining.get("minute", cls._minute_limit) / cls._minute_limit
                if cls._minute_limit > 0
                else 1
            )
            if second_pct < 0.2 or minute_pct < 0.2:
                logger.warning(
                    "Rate limit capacity low",
                    extra={
                        "remaining": remaining,
                        "limits": {
                            "second": cls._second_limit,
                            "minute": cls._minute_limit,
                        },
                    },
                )

    async def _rate_limit(self) -> None:
        """Wait until both the per-second and per-minute windows have room."""
        cls = BaseHiroApi
        current_time = time.time()

        cls._second_requests = [
            t for t in cls._second_requests if current_time - t < 1.0
        ]
        cls._minute_requests = [
            t for t in cls._minute_requests if current_time - t < 60.0
        ]

        windows = [
            ("second", cls._second_requests, cls._second_limit, 1.0),
            ("minute", cls._minute_requests, cls._minute_limit, 60.0),
        ]
        for name, requests, limit, span in windows:
            if len(requests) >= limit:
                sleep_time = requests[0] + span - current_time
                if sleep_time > 0:
                    logger.warning(
                        "Rate limit reached, waiting before next request",
                        extra={
                            "rate_limit_type": name,
                            "current_count": len(requests),
                            "limit": limit,
                            "wait_time_seconds": round(sleep_time, 2),
                        },
                    )
                    await asyncio.sleep(sleep_time)
                    current_time = time.time()

        now = time.time()
        cls._second_requests.append(now)
        cls._minute_requests.append(now)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def _amake_request(
        self,
        method: str,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make an HTTP request with rate limiting.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint
            headers: Optional request headers
            params: Optional query parameters
            json: Optional JSON body

        Returns:
            Dict containing the response data

        Raises:
            HiroApiRateLimitError: On HTTP 429
            HiroApiTimeoutError: When the request exceeds the client timeout
            HiroApiError: On any other failure
        """
        url = f"{self.base_url}{endpoint}"
        headers = dict(headers or {})
        headers.setdefault("Accept", "application/json")
        if self.api_key:
            headers["X-API-Key"] = self.api_key

        await self._rate_limit()
        logger.debug(
            "API request initiated",
            extra={"request": {"method": method, "endpoint": endpoint, "url": url}},
        )

        try:
            async with self._get_session().request(
                method, url, headers=headers, params=params, json=json
            ) as response:
                self._update_rate_limits(response.headers)
                response.raise_for_status()
                logger.debug(
                    "API request completed successfully",
                    extra={
                        "request": {"method": method, "endpoint": endpoint},
                        "response": {"status_code": response.status},
                    },
                )
                return await response.json()
        except aiohttp.ClientResponseError as e:
            if e.status == 429:
                retry_after = (e.headers or {}).get("retry-after")
                logger.error(
                    "API rate limit exceeded",
                    extra={
                        "request": {"method": method, "endpoint": endpoint},
                        "response": {"status_code": e.status},
                    },
                )
                raise HiroApiRateLimitError(
                    f"Rate limit exceeded: {e.message}",
                    retry_after=int(retry_after) if retry_after else None,
                ) from e
            logger.error(
                "API request failed with HTTP error",
                extra={
                    "request": {"method": method, "endpoint": endpoint},
                    "response": {"status_code": e.status},
                    "error": e.message,
                },
            )
            raise HiroApiError(
                f"HTTP error occurred: {e.status} {e.message}", status_code=e.status
            ) from e
        except asyncio.TimeoutError as e:
            logger.error(
                "API request timed out",
                extra={"request": {"method": method, "endpoint": endpoint}},
            )
            raise HiroApiTimeoutError(
                f"Request to {endpoint} timed out after {self.timeout.total}s"
            ) from e
        except aiohttp.ClientError as e:
            logger.error(
                "API request failed with client error",
                extra={
                    "request": {"method": method, "endpoint": endpoint},
                    "error": str(e),
                },
            )
            raise HiroApiError(f"Request error: {str(e)}") from e

    async def close(self) -> None:
        """Close the async session."""
        if self._session:
            logger.debug("Closing Hiro API async session")
            await self._session.close()
            self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
