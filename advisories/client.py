# ============================================================================
# CLAUDE CONTEXT - AVIATION WEATHER HTTP CLIENT
# ============================================================================
# STATUS: Service Layer - Upstream advisory feed client
# PURPOSE: Async HTTP client for the provider's SIGMET / G-AIRMET / CWA JSON feeds
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AviationWeatherClient
# DEPENDENCIES: httpx (async)
# PORTABLE: Yes - accepts base_url/timeout, falls back to config.py
# ENTRY_POINTS: from advisories.client import AviationWeatherClient
# ============================================================================
"""
Aviation Weather HTTP Client (ASYNC VERSION).

Fetches GeoJSON feature collections from the provider's JSON feeds:
- SigmetJSON.php (current and outlook SIGMETs)
- GairmetJSON.php (G-AIRMET snapshots)
- CwaJSON.php (center weather advisories)

Failures raise UpstreamFeedError rather than returning a status wrapper:
the aggregator is fail-fast and one bad feed sinks the whole request.

Usage:
    client = AviationWeatherClient()
    try:
        features = await client.fetch_feed(feed)
    finally:
        await client.aclose()
"""

import httpx
from typing import Any, Dict, List, Optional

from .exceptions import UpstreamFeedError
from .models import FeedRequest
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "AviationWeatherClient")


class AviationWeatherClient:
    """
    Async HTTP client for the aviation weather JSON feeds.

    One instance is shared by all fetches of a single aggregation so the
    parallel requests reuse one connection pool.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize client.

        Args:
            base_url: Feed host. Defaults to AWC_BASE_URL from config.
            timeout: Request timeout in seconds. Defaults to AWC_TIMEOUT_SECONDS.
            user_agent: User-Agent header. Defaults to AWC_USER_AGENT.
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        if base_url is None or timeout is None or user_agent is None:
            from config import get_app_config
            config = get_app_config()
            base_url = base_url or config.awc_base_url
            timeout = timeout or config.awc_timeout_seconds
            user_agent = user_agent or config.awc_user_agent

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                transport=self._transport
            )
        return self._client

    async def aclose(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def build_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def fetch_feed(self, feed: FeedRequest) -> List[Dict[str, Any]]:
        """
        Fetch one feed and return its feature list.

        Args:
            feed: Fetch plan entry (endpoint + query params)

        Returns:
            List of GeoJSON feature dicts, in upstream order

        Raises:
            UpstreamFeedError: On timeout, transport error, non-2xx status,
                non-JSON body, or a body without a ``features`` list
        """
        url = self.build_url(feed.endpoint)
        client = self._get_client()

        try:
            response = await client.get(url, params=feed.params or None)
        except httpx.TimeoutException as e:
            raise UpstreamFeedError(
                feed.name,
                f"Upstream request timeout after {self.timeout}s",
                original_error=e
            ) from e
        except httpx.RequestError as e:
            raise UpstreamFeedError(
                feed.name,
                f"Upstream request error: {e}",
                original_error=e
            ) from e

        if not response.is_success:
            error_text = response.text[:500] if response.text else "Unknown error"
            raise UpstreamFeedError(
                feed.name,
                f"Upstream returned HTTP {response.status_code}: {error_text}",
                status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamFeedError(
                feed.name,
                "Upstream body is not valid JSON",
                status_code=response.status_code,
                original_error=e
            ) from e

        features = payload.get("features") if isinstance(payload, dict) else None
        if not isinstance(features, list):
            raise UpstreamFeedError(
                feed.name,
                "Upstream body is not a GeoJSON FeatureCollection",
                status_code=response.status_code
            )

        logger.debug(
            f"Fetched feed '{feed.name}' ({len(features)} features)",
            extra={'custom_dimensions': {'feed': feed.name, 'params': feed.params, 'features': len(features)}}
        )

        return features
