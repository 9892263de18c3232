# ============================================================================
# CLAUDE CONTEXT - ADVISORY SERVICE
# ============================================================================
# STATUS: Standalone Service - Advisory aggregation business logic
# PURPOSE: Fan out to the upstream feeds, merge, deduplicate and point-filter
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AdvisoryService, build_fetch_plan, merge_features, filter_features_at_point
# INTERFACES: None (standalone implementation)
# PYDANTIC_MODELS: AdvisoryFeatureCollection, FeedRequest
# DEPENDENCIES: asyncio, shapely (via .geometry), httpx (via .client)
# SOURCE: Aviation weather JSON feeds
# SCOPE: Business logic for the advisory point query
# PATTERNS: Service Layer, Facade Pattern
# ENTRY_POINTS: service = AdvisoryService(); fc = await service.query_point(lat, lon)
# ============================================================================

"""
Advisory Service - Business Logic Layer

Orchestrates one point query:
1. Compute time buckets from the injected clock
2. Build the fetch plan (SIGMET, outlook SIGMET, G-AIRMETs, CWA)
3. Fetch every feed concurrently on one shared client (fail-fast)
4. Concatenate features in plan order and keep the first copy of each id
5. Keep only features whose geometry intersects the query point

Plan order is significant: when two feeds publish the same id, the feed
listed earlier wins.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Optional, Tuple

from util_logger import LoggerFactory, ComponentType, log_exceptions

from .client import AviationWeatherClient
from .config import AdvisoryConfig, get_advisory_config
from .geometry import feature_intersects
from .models import AdvisoryFeatureCollection, FeedRequest
from .time_buckets import Clock, TimeBuckets, compute_time_buckets, format_upstream_date, utc_now

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "AdvisoryService")

SIGMET_ENDPOINT = "SigmetJSON.php"
AIRMET_ENDPOINT = "GairmetJSON.php"
CWA_ENDPOINT = "CwaJSON.php"


# ============================================================================
# PURE HELPERS
# ============================================================================

def build_fetch_plan(buckets: TimeBuckets, config: AdvisoryConfig) -> List[FeedRequest]:
    """
    Build the ordered list of feed requests for one aggregation.

    Args:
        buckets: Snapshot times for this run
        config: Advisory configuration (G-AIRMET level / forecast)

    Returns:
        FeedRequests in dedup-precedence order
    """
    plan = [
        FeedRequest(
            name="sigmet",
            endpoint=SIGMET_ENDPOINT,
            params={"date": format_upstream_date(buckets.current)}
        ),
        FeedRequest(
            name="outlook",
            endpoint=SIGMET_ENDPOINT,
            params={"date": format_upstream_date(buckets.outlook), "outlook": "on"}
        ),
    ]

    for index, airmet_time in enumerate(buckets.airmets):
        plan.append(FeedRequest(
            name=f"airmet_{index}",
            endpoint=AIRMET_ENDPOINT,
            params={
                "level": config.airmet_level,
                "fore": config.airmet_forecast,
                "date": format_upstream_date(airmet_time)
            }
        ))

    plan.append(FeedRequest(name="cwa", endpoint=CWA_ENDPOINT))

    return plan


def _dedup_key(feature_id: Any) -> Tuple[str, Any]:
    type_name = type(feature_id).__name__
    try:
        hash(feature_id)
    except TypeError:
        # Unhashable ids (lists, objects) are compared by their text
        return type_name, repr(feature_id)
    return type_name, feature_id


def merge_features(feature_lists: Iterable[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Concatenate feature lists and keep the first feature seen per ``id``.

    Features without an ``id`` share the key None, so only the first of
    them survives. Ids only match when their JSON types match: ``true``,
    ``1`` and ``1.0`` are three different ids. Entries that are not JSON
    objects are skipped.
    """
    seen = set()
    merged = []

    for features in feature_lists:
        for feature in features:
            if not isinstance(feature, dict):
                continue
            key = _dedup_key(feature.get("id"))
            if key in seen:
                continue
            seen.add(key)
            merged.append(feature)

    return merged


def filter_features_at_point(features: Iterable[Dict[str, Any]], lat: float, lon: float) -> List[Dict[str, Any]]:
    """Keep features whose geometry intersects (lon, lat); malformed ones are dropped."""
    return [
        feature for feature in features
        if feature_intersects(feature, lon, lat)
    ]


# ============================================================================
# SERVICE
# ============================================================================

class AdvisoryService:
    """
    Business logic service for the advisory point query.

    Responsibilities:
    - Build the time-bucketed fetch plan
    - Run the concurrent, fail-fast fan-out
    - Merge/deduplicate and point-filter results
    """

    def __init__(
        self,
        config: Optional[AdvisoryConfig] = None,
        client: Optional[AviationWeatherClient] = None,
        clock: Clock = utc_now
    ):
        """
        Initialize service.

        Args:
            config: Advisory configuration (uses singleton if not provided)
            client: Upstream client (a fresh one per aggregation if not provided)
            clock: Returns the current time; injected so tests can pin buckets
        """
        self.config = config or get_advisory_config()
        self._client = client
        self.clock = clock

    def fetch_plan(self) -> List[FeedRequest]:
        """Fetch plan for the clock's current reading."""
        buckets = compute_time_buckets(self.clock(), self.config.airmet_windows)
        return build_fetch_plan(buckets, self.config)

    async def _fetch_all(self, client: AviationWeatherClient, plan: List[FeedRequest]) -> List[List[Dict[str, Any]]]:
        tasks = [asyncio.ensure_future(client.fetch_feed(feed)) for feed in plan]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Drain cancelled siblings so their errors are not reported as unretrieved
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    @log_exceptions(logger=logger)
    async def get_all(self) -> AdvisoryFeatureCollection:
        """
        Fetch every feed and return the merged, deduplicated collection.

        Raises:
            UpstreamFeedError: If any single feed fails
        """
        plan = self.fetch_plan()
        client = self._client or AviationWeatherClient()

        try:
            feature_lists = await self._fetch_all(client, plan)
        finally:
            if self._client is None:
                await client.aclose()

        merged = merge_features(feature_lists)

        logger.info(
            f"Aggregated {len(plan)} feeds into {len(merged)} advisories",
            extra={'custom_dimensions': {
                'feeds': {feed.name: len(features) for feed, features in zip(plan, feature_lists)},
                'merged': len(merged)
            }}
        )

        return AdvisoryFeatureCollection(features=merged)

    async def query_point(self, lat: float, lon: float) -> AdvisoryFeatureCollection:
        """
        Return the advisories whose geometry intersects (lat, lon).

        Raises:
            UpstreamFeedError: If any single feed fails
        """
        collection = await self.get_all()
        matches = filter_features_at_point(collection.features, lat, lon)

        logger.info(
            f"Point query ({lat}, {lon}): {len(matches)} of {len(collection.features)} advisories intersect",
            extra={'custom_dimensions': {'lat': lat, 'lon': lon, 'matched': len(matches)}}
        )

        return AdvisoryFeatureCollection(features=matches)
