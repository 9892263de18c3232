"""
Pytest configuration and shared fixtures for the advisory API tests.

The upstream provider is replaced by httpx.MockTransport; no test touches
the network.
"""

import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
import pytest

# Set environment variables BEFORE importing the app modules
os.environ.setdefault('AWC_BASE_URL', 'https://awc.test/cgi-bin/json')
os.environ.setdefault('AWC_TIMEOUT_SECONDS', '5')
os.environ.setdefault('AWC_USER_AGENT', 'wxadvisories-tests')

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import azure.functions as func  # noqa: E402

from advisories.client import AviationWeatherClient  # noqa: E402
from advisories.config import AdvisoryConfig  # noqa: E402
from advisories.service import AdvisoryService, build_fetch_plan  # noqa: E402
from advisories.time_buckets import compute_time_buckets  # noqa: E402

BASE_URL = 'https://awc.test/cgi-bin/json'

# Query point used across tests (lon, lat)
POINT_LON = -100.0
POINT_LAT = 40.0

FIXED_NOW = datetime(2024, 3, 7, 5, 42, 17, tzinfo=timezone.utc)


def square(lon: float, lat: float, half: float = 1.0) -> Dict[str, Any]:
    """GeoJSON polygon centred on (lon, lat)."""
    return {
        "type": "Polygon",
        "coordinates": [[
            [lon - half, lat - half],
            [lon + half, lat - half],
            [lon + half, lat + half],
            [lon - half, lat + half],
            [lon - half, lat - half]
        ]]
    }


def make_feature(feature_id: Any, geometry: Optional[Dict[str, Any]], **properties) -> Dict[str, Any]:
    feature = {"type": "Feature", "geometry": geometry, "properties": properties}
    if feature_id is not None:
        feature["id"] = feature_id
    return feature


def _route_key(endpoint: str, params: Dict[str, Any]):
    return endpoint, tuple(sorted((k, str(v)) for k, v in params.items()))


class FakeUpstream:
    """
    MockTransport handler that answers each fetch plan entry by feed name.

    responses maps feed name to either a feature list or an httpx.Response;
    feeds without an entry return an empty FeatureCollection.
    """

    def __init__(self, config: AdvisoryConfig, now: datetime, responses: Optional[Dict[str, Any]] = None):
        plan = build_fetch_plan(compute_time_buckets(now, config.airmet_windows), config)
        self.routes = {_route_key(feed.endpoint, feed.params): feed.name for feed in plan}
        self.responses = responses or {}
        self.calls: List[str] = []
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.rsplit('/', 1)[-1]
        name = self.routes.get(_route_key(endpoint, dict(request.url.params)))
        self.calls.append(name)
        self.requests.append(request)

        if name is None:
            return httpx.Response(404, text="unknown feed")

        response = self.responses.get(name, [])
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json={"type": "FeatureCollection", "features": response})


@pytest.fixture
def advisory_config() -> AdvisoryConfig:
    return AdvisoryConfig(route="advisories", airmet_level="sfc", airmet_forecast=-1, airmet_windows=4)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def make_service(advisory_config, fixed_clock):
    """Build (service, upstream) with the given per-feed responses."""
    def _make(responses: Optional[Dict[str, Any]] = None, clock=None):
        clock = clock or fixed_clock
        upstream = FakeUpstream(advisory_config, clock(), responses)
        client = AviationWeatherClient(
            base_url=BASE_URL,
            timeout=5.0,
            user_agent='wxadvisories-tests',
            transport=httpx.MockTransport(upstream)
        )
        service = AdvisoryService(advisory_config, client=client, clock=clock)
        return service, upstream
    return _make


@pytest.fixture
def make_request():
    def _make(params: Optional[Dict[str, str]] = None) -> func.HttpRequest:
        return func.HttpRequest(
            method='GET',
            url='http://localhost:7071/api/advisories',
            params=params or {},
            body=b''
        )
    return _make
