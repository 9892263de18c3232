"""Tests for the upstream aviation weather client."""

import asyncio

import httpx
import pytest

from advisories.client import AviationWeatherClient
from advisories.exceptions import UpstreamFeedError
from advisories.models import FeedRequest

from conftest import BASE_URL

SIGMET = FeedRequest(name="sigmet", endpoint="SigmetJSON.php", params={"date": "202403070600"})


def fetch(handler, feed=SIGMET):
    async def _run():
        client = AviationWeatherClient(
            base_url=BASE_URL + "/",
            timeout=5.0,
            user_agent="wxadvisories-tests",
            transport=httpx.MockTransport(handler)
        )
        try:
            return await client.fetch_feed(feed)
        finally:
            await client.aclose()
    return asyncio.run(_run())


class TestFetchFeed:

    def test_returns_features_and_sends_params(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["user_agent"] = request.headers["user-agent"]
            return httpx.Response(200, json={"type": "FeatureCollection", "features": [{"id": "A"}]})

        features = fetch(handler)

        assert features == [{"id": "A"}]
        assert seen["url"] == f"{BASE_URL}/SigmetJSON.php?date=202403070600"
        assert seen["user_agent"] == "wxadvisories-tests"

    def test_feed_without_params(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"features": []})

        assert fetch(handler, FeedRequest(name="cwa", endpoint="CwaJSON.php")) == []
        assert seen["url"] == f"{BASE_URL}/CwaJSON.php"

    def test_non_2xx_raises(self):
        with pytest.raises(UpstreamFeedError) as exc_info:
            fetch(lambda request: httpx.Response(503, text="maintenance"))

        assert exc_info.value.feed == "sigmet"
        assert exc_info.value.status_code == 503
        assert "503" in str(exc_info.value)

    def test_non_json_body_raises(self):
        with pytest.raises(UpstreamFeedError, match="not valid JSON"):
            fetch(lambda request: httpx.Response(200, text="<html>oops</html>"))

    def test_missing_features_raises(self):
        with pytest.raises(UpstreamFeedError, match="FeatureCollection"):
            fetch(lambda request: httpx.Response(200, json={"type": "FeatureCollection"}))

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamFeedError) as exc_info:
            fetch(handler)

        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(UpstreamFeedError, match="timeout"):
            fetch(handler)
