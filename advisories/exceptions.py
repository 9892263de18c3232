"""
Advisory service exceptions.

Triggers map these onto HTTP status codes; nothing below the trigger layer
builds responses.
"""

from typing import Any, Dict, Optional


class AdvisoryError(Exception):
    """Base exception for the advisory service."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class InvalidCoordinatesError(AdvisoryError):
    """Raised when lat/lon query parameters are missing or not finite numbers."""

    def __init__(self, message: str = "lat and lon must be finite numbers", lat: Any = None, lon: Any = None):
        super().__init__(message, {"lat": lat, "lon": lon})
        self.lat = lat
        self.lon = lon


class UpstreamFeedError(AdvisoryError):
    """
    Raised when a single upstream feed cannot be fetched or decoded.

    Covers transport errors, non-2xx responses and bodies that are not a
    GeoJSON feature collection.
    """

    def __init__(
        self,
        feed: str,
        message: str = "Upstream feed request failed",
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        details: Dict[str, Any] = {"feed": feed}
        if status_code is not None:
            details["status_code"] = status_code
        if original_error is not None:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__
        super().__init__(message, details)
        self.feed = feed
        self.status_code = status_code
        self.original_error = original_error
