# ============================================================================
# CLAUDE CONTEXT - ADVISORY TRIGGERS
# ============================================================================
# STATUS: Standalone HTTP Triggers - Advisory point query endpoint
# PURPOSE: Azure Functions HTTP trigger for GET /api/advisories
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: get_advisory_triggers, AdvisoryQueryTrigger
# INTERFACES: Azure Functions HttpRequest/HttpResponse
# PYDANTIC_MODELS: AdvisoryQueryParameters (for validation)
# DEPENDENCIES: azure.functions, pydantic, json
# SOURCE: HTTP requests from map clients (lat/lon query string)
# SCOPE: HTTP endpoint handler for the advisory API
# VALIDATION: Query parameter parsing and Pydantic validation
# PATTERNS: Trigger Pattern, Factory Pattern (get_advisory_triggers)
# ENTRY_POINTS: Function App route registration via get_advisory_triggers()
# ============================================================================

"""
Advisory API HTTP Triggers - Azure Functions Handlers

Endpoint:
- GET /api/advisories?lat={lat}&lon={lon}

Responses:
- 200 application/json: FeatureCollection of advisories covering the point
- 405 (empty body): lat or lon missing or not a finite number
- 500 {"error": "Error processing"}: upstream or internal failure

Integration:
    In function_app.py:

    from advisories import get_advisory_triggers

    for trigger in get_advisory_triggers():
        app.route(
            route=trigger['route'],
            methods=trigger['methods'],
            auth_level=func.AuthLevel.ANONYMOUS
        )(trigger['handler'])
"""

import azure.functions as func
import json
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from util_logger import LoggerFactory, ComponentType

from .config import AdvisoryConfig, get_advisory_config
from .exceptions import InvalidCoordinatesError
from .models import AdvisoryQueryParameters
from .service import AdvisoryService

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "AdvisoryTriggers")

PROCESSING_ERROR_BODY = {"error": "Error processing"}


# ============================================================================
# TRIGGER REGISTRY FUNCTION
# ============================================================================

def get_advisory_triggers() -> List[Dict[str, Any]]:
    """
    Get list of advisory trigger configurations for function_app.py.

    Returns:
        List of dicts with keys:
        - route: URL route pattern
        - methods: List of HTTP methods
        - handler: Callable trigger handler (async)
    """
    config = get_advisory_config()
    return [
        {
            'route': config.route,
            'methods': ['GET'],
            'handler': AdvisoryQueryTrigger(config).handle
        }
    ]


# ============================================================================
# BASE TRIGGER CLASS
# ============================================================================

class BaseAdvisoryTrigger:
    """
    Base class for advisory triggers.

    Provides JSON response formatting and the generic error response.
    """

    def __init__(self, config: Optional[AdvisoryConfig] = None, service: Optional[AdvisoryService] = None):
        self.config = config or get_advisory_config()
        self.service = service or AdvisoryService(self.config)

    def _json_response(self, data: Any, status_code: int = 200) -> func.HttpResponse:
        """
        Create JSON HTTP response.

        Args:
            data: Data to serialize (dict or Pydantic model)
            status_code: HTTP status code
        """
        if hasattr(data, 'model_dump'):
            data = data.model_dump(mode='json')

        return func.HttpResponse(
            body=json.dumps(data),
            status_code=status_code,
            mimetype="application/json"
        )

    def _error_response(self, status_code: int = 500) -> func.HttpResponse:
        """Generic processing failure; upstream outages and bugs look the same to callers."""
        return func.HttpResponse(
            body=json.dumps(PROCESSING_ERROR_BODY),
            status_code=status_code,
            mimetype="application/json"
        )

    def _bad_request_response(self) -> func.HttpResponse:
        return func.HttpResponse(status_code=405)


# ============================================================================
# ENDPOINT TRIGGERS
# ============================================================================

class AdvisoryQueryTrigger(BaseAdvisoryTrigger):
    """
    Advisory point query trigger.

    Endpoint: GET /api/advisories

    Query Parameters:
    - lat: Latitude (required, finite number)
    - lon: Longitude (required, finite number)
    """

    async def handle(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Handle advisory point query.

        Args:
            req: Azure Functions HTTP request

        Returns:
            HttpResponse with GeoJSON FeatureCollection
        """
        try:
            params = self._parse_query_parameters(req)
        except InvalidCoordinatesError as e:
            # Rejected before any upstream traffic
            logger.warning(f"Rejected advisory query: {e}")
            return self._bad_request_response()

        try:
            feature_collection = await self.service.query_point(params.lat, params.lon)

            logger.info(
                f"Advisory query: lat={params.lat}, lon={params.lon}, "
                f"returned={len(feature_collection.features)}"
            )

            return self._json_response(feature_collection)

        except Exception as e:
            logger.error(f"Error processing advisory query: {e}", exc_info=True)
            return self._error_response()

    def _parse_query_parameters(self, req: func.HttpRequest) -> AdvisoryQueryParameters:
        """
        Parse lat/lon from the query string.

        Raises:
            InvalidCoordinatesError: If either value is missing or not a finite number
        """
        lat = req.params.get('lat')
        lon = req.params.get('lon')

        try:
            return AdvisoryQueryParameters(lat=lat, lon=lon)
        except ValidationError as e:
            raise InvalidCoordinatesError(lat=lat, lon=lon) from e
