# ============================================================================
# CLAUDE CONTEXT - ADVISORY MODELS
# ============================================================================
# STATUS: Standalone Models - request/response models for the advisory API
# PURPOSE: Query parameter validation and GeoJSON response model
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AdvisoryQueryParameters, AdvisoryFeatureCollection, FeedRequest
# INTERFACES: Pydantic BaseModel, dataclass
# DEPENDENCIES: pydantic, typing, dataclasses
# SOURCE: GeoJSON RFC 7946
# VALIDATION: Pydantic v2 validation
# PATTERNS: Data Transfer Objects (DTOs)
# ENTRY_POINTS: from advisories.models import AdvisoryFeatureCollection
# ============================================================================

"""
Advisory API Pydantic Models

Features are kept as plain dicts: upstream payloads are known to carry
degenerate geometries, so nothing beyond ``id`` and ``geometry`` is
interpreted.

References:
- GeoJSON RFC 7946: https://tools.ietf.org/html/rfc7946
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field


class AdvisoryQueryParameters(BaseModel):
    """
    Point query parameters for GET /api/advisories.

    Values arrive as query-string text; pydantic coerces them to float and
    rejects empty, non-numeric, NaN and infinite input.
    """
    lat: float = Field(
        allow_inf_nan=False,
        description="Latitude of the query point (WGS84)"
    )
    lon: float = Field(
        allow_inf_nan=False,
        description="Longitude of the query point (WGS84)"
    )


class AdvisoryFeatureCollection(BaseModel):
    """
    GeoJSON FeatureCollection of hazard advisories.
    """
    type: Literal["FeatureCollection"] = Field(
        default="FeatureCollection",
        description="GeoJSON type"
    )
    features: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Array of GeoJSON Feature objects"
    )


@dataclass(frozen=True)
class FeedRequest:
    """
    One entry of the fetch plan.

    Plan order decides which copy of a duplicated feature survives.
    """
    name: str
    endpoint: str
    params: Dict[str, Any] = field(default_factory=dict)
