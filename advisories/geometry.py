"""
Point-in-geometry test for advisory features.

Upstream feeds occasionally publish degenerate geometries such as
``{"type": "Polygon", "coordinates": [[]]}``. Those are reported as
MALFORMED rather than raised, and the filter treats them as non-matching.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from shapely.errors import ShapelyError
from shapely.geometry import Point, shape
from shapely.geometry.base import BaseGeometry

logger = logging.getLogger(__name__)


class IntersectionResult(str, Enum):
    """Outcome of testing a feature against a point."""
    INTERSECTS = "intersects"
    DISJOINT = "disjoint"
    MALFORMED = "malformed"


def parse_geometry(feature: Dict[str, Any]) -> Optional[BaseGeometry]:
    """
    Build a shapely geometry from a feature's GeoJSON geometry.

    Returns:
        Geometry, or None when the geometry is missing, unparseable or empty
    """
    try:
        geometry = feature.get("geometry")
        if not geometry:
            return None
        geom = shape(geometry)
    except (ShapelyError, ValueError, TypeError, KeyError, IndexError, AttributeError) as e:
        logger.debug(f"Unparseable geometry on feature {feature.get('id')!r}: {e}")
        return None

    if geom.is_empty:
        return None
    return geom


def check_intersection(feature: Dict[str, Any], point: Point) -> IntersectionResult:
    """
    Test whether a feature's geometry intersects a point.

    Boundary contact counts as intersecting.
    """
    geom = parse_geometry(feature)
    if geom is None:
        return IntersectionResult.MALFORMED

    try:
        hit = geom.intersects(point)
    except (ShapelyError, ValueError) as e:
        logger.debug(f"Intersection test failed on feature {feature.get('id')!r}: {e}")
        return IntersectionResult.MALFORMED

    return IntersectionResult.INTERSECTS if hit else IntersectionResult.DISJOINT


def feature_intersects(feature: Dict[str, Any], lon: float, lat: float) -> bool:
    """True only for features that genuinely cover (lon, lat); MALFORMED is False."""
    return check_intersection(feature, Point(lon, lat)) is IntersectionResult.INTERSECTS
