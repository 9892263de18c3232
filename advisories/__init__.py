# ============================================================================
# CLAUDE CONTEXT - ADVISORY API MODULE
# ============================================================================
# STATUS: Standalone Module - Aviation hazard advisory point query
# PURPOSE: Merge SIGMET / outlook / G-AIRMET / CWA feeds and filter to a point
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AdvisoryService, AdvisoryConfig, get_advisory_config, get_advisory_triggers
# INTERFACES: Standalone - only shares config.py and util_logger with the app
# PYDANTIC_MODELS: AdvisoryQueryParameters, AdvisoryFeatureCollection
# DEPENDENCIES: httpx, shapely, pydantic, azure-functions
# SOURCE: Aviation weather JSON feeds
# PATTERNS: Service Layer, Standalone Module
# ENTRY_POINTS: from advisories import get_advisory_triggers
# ============================================================================

"""
Advisory API - Standalone Module

Architecture:
    advisories/
    ├── config.py        # Feed plan settings
    ├── exceptions.py    # Error hierarchy
    ├── geometry.py      # Tri-state point intersection (shapely)
    ├── models.py        # Pydantic request/response models
    ├── service.py       # Fan-out, merge, dedup, filter
    ├── time_buckets.py  # Snapshot times + upstream date format
    └── triggers.py      # Azure Functions HTTP handler
"""

from .config import AdvisoryConfig, get_advisory_config
from .service import AdvisoryService
from .triggers import get_advisory_triggers

__version__ = "1.0.0"
__all__ = [
    "AdvisoryConfig",
    "AdvisoryService",
    "get_advisory_config",
    "get_advisory_triggers"
]
