# ============================================================================
# CLAUDE CONTEXT - ADVISORY CONFIGURATION
# ============================================================================
# STATUS: Standalone Configuration - Advisory point query API
# PURPOSE: Feed plan settings for the advisory aggregator
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AdvisoryConfig, get_advisory_config
# INTERFACES: Pydantic BaseModel
# DEPENDENCIES: pydantic, os
# SOURCE: Environment variables (upstream host lives in the main config.py)
# PATTERNS: Settings Pattern, Singleton via cached function
# ENTRY_POINTS: from advisories.config import get_advisory_config
# ============================================================================

"""
Advisory API Configuration

Environment Variables:
    Optional:
    - ADVISORY_ROUTE: HTTP route for the point query (default: "advisories")
    - ADVISORY_AIRMET_LEVEL: G-AIRMET altitude level (default: "sfc")
    - ADVISORY_AIRMET_FORECAST: G-AIRMET "fore" parameter (default: -1)
    - ADVISORY_AIRMET_WINDOWS: Number of 3-hour G-AIRMET snapshots (default: 4)
"""

import os
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AdvisoryConfig(BaseModel):
    """Configuration for the advisory point query API."""

    # Environment values arrive through default factories and must pass the same checks
    model_config = ConfigDict(validate_default=True)

    route: str = Field(
        default_factory=lambda: os.getenv("ADVISORY_ROUTE", "advisories"),
        description="HTTP route for the advisory point query"
    )
    airmet_level: str = Field(
        default_factory=lambda: os.getenv("ADVISORY_AIRMET_LEVEL", "sfc"),
        description="Altitude level requested from the G-AIRMET feed"
    )
    airmet_forecast: int = Field(
        default_factory=lambda: os.getenv("ADVISORY_AIRMET_FORECAST", "-1"),
        description="Forecast offset requested from the G-AIRMET feed (-1 = all)"
    )
    airmet_windows: int = Field(
        default_factory=lambda: os.getenv("ADVISORY_AIRMET_WINDOWS", "4"),
        ge=1,
        le=8,
        description="Number of 3-hour G-AIRMET snapshots to request"
    )

    @field_validator("route", "airmet_level")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        """Ensure string settings are not blank."""
        if not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v.strip().strip("/") if info.field_name == "route" else v.strip()


_config_cache: Optional[AdvisoryConfig] = None


def get_advisory_config() -> AdvisoryConfig:
    """
    Get singleton advisory configuration instance.

    Raises:
        ValueError: If environment variables hold invalid values
    """
    global _config_cache

    if _config_cache is None:
        _config_cache = AdvisoryConfig()

    return _config_cache
