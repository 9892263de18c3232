# ============================================================================
# CLAUDE CONTEXT - APPLICATION CONFIGURATION
# ============================================================================
# STATUS: Core Infrastructure - Configuration Management
# PURPOSE: Centralized configuration for the upstream aviation weather provider
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AppConfig, get_app_config, validate_configuration
# DEPENDENCIES: pydantic-settings
# SOURCE: Environment variables, optional .env file
# PATTERNS: Singleton pattern for config via lru_cache
# ============================================================================

"""
Application Configuration Module

Provides centralized configuration for wxadvisories:
- Upstream provider base URL (JSON feed host)
- HTTP timeout and User-Agent for outbound requests

Environment Variables:
    Optional:
    - AWC_BASE_URL: Feed host including the /cgi-bin/json path
    - AWC_TIMEOUT_SECONDS: Per-request timeout (default: 30)
    - AWC_USER_AGENT: User-Agent header sent upstream

Usage:
    from config import get_app_config

    config = get_app_config()
    client = AviationWeatherClient(base_url=config.awc_base_url)
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_AWC_BASE_URL = "https://d3akp0hquhcjdh.cloudfront.net/cgi-bin/json"


# ============================================================================
# Application Configuration
# ============================================================================

class AppConfig(BaseSettings):
    """
    Application-wide configuration loaded from environment variables.

    Attributes:
        awc_base_url: Upstream feed host (no trailing slash)
        awc_timeout_seconds: Timeout for each upstream request
        awc_user_agent: User-Agent header for upstream requests
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    awc_base_url: str = Field(
        default=DEFAULT_AWC_BASE_URL,
        description="Aviation weather JSON feed host"
    )
    awc_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Upstream request timeout in seconds"
    )
    awc_user_agent: str = Field(
        default="wxadvisories/1.0",
        description="User-Agent header for upstream requests"
    )

    @field_validator("awc_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so endpoint paths can be appended with '/'."""
        if not v:
            raise ValueError("AWC_BASE_URL must not be empty")
        return v.rstrip("/")


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    """
    Get singleton application configuration instance.

    Returns:
        AppConfig: Validated configuration object

    Raises:
        ValidationError: If environment variables hold invalid values
    """
    return AppConfig()


# ============================================================================
# Configuration Validation
# ============================================================================

def validate_configuration() -> bool:
    """
    Validate configuration on application startup.

    Returns:
        bool: True if configuration is valid

    Raises:
        Exception: If configuration validation fails
    """
    try:
        config = get_app_config()
        logger.info("Configuration validation:")
        logger.info(f"  Upstream host: {config.awc_base_url}")
        logger.info(f"  Timeout: {config.awc_timeout_seconds}s")
        return True

    except Exception as e:
        logger.error(f"❌ Configuration validation failed: {e}")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    validate_configuration()
