# ============================================================================
# CLAUDE CONTEXT - HEALTH CHECK MODULE
# ============================================================================
# STATUS: Core Infrastructure - Health Monitoring
# PURPOSE: Health checks for APIM integration and monitoring
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: get_public_health, get_detailed_health, get_app_identity, HealthStatus
# DEPENDENCIES: httpx, config, util_logger
# PATTERNS: Two-tier health checks (public/detailed) for APIM
# ============================================================================

"""
Health Check Module for wxadvisories

Two-tier health monitoring:

1. Public Health (/api/health):
   - Minimal response for external callers
   - Returns only status and timestamp
   - Always returns 200 (status in body indicates health)

2. Detailed Health (/api/health/detailed):
   - Upstream feed reachability with latency
   - API module status
   - Returns 503 if unhealthy

Usage:
    from health import get_public_health, get_detailed_health

    result = get_public_health()
    # {"status": "healthy", "timestamp": "2026-10-19T12:00:00+00:00"}
"""

import time
import uuid
import httpx
from enum import Enum
from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Optional, Dict, Any

from config import get_app_config
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.HEALTH, "HealthService")

# Parameterless feed, cheapest reachability check of the upstream host
UPSTREAM_CHECK_ENDPOINT = "CwaJSON.php"


# ============================================================================
# Health Status Enum
# ============================================================================

class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"      # Non-critical components failing
    UNHEALTHY = "unhealthy"    # Critical components failing


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class CheckResult:
    """Result of a single health check."""
    status: str              # "pass" or "fail"
    latency_ms: float
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        result = {
            "status": self.status,
            "latency_ms": round(self.latency_ms, 2),
            "message": self.message
        }
        if self.details:
            result["details"] = self.details
        return result


def get_app_identity() -> Dict[str, str]:
    """Name and description used in startup logs and detailed health."""
    return {
        "name": "wxadvisories",
        "description": "Aviation hazard advisory point query API"
    }


# ============================================================================
# Health Check Functions
# ============================================================================

def check_upstream_connectivity(
    timeout_seconds: float = 5.0,
    transport: Optional[httpx.BaseTransport] = None
) -> CheckResult:
    """
    Check that the upstream feed host answers with a feature collection.

    This is a critical check - failure means UNHEALTHY status.

    Args:
        timeout_seconds: Request timeout in seconds
        transport: Optional httpx transport (tests pass httpx.MockTransport)

    Returns:
        CheckResult with reachability and latency
    """
    start_time = time.perf_counter()
    config = get_app_config()
    url = f"{config.awc_base_url}/{UPSTREAM_CHECK_ENDPOINT}"

    try:
        with httpx.Client(
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": config.awc_user_agent},
            transport=transport
        ) as client:
            response = client.get(url)
            response.raise_for_status()
            features = response.json().get("features")

        latency_ms = (time.perf_counter() - start_time) * 1000

        if not isinstance(features, list):
            return CheckResult(
                status="fail",
                latency_ms=latency_ms,
                message="Upstream response is not a FeatureCollection",
                details={"url": url}
            )

        return CheckResult(
            status="pass",
            latency_ms=latency_ms,
            message="Upstream feed reachable",
            details={
                "url": url,
                "status_code": response.status_code,
                "feature_count": len(features)
            }
        )

    except Exception as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"Upstream connectivity check failed: {e}")

        return CheckResult(
            status="fail",
            latency_ms=latency_ms,
            message=f"Upstream request failed: {type(e).__name__}",
            details={"url": url, "error": str(e)}
        )


def check_api_modules() -> CheckResult:
    """
    Check API module availability.

    This is a non-critical check - failure means DEGRADED status.
    """
    start_time = time.perf_counter()

    try:
        from advisories import get_advisory_triggers, get_advisory_config
        triggers = get_advisory_triggers()
        config = get_advisory_config()
        advisory_status = {
            "available": True,
            "endpoints": len(triggers),
            "route": config.route,
            "airmet_windows": config.airmet_windows
        }
        status = "pass"
        message = "All modules loaded"
    except Exception as e:
        advisory_status = {"available": False, "endpoints": 0, "error": str(e)}
        status = "fail"
        message = "No API modules available"

    latency_ms = (time.perf_counter() - start_time) * 1000

    return CheckResult(
        status=status,
        latency_ms=latency_ms,
        message=message,
        details={"advisories": advisory_status}
    )


# ============================================================================
# Main Entry Points
# ============================================================================

def get_public_health() -> Dict[str, Any]:
    """
    Get minimal health status for public endpoint.

    Returns only status and timestamp - no internal details.
    """
    start_time = time.perf_counter()

    upstream_result = check_upstream_connectivity(timeout_seconds=3.0)

    if upstream_result.status == "pass":
        status = HealthStatus.HEALTHY
    else:
        status = HealthStatus.UNHEALTHY

    total_duration = (time.perf_counter() - start_time) * 1000

    logger.info("Public health check completed", extra={
        'custom_dimensions': {
            'status': status.value,
            'duration_ms': round(total_duration, 2),
            'check_type': 'public'
        }
    })

    return {
        "status": status.value,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


def get_detailed_health() -> Dict[str, Any]:
    """
    Get detailed health status for APIM monitoring and operations.

    SECURITY NOTE: Block this endpoint from external access via APIM policy.
    """
    start_time = time.perf_counter()
    request_id = str(uuid.uuid4())[:8]

    checks = {}
    critical_failures = []
    non_critical_failures = []

    upstream_result = check_upstream_connectivity()
    checks["upstream"] = upstream_result.to_dict()
    if upstream_result.status == "fail":
        critical_failures.append("upstream")

    modules_result = check_api_modules()
    checks["api_modules"] = modules_result.to_dict()
    if modules_result.status == "fail":
        non_critical_failures.append("api_modules")

    if critical_failures:
        status = HealthStatus.UNHEALTHY
    elif non_critical_failures:
        status = HealthStatus.DEGRADED
    else:
        status = HealthStatus.HEALTHY

    total_duration = (time.perf_counter() - start_time) * 1000

    logger.info("Detailed health check completed", extra={
        'custom_dimensions': {
            'status': status.value,
            'duration_ms': round(total_duration, 2),
            'check_type': 'detailed',
            'request_id': request_id,
            'critical_failures': critical_failures,
            'non_critical_failures': non_critical_failures,
            'upstream_latency_ms': upstream_result.latency_ms
        }
    })

    identity = get_app_identity()

    return {
        "status": status.value,
        "app": identity["name"],
        "description": identity["description"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id,
        "checks": checks,
        "total_duration_ms": round(total_duration, 2)
    }
