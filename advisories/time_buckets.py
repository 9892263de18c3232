"""
Time bucket computation for upstream feed snapshots.

The provider publishes SIGMET and G-AIRMET snapshots keyed by a compact
UTC timestamp (``YYYYMMDDHH00``). Buckets are pure functions of the clock
reading, so two requests inside the same hour ask for the same snapshots.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List

Clock = Callable[[], datetime]

AIRMET_STEP_HOURS = 3


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes are taken to already be UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class TimeBuckets:
    """Snapshot times for one aggregation run (all UTC)."""
    current: datetime
    outlook: datetime
    airmets: List[datetime]


def compute_time_buckets(now: datetime, airmet_windows: int = 4) -> TimeBuckets:
    """
    Compute the snapshot times requested from each feed.

    Args:
        now: Clock reading (naive values are treated as UTC)
        airmet_windows: Number of 3-hour G-AIRMET snapshots

    Returns:
        TimeBuckets with:
        - current: next top of the hour
        - outlook: start of the current hour + 3h
        - airmets: most recent 3-hour boundary, then +3h, +6h, ...
    """
    hour_start = _as_utc(now).replace(minute=0, second=0, microsecond=0)
    airmet_start = hour_start.replace(hour=hour_start.hour - hour_start.hour % AIRMET_STEP_HOURS)

    return TimeBuckets(
        current=hour_start + timedelta(hours=1),
        outlook=hour_start + timedelta(hours=3),
        airmets=[
            airmet_start + timedelta(hours=AIRMET_STEP_HOURS * i)
            for i in range(airmet_windows)
        ]
    )


def format_upstream_date(moment: datetime) -> str:
    """
    Format a timestamp as the provider's ``YYYYMMDDHH00`` date parameter.

    >>> format_upstream_date(datetime(2024, 3, 7, 5, 42, tzinfo=timezone.utc))
    '202403070500'
    """
    moment = _as_utc(moment)
    return f"{moment.year:04d}{moment.month:02d}{moment.day:02d}{moment.hour:02d}00"
