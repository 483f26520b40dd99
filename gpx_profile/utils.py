"""
Utility Functions for GPX Elevation Profile Analysis

This module provides helper functions for unit conversion and for the
text formatting shared by the statistics report and the chart labels.
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional, Tuple
from . import constants


def meters_to_feet(meters: float) -> float:
    """Convert meters to feet."""
    return meters * constants.FEET_PER_METER


def meters_to_miles(meters: float) -> float:
    """Convert meters to statute miles."""
    return meters / constants.METERS_PER_MILE


def adaptive_distance(meters: float) -> Tuple[float, str, float, str]:
    """
    Express a distance in the unit pair used for reporting.
    
    Distances under 1000 m stay in meters (with feet as secondary unit),
    longer distances switch to kilometers (with miles).
    
    Args:
        meters: Distance in meters.
        
    Returns:
        Tuple of (primary value, primary unit, secondary value, secondary unit).
    """
    if meters < constants.METERS_PER_KM:
        return meters, "m", meters_to_feet(meters), "ft"
    return meters / constants.METERS_PER_KM, "km", meters_to_miles(meters), "miles"


def as_aware(timestamp: datetime) -> datetime:
    """Attach UTC to a naive timestamp; aware values are returned unchanged."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def format_clock_time(timestamp: datetime, tz: Optional[tzinfo] = None) -> str:
    """
    Format a timestamp as local 12-hour wall-clock time, e.g. "3:07 pm".
    
    Args:
        timestamp: Instant to format. Naive values are taken as UTC.
        tz: Target time zone. If None, the system local zone is used.
        
    Returns:
        Hour without leading zero, zero-padded minute and am/pm suffix.
    """
    local = as_aware(timestamp).astimezone(tz)
    hour = local.hour % 12 or 12
    suffix = "am" if local.hour < 12 else "pm"
    return f"{hour}:{local.minute:02d} {suffix}"
