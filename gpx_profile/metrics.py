"""
Metrics Computation for GPX Elevation Profile Analysis

This module turns raw point tuples into a built track: chronological
ordering followed by great-circle distance accumulation.
"""

import numpy as np
from typing import List, Sequence
from . import constants
from . import utils
from .models import GeoPoint, RawPoint, Track


def haversine_m(lat1, lon1, lat2, lon2):
    """
    Calculate the great-circle distance between two points on Earth.

    Uses the Haversine formula on a sphere of radius 6,371,000 m. Works on
    scalars as well as numpy arrays (element-wise).

    Args:
        lat1, lon1: Latitude and longitude of first point in degrees.
        lat2, lon2: Latitude and longitude of second point in degrees.

    Returns:
        Distance in meters between the two points.
    """
    R = constants.EARTH_RADIUS_M
    lat1_rad, lon1_rad = np.deg2rad(lat1), np.deg2rad(lon1)
    lat2_rad, lon2_rad = np.deg2rad(lat2), np.deg2rad(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
    # Rounding can push a slightly past 1 for near-antipodal points
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return R * c


def order_points(raw_points: Sequence[RawPoint]) -> List[RawPoint]:
    """
    Put raw points into chronological order when that order is defined.

    Points are only reordered if every one of them carries a timestamp; the
    sort is stable, so equal timestamps keep their input order. Naive
    timestamps are compared as UTC. If any point
    lacks a timestamp the input order is returned unchanged.

    Args:
        raw_points: Points in input (file) order.

    Returns:
        New list of points in track order.
    """
    points = [RawPoint(*p) for p in raw_points]
    if points and all(p.timestamp is not None for p in points):
        return sorted(points, key=lambda p: utils.as_aware(p.timestamp))
    return points


def segment_distances(points: Sequence[RawPoint]) -> np.ndarray:
    """
    Compute the distance from each point to its predecessor.

    Args:
        points: Points in track order.

    Returns:
        Array of the same length; element 0 is 0.
    """
    if len(points) < 2:
        return np.zeros(len(points))

    lat = np.array([p.latitude for p in points], dtype=float)
    lon = np.array([p.longitude for p in points], dtype=float)

    distances = np.zeros(len(points))
    distances[1:] = haversine_m(lat[:-1], lon[:-1], lat[1:], lon[1:])
    return distances


def build_track(raw_points: Sequence[RawPoint]) -> Track:
    """
    Build an ordered, distance-annotated track from raw samples.

    Orders the samples (see order_points), then walks them once assigning
    distance_from_previous and the running distance_from_start. Geographic
    ranges are not validated.

    Args:
        raw_points: Sequence of (lat, lon, alt, timestamp-or-None) tuples.

    Returns:
        Track; empty if no points were given.
    """
    ordered = order_points(raw_points)
    distances = segment_distances(ordered)

    built = []
    cumulative = 0.0
    for point, step in zip(ordered, distances):
        step = float(step)
        cumulative += step
        built.append(GeoPoint(
            latitude=float(point.latitude),
            longitude=float(point.longitude),
            altitude=float(point.altitude),
            timestamp=point.timestamp,
            distance_from_previous=step,
            distance_from_start=cumulative,
        ))

    return Track(tuple(built))
