"""
Data Models for GPX Elevation Profile Analysis

This module defines the raw input tuple, the built track point, the
immutable track container and the summary statistics record.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, NamedTuple, Optional, Tuple


class RawPoint(NamedTuple):
    """One sample as yielded by the ingestion layer, before ordering."""

    latitude: float
    longitude: float
    altitude: float
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class GeoPoint:
    """
    A single track sample annotated with path distances.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        altitude: Altitude in meters.
        timestamp: Absolute time of the sample, if recorded.
        distance_from_previous: Great-circle distance to the preceding point
            of the built track in meters (0 for the first point).
        distance_from_start: Cumulative distance up to this point in meters.
    """

    latitude: float
    longitude: float
    altitude: float
    timestamp: Optional[datetime] = None
    distance_from_previous: float = 0.0
    distance_from_start: float = 0.0


@dataclass(frozen=True)
class Track:
    """
    An ordered, immutable sequence of GeoPoints.

    Built once by metrics.build_track() and read-only thereafter, so it
    can be shared with a UI thread without locking.
    """

    points: Tuple[GeoPoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[GeoPoint]:
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def total_distance_m(self) -> float:
        """Cumulative distance of the last point (0 for an empty track)."""
        if not self.points:
            return 0.0
        return self.points[-1].distance_from_start

    @property
    def has_timestamps(self) -> bool:
        """True if at least one point carries a timestamp."""
        return any(p.timestamp is not None for p in self.points)


@dataclass(frozen=True)
class TrackStats:
    """Aggregate summary of a non-empty track."""

    count: int
    total_distance_m: float
    min_altitude_m: float
    max_altitude_m: float

    @property
    def elevation_range_m(self) -> float:
        return self.max_altitude_m - self.min_altitude_m
