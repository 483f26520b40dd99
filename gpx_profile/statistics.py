"""
Track Statistics for GPX Elevation Profile Analysis

This module derives aggregate summaries from a built track and formats the
human-readable statistics report and sample table.
"""

from typing import List
from . import utils
from .models import Track, TrackStats


def summarize(track: Track) -> TrackStats:
    """
    Compute point count, total distance and altitude extremes.

    Args:
        track: Built track.

    Returns:
        TrackStats for the track.

    Raises:
        ValueError: If the track is empty (there are no extremes to report).
    """
    if track.is_empty:
        raise ValueError("Cannot summarize an empty track")

    min_alt = track[0].altitude
    max_alt = track[0].altitude
    for point in track:
        min_alt = min(min_alt, point.altitude)
        max_alt = max(max_alt, point.altitude)

    return TrackStats(
        count=len(track),
        total_distance_m=track.total_distance_m,
        min_altitude_m=min_alt,
        max_altitude_m=max_alt,
    )


def format_statistics(track: Track) -> str:
    """
    Build the statistics report printed after loading a track.

    Total distance is shown in meters/feet below 1 km and in
    kilometers/miles from 1 km up.

    Args:
        track: Built track.

    Returns:
        Multi-line report, or "No track points found." for an empty track.
    """
    if track.is_empty:
        return "No track points found."

    stats = summarize(track)
    value, unit, secondary, secondary_unit = utils.adaptive_distance(stats.total_distance_m)

    lines = [
        "=== Track Statistics ===",
        f"Total Points: {stats.count}",
        f"Total Distance: {value:.2f} {unit} ({secondary:.2f} {secondary_unit})",
        f"Min Altitude: {stats.min_altitude_m:.2f} m ({utils.meters_to_feet(stats.min_altitude_m):.2f} ft)",
        f"Max Altitude: {stats.max_altitude_m:.2f} m ({utils.meters_to_feet(stats.max_altitude_m):.2f} ft)",
        f"Elevation Range: {stats.elevation_range_m:.2f} m "
        f"({utils.meters_to_feet(stats.elevation_range_m):.2f} ft)",
    ]
    return "\n".join(lines)


def sample_indices(count: int, samples: int = 10) -> List[int]:
    """Indices of every max(1, count // samples)-th point."""
    step = max(1, count // samples)
    return list(range(0, count, step))


def format_sample_table(track: Track, samples: int = 10) -> str:
    """
    Format a short table of evenly spaced track points.

    Args:
        track: Built track.
        samples: Approximate number of rows to show. Default 10.

    Returns:
        Table with distance (km), altitude (m) and segment distance (m).
    """
    lines = [
        "=== Sample Data Points ===",
        "Distance (km) | Altitude (m) | Segment Distance (m)",
        "---------------------------------------------------",
    ]
    for idx in sample_indices(len(track), samples):
        p = track[idx]
        lines.append(
            f"{p.distance_from_start / 1000.0:12.3f} | {p.altitude:12.2f} | {p.distance_from_previous:20.2f}"
        )
    return "\n".join(lines)
