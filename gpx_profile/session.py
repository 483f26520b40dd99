"""
Session Builder for GPX Elevation Profile Analysis

This module chains the pipeline steps for one GPX file (load, order,
accumulate distances, summarize) and discovers GPX files for batch runs.
"""

from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional, Union
from . import gpx_loading
from . import metrics
from . import statistics
from .models import Track


def load_track(data_file: Union[str, Path]) -> Track:
    """
    Load a GPX file and build its track.

    Args:
        data_file: Path to the .gpx file.

    Returns:
        Built, immutable Track (possibly empty).

    Raises:
        FileNotFoundError: If the file does not exist.
        xml.etree.ElementTree.ParseError: If the file is not well-formed XML.
    """
    raw_points = gpx_loading.load_gpx_points(data_file)
    return metrics.build_track(raw_points)


def stats_payload(track: Track) -> Optional[Dict]:
    """
    TrackStats of a track as a dictionary, with elevation_range_m added.

    Returns None for an empty track.
    """
    if track.is_empty:
        return None
    summary = statistics.summarize(track)
    stats = asdict(summary)
    stats["elevation_range_m"] = summary.elevation_range_m
    return stats


def build_profile_payload(data_file: Union[str, Path]) -> Dict:
    """
    Build the profile payload for a single GPX file.

    Args:
        data_file: Path to the .gpx file.

    Returns:
        Dictionary containing:
        - file: The input path
        - track: The built Track
        - stats: TrackStats as a dictionary (with elevation_range_m),
          or None for an empty track
    """
    track = load_track(data_file)
    return {
        "file": Path(data_file),
        "track": track,
        "stats": stats_payload(track),
    }


def find_gpx_files(directory: Union[str, Path]) -> List[Path]:
    """
    Find GPX files below a directory, for batch processing.

    Args:
        directory: Root directory to walk.

    Returns:
        Sorted list of .gpx paths (case-insensitive extension match).
    """
    root = Path(directory)
    return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == ".gpx")
