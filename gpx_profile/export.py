"""
Export Functions for GPX Elevation Profile Analysis

This module provides a tabular view of a built track and serializes the
distance/altitude profile to CSV for external plotting tools.
"""

from pathlib import Path
from typing import Union
import pandas as pd
from . import constants
from .models import Track


CSV_COLUMNS = ["Distance_m", "Altitude_m", "Distance_km", "Altitude_ft"]


def track_to_dataframe(track: Track) -> pd.DataFrame:
    """
    Convert a track into a DataFrame with one row per point.

    Args:
        track: Built track.

    Returns:
        DataFrame with columns distance_m, altitude_m, distance_km,
        altitude_ft, segment_distance_m and timestamp.
    """
    df = pd.DataFrame({
        "distance_m": [p.distance_from_start for p in track],
        "altitude_m": [p.altitude for p in track],
        "segment_distance_m": [p.distance_from_previous for p in track],
        "timestamp": [p.timestamp for p in track],
    }, columns=["distance_m", "altitude_m", "segment_distance_m", "timestamp"])

    df["distance_m"] = df["distance_m"].astype(float)
    df["altitude_m"] = df["altitude_m"].astype(float)
    df["segment_distance_m"] = df["segment_distance_m"].astype(float)
    df["distance_km"] = df["distance_m"] / constants.METERS_PER_KM
    df["altitude_ft"] = df["altitude_m"] * constants.FEET_PER_METER

    return df[["distance_m", "altitude_m", "distance_km", "altitude_ft", "segment_distance_m", "timestamp"]]


def export_profile_csv(track: Track) -> str:
    """
    Export the elevation profile to CSV text.

    Columns are cumulative distance (m, 2 decimals), altitude (m, 2 decimals),
    cumulative distance (km, 3 decimals) and altitude (ft, 2 decimals).

    Args:
        track: Built track.

    Returns:
        CSV string with a header row.
    """
    df = track_to_dataframe(track)
    out = pd.DataFrame({
        "Distance_m": df["distance_m"].map("{:.2f}".format),
        "Altitude_m": df["altitude_m"].map("{:.2f}".format),
        "Distance_km": df["distance_km"].map("{:.3f}".format),
        "Altitude_ft": df["altitude_ft"].map("{:.2f}".format),
    }, columns=CSV_COLUMNS)
    return out.to_csv(index=False, lineterminator="\n")


def write_profile_csv(track: Track, output_path: Union[str, Path]) -> Path:
    """
    Write the elevation profile CSV to disk.

    Args:
        track: Built track.
        output_path: Destination file.

    Returns:
        The path written.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(output_path)
    path.write_text(export_profile_csv(track), encoding="utf-8")
    return path
