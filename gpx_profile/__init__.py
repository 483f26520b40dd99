"""
GPX Elevation Profile Analysis

Builds a cumulative distance vs. altitude profile from a GPS track,
summarizes it, and renders it as a chart on screen or to PNG.

This module re-exports the public functions of the package modules.
"""

# Import constants
from .constants import DATA_DIR, DEFAULT_CANVAS_SIZE, DEFAULT_TITLE

# Import data models
from .models import (
    RawPoint,
    GeoPoint,
    Track,
    TrackStats,
)

# Import utility functions
from .utils import (
    meters_to_feet,
    meters_to_miles,
    adaptive_distance,
    format_clock_time,
)

# Import data loading functions
from .gpx_loading import (
    load_gpx_points,
    parse_gpx_time,
)

# Import metrics functions
from .metrics import (
    haversine_m,
    order_points,
    build_track,
)

# Import statistics functions
from .statistics import (
    summarize,
    format_statistics,
    format_sample_table,
)

# Import export functions
from .export import (
    track_to_dataframe,
    export_profile_csv,
    write_profile_csv,
)

# Import plotting functions
from .plotting import (
    plan_profile,
    render_profile,
    rasterize_profile,
    save_profile_png,
    show_profile,
)

# Import session builder functions
from .session import (
    load_track,
    build_profile_payload,
    stats_payload,
    find_gpx_files,
)

__all__ = [
    # Constants
    "DATA_DIR",
    "DEFAULT_CANVAS_SIZE",
    "DEFAULT_TITLE",
    # Models
    "RawPoint",
    "GeoPoint",
    "Track",
    "TrackStats",
    # Utilities
    "meters_to_feet",
    "meters_to_miles",
    "adaptive_distance",
    "format_clock_time",
    # Data loading
    "load_gpx_points",
    "parse_gpx_time",
    # Metrics
    "haversine_m",
    "order_points",
    "build_track",
    # Statistics
    "summarize",
    "format_statistics",
    "format_sample_table",
    # Export
    "track_to_dataframe",
    "export_profile_csv",
    "write_profile_csv",
    # Plotting
    "plan_profile",
    "render_profile",
    "rasterize_profile",
    "save_profile_png",
    "show_profile",
    # Session builder
    "load_track",
    "build_profile_payload",
    "stats_payload",
    "find_gpx_files",
]
