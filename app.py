"""
FastAPI Web Application for GPX Elevation Profiles

This module provides a REST API for browsing GPX datasets and retrieving
their statistics, profile data, CSV export and rendered PNG chart.
"""

import io
from datetime import timezone, tzinfo
from typing import Dict, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse, Response
import pandas as pd
import gpx_profile


# ============================================================================
# APPLICATION SETUP
# ============================================================================

app = FastAPI()


# ============================================================================
# DATASET DISCOVERY
# ============================================================================

def get_available_datasets() -> list:
    """
    Discover available GPX files in the GPX Data directory.

    Returns:
        List of dictionaries with 'filename' and 'display_name' keys,
        sorted by filename.
    """
    data_dir = gpx_profile.DATA_DIR
    if not data_dir.exists():
        return []

    datasets = []
    for file_path in gpx_profile.find_gpx_files(data_dir):
        datasets.append({
            "filename": str(file_path.relative_to(data_dir).as_posix()),
            "display_name": file_path.stem.replace("_", " ").title(),
        })
    return datasets


# ============================================================================
# TRACK LOADING & CACHING
# ============================================================================

# Cache for built tracks (dataset_filename -> Track)
track_cache: Dict[str, gpx_profile.Track] = {}


def load_dataset(dataset_filename: str) -> gpx_profile.Track:
    """
    Load and build the track for a dataset.

    Tracks are immutable once built, so they are cached and shared between
    requests.

    Args:
        dataset_filename: GPX filename relative to the data directory.

    Returns:
        The built Track.

    Raises:
        HTTPException: 404 if the file does not exist, 500 if it cannot be parsed.
    """
    if dataset_filename in track_cache:
        return track_cache[dataset_filename]

    data_dir = gpx_profile.DATA_DIR.resolve()
    data_file = (data_dir / dataset_filename).resolve()
    if data_dir not in data_file.parents or not data_file.is_file():
        raise HTTPException(status_code=404, detail=f"Dataset file not found: {dataset_filename}")

    try:
        track = gpx_profile.load_track(data_file)
    except Exception as exc:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to load track: {exc}"
        ) from exc

    track_cache[dataset_filename] = track
    return track


# ============================================================================
# API ROUTES - DATASET MANAGEMENT
# ============================================================================

@app.get("/api/datasets")
def get_datasets():
    """Get list of available GPX datasets."""
    return get_available_datasets()


# ============================================================================
# API ROUTES - DATA RETRIEVAL
# ============================================================================

@app.get("/api/stats")
def get_stats(dataset: str = Query(..., description="Dataset filename to load")):
    """
    Get summary statistics for a dataset.

    Args:
        dataset: Dataset filename.

    Returns:
        Dictionary with count, total_distance_m, min/max altitude and
        elevation_range_m, or just {"count": 0} for an empty track.
    """
    track = load_dataset(dataset)
    return gpx_profile.stats_payload(track) or {"count": 0}


@app.get("/api/profile")
def get_profile(dataset: str = Query(..., description="Dataset filename to load")):
    """
    Get the distance/altitude profile rows for a dataset.

    Returns:
        List of records with distance_m, altitude_m, distance_km,
        altitude_ft, segment_distance_m and timestamp (ISO-8601 or None).
    """
    track = load_dataset(dataset)
    df = gpx_profile.track_to_dataframe(track)
    df["timestamp"] = [None if pd.isna(ts) else ts.isoformat() for ts in df["timestamp"]]
    return df.to_dict(orient="records")


# ============================================================================
# API ROUTES - EXPORT
# ============================================================================

def resolve_timezone(name: str) -> tzinfo:
    """
    Resolve a time zone name for chart labels.

    Raises:
        HTTPException: 400 if the name is not a known IANA time zone.
    """
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Unknown time zone: {name}") from exc


@app.get("/api/export/csv")
def export_csv(dataset: str = Query(..., description="Dataset filename to export")):
    """
    Export the elevation profile as CSV.

    Returns:
        PlainTextResponse: CSV file with Content-Disposition header.
    """
    track = load_dataset(dataset)
    body = gpx_profile.export_profile_csv(track)
    stem = dataset.rsplit("/", 1)[-1].rsplit(".", 1)[0]
    headers = {"Content-Disposition": f"attachment; filename={stem}_profile.csv"}
    return PlainTextResponse(
        body,
        media_type="text/csv",
        headers=headers
    )


@app.get("/api/export/png")
def export_png(
    dataset: str = Query(..., description="Dataset filename to render"),
    title: Optional[str] = Query(None, description="Chart title"),
    width: int = Query(gpx_profile.DEFAULT_CANVAS_SIZE[0], ge=200, le=4000),
    height: int = Query(gpx_profile.DEFAULT_CANVAS_SIZE[1], ge=200, le=4000),
    tz: str = Query("UTC", description="IANA time zone for point labels"),
):
    """
    Render the elevation profile chart as a PNG image.

    Label clock times are shown in the requested time zone (UTC by default),
    so the image does not depend on the server's zone.

    Returns:
        Response: image/png body.
    """
    label_tz = resolve_timezone(tz)
    track = load_dataset(dataset)
    size: Tuple[int, int] = (width, height)
    fig = gpx_profile.render_profile(track, title=title, size=size, tz=label_tz)

    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=fig.dpi)
    return Response(content=buffer.getvalue(), media_type="image/png")


# ============================================================================
# RUN INSTRUCTIONS
# ============================================================================
# Run with: uvicorn app:app --reload
