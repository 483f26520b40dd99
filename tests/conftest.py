"""
Shared fixtures for the elevation profile tests.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

import pytest

from gpx_profile.metrics import build_track
from gpx_profile.models import RawPoint


START_TIME = datetime(2024, 5, 1, 14, 0, tzinfo=timezone.utc)

GPX_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>test</name>
    <trkseg>
{points}
    </trkseg>
  </trk>
</gpx>
"""


def make_gpx(points) -> str:
    """Render (lat, lon, ele-or-None, time-text-or-None) tuples as a GPX document."""
    lines = []
    for lat, lon, ele, time_text in points:
        children = ""
        if ele is not None:
            children += f"<ele>{ele}</ele>"
        if time_text is not None:
            children += f"<time>{time_text}</time>"
        lines.append(f'      <trkpt lat="{lat}" lon="{lon}">{children}</trkpt>')
    return GPX_TEMPLATE.format(points="\n".join(lines))


@pytest.fixture
def equator_points():
    """Three points 0.01 degrees apart along the equator, no timestamps."""
    return [
        RawPoint(0.0, 0.0, 100.0),
        RawPoint(0.0, 0.01, 150.0),
        RawPoint(0.0, 0.02, 120.0),
    ]


@pytest.fixture
def equator_track(equator_points):
    return build_track(equator_points)


def timed_points(count, step_deg=0.001, start=START_TIME):
    """Points marching east along the equator, one minute apart."""
    return [
        RawPoint(0.0, i * step_deg, 100.0 + (i % 7) * 5.0, start + timedelta(minutes=i))
        for i in range(count)
    ]


@pytest.fixture
def timed_track():
    return build_track(timed_points(150))


@pytest.fixture
def gpx_file(tmp_path) -> Path:
    path = tmp_path / "ride.gpx"
    path.write_text(make_gpx([
        (0.0, 0.0, 100.0, "2024-05-01T14:00:00Z"),
        (0.0, 0.01, 150.0, "2024-05-01T14:05:00Z"),
        (0.0, 0.02, 120.0, "2024-05-01T14:10:00Z"),
    ]), encoding="utf-8")
    return path
