"""
Constants for GPX Elevation Profile Analysis

This module defines the paths, unit factors and chart settings used
throughout the elevation profile system.
"""

import os
from pathlib import Path

# GPX Data folder is one level up from gpx_profile/, unless overridden
DATA_DIR = Path(os.environ.get("GPX_DATA_DIR", Path(__file__).parent.parent / "GPX Data"))

# Geodesy and units
EARTH_RADIUS_M = 6371000.0
FEET_PER_METER = 3.28084
METERS_PER_MILE = 1609.34
METERS_PER_KM = 1000.0

# Chart geometry (pixels)
DEFAULT_CANVAS_SIZE = (1000, 600)
PADDING = 60
TITLE_Y = 30
DPI = 72  # 1 pt == 1 px
DEFAULT_TITLE = "Elevation Profile"
NO_DATA_MESSAGE = "No data to display"

# Grid
ALTITUDE_DIVISIONS = 8
DISTANCE_DIVISIONS = 10
ALTITUDE_PADDING_FRACTION = 0.1

# Annotations
MAX_ANNOTATIONS = 15
MARKER_RADIUS = 4
ENDPOINT_MARKER_RADIUS = 7
LABEL_PADDING = 3
LABEL_GAP = 6

# Colors (RGBA, 0-1)
AXIS_COLOR = (0.0, 0.0, 0.0, 1.0)
GRID_COLOR = (0.75, 0.75, 0.75, 1.0)
CURVE_COLOR = (70 / 255, 130 / 255, 180 / 255, 1.0)
FILL_COLOR = (70 / 255, 130 / 255, 180 / 255, 50 / 255)
MARKER_COLOR = (25 / 255, 80 / 255, 140 / 255, 1.0)
LABEL_BACKGROUND = (1.0, 1.0, 1.0, 0.75)
START_COLOR = (46 / 255, 139 / 255, 87 / 255, 1.0)
END_COLOR = (178 / 255, 34 / 255, 34 / 255, 1.0)
OUTLINE_COLOR = (1.0, 1.0, 1.0, 1.0)

# Fonts (points == pixels at DPI 72)
FONT_FAMILY = "DejaVu Sans"
LABEL_FONT_SIZE = 10
AXIS_TITLE_FONT_SIZE = 12
TITLE_FONT_SIZE = 16
