"""
Elevation Profile Rendering for GPX Elevation Profile Analysis

This module lays out the distance/altitude chart as an ordered list of
primitive draw commands in canvas pixels (origin top-left, y down), then
replays those commands onto a matplotlib figure. The same layout feeds the
interactive window, the off-screen raster buffer and the PNG export, so all
three produce the same picture for the same inputs.

Layering, bottom to top: grid and tick labels, axis titles, filled area,
axis strokes, profile curve, point markers and labels, start/end markers,
title.
"""

import math
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.font_manager import FontProperties
from matplotlib.lines import Line2D
from matplotlib.patches import Circle as CirclePatch
from matplotlib.patches import Polygon as PolygonPatch
from matplotlib.patches import Rectangle
from matplotlib.textpath import text_to_path

from . import constants
from . import utils
from .models import GeoPoint, Track

Color = Tuple[float, float, float, float]
CanvasSize = Tuple[int, int]


# ============================================================================
# DRAW COMMANDS
# ============================================================================

@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float = 1.0


@dataclass(frozen=True)
class Polyline:
    points: Tuple[Tuple[float, float], ...]
    color: Color
    width: float = 1.0


@dataclass(frozen=True)
class Polygon:
    points: Tuple[Tuple[float, float], ...]
    color: Color


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    color: Color


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    color: Color
    edgecolor: Optional[Color] = None
    linewidth: float = 0.0


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    size: float
    color: Color = constants.AXIS_COLOR
    ha: str = "left"
    va: str = "baseline"
    weight: str = "normal"
    rotation: float = 0.0


DrawCommand = Union[Line, Polyline, Polygon, Rect, Circle, Text]


# ============================================================================
# DOMAIN & COORDINATE MAPPING
# ============================================================================

class Domain(NamedTuple):
    """Data ranges shown on the chart."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float


class AxisUnit(NamedTuple):
    """Distance unit used for the x-axis ticks and title."""

    divisor: float
    label_format: str
    title: str


METERS_UNIT = AxisUnit(1.0, "{:.0f} m", "Distance (meters)")
KILOMETERS_UNIT = AxisUnit(constants.METERS_PER_KM, "{:.1f} km", "Distance (kilometers)")


def compute_domain(track: Track) -> Domain:
    """
    Compute the chart domain for a non-empty track.

    The x-domain runs from 0 to the last point's cumulative distance. The
    y-domain is the altitude span widened by 10% of the span on each end.

    Args:
        track: Non-empty built track.

    Returns:
        Domain tuple.
    """
    altitudes = [p.altitude for p in track]
    min_alt = min(altitudes)
    max_alt = max(altitudes)
    pad = (max_alt - min_alt) * constants.ALTITUDE_PADDING_FRACTION
    return Domain(0.0, track.total_distance_m, min_alt - pad, max_alt + pad)


def distance_unit(total_distance_m: float) -> AxisUnit:
    """Meters below 1 km of total distance, kilometers otherwise."""
    if total_distance_m < constants.METERS_PER_KM:
        return METERS_UNIT
    return KILOMETERS_UNIT


@dataclass(frozen=True)
class PlotFrame:
    """Maps domain values to canvas pixels inside the padded plot area."""

    width: int
    height: int
    domain: Domain
    padding: int = constants.PADDING

    @property
    def left(self) -> float:
        return self.padding

    @property
    def right(self) -> float:
        return self.width - self.padding

    @property
    def top(self) -> float:
        return self.padding

    @property
    def bottom(self) -> float:
        return self.height - self.padding

    def x(self, value: float) -> float:
        """Distance to pixel column; a zero-width domain maps to the left edge."""
        span = self.domain.x_max - self.domain.x_min
        if span == 0:
            return self.left
        return self.left + (value - self.domain.x_min) / span * (self.right - self.left)

    def y(self, value: float) -> float:
        """Altitude to pixel row (inverted); a zero-height domain maps to the bottom edge."""
        span = self.domain.y_max - self.domain.y_min
        if span == 0:
            return self.bottom
        return self.bottom - (value - self.domain.y_min) / span * (self.bottom - self.top)

    def point(self, p: GeoPoint) -> Tuple[float, float]:
        return self.x(p.distance_from_start), self.y(p.altitude)


# ============================================================================
# TEXT MEASUREMENT
# ============================================================================

def font_properties(size: float, weight: str = "normal") -> FontProperties:
    return FontProperties(family=constants.FONT_FAMILY, size=size, weight=weight)


def measure_text(text: str, size: float, weight: str = "normal") -> Tuple[float, float, float]:
    """
    Measure a string without a renderer.

    Args:
        text: String to measure.
        size: Font size in points (equal to pixels at the chart DPI).
        weight: Font weight.

    Returns:
        Tuple of (width, height, descent) in pixels.
    """
    return text_to_path.get_text_width_height_descent(text, font_properties(size, weight), ismath=False)


# ============================================================================
# LAYOUT
# ============================================================================

def annotation_indices(count: int, limit: int = constants.MAX_ANNOTATIONS) -> List[int]:
    """
    Pick at most `limit` evenly index-spaced points to annotate.

    Args:
        count: Number of points in the track.
        limit: Maximum number of annotations. Default 15.

    Returns:
        Indices 0, stride, 2*stride, ... with stride = max(1, ceil(count / limit)).
    """
    if count <= 0:
        return []
    stride = max(1, math.ceil(count / limit))
    return list(range(0, count, stride))[:limit]


def annotation_text(point: GeoPoint, tz: Optional[tzinfo] = None) -> str:
    """Label for an annotated point, e.g. "152 m, 3:07 pm"."""
    return f"{point.altitude:.0f} m, {utils.format_clock_time(point.timestamp, tz)}"


def grid_commands(frame: PlotFrame, unit: AxisUnit) -> List[DrawCommand]:
    """Guide lines, tick labels and axis titles."""
    commands: List[DrawCommand] = []
    domain = frame.domain

    # Horizontal lines and altitude labels
    for i in range(constants.ALTITUDE_DIVISIONS + 1):
        alt = domain.y_min + (domain.y_max - domain.y_min) * i / constants.ALTITUDE_DIVISIONS
        y = frame.y(alt)
        commands.append(Line(frame.left, y, frame.right, y, constants.GRID_COLOR))
        commands.append(Text(frame.left - 10, y, f"{alt:.0f} m", constants.LABEL_FONT_SIZE,
                             ha="right", va="center"))

    # Vertical lines and distance labels
    for i in range(constants.DISTANCE_DIVISIONS + 1):
        dist = domain.x_min + (domain.x_max - domain.x_min) * i / constants.DISTANCE_DIVISIONS
        x = frame.x(dist)
        commands.append(Line(x, frame.top, x, frame.bottom, constants.GRID_COLOR))
        commands.append(Text(x, frame.bottom + 20, unit.label_format.format(dist / unit.divisor),
                             constants.LABEL_FONT_SIZE, ha="center"))

    commands.append(Text(20, frame.height / 2, "Altitude (meters)", constants.AXIS_TITLE_FONT_SIZE,
                         ha="center", va="center", weight="bold", rotation=90))
    commands.append(Text(frame.width / 2, frame.height - 10, unit.title, constants.AXIS_TITLE_FONT_SIZE,
                         ha="center", weight="bold"))
    return commands


def profile_commands(track: Track, frame: PlotFrame) -> List[DrawCommand]:
    """Filled area, axis strokes and the profile curve."""
    path = tuple(frame.point(p) for p in track)
    baseline = frame.bottom
    fill = path + (
        (frame.x(frame.domain.x_max), baseline),
        (frame.x(frame.domain.x_min), baseline),
    )
    return [
        Polygon(fill, constants.FILL_COLOR),
        Line(frame.left, frame.top, frame.left, frame.bottom, constants.AXIS_COLOR, 2.0),
        Line(frame.left, frame.bottom, frame.right, frame.bottom, constants.AXIS_COLOR, 2.0),
        Polyline(path, constants.CURVE_COLOR, 2.0),
    ]


def label_commands(text: str, x: float, y: float, frame: PlotFrame) -> List[DrawCommand]:
    """
    Place a label with its background block next to a marker.

    The label sits above the marker unless its top would cross the top
    padding, in which case it goes below.
    """
    pad = constants.LABEL_PADDING
    width, height, descent = measure_text(text, constants.LABEL_FONT_SIZE)
    box_width = width + 2 * pad
    box_height = height + 2 * pad

    top = y - constants.MARKER_RADIUS - constants.LABEL_GAP - box_height
    if top < frame.top:
        top = y + constants.MARKER_RADIUS + constants.LABEL_GAP

    baseline = top + pad + height - descent
    return [
        Rect(x - box_width / 2, top, box_width, box_height, constants.LABEL_BACKGROUND),
        Text(x, baseline, text, constants.LABEL_FONT_SIZE, ha="center"),
    ]


def annotation_commands(track: Track, frame: PlotFrame, tz: Optional[tzinfo] = None) -> List[DrawCommand]:
    """Markers for the decluttered subset of points, labelled when timestamped."""
    commands: List[DrawCommand] = []
    for idx in annotation_indices(len(track)):
        point = track[idx]
        x, y = frame.point(point)
        commands.append(Circle(x, y, constants.MARKER_RADIUS, constants.MARKER_COLOR))
        if point.timestamp is not None:
            commands.extend(label_commands(annotation_text(point, tz), x, y, frame))
    return commands


def endpoint_commands(track: Track, frame: PlotFrame) -> List[DrawCommand]:
    """Start and end highlight markers, drawn whenever any point has a timestamp."""
    if not track.has_timestamps:
        return []
    commands: List[DrawCommand] = []
    for point, color in ((track[0], constants.START_COLOR), (track[-1], constants.END_COLOR)):
        x, y = frame.point(point)
        commands.append(Circle(x, y, constants.ENDPOINT_MARKER_RADIUS, color,
                               edgecolor=constants.OUTLINE_COLOR, linewidth=1.5))
    return commands


def plan_profile(track: Track, title: Optional[str] = None,
                 size: CanvasSize = constants.DEFAULT_CANVAS_SIZE,
                 tz: Optional[tzinfo] = None) -> List[DrawCommand]:
    """
    Lay out the elevation profile chart.

    Pure function of its arguments: the same track, title, size and time
    zone always produce the same command list.

    Args:
        track: Built track.
        title: Chart title. Defaults to "Elevation Profile".
        size: Canvas (width, height) in pixels.
        tz: Time zone for annotation clock times. If None, the system local
            zone is used.

    Returns:
        Draw commands in painting order. An empty track yields a single
        centered "No data to display" text command.
    """
    width, height = size
    if track.is_empty:
        return [Text(width / 2, height / 2, constants.NO_DATA_MESSAGE, constants.AXIS_TITLE_FONT_SIZE,
                     ha="center", va="center")]

    frame = PlotFrame(width, height, compute_domain(track))
    unit = distance_unit(track.total_distance_m)

    commands: List[DrawCommand] = []
    commands.extend(grid_commands(frame, unit))
    commands.extend(profile_commands(track, frame))
    commands.extend(annotation_commands(track, frame, tz))
    commands.extend(endpoint_commands(track, frame))
    commands.append(Text(width / 2, constants.TITLE_Y, title or constants.DEFAULT_TITLE,
                         constants.TITLE_FONT_SIZE, ha="center", weight="bold"))
    return commands


# ============================================================================
# MATPLOTLIB OUTPUT
# ============================================================================

def draw_commands(commands: Sequence[DrawCommand], ax) -> None:
    """
    Replay draw commands onto a matplotlib Axes set up in canvas pixels.

    Each command gets its own z-order so painting order is kept across
    artist types.
    """
    for zorder, cmd in enumerate(commands, start=1):
        if isinstance(cmd, Line):
            ax.add_line(Line2D([cmd.x1, cmd.x2], [cmd.y1, cmd.y2], color=cmd.color,
                               linewidth=cmd.width, solid_capstyle="butt", zorder=zorder))
        elif isinstance(cmd, Polyline):
            xs = [p[0] for p in cmd.points]
            ys = [p[1] for p in cmd.points]
            ax.add_line(Line2D(xs, ys, color=cmd.color, linewidth=cmd.width,
                               solid_joinstyle="round", zorder=zorder))
        elif isinstance(cmd, Polygon):
            ax.add_patch(PolygonPatch(cmd.points, closed=True, facecolor=cmd.color,
                                      edgecolor="none", zorder=zorder))
        elif isinstance(cmd, Rect):
            ax.add_patch(Rectangle((cmd.x, cmd.y), cmd.width, cmd.height, facecolor=cmd.color,
                                   edgecolor="none", zorder=zorder))
        elif isinstance(cmd, Circle):
            ax.add_patch(CirclePatch((cmd.x, cmd.y), cmd.radius, facecolor=cmd.color,
                                     edgecolor=cmd.edgecolor or "none", linewidth=cmd.linewidth,
                                     zorder=zorder))
        elif isinstance(cmd, Text):
            ax.text(cmd.x, cmd.y, cmd.text, fontproperties=font_properties(cmd.size, cmd.weight),
                    color=cmd.color, ha=cmd.ha, va=cmd.va, rotation=cmd.rotation,
                    rotation_mode="anchor", zorder=zorder)
        else:
            raise TypeError(f"Unknown draw command: {cmd!r}")


def prepare_figure(figure: Figure, size: CanvasSize):
    """
    Size a figure to exactly `size` pixels and add a full-bleed pixel Axes.

    Returns:
        The Axes, with x in [0, width] and y in [height, 0].
    """
    width, height = size
    # Agg truncates the figure size to whole pixels
    figure.set_dpi(constants.DPI)
    figure.set_size_inches((width + 1e-3) / constants.DPI, (height + 1e-3) / constants.DPI)
    figure.set_facecolor("white")

    ax = figure.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_axis_off()
    return ax


def render_profile(track: Track, title: Optional[str] = None,
                   size: CanvasSize = constants.DEFAULT_CANVAS_SIZE,
                   tz: Optional[tzinfo] = None,
                   figure: Optional[Figure] = None) -> Figure:
    """
    Render the elevation profile onto a matplotlib figure.

    Args:
        track: Built track.
        title: Chart title. Defaults to "Elevation Profile".
        size: Canvas (width, height) in pixels. Default 1000x600.
        tz: Time zone for annotation labels (None = system local).
        figure: Existing figure to draw on, e.g. one owned by pyplot. A new
            off-screen Figure is created if omitted.

    Returns:
        The figure drawn on.
    """
    fig = figure if figure is not None else Figure()
    ax = prepare_figure(fig, size)
    draw_commands(plan_profile(track, title, size, tz), ax)
    return fig


def rasterize_profile(track: Track, title: Optional[str] = None,
                      size: CanvasSize = constants.DEFAULT_CANVAS_SIZE,
                      tz: Optional[tzinfo] = None) -> np.ndarray:
    """
    Rasterize the elevation profile into an off-screen RGBA pixel buffer.

    Returns:
        uint8 array of shape (height, width, 4).
    """
    fig = render_profile(track, title, size, tz)
    canvas = FigureCanvasAgg(fig)
    canvas.draw()
    return np.asarray(canvas.buffer_rgba()).copy()


def save_profile_png(track: Track, output_path: Union[str, Path], title: Optional[str] = None,
                     size: CanvasSize = constants.DEFAULT_CANVAS_SIZE,
                     tz: Optional[tzinfo] = None) -> Path:
    """
    Export the elevation profile as a PNG image.

    Args:
        track: Built track.
        output_path: Destination file.
        title: Chart title.
        size: Image (width, height) in pixels. Default 1000x600.
        tz: Time zone for annotation labels.

    Returns:
        The output path.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(output_path)
    fig = render_profile(track, title, size, tz)
    fig.savefig(path, format="png", dpi=constants.DPI)
    return path


def show_profile(track: Track, title: Optional[str] = None,
                 size: CanvasSize = constants.DEFAULT_CANVAS_SIZE,
                 tz: Optional[tzinfo] = None, block: bool = True) -> Figure:
    """
    Display the elevation profile in an interactive window.

    The window shows the same figure that rasterize_profile() renders
    off-screen. The track must be fully built before this is called.

    Args:
        track: Built track.
        title: Chart and window title.
        size: Canvas (width, height) in pixels.
        tz: Time zone for annotation labels.
        block: Wait for the window to be closed. Default True.

    Returns:
        The displayed figure.
    """
    import matplotlib.pyplot as plt

    fig = plt.figure(num=title or constants.DEFAULT_TITLE, clear=True)
    render_profile(track, title, size, tz, figure=fig)
    plt.show(block=block)
    return fig
