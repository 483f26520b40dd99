"""
Data Loading and Parsing for GPX Elevation Profile Analysis

This module reads GPX track files and yields the raw point tuples consumed
by the track builder. Elements are matched by local name, so GPX 1.0 and
1.1 namespaces are both accepted.
"""

import warnings
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union
import pandas as pd
from .models import RawPoint


def local_name(tag: str) -> str:
    """Strip an XML namespace ("{uri}trkpt" -> "trkpt")."""
    return tag.rsplit("}", 1)[-1]


def find_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    """Return the first direct child with the given local name, or None."""
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def parse_gpx_time(text: str) -> datetime:
    """
    Parse a GPX ISO-8601 timestamp into a timezone-aware datetime.

    A trailing "Z" and fractional seconds of any length are accepted; values
    without an offset are taken as UTC. The result is expressed in UTC.

    Args:
        text: Timestamp text, e.g. "2024-05-01T14:03:22Z".

    Returns:
        Timezone-aware datetime.

    Raises:
        ValueError: If the text is not a valid ISO-8601 timestamp.
    """
    parsed = pd.to_datetime(text.strip(), utc=True)
    if pd.isna(parsed):
        raise ValueError(f"Invalid timestamp: {text!r}")
    return parsed.to_pydatetime()


def parse_trackpoint(trkpt: ET.Element, index: int) -> RawPoint:
    """
    Convert one <trkpt> element into a raw point.

    Missing elevation defaults to 0.0. An unparseable <time> is reported
    with a warning and the point is kept without a timestamp.

    Args:
        trkpt: The trkpt element.
        index: Position of the point in the file, used in warnings.

    Returns:
        RawPoint for the element.
    """
    lat = float(trkpt.get("lat"))
    lon = float(trkpt.get("lon"))

    altitude = 0.0
    ele = find_child(trkpt, "ele")
    if ele is not None and ele.text:
        altitude = float(ele.text)

    timestamp = None
    time_el = find_child(trkpt, "time")
    if time_el is not None and time_el.text:
        try:
            timestamp = parse_gpx_time(time_el.text)
        except ValueError:
            warnings.warn(f"Could not parse timestamp at index {index}")

    return RawPoint(lat, lon, altitude, timestamp)


def load_gpx_points(file_path: Union[str, Path]) -> List[RawPoint]:
    """
    Load every track point of a GPX file in document order.

    Args:
        file_path: Path to the .gpx file.

    Returns:
        List of RawPoint tuples (latitude, longitude, altitude, timestamp).

    Raises:
        FileNotFoundError: If the file does not exist.
        xml.etree.ElementTree.ParseError: If the file is not well-formed XML.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"GPX file not found: {path}")

    root = ET.parse(path).getroot()
    trackpoints = [el for el in root.iter() if local_name(el.tag) == "trkpt"]

    return [parse_trackpoint(trkpt, i) for i, trkpt in enumerate(trackpoints)]
