"""
Tests for reading GPX files into raw point tuples.
"""

import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

import pytest

from gpx_profile.gpx_loading import load_gpx_points, parse_gpx_time

from conftest import make_gpx


class TestParseGpxTime:

    def test_zulu(self):
        assert parse_gpx_time("2024-05-01T14:03:22Z") == datetime(2024, 5, 1, 14, 3, 22, tzinfo=timezone.utc)

    def test_offset(self):
        parsed = parse_gpx_time("2024-05-01T16:03:22+02:00")
        assert parsed.utcoffset() == timedelta(0)
        assert parsed == datetime(2024, 5, 1, 14, 3, 22, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        parsed = parse_gpx_time(" 2024-05-01T14:03:22 ")
        assert parsed.utcoffset() == timedelta(0)
        assert parsed == datetime(2024, 5, 1, 14, 3, 22, tzinfo=timezone.utc)

    def test_short_fractional_seconds(self):
        assert parse_gpx_time("2024-05-01T14:03:22.5Z").microsecond == 500000
        assert parse_gpx_time("2024-05-01T14:03:22.25Z").microsecond == 250000

    def test_millisecond_fraction(self):
        parsed = parse_gpx_time("2024-05-01T14:03:22.123Z")
        assert parsed == datetime(2024, 5, 1, 14, 3, 22, 123000, tzinfo=timezone.utc)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_gpx_time("not-a-time")


class TestLoadGpxPoints:

    def test_points_in_document_order(self, gpx_file):
        points = load_gpx_points(gpx_file)
        assert len(points) == 3
        assert points[1].latitude == 0.0
        assert points[1].longitude == 0.01
        assert points[1].altitude == 150.0
        assert points[1].timestamp == datetime(2024, 5, 1, 14, 5, tzinfo=timezone.utc)

    def test_missing_elevation_defaults_to_zero(self, tmp_path):
        path = tmp_path / "noele.gpx"
        path.write_text(make_gpx([(1.5, 2.5, None, None)]), encoding="utf-8")
        points = load_gpx_points(path)
        assert points[0].altitude == 0.0
        assert points[0].timestamp is None

    def test_bad_timestamp_warns_and_keeps_point(self, tmp_path):
        path = tmp_path / "badtime.gpx"
        path.write_text(make_gpx([
            (0.0, 0.0, 10.0, "2024-05-01T14:00:00Z"),
            (0.0, 0.001, 11.0, "not-a-time"),
        ]), encoding="utf-8")
        with pytest.warns(UserWarning, match="index 1"):
            points = load_gpx_points(path)
        assert len(points) == 2
        assert points[1].timestamp is None

    def test_without_namespace(self, tmp_path):
        path = tmp_path / "plain.gpx"
        path.write_text(
            '<gpx><trk><trkseg><trkpt lat="1" lon="2"><ele>3</ele></trkpt></trkseg></trk></gpx>',
            encoding="utf-8",
        )
        assert load_gpx_points(path)[0][:3] == (1.0, 2.0, 3.0)

    def test_no_trackpoints(self, tmp_path):
        path = tmp_path / "empty.gpx"
        path.write_text(make_gpx([]), encoding="utf-8")
        assert load_gpx_points(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_gpx_points(tmp_path / "nope.gpx")

    def test_malformed_xml(self, tmp_path):
        path = tmp_path / "broken.gpx"
        path.write_text("<gpx><trk>", encoding="utf-8")
        with pytest.raises(ET.ParseError):
            load_gpx_points(path)
