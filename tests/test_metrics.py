"""
Tests for track building: haversine distance, ordering and accumulation.
"""

import dataclasses
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from gpx_profile.metrics import build_track, haversine_m, order_points, segment_distances
from gpx_profile.models import RawPoint

from conftest import START_TIME, timed_points


class TestHaversine:
    """Great-circle distance on a 6,371 km sphere"""

    def test_same_point_is_zero(self):
        assert haversine_m(47.6, -122.3, 47.6, -122.3) == 0.0

    def test_symmetric(self):
        d1 = haversine_m(47.6062, -122.3321, 45.5152, -122.6784)
        d2 = haversine_m(45.5152, -122.6784, 47.6062, -122.3321)
        assert d1 == pytest.approx(d2, rel=1e-12)

    def test_hundredth_degree_on_equator(self):
        # 0.01 deg of arc on a 6,371,000 m sphere
        assert haversine_m(0.0, 0.0, 0.0, 0.01) == pytest.approx(1111.95, abs=0.01)

    def test_seattle_to_portland(self):
        d = haversine_m(47.6062, -122.3321, 45.5152, -122.6784)
        assert d == pytest.approx(233_900, rel=0.01)

    def test_vectorised(self):
        lat = np.array([0.0, 0.0, 0.0])
        lon = np.array([0.0, 0.01, 0.02])
        d = haversine_m(lat[:-1], lon[:-1], lat[1:], lon[1:])
        assert d.shape == (2,)
        assert d[0] == pytest.approx(d[1])

    def test_antipodal(self):
        d = haversine_m(0.0, 0.0, 0.0, 180.0)
        assert d == pytest.approx(np.pi * 6_371_000.0)


class TestOrderPoints:
    """Chronological ordering only when every point is timestamped"""

    def test_no_timestamps_keeps_input_order(self):
        points = [RawPoint(0.0, lon, 0.0) for lon in (0.3, 0.1, 0.2)]
        assert order_points(points) == points

    def test_all_timestamps_sorted(self):
        t = START_TIME
        points = [
            RawPoint(0.0, 0.2, 0.0, t + timedelta(minutes=2)),
            RawPoint(0.0, 0.0, 0.0, t),
            RawPoint(0.0, 0.1, 0.0, t + timedelta(minutes=1)),
        ]
        ordered = order_points(points)
        assert [p.longitude for p in ordered] == [0.0, 0.1, 0.2]

    def test_equal_timestamps_keep_input_order(self):
        t = START_TIME
        points = [
            RawPoint(0.0, 0.5, 0.0, t + timedelta(minutes=1)),
            RawPoint(0.0, 0.3, 0.0, t),
            RawPoint(0.0, 0.1, 0.0, t),
        ]
        ordered = order_points(points)
        assert [p.longitude for p in ordered] == [0.3, 0.1, 0.5]

    def test_partial_timestamps_left_unsorted(self):
        t = START_TIME
        points = [
            RawPoint(0.0, 0.2, 0.0, t + timedelta(minutes=5)),
            RawPoint(0.0, 0.1, 0.0, None),
            RawPoint(0.0, 0.0, 0.0, t),
        ]
        assert order_points(points) == points

    def test_mixed_offsets_compare_as_instants(self):
        utc = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        plus_two = timezone(timedelta(hours=2))
        points = [
            RawPoint(0.0, 0.1, 0.0, utc),
            RawPoint(0.0, 0.0, 0.0, datetime(2024, 5, 1, 13, 30, tzinfo=plus_two)),  # 11:30 UTC
        ]
        assert [p.longitude for p in order_points(points)] == [0.0, 0.1]

    def test_naive_timestamps_compare_as_utc(self):
        points = [
            RawPoint(0.0, 0.1, 0.0, datetime(2024, 5, 1, 12, 0)),
            RawPoint(0.0, 0.0, 0.0, datetime(2024, 5, 1, 11, 0, tzinfo=timezone.utc)),
            RawPoint(0.0, 0.2, 0.0, datetime(2024, 5, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))),
        ]
        assert [p.longitude for p in order_points(points)] == [0.0, 0.1, 0.2]

    def test_accepts_plain_tuples(self):
        ordered = order_points([(1.0, 2.0, 3.0, None), (4.0, 5.0, 6.0)])
        assert ordered[1] == RawPoint(4.0, 5.0, 6.0, None)


class TestBuildTrack:
    """Ordered, distance-annotated tracks"""

    def test_empty_input(self):
        track = build_track([])
        assert len(track) == 0
        assert track.is_empty
        assert track.total_distance_m == 0.0

    def test_single_point(self):
        track = build_track([RawPoint(10.0, 20.0, 5.0)])
        assert track[0].distance_from_previous == 0.0
        assert track[0].distance_from_start == 0.0
        assert track.total_distance_m == 0.0

    def test_equator_scenario(self, equator_track):
        assert [p.distance_from_previous for p in equator_track] == pytest.approx([0.0, 1111.95, 1111.95], abs=0.01)
        assert [p.distance_from_start for p in equator_track] == pytest.approx([0.0, 1111.95, 2223.90], abs=0.01)
        assert equator_track.total_distance_m == pytest.approx(2223.90, abs=0.01)

    def test_cumulative_distance_adds_up(self):
        track = build_track(timed_points(60, step_deg=0.0007))
        assert track[0].distance_from_previous == 0.0
        assert track[0].distance_from_start == 0.0
        for prev, cur in zip(track, track[1:]):
            assert cur.distance_from_start == prev.distance_from_start + cur.distance_from_previous
            assert cur.distance_from_start >= prev.distance_from_start

    def test_distances_follow_sorted_order(self):
        t = START_TIME
        track = build_track([
            RawPoint(0.0, 0.02, 120.0, t + timedelta(minutes=2)),
            RawPoint(0.0, 0.0, 100.0, t),
            RawPoint(0.0, 0.01, 150.0, t + timedelta(minutes=1)),
        ])
        assert [p.altitude for p in track] == [100.0, 150.0, 120.0]
        assert track.total_distance_m == pytest.approx(2223.90, abs=0.01)

    def test_timestamps_non_decreasing(self):
        points = timed_points(20)
        points.reverse()
        track = build_track(points)
        stamps = [p.timestamp for p in track]
        assert stamps == sorted(stamps)

    def test_track_is_immutable(self, equator_track):
        with pytest.raises(dataclasses.FrozenInstanceError):
            equator_track[0].altitude = 0.0
        with pytest.raises(dataclasses.FrozenInstanceError):
            equator_track.points = ()

    def test_point_str_is_dataclass_repr(self, equator_track):
        assert str(equator_track[1]) == repr(equator_track[1])
        assert str(equator_track[1]).startswith("GeoPoint(latitude=0.0")

    def test_out_of_range_coordinates_not_rejected(self):
        track = build_track([RawPoint(95.0, 200.0, 0.0), RawPoint(-95.0, -200.0, 0.0)])
        assert len(track) == 2
        assert np.isfinite(track.total_distance_m)

    def test_segment_distances_short_input(self):
        assert segment_distances([]).shape == (0,)
        assert list(segment_distances([RawPoint(0.0, 0.0, 0.0)])) == [0.0]
