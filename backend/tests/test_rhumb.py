"""
Tests for rhumb line (constant bearing) calculations.
"""

import math
import pytest

from core.constants import WGS84_SEMI_MAJOR_AXIS_METERS
from core.geodesy import rhumb_line, destination, GeodesicMethod
from core.models.coordinate import Coordinate

ONE_DEGREE_ARC = WGS84_SEMI_MAJOR_AXIS_METERS * math.radians(1)


class TestRhumbLine:
    """Tests for rhumb_line distance and bearing."""

    def test_due_north(self):
        result = rhumb_line(Coordinate(43.0, -87.0), Coordinate(44.0, -87.0))
        assert result.initial_azimuth == pytest.approx(0.0, abs=1e-9)
        assert result.distance_meters == pytest.approx(ONE_DEGREE_ARC, rel=1e-9)
        assert result.method == GeodesicMethod.RHUMB_LINE
        assert result.converged

    def test_due_south(self):
        result = rhumb_line(Coordinate(44.0, -87.0), Coordinate(43.0, -87.0))
        assert result.initial_azimuth == pytest.approx(180.0, abs=1e-9)

    def test_east_west_follows_parallel(self):
        """Along a parallel the distance shrinks with cos(latitude)."""
        result = rhumb_line(Coordinate(45.0, 0.0), Coordinate(45.0, 1.0))
        assert result.initial_azimuth == pytest.approx(90.0, abs=1e-9)
        assert result.distance_meters == pytest.approx(ONE_DEGREE_ARC * math.cos(math.radians(45)), rel=1e-9)

    def test_west_bearing(self):
        result = rhumb_line(Coordinate(45.0, 1.0), Coordinate(45.0, 0.0))
        assert result.initial_azimuth == pytest.approx(270.0, abs=1e-9)

    def test_constant_bearing(self):
        """Initial and final azimuth are identical."""
        result = rhumb_line(Coordinate(40.7128, -74.0060), Coordinate(51.5074, -0.1278))
        assert result.initial_azimuth == result.final_azimuth

    def test_rhumb_longer_than_geodesic_on_long_routes(self):
        from core.geodesy import haversine_inverse
        a, b = Coordinate(40.7128, -74.0060), Coordinate(51.5074, -0.1278)
        assert rhumb_line(a, b).distance_meters > haversine_inverse(a, b).distance_meters

    @pytest.mark.parametrize("start_lon,end_lon,expected_bearing", [
        (179.0, -179.0, 90.0),
        (-179.0, 179.0, 270.0),
    ])
    def test_antimeridian_takes_short_way(self, start_lon, end_lon, expected_bearing):
        result = rhumb_line(Coordinate(0.0, start_lon), Coordinate(0.0, end_lon))
        assert result.initial_azimuth == pytest.approx(expected_bearing, abs=1e-9)
        assert result.distance_meters == pytest.approx(2 * ONE_DEGREE_ARC, rel=1e-9)

    def test_coincident_points(self):
        point = Coordinate(43.0, -87.0)
        result = rhumb_line(point, point)
        assert result.distance_meters == 0


class TestDestination:
    """Tests for projecting along a constant bearing."""

    def test_north_one_degree(self):
        end = destination(Coordinate(43.0, -87.0), 0.0, ONE_DEGREE_ARC)
        assert end.latitude == pytest.approx(44.0, abs=1e-9)
        assert end.longitude == pytest.approx(-87.0, abs=1e-9)

    def test_east_along_equator(self):
        end = destination(Coordinate(0.0, 0.0), 90.0, ONE_DEGREE_ARC)
        assert end.latitude == pytest.approx(0.0, abs=1e-9)
        assert end.longitude == pytest.approx(1.0, abs=1e-9)

    def test_inverts_rhumb_line(self):
        start, end = Coordinate(43.0, -87.0), Coordinate(44.5, -85.25)
        result = rhumb_line(start, end)
        projected = destination(start, result.initial_azimuth, result.distance_meters)
        assert projected.latitude == pytest.approx(end.latitude, abs=1e-6)
        assert projected.longitude == pytest.approx(end.longitude, abs=1e-6)

    def test_clamps_at_pole(self):
        end = destination(Coordinate(89.0, 0.0), 0.0, 500_000)
        assert end.latitude == 90.0
        assert end.longitude == pytest.approx(0.0, abs=1e-9)

    def test_normalizes_longitude_across_antimeridian(self):
        end = destination(Coordinate(0.0, 179.5), 90.0, ONE_DEGREE_ARC)
        assert end.longitude == pytest.approx(-179.5, abs=1e-9)

    def test_zero_distance(self):
        start = Coordinate(43.0, -87.0)
        end = destination(start, 123.0, 0.0)
        assert end.latitude == pytest.approx(start.latitude)
        assert end.longitude == pytest.approx(start.longitude)
