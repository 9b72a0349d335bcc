"""
Tests for coordinate display formatting.
"""

import pytest

from core.models.coordinate import Coordinate
from core.parsing import (
    parse, convert, format_coordinate, CoordinateFormat, CoordinateFormatter, CoordinatePrecision
)
from core.validation import ValidationError, CoordinateFormatError

DD = CoordinateFormat.DECIMAL_DEGREES
DDM = CoordinateFormat.DEGREES_DECIMAL_MINUTES
DMS = CoordinateFormat.DEGREES_MINUTES_SECONDS


@pytest.fixture
def formatter():
    return CoordinateFormatter()


class TestDefaultPrecision:
    """Formatting with the default 4 / 3 / 1 precision."""

    @pytest.mark.parametrize("value,is_latitude,fmt,expected", [
        (43.1234, True, DD, "43.1234° N"),
        (-43.1234, True, DD, "43.1234° S"),
        (43.1234, True, DDM, "043° 07.404′ N"),
        (43.1234, True, DMS, "043° 07′ 24.2″ N"),
        (87.9876, False, DMS, "087° 59′ 15.4″ E"),
        (-87.9876, False, DMS, "087° 59′ 15.4″ W"),
        (-87.9876, False, DDM, "087° 59.256′ W"),
        (180.0, False, DDM, "180° 00.000′ E"),
        (0.0, True, DMS, "000° 00′ 0.0″ N"),
        (0.0, False, DD, "0.0000° E"),
    ])
    def test_format(self, formatter, value, is_latitude, fmt, expected):
        assert formatter.format(value, is_latitude, fmt) == expected

    def test_without_hemisphere_ends_at_glyph(self, formatter):
        assert formatter.format(43.1234, True, DD, include_hemisphere=False) == "43.1234°"
        assert formatter.format(43.1234, True, DDM, include_hemisphere=False) == "043° 07.404′"
        assert formatter.format(43.1234, True, DMS, include_hemisphere=False) == "043° 07′ 24.2″"

    def test_format_accepts_string_notation(self, formatter):
        assert formatter.format(43.1234, True, "DD") == "43.1234° N"


class TestCarry:
    """Rounding that reaches 60 rolls into the next unit."""

    def test_seconds_carry_into_degrees(self, formatter):
        assert formatter.format(89.999999, True, DMS) == "090° 00′ 0.0″ N"

    def test_seconds_carry_into_minutes(self, formatter):
        # 45° 30′ 59.97″ rounds to 60.0″
        assert formatter.format(45.516658333, True, DMS) == "045° 31′ 0.0″ N"

    def test_seconds_just_below_boundary(self, formatter):
        # 45° 30′ 29.9988″
        assert formatter.format(45.508333, True, DMS) == "045° 30′ 30.0″ N"

    def test_minutes_carry_into_degrees(self, formatter):
        assert formatter.format(43.99999999, True, DDM) == "044° 00.000′ N"


class TestCustomPrecision:
    """Each notation uses its own precision."""

    def test_custom_precision(self):
        formatter = CoordinateFormatter(CoordinatePrecision(decimal_degrees=2, decimal_minutes=1, seconds=0))
        assert formatter.format(43.1234, True, DD) == "43.12° N"
        assert formatter.format(43.1234, True, DDM) == "043° 07.4′ N"
        assert formatter.format(43.1234, True, DMS) == "043° 07′ 24″ N"

    def test_zero_minute_precision_pads_to_two_digits(self):
        formatter = CoordinateFormatter(CoordinatePrecision(decimal_minutes=0))
        assert formatter.format(43.1234, True, DDM) == "043° 07′ N"

    def test_negative_precision_rejected(self):
        with pytest.raises(ValidationError):
            CoordinatePrecision(decimal_degrees=-1)


class TestConvert:
    """Parse-then-format conversion."""

    def test_dms_to_dd(self):
        assert convert("43 7 24.24", True, DD) == "43.1234° N"

    def test_dd_to_ddm(self):
        assert convert("-87.9876", False, DDM) == "087° 59.256′ W"

    def test_invalid_text_propagates(self):
        with pytest.raises(CoordinateFormatError):
            convert("not a coordinate", True, DD)


class TestFormatCoordinate:
    """Formatting a latitude/longitude pair."""

    def test_pair(self):
        latitude, longitude = format_coordinate(Coordinate(43.1234, -87.9876), DDM)
        assert latitude == "043° 07.404′ N"
        assert longitude == "087° 59.256′ W"


class TestRoundTrip:
    """parse(format(v)) stays within half a unit of the last displayed digit."""

    @pytest.mark.parametrize("fmt,tolerance", [
        (DD, 0.5e-4),
        (DDM, 0.5e-3 / 60),
        (DMS, 0.05 / 3600),
    ])
    @pytest.mark.parametrize("value,is_latitude", [
        (0.0, True),
        (43.1234, True),
        (-43.1234, True),
        (89.999999, True),
        (-12.5, True),
        (-179.5, False),
        (151.2093, False),
    ])
    def test_round_trip(self, formatter, value, is_latitude, fmt, tolerance):
        text = formatter.format(value, is_latitude, fmt)
        assert parse(text, is_latitude) == pytest.approx(value, abs=tolerance + 1e-12)
