"""
Tests for the magnetic declination model and service.
"""

import pytest
from datetime import date, datetime, timedelta, timezone

from core.magvar import (
    declination, is_high_confidence, validity_period, true_to_magnetic, magnetic_to_true,
    format_declination, calculate, to_calculation_date
)
from core.models.coordinate import Coordinate
from core.validation import ValidationError
from services.magvar_service import MagneticVariationService, get_magvar_service

MID_2025 = date(2025, 6, 1)


class TestDeclination:
    """Tests for the dipole declination formula."""

    @pytest.mark.parametrize("lat,lon", [
        (0, -60), (40.7, -74.0), (51.5, -0.1), (35.7, 139.7), (-33.9, 151.2),
    ])
    def test_within_valid_range(self, lat, lon):
        assert abs(declination(lat, lon, on_date=MID_2025)) < 180

    def test_mid_latitude_value_at_epoch(self):
        # atan2(g11 cos45, -2 g10 sin45) with epoch coefficients
        assert declination(45.0, 0.0, on_date=date(2025, 1, 1)) == pytest.approx(-1.413, abs=0.01)

    def test_equator_at_greenwich(self):
        """On the equator the dipole north component vanishes."""
        assert declination(0.0, 0.0, on_date=date(2025, 1, 1)) == pytest.approx(-90.0)

    def test_altitude_scales_both_components(self):
        at_sea_level = declination(40.7, -74.0, on_date=MID_2025)
        at_altitude = declination(40.7, -74.0, 10_000, on_date=MID_2025)
        assert at_altitude == pytest.approx(at_sea_level, abs=1e-9)

    def test_secular_variation_changes_result(self):
        early = declination(40.7, -74.0, on_date=date(2025, 1, 1))
        late = declination(40.7, -74.0, on_date=date(2030, 1, 1))
        assert early != pytest.approx(late, abs=1e-6)

    def test_accepts_datetime(self):
        assert declination(40.7, -74.0, on_date=datetime(2025, 6, 1, 12, 0)) == \
            declination(40.7, -74.0, on_date=MID_2025)


class TestConfidence:
    """Tests for the confidence gate."""

    @pytest.mark.parametrize("latitude,expected", [
        (0, True), (40, True), (70, True), (79.9, True), (80, True),
        (80.1, False), (85, False), (90, False), (-79.9, True), (-80.1, False),
    ])
    def test_latitude_boundaries(self, latitude, expected):
        assert is_high_confidence(latitude, MID_2025) is expected

    @pytest.mark.parametrize("on_date,expected", [
        (date(2025, 1, 1), True),
        (date(2025, 6, 1), True),
        (date(2027, 6, 1), True),
        (date(2030, 12, 31), True),
        (date(2024, 12, 31), False),
        (date(2031, 1, 1), False),
    ])
    def test_date_boundaries(self, on_date, expected):
        assert is_high_confidence(0, on_date) is expected

    def test_aware_datetime_uses_utc_date(self):
        """00:30 on Jan 1st at UTC+5 is still Dec 31st in UTC."""
        local = datetime(2025, 1, 1, 0, 30, tzinfo=timezone(timedelta(hours=5)))
        assert to_calculation_date(local) == date(2024, 12, 31)
        assert not is_high_confidence(0, local)

    def test_rejects_non_date(self):
        with pytest.raises(ValidationError):
            to_calculation_date("2025-06-01")

    def test_validity_period(self):
        assert validity_period() == (date(2025, 1, 1), date(2030, 12, 31))


class TestConversions:
    """True/magnetic bearing conversion and display."""

    @pytest.mark.parametrize("true_bearing,decl,expected", [
        (90, 10, 80),
        (90, -10, 100),
        (5, -10, 15),
        (5, 10, 355),
    ])
    def test_true_to_magnetic(self, true_bearing, decl, expected):
        assert true_to_magnetic(true_bearing, decl) == pytest.approx(expected, abs=0.01)

    @pytest.mark.parametrize("magnetic_bearing,decl,expected", [
        (80, 10, 90),
        (100, -10, 90),
        (355, 10, 5),
    ])
    def test_magnetic_to_true(self, magnetic_bearing, decl, expected):
        assert magnetic_to_true(magnetic_bearing, decl) == pytest.approx(expected, abs=0.01)

    @pytest.mark.parametrize("decl,expected", [
        (10, "10.0° E"),
        (-10, "10.0° W"),
        (0, "0.0°"),
        (0.04, "0.0°"),
        (-0.049, "0.0°"),
        (5.25, "5.2° E"),
        (-15.87, "15.9° W"),
    ])
    def test_format_declination(self, decl, expected):
        assert format_declination(decl) == expected


class TestCalculate:
    def test_report(self):
        report = calculate(40.7, -74.0, MID_2025)
        assert report.high_confidence
        assert report.calculation_date == MID_2025
        assert report.formatted_declination == format_declination(report.declination)
        assert report.to_dict()['calculation_date'] == "2025-06-01"


class TestMagneticVariationService:
    """Tests for MagneticVariationService."""

    def test_get_declination(self):
        service = MagneticVariationService(MID_2025)
        result = service.get_declination(Coordinate(40.7, -74.0))
        assert result.declination != 0
        assert result.high_confidence
        assert result.latitude == 40.7
        assert result.longitude == -74.0
        assert result.calculation_date == MID_2025

    def test_conversions_when_confident(self):
        service = get_magvar_service(MID_2025)
        coordinate = Coordinate(40.7, -74.0)
        magnetic = service.true_to_magnetic(90.0, coordinate)
        assert magnetic is not None
        assert service.magnetic_to_true(magnetic, coordinate) == pytest.approx(90.0)

    def test_conversions_unavailable_at_high_latitude(self):
        service = MagneticVariationService(MID_2025)
        coordinate = Coordinate(85.0, 0.0)
        assert service.true_to_magnetic(90.0, coordinate) is None
        assert service.magnetic_to_true(90.0, coordinate) is None

    def test_availability(self):
        service = MagneticVariationService(MID_2025)
        assert service.check_availability(Coordinate(40.7, -74.0)) == (True, None)

        available, reason = service.check_availability(Coordinate(85.0, 0.0))
        assert not available
        assert "80" in reason

    def test_availability_outside_validity_period(self):
        service = MagneticVariationService(date(2031, 1, 1))
        available, reason = service.check_availability(Coordinate(40.7, -74.0))
        assert not available
        assert "2025-2030" in reason
