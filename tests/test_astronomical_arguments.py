# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the terms in COMMERCIAL-LICENSE.md.
# Free for personal, educational, and academic use.
# Commercial use requires a paid license — see COMMERCIAL-LICENSE.md.
"""Tests for Delaunay arguments, GMST and the Julian Date helpers."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from geotide.domain.astronomical_arguments import (
    delaunay_arguments,
    gmst_rad,
    sidereal_time,
)
from geotide.domain.time_conversion import (
    datetime_to_jd,
    datetime_to_mjd,
    days_since_j2000,
)
from tide_doubles import FakeReduction

J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestTimeConversion:

    def test_j2000_julian_date(self):
        assert datetime_to_jd(J2000) == pytest.approx(2451545.0, abs=1e-9)

    def test_j2000_mjd(self):
        assert datetime_to_mjd(J2000) == pytest.approx(51544.5, abs=1e-9)

    def test_naive_is_utc(self):
        naive = datetime(2024, 5, 17, 6, 30)
        aware = naive.replace(tzinfo=timezone.utc)
        assert datetime_to_mjd(naive) == datetime_to_mjd(aware)

    def test_other_timezone_converted(self):
        cet = timezone(timedelta(hours=1))
        local = datetime(2000, 1, 1, 13, 0, 0, tzinfo=cet)
        assert days_since_j2000(local) == pytest.approx(0.0, abs=1e-9)

    def test_days_since_j2000(self):
        assert days_since_j2000(J2000 + timedelta(days=10)) == pytest.approx(10.0, abs=1e-9)


class TestDelaunayArguments:

    def test_values_at_j2000(self):
        f = delaunay_arguments(J2000)
        expected = [134.96, 357.53, 93.27, 297.85, 125.04]
        assert len(f) == 5
        for got, deg in zip(f, expected):
            assert got == pytest.approx(math.radians(deg), abs=1e-9)

    def test_daily_rates(self):
        f0 = delaunay_arguments(J2000)
        f1 = delaunay_arguments(J2000 + timedelta(days=1))
        rates = [13.064993, 0.985600, 13.229350, 12.190749, -0.052954]
        for a, b, rate in zip(f0, f1, rates):
            assert b - a == pytest.approx(math.radians(rate), abs=1e-9)

    def test_node_regresses(self):
        f0 = delaunay_arguments(J2000)
        f1 = delaunay_arguments(J2000 + timedelta(days=365))
        assert f1[4] < f0[4]

    def test_not_wrapped(self):
        f = delaunay_arguments(J2000 + timedelta(days=3650))
        assert f[0] > 2 * math.pi


class TestSiderealTime:

    def test_delegates_to_reduction(self):
        reduction = FakeReduction(gmst=1.234)
        assert sidereal_time(J2000, reduction) == 1.234

    def test_gmst_at_j2000(self):
        assert gmst_rad(J2000) == pytest.approx(math.radians(280.46061837), abs=1e-9)

    def test_gmst_range(self):
        for days in (0.3, 17.0, 4000.25):
            g = gmst_rad(J2000 + timedelta(days=days))
            assert 0.0 <= g < 2 * math.pi

    def test_sidereal_day_advance(self):
        """GMST advances ~360.9856° per solar day."""
        g0 = gmst_rad(J2000)
        g1 = gmst_rad(J2000 + timedelta(hours=6))
        advance = math.degrees(g1 - g0) % 360.0
        assert advance == pytest.approx(360.98564736629 / 4 % 360.0, abs=1e-6)
